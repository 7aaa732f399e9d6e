"""Argument parsing for the vzconf CLI."""

import argparse
from typing import Optional, Sequence

from .. import __version__


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    p = argparse.ArgumentParser(prog="vzconf", description="OpenVZ container definitions")
    p.add_argument("--version", "-V", action="version", version=f"vzconf {__version__}")
    p.add_argument(
        "--conf-dir", metavar="DIR", action="append", dest="conf_dirs",
        help="Config directory to probe (repeatable, replaces the defaults)",
    )
    p.add_argument("--verbose", "-v", action="store_true", help="Log debug output")

    sub = p.add_subparsers(dest="command", metavar="<command>")

    sub.add_parser("version", help="Show version")

    add = sub.add_parser("get-param", help="Print a parameter from a VE config file")
    add.add_argument("veid", type=int, help="VE id")
    add.add_argument("param", help="Parameter name, e.g. OSTEMPLATE")

    add = sub.add_parser("uuid", help="Print the UUID of a VE, assigning one if needed")
    add.add_argument("veid", type=int, help="VE id")

    sub.add_parser("assign-uuids", help="Assign UUIDs to every VE config file")

    add = sub.add_parser("show", help="Validate a domain XML file and print it as YAML")
    add.add_argument("file", help="Path to domain XML")

    sub.add_parser(
        "list", help="List VEs from 'vzlist -a -ovpsid,status -H' output on stdin",
        aliases=["ls"],
    )

    args = p.parse_args(argv)
    args.parser = p
    return args
