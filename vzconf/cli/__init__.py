"""Command-line interface for vzconf."""

import logging
import sys
from typing import Optional, Sequence

from ..conffile import ConfigLineStore
from ..config import LOG_LEVEL
from ..errors import VzConfError
from ..output import die

from .args import parse_args
from .handlers import COMMANDS


def main(argv: Optional[Sequence[str]] = None) -> None:
    """Main entry point."""
    args = parse_args(argv)
    if not args.command:
        args.parser.print_help()
        sys.exit(0)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(message)s",
    )

    store = ConfigLineStore(args.conf_dirs)
    try:
        COMMANDS[args.command](args, store)
    except VzConfError as e:
        die(str(e))
