"""Command handlers for the vzconf CLI."""

import sys
from pathlib import Path

import yaml

from .. import __version__
from ..parser import DefinitionParser
from ..registry import Registry
from ..status import parse_status_lines
from ..uuids import UuidAssigner
from ..output import die, log_step, log_success, log_warning, print_table


COMMANDS = {}


def command(name, aliases=()):
    """Register a command handler."""
    def decorator(fn):
        COMMANDS[name] = fn
        for alias in aliases:
            COMMANDS[alias] = fn
        return fn
    return decorator


@command("version")
def cmd_version(args, store):
    print(f"vzconf {__version__}")


@command("get-param")
def cmd_get_param(args, store):
    found, value = store.find_param(args.veid, args.param)
    if not found:
        die(f"{args.param} is not set for VE {args.veid}")
    print(value)


@command("uuid")
def cmd_uuid(args, store):
    print(UuidAssigner(store).ensure_uuid(args.veid))


@command("assign-uuids")
def cmd_assign_uuids(args, store):
    log_step(f"Scanning {store.conf_dir}...")
    ids = store.list_ids()
    assigned = UuidAssigner(store).assign_all()
    skipped = [veid for veid in ids if veid not in assigned]
    if skipped:
        log_warning(f"Skipped VEs: {', '.join(str(v) for v in skipped)}")
    log_success(f"{len(assigned)} of {len(ids)} VEs have a UUID")


@command("show")
def cmd_show(args, store):
    path = Path(args.file)
    try:
        xml_text = path.read_text()
    except OSError as e:
        die(f"Cannot read {path}: {e.strerror or e}")
    definition = DefinitionParser().parse_string(xml_text, display_name=path.name)
    print(yaml.safe_dump(definition.to_dict(), sort_keys=False), end="")


@command("list", aliases=["ls"])
def cmd_list(args, store):
    registry = Registry()
    registry.repopulate(parse_status_lines(sys.stdin), UuidAssigner(store).lookup)

    rows = []
    for inst in registry.instances():
        state = "running" if inst.active else "stopped"
        rows.append([inst.name, state, str(inst.uuid) if inst.uuid else "-"])
    print_table(["VEID", "STATUS", "UUID"], rows)
    print(f"\n{registry.active_count} active, {registry.inactive_count} inactive")
