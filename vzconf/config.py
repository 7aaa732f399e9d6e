"""Configuration for vzconf."""

import os
from pathlib import Path


DEFAULT_CONF_DIRS = ("/etc/vz/conf", "/usr/local/etc/conf")

# Container ids at or below this value belong to the host
RESERVED_ID_LIMIT = 100

NAME_MAX = 16
TEMPLATE_MAX = 256
MAX_LINE = 4096
INT_MAX = 2**31 - 1

UUID_MARKER = "#UUID:"

LOG_LEVEL = os.environ.get("VZCONF_LOG_LEVEL", "WARNING")


def conf_dirs() -> list[Path]:
    """Candidate config directories, in probe order.

    VZCONF_CONF_DIRS (os.pathsep separated) replaces the defaults.
    """
    override = os.environ.get("VZCONF_CONF_DIRS", "")
    if override:
        return [Path(d) for d in override.split(os.pathsep) if d]
    return [Path(d) for d in DEFAULT_CONF_DIRS]
