"""Domain model for vzconf."""

from .definition import Definition, FilesystemSpec, NetInterface
from .instance import Instance, Status

__all__ = ["Definition", "FilesystemSpec", "Instance", "NetInterface", "Status"]
