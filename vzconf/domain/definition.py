"""Definition value objects - validated container configuration."""

from typing import Literal, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from ..config import NAME_MAX, TEMPLATE_MAX


class FilesystemSpec(BaseModel):
    """Template-based container filesystem.

    Attributes:
        template: OS template name (e.g. "fedora-core-5-i386")
        disk_size: Disk space limit in blocks, 0 if not declared
        disk_inodes: Inode limit, 0 if not declared
    """
    model_config = ConfigDict(frozen=True)

    template: str = Field(default="", max_length=TEMPLATE_MAX - 1)
    disk_size: int = 0
    disk_inodes: int = 0


class NetInterface(BaseModel):
    """A network interface of a container."""
    model_config = ConfigDict(frozen=True)

    type: Literal["bridge", "network", "ethernet"]
    mac: Optional[str] = None  # AA:BB:CC:DD:EE:FF, None if unset
    bridge: Optional[str] = None
    network: Optional[str] = None
    target: Optional[str] = None


class Definition(BaseModel):
    """Validated configuration of one container.

    Definitions built from runtime status alone (skeletons) carry no
    filesystem and may have no UUID.
    """
    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1, max_length=NAME_MAX)
    uuid: Optional[UUID] = None
    vcpus: int = Field(default=0, ge=0)  # 0 = runtime default
    filesystem: Optional[FilesystemSpec] = None
    nets: tuple[NetInterface, ...] = ()

    @property
    def is_skeleton(self) -> bool:
        return self.filesystem is None

    @classmethod
    def skeleton(cls, veid: int, uuid: Optional[UUID] = None) -> "Definition":
        """Minimal definition for a container known only by its id."""
        return cls(name=str(veid), uuid=uuid)

    def to_dict(self) -> dict:
        """Plain data suitable for YAML/JSON output."""
        return self.model_dump(mode="json")
