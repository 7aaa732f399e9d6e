"""Instance - a registry entry for one container."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional
from uuid import UUID

from .definition import Definition


class Status(Enum):
    """Runtime state of a container."""
    RUNNING = "running"
    SHUTOFF = "shutoff"


@dataclass(eq=False)
class Instance:
    """A container known to the registry, active or not.

    Attributes:
        definition: The container's current Definition
        instance_id: Runtime id while running, -1 otherwise
        status: RUNNING or SHUTOFF
    """

    definition: Definition
    instance_id: int = -1
    status: Status = Status.SHUTOFF

    @property
    def name(self) -> str:
        return self.definition.name

    @property
    def uuid(self) -> Optional[UUID]:
        return self.definition.uuid

    @property
    def active(self) -> bool:
        return self.status is Status.RUNNING
