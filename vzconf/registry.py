"""Registry - the in-memory collection of container instances."""

from __future__ import annotations

import logging
from typing import Callable, Iterable, Iterator, Optional
from uuid import UUID

from .config import INT_MAX
from .domain.definition import Definition
from .domain.instance import Instance, Status
from .errors import (
    ErrorSink,
    IdentityConflict,
    InstanceActive,
    LoggingErrorSink,
    StatusParseError,
    report,
)
from .status import StatusRow

logger = logging.getLogger(__name__)

UuidLookup = Callable[[int], Optional[UUID]]


class Registry:
    """Tracks every known container, keyed by name.

    Callers must serialize access; nothing here is locked.

    Attributes:
        active_count: Number of RUNNING instances
        inactive_count: Number of SHUTOFF instances
    """

    def __init__(self, sink: Optional[ErrorSink] = None) -> None:
        self.sink = sink or LoggingErrorSink()
        self._instances: dict[str, Instance] = {}
        self.active_count = 0
        self.inactive_count = 0

    def __len__(self) -> int:
        return len(self._instances)

    def __iter__(self) -> Iterator[Instance]:
        return iter(list(self._instances.values()))

    def __contains__(self, instance: object) -> bool:
        if not isinstance(instance, Instance):
            return False
        return self._instances.get(instance.name) is instance

    def instances(self) -> list[Instance]:
        """All instances, in insertion order."""
        return list(self._instances.values())

    def find_by_id(self, instance_id: int) -> Instance | None:
        for instance in self._instances.values():
            if instance.instance_id == instance_id:
                return instance
        return None

    def find_by_uuid(self, uuid: UUID) -> Instance | None:
        for instance in self._instances.values():
            if instance.uuid == uuid:
                return instance
        return None

    def find_by_name(self, name: str) -> Instance | None:
        return self._instances.get(name)

    def assign(self, definition: Definition) -> Instance:
        """Add a definition, or redefine the inactive instance of that name.

        Returns:
            The new or redefined Instance

        Raises:
            IdentityConflict: An active instance already has this name; the
                given definition is dropped and the active one left as is
        """
        instance = self._instances.get(definition.name)
        if instance is not None:
            if instance.active:
                raise report(self.sink, IdentityConflict(definition.name))
            instance.definition = definition
            logger.debug(f"Redefined inactive VE {definition.name}")
            return instance

        instance = Instance(definition=definition)
        self._instances[definition.name] = instance
        self.inactive_count += 1
        logger.debug(f"Defined VE {definition.name}")
        return instance

    def remove(self, instance: Instance) -> None:
        """Forget an inactive instance.

        Raises:
            InstanceActive: The instance is running
        """
        if instance not in self:
            logger.warning(f"Attempt to remove unknown VE {instance.name}")
            return
        if instance.active:
            raise report(
                self.sink, InstanceActive(f"Cannot remove active VE {instance.name}")
            )
        del self._instances[instance.name]
        self.inactive_count -= 1

    def mark_running(self, instance: Instance, instance_id: int) -> None:
        """Record that an instance was started with the given runtime id."""
        if instance not in self:
            raise ValueError(f"VE {instance.name} is not in this registry")
        if instance_id <= 0:
            raise ValueError(f"Invalid runtime id {instance_id}")
        if instance.active:
            instance.instance_id = instance_id
            return
        instance.status = Status.RUNNING
        instance.instance_id = instance_id
        self.inactive_count -= 1
        self.active_count += 1

    def mark_shutoff(self, instance: Instance) -> None:
        """Record that an instance was stopped."""
        if instance not in self:
            raise ValueError(f"VE {instance.name} is not in this registry")
        if not instance.active:
            return
        instance.status = Status.SHUTOFF
        instance.instance_id = -1
        self.active_count -= 1
        self.inactive_count += 1

    def clear(self) -> None:
        self._instances = {}
        self.active_count = 0
        self.inactive_count = 0

    def repopulate(
        self,
        rows: Iterable[tuple[int, str]],
        uuid_lookup: Optional[UuidLookup] = None,
    ) -> None:
        """Replace the whole registry with skeletons built from status rows.

        Every previous instance is dropped, including ones defined through
        assign(). Skeletons are named after their id and carry only the
        UUID returned by uuid_lookup (None when not given).

        Either every row is taken or, on the first failure, the registry is
        left exactly as it was. Rows are all checked before uuid_lookup is
        called. uuid_lookup must only read: a write made for an early row
        would survive a failure on a later one.

        Args:
            rows: (veid, status) pairs; status "stopped" means inactive
            uuid_lookup: Read-only UUID source per veid, e.g. UuidAssigner.lookup

        Raises:
            StatusParseError: A malformed or duplicate row
            VzConfError: uuid_lookup failed
        """
        entries: list[StatusRow] = []
        seen: set[int] = set()
        try:
            for row in rows:
                veid, token = self._check_row(row)
                if veid in seen:
                    raise StatusParseError(f"VE {veid} listed more than once")
                seen.add(veid)
                entries.append(StatusRow(veid, token))
        except StatusParseError as e:
            report(self.sink, e)
            raise

        instances: dict[str, Instance] = {}
        active = inactive = 0
        for entry in entries:
            definition = Definition.skeleton(
                entry.veid, uuid_lookup(entry.veid) if uuid_lookup else None
            )
            if entry.active:
                instance = Instance(definition, entry.veid, Status.RUNNING)
                active += 1
            else:
                instance = Instance(definition, -1, Status.SHUTOFF)
                inactive += 1
            instances[definition.name] = instance

        self._instances = instances
        self.active_count = active
        self.inactive_count = inactive
        logger.info(f"Loaded {active} active and {inactive} inactive VEs")

    @staticmethod
    def _check_row(row) -> tuple[int, str]:
        try:
            veid, token = row
        except (TypeError, ValueError):
            raise StatusParseError(f"Malformed status row {row!r}") from None
        if isinstance(veid, bool) or not isinstance(veid, int) or not 0 <= veid <= INT_MAX:
            raise StatusParseError(f"Malformed VE id {veid!r}")
        if not isinstance(token, str) or not token:
            raise StatusParseError(f"Malformed status for VE {veid}: {token!r}")
        return veid, token
