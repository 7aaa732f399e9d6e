"""UUID assignment for containers.

OpenVZ has no notion of container UUIDs, so one is kept in each config file
as a comment line the OpenVZ tools ignore:

    #UUID: 86c12009-e591-a159-6e9f-91d18b85ef78
"""

import logging
import uuid
from typing import Callable, Optional

from .conffile import ConfigLineStore
from .config import UUID_MARKER
from .errors import (
    ErrorSink,
    LoggingErrorSink,
    MalformedUuid,
    ResourceExhaustion,
    VzConfError,
    report,
)
from .util import parse_uuid

logger = logging.getLogger(__name__)


class UuidAssigner:
    """Looks up, and when missing records, container UUIDs."""

    def __init__(
        self,
        store: ConfigLineStore,
        sink: Optional[ErrorSink] = None,
        uuid_factory: Callable[[], uuid.UUID] = uuid.uuid4,
    ):
        self.store = store
        self.sink = sink or LoggingErrorSink()
        self._uuid_factory = uuid_factory

    def lookup(self, veid: int) -> Optional[uuid.UUID]:
        """UUID recorded for a container, or None if there is none.

        Raises:
            MalformedUuid: The recorded text is not a UUID
            ConfigIOError: The config file can't be read
        """
        text = self.store.find_uuid_record(veid)
        if text is None:
            return None
        try:
            return parse_uuid(text)
        except ValueError as e:
            raise report(self.sink, MalformedUuid(veid, text)) from e

    def ensure_uuid(self, veid: int) -> uuid.UUID:
        """Return the container's UUID, generating and recording one if needed."""
        existing = self.lookup(veid)
        if existing is not None:
            return existing

        try:
            new_uuid = self._uuid_factory()
        except OSError as e:
            raise report(
                self.sink, ResourceExhaustion(f"Failed to generate UUID for VE {veid}: {e}")
            ) from e

        self.store.append_raw(veid, f"\n{UUID_MARKER} {new_uuid}\n")
        logger.info(f"Assigned UUID {new_uuid} to VE {veid}")
        return new_uuid

    def assign_all(self) -> dict[int, uuid.UUID]:
        """Make sure every container with a config file has a UUID.

        Failures are logged and skipped; the remaining containers are still
        processed.

        Returns:
            UUID of every container that was handled successfully
        """
        assigned = {}
        for veid in self.store.list_ids():
            try:
                assigned[veid] = self.ensure_uuid(veid)
            except VzConfError as e:
                logger.warning(f"Skipping VE {veid}: {e}")
        return assigned
