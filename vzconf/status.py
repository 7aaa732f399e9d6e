"""Runtime status rows, as listed by `vzlist -a -ovpsid,status -H`."""

from typing import Iterable, Iterator, NamedTuple

from .errors import StatusParseError

STOPPED = "stopped"


class StatusRow(NamedTuple):
    veid: int
    status: str

    @property
    def active(self) -> bool:
        """Anything but "stopped" counts as running."""
        return self.status != STOPPED


def parse_status_lines(lines: Iterable[str]) -> Iterator[StatusRow]:
    """Parse "<veid> <status>" lines, skipping blank ones.

    Raises:
        StatusParseError: A line doesn't have exactly those two fields
    """
    for lineno, line in enumerate(lines, 1):
        fields = line.split()
        if not fields:
            continue
        if len(fields) != 2:
            raise StatusParseError(f"Failed to parse vzlist output (line {lineno}): {line.strip()!r}")
        try:
            veid = int(fields[0])
        except ValueError:
            raise StatusParseError(
                f"Failed to parse vzlist output (line {lineno}): bad VE id {fields[0]!r}"
            ) from None
        yield StatusRow(veid, fields[1])
