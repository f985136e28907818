"""Log writer rendering one line per device per cycle."""

from collections.abc import Iterable
from datetime import datetime, timezone
from typing import Any

from pydantic import Field

from .device import DeviceCollection
from .entity import Entity

TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%SZ"
SEPARATOR = ","


def utc_now() -> datetime:
    """Get the current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def format_timestamp(moment: datetime) -> str:
    """Format a datetime as second-precision ISO-8601 UTC with a Z."""
    if moment.tzinfo is not None:
        moment = moment.astimezone(timezone.utc)
    return moment.strftime(TIMESTAMP_FORMAT)


class LogWriter(Entity):
    """Appends device samples to a text sink.

    Each device produces one line per cycle:

        <kind>,<name>,<YYYY-MM-DDTHH:MM:SSZ>,<v1>,...,<vN>

    The timestamp is taken separately for every device as its line is
    rendered, so devices later in a cycle may carry a later second than
    earlier ones. Flushing is left to the sink.
    """

    name: str = Field(default="log", min_length=1)
    sink: Any = Field(
        description="Writable text stream opened in append mode"
    )

    def render(self, device: DeviceCollection) -> str:
        """Render one log line for a device, without the newline."""
        fields = [
            device.kind.value,
            device.name,
            format_timestamp(utc_now()),
            *device.values(),
        ]
        return SEPARATOR.join(fields)

    def write_cycle(self, devices: Iterable[DeviceCollection]) -> int:
        """Append one line per device, in the given order.

        Returns:
            Number of lines written

        """
        count = 0
        for device in devices:
            self.sink.write(self.render(device) + "\n")
            count += 1
        self._logger.debug(f"Wrote {count} log lines")
        return count

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name='{self.name}')"
