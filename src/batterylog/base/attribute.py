"""Attribute class for a single re-readable sysfs value."""

from typing import IO, Any

from pydantic import ConfigDict, Field

from .entity import Entity


class Attribute(Entity):
    """A single text-valued attribute file exposed by the kernel.

    The file is opened once by initialize() and kept open for the
    lifetime of the Attribute. Each sample() rewinds to the start of the
    file before reading, so the kernel regenerates the content and the
    freshest value is always returned.

    Read failures are not errors. Attributes may transiently disappear
    (for example across suspend), so a failed read leaves an empty
    value for that sample and the next sample tries again.
    """

    model_config = ConfigDict(frozen=False)

    path: str = Field(description="Absolute filesystem path of the attribute")
    value: str = Field(
        default="",
        description="Last sampled value, empty until sampled or on failure",
    )

    def __init__(self, **data: Any) -> None:
        """Initialize Attribute; the file is not opened until initialize()."""
        super().__init__(**data)
        self._file: IO[str] | None = None

    @property
    def is_open(self) -> bool:
        """Check whether the attribute file is currently held open."""
        return self._file is not None and not self._file.closed

    def initialize(self) -> bool:
        """Open the attribute file for reading.

        Returns:
            True if the file was opened, False if it is missing or
            unreadable

        """
        try:
            self._file = open(self.path, encoding="utf-8")  # noqa: SIM115
        except OSError as e:
            self._logger.debug(f"Cannot open {self.path}: {e}")
            self._file = None
            return False
        return True

    def sample(self) -> None:
        """Read the first line of the attribute into value."""
        if self._file is None:
            self.value = ""
            return

        try:
            self._file.seek(0)
            self.value = self._file.readline().rstrip("\n")
        except (OSError, ValueError):
            self.value = ""

    def close(self) -> None:
        """Close the attribute file. Safe to call more than once."""
        if self._file is not None:
            self._file.close()
            self._file = None
