"""Detection of devices from explicit paths or a sysfs class scan."""

import os
from collections.abc import Sequence
from typing import Any

from pydantic import Field, ValidationError

from .device import DeviceCollection, DeviceKind, device_class
from .entity import Entity


def read_marker(path: str) -> str | None:
    """Read and trim the first line of a marker attribute.

    Returns:
        The trimmed content, or None if the file is missing or
        unreadable

    """
    try:
        with open(path, encoding="utf-8") as f:
            return f.readline().strip()
    except (OSError, ValueError):
        return None


class DeviceDetector(Entity):
    """Builds initialized DeviceCollections of one kind.

    With explicit paths, every path is trusted: each is initialized
    and kept if all of its attribute files open, and detection succeeds
    even if none survive. Without explicit paths, every entry of the
    namespace whose marker attribute equals the expected value is
    initialized, and detection fails if nothing usable is found, since
    logging nothing at all would hide a misconfiguration.

    Namespace entries are visited in sorted name order so the result is
    deterministic for a given directory snapshot.
    """

    kind: DeviceKind = Field(description="Kind of device to build")
    namespace: str = Field(description="Directory scanned for entries")
    marker_attribute: str = Field(
        min_length=1, description="Attribute file identifying the kind"
    )
    marker_value: str = Field(
        description="Expected trimmed content of the marker attribute"
    )

    def __init__(self, **data: Any) -> None:
        """Initialize detector, named after its kind unless given a name."""
        if "kind" in data:
            data.setdefault("name", DeviceKind(data["kind"]).value)
        super().__init__(**data)

    @classmethod
    def for_kind(cls, kind: DeviceKind, **overrides: Any) -> "DeviceDetector":
        """Create a detector with the kind's default namespace and marker."""
        marker_attribute, marker_value = kind.marker
        data: dict[str, Any] = {
            "kind": kind,
            "namespace": kind.namespace,
            "marker_attribute": marker_attribute,
            "marker_value": marker_value,
        }
        data.update(overrides)
        return cls(**data)

    @classmethod
    def for_batteries(cls, **overrides: Any) -> "DeviceDetector":
        """Create a detector for power supplies of type Battery."""
        return cls.for_kind(DeviceKind.BATTERY, **overrides)

    @classmethod
    def for_backlights(cls, **overrides: Any) -> "DeviceDetector":
        """Create a detector for raw display backlights."""
        return cls.for_kind(DeviceKind.BACKLIGHT, **overrides)

    def detect(
        self, explicit_paths: Sequence[str] = ()
    ) -> tuple[list[DeviceCollection], bool]:
        """Detect devices of this detector's kind.

        Args:
            explicit_paths: Device directories to use instead of
                scanning the namespace. The marker is not checked for
                these.

        Returns:
            Tuple of (initialized devices, success)

        """
        devices: list[DeviceCollection] = []
        if explicit_paths:
            for path in explicit_paths:
                device = self._build(path, explicit=True)
                if device is not None:
                    devices.append(device)
            return devices, True

        for entry in self._scan():
            device = self._build(entry, explicit=False)
            if device is not None:
                devices.append(device)

        if not devices:
            self._logger.debug(
                f"No {self.kind.value} found in {self.namespace}"
            )
        return devices, bool(devices)

    def is_match(self, path: str) -> bool:
        """Check whether a directory's marker attribute matches."""
        marker = read_marker(os.path.join(path, self.marker_attribute))
        return marker is not None and marker == self.marker_value

    def _scan(self) -> list[str]:
        """List namespace entries whose marker matches, in name order."""
        try:
            entries = sorted(os.listdir(self.namespace))
        except OSError as e:
            self._logger.warning(f"Cannot scan {self.namespace}: {e}")
            return []

        matches = []
        for entry in entries:
            path = os.path.join(self.namespace, entry)
            if self.is_match(path):
                matches.append(path)
            else:
                self._logger.debug(f"Skipping {path}")
        return matches

    def _build(self, path: str, explicit: bool) -> DeviceCollection | None:
        """Construct and initialize one device, or None if unusable."""
        try:
            device = device_class(self.kind)(path=path)
        except ValidationError:
            self._logger.warning(f"Invalid {self.kind.value} path {path!r}")
            return None

        if not device.initialize():
            if explicit:
                self._logger.warning(
                    f"Ignoring {self.kind.value} {path}: "
                    "missing attribute files"
                )
            else:
                self._logger.debug(
                    f"Skipping {path}: missing attribute files"
                )
            return None

        self._logger.info(f"Added {self.kind.value} {device.name}")
        return device
