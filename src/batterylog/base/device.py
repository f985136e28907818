"""Device classes grouping the sysfs attributes of one physical device."""

import os
from enum import Enum
from typing import Any, ClassVar

from pydantic import ConfigDict, Field

from .attribute import Attribute
from .entity import Entity


class DeviceKind(str, Enum):
    """The closed set of device kinds that can be logged.

    Each kind carries its fixed attribute list, whose order is the
    column order of the log line, and the marker used to recognise the
    kind when scanning a sysfs class directory.
    """

    BATTERY = "battery"
    BACKLIGHT = "backlight"

    @property
    def attribute_names(self) -> tuple[str, ...]:
        """Fixed attribute file names for this kind, in log order."""
        return _ATTRIBUTE_NAMES[self]

    @property
    def namespace(self) -> str:
        """Default sysfs class directory scanned for this kind."""
        return _NAMESPACES[self]

    @property
    def marker(self) -> tuple[str, str]:
        """Default (marker attribute, expected value) for detection."""
        return _MARKERS[self]


_ATTRIBUTE_NAMES: dict[DeviceKind, tuple[str, ...]] = {
    DeviceKind.BATTERY: (
        "capacity",
        "cycle_count",
        "energy_full",
        "energy_full_design",
        "energy_now",
        "power_now",
        "present",
        "status",
        "voltage_min_design",
        "voltage_now",
    ),
    DeviceKind.BACKLIGHT: (
        "brightness",
        "max_brightness",
    ),
}

_NAMESPACES: dict[DeviceKind, str] = {
    DeviceKind.BATTERY: "/sys/class/power_supply/",
    DeviceKind.BACKLIGHT: "/sys/class/backlight/",
}

_MARKERS: dict[DeviceKind, tuple[str, str]] = {
    DeviceKind.BATTERY: ("type", "Battery"),
    DeviceKind.BACKLIGHT: ("type", "raw"),
}


def _strip_trailing_slash(path: str) -> str:
    return path.rstrip("/") or path


class DeviceCollection(Entity):
    """The attributes of one physical device instance.

    A DeviceCollection owns one Attribute per name in its kind's fixed
    attribute list. Initialization is all-or-nothing: if any attribute
    file cannot be opened, the files already opened are closed and the
    collection is left empty and unusable.

    Variants only pin the kind; all behavior lives here. Use
    device_class() to map a DeviceKind to its variant.
    """

    model_config = ConfigDict(frozen=False)

    kind: ClassVar[DeviceKind]

    path: str = Field(description="sysfs directory of the device")
    attributes: list[Attribute] = Field(
        default_factory=list,
        description="Opened attributes in fixed log order",
    )
    initialized: bool = Field(
        default=False,
        description="Whether every attribute file was opened",
    )

    def __init__(self, **data: Any) -> None:
        """Initialize a device from its path.

        The trailing slash is stripped from the path and, unless given
        explicitly, the name is the last path segment.
        """
        if "path" in data:
            path = _strip_trailing_slash(str(data["path"]))
            data["path"] = path
            data.setdefault("name", os.path.basename(path))
        super().__init__(**data)

    @property
    def attribute_names(self) -> tuple[str, ...]:
        """Fixed attribute file names for this device, in log order."""
        return self.kind.attribute_names

    def initialize(self) -> bool:
        """Open every fixed attribute file under this device's path.

        Returns:
            True if all attribute files were opened, False otherwise

        """
        self.close()

        opened: list[Attribute] = []
        for attribute_name in self.attribute_names:
            attribute = Attribute(
                name=attribute_name,
                path=os.path.join(self.path, attribute_name),
            )
            if not attribute.initialize():
                self._logger.debug(
                    f"Missing attribute {attribute_name} in {self.path}"
                )
                for previous in opened:
                    previous.close()
                return False
            opened.append(attribute)

        self.attributes = opened
        self.initialized = True
        return True

    def sample_all(self) -> None:
        """Sample every attribute in fixed order."""
        for attribute in self.attributes:
            attribute.sample()

    def values(self) -> list[str]:
        """Get the current values in fixed attribute order.

        The result always has one entry per fixed attribute name, even
        before initialization or after close(); missing values are
        empty strings.
        """
        if not self.attributes:
            return ["" for _ in self.attribute_names]
        return [attribute.value for attribute in self.attributes]

    def close(self) -> None:
        """Close every attribute file and mark the device unusable."""
        for attribute in self.attributes:
            attribute.close()
        self.attributes = []
        self.initialized = False

    def __enter__(self) -> "DeviceCollection":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


class Battery(DeviceCollection):
    """A power supply of type Battery.

    Logged attributes, in order: capacity, cycle_count, energy_full,
    energy_full_design, energy_now, power_now, present, status,
    voltage_min_design, voltage_now.
    """

    kind: ClassVar[DeviceKind] = DeviceKind.BATTERY


class Backlight(DeviceCollection):
    """A display backlight.

    Logged attributes, in order: brightness, max_brightness.
    """

    kind: ClassVar[DeviceKind] = DeviceKind.BACKLIGHT


_DEVICE_CLASSES: dict[DeviceKind, type[DeviceCollection]] = {
    DeviceKind.BATTERY: Battery,
    DeviceKind.BACKLIGHT: Backlight,
}


def device_class(kind: DeviceKind) -> type[DeviceCollection]:
    """Get the DeviceCollection variant for a kind."""
    return _DEVICE_CLASSES[kind]
