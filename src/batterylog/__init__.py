"""Periodic battery and backlight logging from Linux sysfs."""

__version__ = "0.2.0"

from .base import (  # noqa: E402
    Attribute,
    Backlight,
    Battery,
    DeviceCollection,
    DeviceDetector,
    DeviceKind,
    Entity,
    InterruptibleTimer,
    LogWriter,
    Runner,
    SignalWatcher,
    device_class,
)

__all__ = [
    "Attribute",
    "Backlight",
    "Battery",
    "DeviceCollection",
    "DeviceDetector",
    "DeviceKind",
    "Entity",
    "InterruptibleTimer",
    "LogWriter",
    "Runner",
    "SignalWatcher",
    "__version__",
    "device_class",
]
