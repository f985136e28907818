"""Base classes for the batterylog sampling daemon."""

from batterylog.base.attribute import Attribute
from batterylog.base.detector import DeviceDetector
from batterylog.base.device import (
    Backlight,
    Battery,
    DeviceCollection,
    DeviceKind,
    device_class,
)
from batterylog.base.entity import Entity
from batterylog.base.runner import Runner
from batterylog.base.signals import SignalWatcher
from batterylog.base.timer import InterruptibleTimer
from batterylog.base.writer import LogWriter

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
    "device_class",
]
