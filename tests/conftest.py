from pathlib import Path
from typing import Callable, Dict

import pytest

from batterylog.base.device import DeviceKind


BATTERY_VALUES: Dict[str, str] = {
    "capacity": "50",
    "cycle_count": "112",
    "energy_full": "45120000",
    "energy_full_design": "57020000",
    "energy_now": "22560000",
    "power_now": "8510000",
    "present": "1",
    "status": "Discharging",
    "voltage_min_design": "11400000",
    "voltage_now": "11862000",
}

BACKLIGHT_VALUES: Dict[str, str] = {
    "brightness": "120",
    "max_brightness": "255",
}


def write_device(directory: Path, values: Dict[str, str]) -> Path:
    """Create a fake sysfs device directory with newline-terminated files."""
    directory.mkdir(parents=True, exist_ok=True)
    for name, value in values.items():
        (directory / name).write_text(f"{value}\n")
    return directory


@pytest.fixture
def battery_values() -> Dict[str, str]:
    """Provides a complete set of battery attribute values."""
    return dict(BATTERY_VALUES)


@pytest.fixture
def backlight_values() -> Dict[str, str]:
    """Provides a complete set of backlight attribute values."""
    return dict(BACKLIGHT_VALUES)


@pytest.fixture
def make_battery(tmp_path: Path) -> Callable[..., Path]:
    """Factory for fake battery directories under a power_supply tree."""

    def factory(name: str = "BAT0", marker: str | None = "Battery", **overrides: str) -> Path:
        values = dict(BATTERY_VALUES, **overrides)
        if marker is not None:
            values["type"] = marker
        return write_device(tmp_path / "power_supply" / name, values)

    return factory


@pytest.fixture
def make_backlight(tmp_path: Path) -> Callable[..., Path]:
    """Factory for fake backlight directories under a backlight tree."""

    def factory(name: str = "intel_backlight", marker: str | None = "raw", **overrides: str) -> Path:
        values = dict(BACKLIGHT_VALUES, **overrides)
        if marker is not None:
            values["type"] = marker
        return write_device(tmp_path / "backlight" / name, values)

    return factory


@pytest.fixture(params=list(DeviceKind))
def kind(request) -> DeviceKind:
    """Parametrizes a test over every device kind."""
    return request.param


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "unit: marks tests as unit tests")
    config.addinivalue_line("markers", "integration: marks tests as integration tests")
    config.addinivalue_line("markers", "slow: marks tests as slow running")


@pytest.fixture
def device_dir() -> Callable[[Path, Dict[str, str]], Path]:
    """Provides the helper that writes a fake sysfs device directory."""
    return write_device
