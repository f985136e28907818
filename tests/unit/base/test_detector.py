"""Tests for DeviceDetector explicit and automatic detection."""

import logging

from batterylog.base.detector import DeviceDetector, read_marker
from batterylog.base.device import Backlight, Battery, DeviceKind


def battery_detector(tmp_path):
    return DeviceDetector.for_batteries(namespace=str(tmp_path / "power_supply"))


def backlight_detector(tmp_path):
    return DeviceDetector.for_backlights(namespace=str(tmp_path / "backlight"))


class TestDetectorConfiguration:
    """Test detector factories and defaults."""

    def test_battery_defaults(self):
        """Test the default battery namespace and marker."""
        detector = DeviceDetector.for_batteries()

        assert detector.kind is DeviceKind.BATTERY
        assert detector.namespace == "/sys/class/power_supply/"
        assert detector.marker_attribute == "type"
        assert detector.marker_value == "Battery"

    def test_backlight_defaults(self):
        """Test the default backlight namespace and marker."""
        detector = DeviceDetector.for_backlights()

        assert detector.kind is DeviceKind.BACKLIGHT
        assert detector.namespace == "/sys/class/backlight/"
        assert detector.marker_value == "raw"

    def test_overrides(self, tmp_path):
        """Test overriding the marker value."""
        detector = DeviceDetector.for_backlights(
            namespace=str(tmp_path), marker_value="firmware"
        )

        assert detector.namespace == str(tmp_path)
        assert detector.marker_value == "firmware"


class TestReadMarker:
    """Test marker file reading."""

    def test_trims_content(self, tmp_path):
        """Test that surrounding whitespace is removed."""
        (tmp_path / "type").write_text("  Battery \n")

        assert read_marker(str(tmp_path / "type")) == "Battery"

    def test_missing_marker(self, tmp_path):
        """Test that a missing marker reads as None."""
        assert read_marker(str(tmp_path / "type")) is None


class TestExplicitDetection:
    """Test detection from explicit paths."""

    def test_explicit_paths_initialized(self, tmp_path, make_battery):
        """Test that explicit paths become initialized devices."""
        bat0 = make_battery("BAT0")
        bat1 = make_battery("BAT1")

        devices, ok = battery_detector(tmp_path).detect([str(bat1), str(bat0)])

        assert ok is True
        assert [d.name for d in devices] == ["BAT1", "BAT0"]
        assert all(isinstance(d, Battery) and d.initialized for d in devices)
        for device in devices:
            device.close()

    def test_explicit_bypasses_marker(self, tmp_path, device_dir):
        """Test that explicit paths are not checked against the marker."""
        path = device_dir(
            tmp_path / "fake" / "backlight0",
            {"brightness": "120", "max_brightness": "255"},
        )

        devices, ok = backlight_detector(tmp_path).detect([str(path)])

        assert ok is True
        assert len(devices) == 1
        assert isinstance(devices[0], Backlight)
        assert devices[0].name == "backlight0"
        devices[0].close()

    def test_failed_explicit_paths_dropped(self, tmp_path, make_battery, device_dir):
        """Test that unusable explicit paths are dropped, not fatal."""
        good = make_battery("BAT0")
        partial = device_dir(
            tmp_path / "BAT1", {"capacity": "50", "status": "Discharging"}
        )

        devices, ok = battery_detector(tmp_path).detect(
            [str(partial), str(tmp_path / "missing"), str(good)]
        )

        assert ok is True
        assert [d.name for d in devices] == ["BAT0"]
        devices[0].close()

    def test_explicit_all_failed_still_succeeds(self, tmp_path):
        """Test that explicit input succeeds even with zero devices."""
        devices, ok = battery_detector(tmp_path).detect(
            [str(tmp_path / "nothing"), "/"]
        )

        assert ok is True
        assert devices == []

    def test_explicit_failure_logged(self, tmp_path, caplog):
        """Test that a dropped explicit path produces a warning."""
        with caplog.at_level(logging.WARNING):
            battery_detector(tmp_path).detect([str(tmp_path / "BAT7")])

        assert "BAT7" in caplog.text


class TestAutoDetection:
    """Test scanning the namespace for marker matches."""

    def test_matching_entries_detected(self, tmp_path, make_battery):
        """Test that entries with the expected marker are detected."""
        make_battery("BAT1")
        make_battery("BAT0")

        devices, ok = battery_detector(tmp_path).detect([])

        assert ok is True
        assert [d.name for d in devices] == ["BAT0", "BAT1"]
        for device in devices:
            device.close()

    def test_mismatched_and_missing_markers_skipped(
        self, tmp_path, make_battery
    ):
        """Test that non-battery supplies are skipped without error."""
        make_battery("AC", marker="Mains")
        make_battery("hidpp_battery_0", marker=None)
        make_battery("BAT0")

        devices, ok = battery_detector(tmp_path).detect([])

        assert ok is True
        assert [d.name for d in devices] == ["BAT0"]
        devices[0].close()

    def test_marker_match_without_attributes_skipped(
        self, tmp_path, device_dir
    ):
        """Test that a matching entry missing attributes is not kept."""
        device_dir(
            tmp_path / "power_supply" / "BAT0",
            {"type": "Battery", "capacity": "50", "status": "Discharging"},
        )

        devices, ok = battery_detector(tmp_path).detect([])

        assert ok is False
        assert devices == []

    def test_no_matches_fails(self, tmp_path, make_battery):
        """Test that finding nothing is a failure."""
        make_battery("AC", marker="Mains")

        devices, ok = battery_detector(tmp_path).detect()

        assert ok is False
        assert devices == []

    def test_missing_namespace_fails(self, tmp_path):
        """Test that a missing namespace counts as zero entries."""
        detector = DeviceDetector.for_batteries(
            namespace=str(tmp_path / "does_not_exist")
        )

        devices, ok = detector.detect([])

        assert ok is False
        assert devices == []

    def test_backlight_marker(self, tmp_path, make_backlight):
        """Test backlight detection by its type marker."""
        make_backlight("intel_backlight", marker="raw")
        make_backlight("acpi_video0", marker="firmware")

        devices, ok = backlight_detector(tmp_path).detect([])

        assert ok is True
        assert [d.name for d in devices] == ["intel_backlight"]
        devices[0].close()

    def test_detection_is_deterministic(self, tmp_path, make_battery):
        """Test that repeated detection yields the same device names."""
        for name in ("BAT2", "BAT0", "CMB1", "BAT1"):
            make_battery(name)
        make_battery("ADP1", marker="Mains")
        detector = battery_detector(tmp_path)

        first, _ = detector.detect([])
        second, _ = detector.detect([])

        assert [d.name for d in first] == [d.name for d in second]
        assert {d.name for d in first} == {"BAT0", "BAT1", "BAT2", "CMB1"}
        for device in first + second:
            device.close()

    def test_added_devices_logged(self, tmp_path, make_battery, caplog):
        """Test that every kept device is announced."""
        make_battery("BAT0")

        with caplog.at_level(logging.INFO):
            devices, _ = battery_detector(tmp_path).detect([])

        assert "Added battery BAT0" in caplog.text
        devices[0].close()
