"""Command line entry point for batterylogd."""

import argparse
import logging
import sys
from collections.abc import Sequence
from contextlib import ExitStack
from pathlib import Path

from pydantic import ValidationError

from batterylog import __version__
from batterylog.base import (
    DeviceCollection,
    DeviceDetector,
    LogWriter,
    Runner,
    SignalWatcher,
)
from batterylog.config import DEFAULT_INTERVAL, Settings

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for batterylogd."""
    parser = argparse.ArgumentParser(
        prog="batterylogd",
        description="Periodically log battery and backlight state.",
    )
    parser.add_argument(
        "-v",
        "--version",
        action="version",
        version=f"batterylogd: version {__version__}",
    )
    parser.add_argument(
        "-i",
        "--interval",
        type=int,
        default=DEFAULT_INTERVAL,
        help=f"Sampling interval in seconds (default: {DEFAULT_INTERVAL})",
    )
    parser.add_argument(
        "-b",
        "--battery",
        dest="batteries",
        action="append",
        default=[],
        metavar="PATH",
        help="Path to a battery in sysfs. May be given multiple times. "
        "If omitted, batteries are detected automatically.",
    )
    parser.add_argument(
        "-L",
        "--backlight",
        dest="backlights",
        action="append",
        default=[],
        metavar="PATH",
        help="Path to a display backlight in sysfs to log as well. "
        "May be given multiple times.",
    )
    parser.add_argument(
        "-A",
        "--auto-backlight",
        action="store_true",
        help="Detect raw display backlights automatically.",
    )
    parser.add_argument(
        "-l",
        "--log",
        dest="log_file",
        type=Path,
        default=None,
        metavar="PATH",
        help="Path to log file (default: $HOME/batterylogd.log)",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Diagnostic logging level (default: INFO)",
    )
    return parser


def parse_settings(
    argv: Sequence[str] | None = None,
    parser: argparse.ArgumentParser | None = None,
) -> Settings:
    """Parse command line arguments into validated Settings.

    Invalid values exit through parser.error() with status 2.
    """
    parser = parser or build_parser()
    args = parser.parse_args(argv)

    values = {
        "interval": args.interval,
        "batteries": args.batteries,
        "backlights": args.backlights,
        "auto_backlight": args.auto_backlight,
        "log_level": args.log_level,
    }
    if args.log_file is not None:
        values["log_file"] = args.log_file

    try:
        return Settings(**values)
    except ValidationError as e:
        parser.error(
            "; ".join(
                f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
                for error in e.errors()
            )
        )


def detect_devices(settings: Settings) -> list[DeviceCollection] | None:
    """Detect every device to log.

    Returns:
        The devices, or None if a required auto-detection found nothing

    """
    batteries, ok = DeviceDetector.for_batteries().detect(settings.batteries)
    if not ok:
        logger.error("No batteries found. Provide -b argument.")
        return None

    devices = list(batteries)
    if settings.backlight_enabled:
        backlights, ok = DeviceDetector.for_backlights().detect(
            settings.backlights
        )
        if not ok:
            for device in devices:
                device.close()
            logger.error("No backlights found. Provide -L argument.")
            return None
        devices.extend(backlights)

    return devices


def run(settings: Settings) -> int:
    """Run the daemon until a termination signal arrives.

    Returns:
        Process exit status

    """
    devices = detect_devices(settings)
    if devices is None:
        return 1

    with ExitStack() as stack:
        for device in devices:
            stack.enter_context(device)

        logger.info(f"Log file: {settings.log_file}")
        try:
            log_file = stack.enter_context(
                open(settings.log_file, "a", buffering=1, encoding="utf-8")
            )
        except OSError as e:
            logger.error(f"Could not open log file: {e}")
            return 1

        runner = Runner(
            devices=devices,
            writer=LogWriter(sink=log_file),
            interval=settings.interval,
        )

        watcher = SignalWatcher(runner.timer)
        watcher.install()
        stack.callback(watcher.uninstall)
        watcher.start()

        runner.start()
        runner.join()

        logger.info("Shutting down batterylogd ...")

    return 0


def main(argv: Sequence[str] | None = None) -> int:
    """Console script entry point."""
    settings = parse_settings(argv)
    logging.basicConfig(level=settings.log_level, format=LOG_FORMAT)
    return run(settings)


if __name__ == "__main__":
    sys.exit(main())
