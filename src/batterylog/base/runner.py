"""Runner driving the sample, write and wait cycle."""

import threading
from typing import Any

from pydantic import ConfigDict, Field

from .device import DeviceCollection
from .entity import Entity
from .timer import InterruptibleTimer
from .writer import LogWriter


class Runner(Entity):
    """Periodic sampling loop over a fixed list of devices.

    Each cycle samples every device in list order, appends one log line
    per device through the LogWriter, and then waits on the timer for
    one interval. Interrupting the timer ends the loop at the next wait
    point, so the cycle in progress always completes and a run that is
    interrupted between a write and the following wait still writes
    that cycle in full.

    Key characteristics:
    - Devices are sampled sequentially, never concurrently
    - run() blocks; start() runs the same loop in a background thread
    - Unexpected errors in a cycle are logged and the loop continues
    - The device list is fixed for the lifetime of the runner
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    name: str = Field(default="batterylogd", min_length=1)
    devices: list[DeviceCollection] = Field(
        default_factory=list,
        description="Devices sampled every cycle, in log order",
    )
    writer: LogWriter = Field(description="Writer for each cycle's lines")
    interval: float = Field(
        default=60.0,
        gt=0,
        le=threading.TIMEOUT_MAX,
        description="Seconds between cycles",
    )
    timer: InterruptibleTimer = Field(
        default_factory=InterruptibleTimer,
        description="Timer shared with the shutdown path",
    )

    def __init__(self, **data: Any) -> None:
        super().__init__(**data)
        self._thread: threading.Thread | None = None
        self._cycle_count = 0

    @property
    def cycle_count(self) -> int:
        """Number of cycles completed so far."""
        return self._cycle_count

    def run_cycle(self) -> None:
        """Sample every device and write one batch of log lines."""
        for device in self.devices:
            device.sample_all()
        self.writer.write_cycle(self.devices)
        self._cycle_count += 1

    def run(self) -> None:
        """Run cycles until the timer is interrupted.

        Returns only after the cycle that precedes the interrupted wait
        has been written.
        """
        self._logger.info(
            f"Starting runner {self.name} with {len(self.devices)} "
            f"devices every {self.interval}s"
        )
        try:
            while True:
                try:
                    self.run_cycle()
                except Exception as e:
                    self._logger.error(
                        f"Error in sampling cycle: {e}", exc_info=True
                    )

                if not self.timer.wait(self.interval):
                    break
        finally:
            self._logger.info(
                f"Runner {self.name} stopped after "
                f"{self._cycle_count} cycles"
            )

    def start(self) -> None:
        """Start run() in a background thread.

        Raises:
            RuntimeError: If runner is already started

        """
        if self._thread and self._thread.is_alive():
            raise RuntimeError(f"Runner {self.name} already started")

        self._thread = threading.Thread(
            target=self.run,
            name=f"Runner-{self.name}",
            daemon=True,
        )
        self._thread.start()

    def join(self, timeout: float | None = None) -> bool:
        """Wait for the background thread to finish.

        Returns:
            True if the thread has finished (or was never started)

        """
        if not self._thread:
            return True

        self._thread.join(timeout=timeout)
        return not self._thread.is_alive()

    def stop(self, timeout: float = 5.0) -> None:
        """Interrupt the timer and wait for the loop to finish."""
        self._logger.info(f"Stopping runner {self.name}")
        self.timer.interrupt()

        if not self.join(timeout=timeout):
            self._logger.warning(
                f"Runner {self.name} thread did not stop within timeout"
            )
            return
        self._thread = None

    def is_running(self) -> bool:
        """Check if the background thread is currently executing."""
        return self._thread is not None and self._thread.is_alive()

    def __repr__(self) -> str:
        device_names = ", ".join(device.name for device in self.devices)
        return (
            f"{self.__class__.__name__}(name='{self.name}', "
            f"interval={self.interval}, devices=[{device_names}])"
        )
