"""Shutdown signal handling for the sampling loop.

Signal handlers only set a flag. A separate watcher thread polls that
flag and calls InterruptibleTimer.interrupt() from a normal thread
context, since the timer's lock must not be taken inside a handler.
"""

import logging
import signal
import threading
import time
from collections.abc import Iterable
from types import FrameType
from typing import Any

from .timer import InterruptibleTimer

DEFAULT_SIGNALS = (signal.SIGINT, signal.SIGTERM)


class SignalWatcher:
    """Turns termination signals into one timer interrupt.

    The watcher shares the runner's timer. Call install() from the main
    thread before the runner starts, start() to launch the polling
    thread, and uninstall() once the runner has finished to restore the
    previous handlers.
    """

    def __init__(
        self,
        timer: InterruptibleTimer,
        signals: Iterable[int] = DEFAULT_SIGNALS,
        poll_interval: float = 1.0,
    ) -> None:
        self.timer = timer
        self.signals = tuple(signals)
        self.poll_interval = poll_interval
        self._logger = logging.getLogger(
            f"{self.__class__.__module__}.{self.__class__.__name__}"
        )
        self._received: int | None = None
        self._closed = False
        self._previous: dict[int, Any] = {}
        self._thread: threading.Thread | None = None

    @property
    def received(self) -> int | None:
        """The signal number that requested termination, if any."""
        return self._received

    def install(self) -> None:
        """Register the flag-setting handler for every watched signal.

        Must be called from the main thread.
        """
        for signum in self.signals:
            self._previous[signum] = signal.signal(signum, self.handle)

    def handle(self, signum: int, frame: FrameType | None) -> None:
        """Signal handler: record the request and return."""
        self._received = signum

    def start(self) -> None:
        """Start the watcher thread that forwards the request."""
        if self._thread and self._thread.is_alive():
            raise RuntimeError("Signal watcher already started")

        self._closed = False
        self._thread = threading.Thread(
            target=self._watch, name="SignalWatcher", daemon=True
        )
        self._thread.start()

    def uninstall(self) -> None:
        """Restore previous handlers and stop the watcher thread."""
        for signum, previous in self._previous.items():
            # None means the handler was not installed from Python
            signal.signal(
                signum, signal.SIG_DFL if previous is None else previous
            )
        self._previous.clear()

        self._closed = True
        if self._thread:
            self._thread.join(timeout=self.poll_interval * 2)
            self._thread = None

    def _watch(self) -> None:
        while self._received is None and not self._closed:
            time.sleep(self.poll_interval)

        if self._received is not None:
            self._logger.info(
                f"Received {signal.Signals(self._received).name}, "
                "interrupting timer"
            )
            self.timer.interrupt()
