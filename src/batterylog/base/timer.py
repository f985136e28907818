"""A periodic wait that can be cut short from another thread."""

import threading
import time

# Longest single Condition.wait; longer waits are split into steps of
# this size because lock timeouts are limited by the platform.
MAX_WAIT_STEP = 3600.0


class InterruptibleTimer:
    """A timer that can be interrupted prematurely.

    wait() blocks for the given duration unless interrupt() is called
    from another thread first. Interruption is permanent: once
    interrupted, every later wait() returns False immediately, so an
    interrupt that arrives while nobody is waiting is never lost.

    The flag is the only state shared between the sampling thread and
    the shutdown thread, and it is only touched under the condition's
    lock.
    """

    def __init__(self) -> None:
        self._condition = threading.Condition()
        self._interrupted = False

    @property
    def interrupted(self) -> bool:
        """Check whether interrupt() has been called."""
        with self._condition:
            return self._interrupted

    def wait(self, seconds: float) -> bool:
        """Block for up to seconds.

        Args:
            seconds: Duration to wait; any non-negative length is
                accepted

        Returns:
            True if the full duration elapsed, False if interrupted

        """
        deadline = time.monotonic() + seconds
        with self._condition:
            while not self._interrupted:
                remaining = deadline - time.monotonic()
                if remaining <= 0:
                    return True
                self._condition.wait(min(remaining, MAX_WAIT_STEP))
            return False

    def interrupt(self) -> None:
        """Wake any waiter and make all future waits return False."""
        with self._condition:
            self._interrupted = True
            self._condition.notify_all()
