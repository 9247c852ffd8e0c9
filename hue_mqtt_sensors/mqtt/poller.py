"""Periodic polling of hub sensors."""

import logging
import threading
import time
from typing import TYPE_CHECKING, Callable, Optional

from ..config import PollErrorPolicy
from ..hue.exceptions import HubError

if TYPE_CHECKING:
    from ..hue import BaseHueClient
    from .publisher import StatusPublisher


class SensorPoller:
    """Publishes all hub sensors on startup and then on a fixed interval.

    Every tick schedules the next one before polling, so a slow hub can make
    polls overlap. Failed polls are not retried before the next tick.
    """

    def __init__(
        self,
        hub_client: "BaseHueClient",
        publisher: "StatusPublisher",
        interval_seconds: float = 60,
        error_policy: PollErrorPolicy = PollErrorPolicy.CONTINUE,
        on_fatal: Optional[Callable[[Exception], None]] = None,
    ):
        """Initialize the poller.

        Args:
            hub_client: Hue hub client to list sensors with
            publisher: Publisher for sensor status messages
            interval_seconds: Seconds between poll starts
            error_policy: What to do when a poll fails
            on_fatal: Called with the error when the EXIT policy stops polling
        """
        self.hub_client = hub_client
        self.publisher = publisher
        self.interval_seconds = interval_seconds
        self.error_policy = error_policy
        self.on_fatal = on_fatal
        self.logger = logging.getLogger(__name__)

        self.polls_completed = 0
        self.poll_failures = 0
        self.last_poll_at: Optional[float] = None
        self.last_error: Optional[str] = None

        self._timer: Optional[threading.Timer] = None
        self._lock = threading.Lock()
        self._running = False

    @property
    def running(self) -> bool:
        return self._running

    @property
    def last_poll_ok(self) -> bool:
        """True once a poll has succeeded and no poll has failed since."""
        return self.last_poll_at is not None and self.last_error is None

    def start(self) -> None:
        """Poll immediately, then keep polling every interval."""
        with self._lock:
            if self._running:
                return
            self._running = True

        self.logger.info(f"Starting sensor polling every {self.interval_seconds} seconds")
        self._tick()

    def stop(self) -> None:
        """Cancel the pending poll. A poll already in progress runs to completion."""
        with self._lock:
            self._running = False
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None
        self.logger.info("Stopped sensor polling")

    def poll_once(self) -> int:
        """Fetch all sensors and publish each one.

        Returns:
            Number of sensors published

        Raises:
            HubError: If the sensor listing fails
        """
        sensors = self.hub_client.list_sensors()
        count = self.publisher.publish_all(sensors)

        with self._lock:
            self.polls_completed += 1
            self.last_poll_at = time.time()
            self.last_error = None
        self.logger.debug(f"Published {count} sensors")
        return count

    def _tick(self) -> None:
        self._schedule_next()
        self._run_poll()

    def _schedule_next(self) -> None:
        with self._lock:
            if not self._running:
                return
            self._timer = threading.Timer(self.interval_seconds, self._tick)
            self._timer.daemon = True
            self._timer.start()

    def _run_poll(self) -> None:
        """Run one poll and apply the error policy to any failure.

        Hub errors are logged without a traceback, anything else (such as a
        malformed hub response) with one.
        """
        try:
            self.poll_once()
        except Exception as e:
            with self._lock:
                self.poll_failures += 1
                self.last_error = str(e) or type(e).__name__
            unexpected = not isinstance(e, HubError)

            if self.error_policy == PollErrorPolicy.EXIT:
                self.logger.error(f"Sensor poll failed, stopping: {e}", exc_info=unexpected)
                self.stop()
                if self.on_fatal is not None:
                    self.on_fatal(e)
                return

            self.logger.error(
                f"Sensor poll failed, retrying in {self.interval_seconds} seconds: {e}", exc_info=unexpected
            )
