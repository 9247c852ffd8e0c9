"""Routing of inbound MQTT command topics to hub updates."""

import logging
import threading
from typing import TYPE_CHECKING, Callable, Dict

from ..hue.codec import apply_value
from . import topics
from .topics import Topics

if TYPE_CHECKING:
    from ..hue import BaseHueClient
    from .publisher import StatusPublisher


class CommandRouter:
    """Dispatches command topics (``{prefix}/{function}/...``) to their handlers."""

    def __init__(self, hub_client: "BaseHueClient", publisher: "StatusPublisher", topic_prefix: str):
        """Initialize the router.

        Args:
            hub_client: Hue hub client to fetch and update sensors with
            publisher: Publisher used to re-publish changed sensors
            topic_prefix: Base topic prefix (e.g. "hue-sensors")
        """
        prefix = topic_prefix.rstrip("/")
        self.hub_client = hub_client
        self.publisher = publisher
        self.function_pattern = f"{prefix}/{Topics.FUNCTION}"
        self.set_pattern = f"{prefix}/{Topics.SET}"
        self.commands_handled = 0
        self._counter_lock = threading.Lock()
        self.logger = logging.getLogger(__name__)

        self.handlers: Dict[str, Callable[[str, bytes], bool]] = {
            "set": self.handle_set,
        }

    def route(self, topic: str, payload: bytes) -> bool:
        """Route one inbound message.

        Topics outside the command family and unknown functions are ignored.

        Args:
            topic: Topic the message arrived on
            payload: Raw message payload

        Returns:
            True if a handler acted on the message

        Raises:
            HubError: If a hub call made by the handler fails
        """
        params = topics.match(self.function_pattern, topic)
        if params is None:
            self.logger.debug(f"Ignoring message on {topic}: not a command topic")
            return False

        function = params["function"]
        handler = self.handlers.get(function)
        if handler is None:
            self.logger.debug(f"Ignoring unsupported command '{function}' on {topic}")
            return False

        return handler(topic, payload)

    def handle_set(self, topic: str, payload: bytes) -> bool:
        """Apply a value to a sensor and re-publish its status.

        The sensor is fetched, changed, pushed to the hub and fetched again so
        the published status carries hub-assigned fields such as lastupdated.
        """
        params = topics.match(self.set_pattern, topic)
        if params is None:
            self.logger.debug(f"Ignoring malformed set topic: {topic}")
            return False

        sensor_type, sensor_id = params["type"], params["id"]

        sensor = self.hub_client.get_sensor(sensor_id)
        if sensor.type != sensor_type:
            self.logger.debug(
                f"Set topic names type {sensor_type} but sensor {sensor_id} is {sensor.type}"
            )

        apply_value(sensor, payload)
        self.hub_client.update_sensor(sensor)

        result = self.hub_client.get_sensor(sensor_id)
        self.publisher.publish(result)

        with self._counter_lock:
            self.commands_handled += 1
        self.logger.info(f"Handled set command for sensor {sensor_id}")
        return True
