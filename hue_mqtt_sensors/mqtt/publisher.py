"""Status publishing of hub sensors to MQTT."""

import json
import logging
import threading
from typing import TYPE_CHECKING, Any, Dict, Iterable

import paho.mqtt.client as mqtt

from ..hue.codec import read_value
from . import topics
from .topics import Topics

if TYPE_CHECKING:
    from ..hue.models import Sensor


def build_status_message(sensor: "Sensor") -> Dict[str, Any]:
    """Build the status message for a sensor.

    Returns:
        Dict with the primary reading ("val"), the hub timestamp ("ts") and the
        full hub payload ("payload")
    """
    return {
        "val": read_value(sensor),
        "ts": sensor.last_updated,
        "payload": sensor.hue_payload(),
    }


class StatusPublisher:
    """Publishes sensor status messages on type and id scoped topics."""

    def __init__(self, mqtt_client: mqtt.Client, topic_prefix: str, qos: int = 0, retain: bool = False):
        """Initialize the publisher.

        Args:
            mqtt_client: MQTT client to publish with
            topic_prefix: Base topic prefix (e.g. "hue-sensors")
            qos: QoS level for status messages
            retain: Whether status messages are retained
        """
        self.mqtt_client = mqtt_client
        self.status_pattern = f"{topic_prefix.rstrip('/')}/{Topics.STATUS}"
        self.qos = qos
        self.retain = retain
        self.sensors_published = 0
        self._counter_lock = threading.Lock()
        self.logger = logging.getLogger(__name__)

    def status_topic(self, sensor: "Sensor") -> str:
        """Topic a sensor's status is published on."""
        return topics.fill(self.status_pattern, {"type": sensor.type, "id": sensor.id})

    def publish(self, sensor: "Sensor") -> None:
        """Publish a sensor's status without waiting for delivery.

        Failures are logged, never raised.
        """
        topic = self.status_topic(sensor)
        payload = json.dumps(build_status_message(sensor))

        try:
            result = self.mqtt_client.publish(topic, payload, qos=self.qos, retain=self.retain)
        except ValueError as e:
            self.logger.warning(f"Failed to publish status of sensor {sensor.id} on {topic}: {e}")
            return

        if result.rc != mqtt.MQTT_ERR_SUCCESS:
            self.logger.warning(f"Failed to publish status on {topic}: MQTT error code {result.rc}")
            return

        with self._counter_lock:
            self.sensors_published += 1
        self.logger.debug(f"Published status on {topic}")

    def publish_all(self, sensors: Iterable["Sensor"]) -> int:
        """Publish every sensor in order, each independently of the others.

        Returns:
            Number of sensors handed to the MQTT client
        """
        count = 0
        for sensor in sensors:
            self.publish(sensor)
            count += 1
        return count
