"""MQTT bridge between Hue hub sensors and an MQTT broker."""

import logging
import ssl
import threading
from typing import TYPE_CHECKING, Optional

import paho.mqtt.client as mqtt

from .poller import SensorPoller
from .publisher import StatusPublisher
from .router import CommandRouter
from .topics import Topics

if TYPE_CHECKING:
    from ..config import AppConfig
    from ..hue import BaseHueClient


class HueSensorsMQTTBridge:
    """Publishes Hue sensor status to MQTT and applies commands received from it."""

    def __init__(self, config: "AppConfig", hub_client: Optional["BaseHueClient"] = None):
        """Initialize the MQTT bridge.

        Args:
            config: Application configuration object (use AppConfig.from_env())
            hub_client: Hub client to use; created from config.hue when omitted
        """
        from ..hue import create_hue_client

        self.config = config
        self.topic_prefix = config.mqtt.topic_prefix.rstrip("/")
        self.logger = logging.getLogger(__name__)
        self.fatal_error: Optional[Exception] = None

        # Initialize Hue hub client (may discover and pair in local mode)
        self.hub_client = hub_client if hub_client is not None else create_hue_client(config.hue)

        self.mqtt_client = self._create_mqtt_client()

        self.publisher = StatusPublisher(
            self.mqtt_client, self.topic_prefix, qos=config.mqtt.qos, retain=config.mqtt.retain
        )
        self.router = CommandRouter(self.hub_client, self.publisher, self.topic_prefix)
        self.poller = SensorPoller(
            self.hub_client,
            self.publisher,
            interval_seconds=config.interval,
            error_policy=config.poll_error_policy,
            on_fatal=self._on_poll_fatal,
        )

    def _create_mqtt_client(self) -> mqtt.Client:
        """Create and configure MQTT client.

        Returns:
            Configured MQTT client instance
        """
        client = mqtt.Client(
            callback_api_version=mqtt.CallbackAPIVersion.VERSION2,
            client_id=self.config.mqtt.client_id or "",
            clean_session=True,
        )

        client.on_connect = self._on_connect
        client.on_message = self._on_message
        client.on_disconnect = self._on_disconnect

        if self.config.mqtt.username:
            client.username_pw_set(self.config.mqtt.username, self.config.mqtt.password)

        if self.config.mqtt.use_tls:
            self._configure_tls(client)

        return client

    def _configure_tls(self, client: mqtt.Client) -> None:
        """Configure TLS/SSL for an mqtts:// connection.

        Args:
            client: MQTT client instance

        Raises:
            Exception: If TLS configuration fails
        """
        try:
            client.tls_set(
                ca_certs=self.config.mqtt.ca_certs,
                cert_reqs=ssl.CERT_REQUIRED,
                tls_version=ssl.PROTOCOL_TLS_CLIENT,
            )
            self.logger.info("TLS/SSL configured successfully")

            if self.config.mqtt.tls_insecure:
                client.tls_insecure_set(True)
                self.logger.warning("TLS hostname verification DISABLED - insecure mode active")
        except Exception as e:
            self.logger.error(f"Failed to configure TLS/SSL: {e}")
            raise

    def get_topic(self, suffix: str) -> str:
        """Get full topic path with configured prefix.

        Args:
            suffix: Topic suffix (e.g., "set/#")

        Returns:
            Full topic path with prefix
        """
        return f"{self.topic_prefix}/{suffix}"

    def _on_connect(self, client, userdata, flags, reason_code, properties=None):
        """Callback for when MQTT client connects.

        Args:
            client: MQTT client instance
            userdata: User data set in client
            flags: Connection flags
            reason_code: Connection result code
            properties: MQTT v5 properties
        """
        if reason_code != 0:
            self.logger.error(f"Failed to connect to MQTT broker: {reason_code}")
            return

        self.logger.info("Connected to MQTT broker")

        # Subscriptions are lost with a clean session, renew them on every connect
        if self.config.commands_enabled:
            topic = self.get_topic(Topics.SET_SUBSCRIPTION)
            client.subscribe(topic, qos=self.config.mqtt.qos)
            self.logger.debug(f"Subscribed to {topic} with QoS {self.config.mqtt.qos}")

        if not self.poller.running:
            threading.Thread(target=self.poller.start, name="sensor-poller", daemon=True).start()

    def _on_disconnect(self, client, userdata, flags, reason_code, properties=None):
        """Callback for when MQTT client disconnects.

        Args:
            client: MQTT client instance
            userdata: User data set in client
            flags: Disconnect flags
            reason_code: Disconnection result code
            properties: MQTT v5 properties
        """
        if reason_code != 0:
            self.logger.warning(f"Unexpected disconnection from MQTT broker: {reason_code}")
        else:
            self.logger.info("Disconnected from MQTT broker")

    def _on_message(self, client, userdata, message):
        """Handle incoming MQTT messages.

        Args:
            client: MQTT client instance
            userdata: User data set in client
            message: MQTT message
        """
        topic = message.topic
        self.logger.debug(f"Received message on {topic}: {message.payload[:100]!r}")

        try:
            self.router.route(topic, message.payload)
        except Exception as e:
            self.logger.error(f"Error handling message on {topic}: {e}", exc_info=True)

    def _on_poll_fatal(self, error: Exception) -> None:
        """Stop the bridge after a poll failure under the exit policy."""
        self.fatal_error = error
        self.logger.critical(f"Stopping bridge after poll failure: {error}")
        self.stop()

    @property
    def is_connected(self) -> bool:
        return self.mqtt_client.is_connected()

    def start(self) -> None:
        """Connect to the broker and run the MQTT network loop until stopped."""
        try:
            self.logger.info(
                f"Connecting to MQTT broker at {self.config.mqtt.host}:"
                f"{self.config.mqtt.port} with topic prefix '{self.topic_prefix}'"
            )
            self.mqtt_client.connect(
                self.config.mqtt.host,
                self.config.mqtt.port,
                self.config.mqtt.keepalive,
            )
            self.mqtt_client.loop_forever()
        except KeyboardInterrupt:
            self.logger.info("Shutting down MQTT bridge...")
            self.stop()
        except Exception as e:
            self.logger.error(f"Error starting MQTT bridge: {e}", exc_info=True)
            raise

    def stop(self) -> None:
        """Stop polling and disconnect from the broker."""
        self.poller.stop()

        self.mqtt_client.disconnect()
        self.mqtt_client.loop_stop()
        self.logger.info("MQTT bridge stopped")
