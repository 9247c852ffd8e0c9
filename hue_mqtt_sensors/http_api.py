"""HTTP API for health and metrics endpoints."""

import time

from fastapi import FastAPI

from .mqtt import HueSensorsMQTTBridge

SERVICE_NAME = "hue-mqtt-sensors"
VERSION = "1.0.0"


class HueSensorsHTTPAPI:
    """HTTP API for liveness, readiness and metrics endpoints."""

    def __init__(self, mqtt_bridge: HueSensorsMQTTBridge):
        """Initialize the HTTP API.

        Args:
            mqtt_bridge: The MQTT bridge instance
        """
        self.mqtt_bridge = mqtt_bridge
        self.start_time = time.time()
        self.app = FastAPI(
            title="Hue MQTT Sensors Bridge",
            description="Health and metrics endpoints for the Hue MQTT sensors bridge",
            version=VERSION,
        )

        self._setup_routes()

    def _setup_routes(self):
        """Set up FastAPI routes."""

        @self.app.get("/health")
        async def health_check():
            """Liveness probe."""
            return {"status": "healthy", "service": SERVICE_NAME}

        @self.app.get("/ready")
        async def readiness_check():
            """Readiness probe: connected to MQTT and the last poll succeeded."""
            mqtt_connected = self.mqtt_bridge.mqtt_client.is_connected()
            last_poll_ok = self.mqtt_bridge.poller.last_poll_ok

            return {
                "status": "ready" if mqtt_connected and last_poll_ok else "not ready",
                "mqtt_connected": mqtt_connected,
                "last_poll_ok": last_poll_ok,
            }

        @self.app.get("/metrics")
        async def metrics():
            """Basic metrics endpoint for monitoring."""
            poller = self.mqtt_bridge.poller
            uptime = time.time() - self.start_time

            return {
                "uptime_seconds": round(uptime, 2),
                "mqtt_connected": self.mqtt_bridge.mqtt_client.is_connected(),
                "polls_completed": poller.polls_completed,
                "poll_failures": poller.poll_failures,
                "last_poll_at": poller.last_poll_at,
                "last_error": poller.last_error,
                "sensors_published": self.mqtt_bridge.publisher.sensors_published,
                "commands_handled": self.mqtt_bridge.router.commands_handled,
                "service": SERVICE_NAME,
                "version": VERSION,
            }


def create_app(mqtt_bridge: HueSensorsMQTTBridge) -> FastAPI:
    """Create FastAPI application instance.

    Args:
        mqtt_bridge: The MQTT bridge instance

    Returns:
        FastAPI application
    """
    api = HueSensorsHTTPAPI(mqtt_bridge)
    return api.app
