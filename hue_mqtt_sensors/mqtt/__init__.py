"""MQTT bridge functionality for Hue sensors.

This package provides MQTT integration for Hue hub sensors, including status
publishing, command routing and periodic polling.
"""

from .bridge import HueSensorsMQTTBridge
from .poller import SensorPoller
from .publisher import StatusPublisher, build_status_message
from .router import CommandRouter
from .topics import Topics

__all__ = [
    "HueSensorsMQTTBridge",
    "CommandRouter",
    "SensorPoller",
    "StatusPublisher",
    "Topics",
    "build_status_message",
]
