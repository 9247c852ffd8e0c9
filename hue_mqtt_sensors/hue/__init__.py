"""Hue hub client library for sensor access.

This package provides Local and Remote API clients over the Hue v1 REST API,
the sensor model and the translation between sensor state and MQTT values.
"""

from .base import BaseHueClient
from .codec import apply_value, read_value, state_update
from .credentials import CredentialStore
from .exceptions import (
    HubAPIError,
    HubAuthError,
    HubConnectionError,
    HubError,
    LinkButtonNotPressedError,
    SensorNotFoundError,
)
from .factory import create_hue_client
from .local_client import LocalHueClient, discover_bridges, register_user
from .models import Sensor
from .remote_client import RemoteHueClient
from .sensor_types import SensorType

__all__ = [
    # Base classes
    "BaseHueClient",
    # Client implementations
    "LocalHueClient",
    "RemoteHueClient",
    # Factory and pairing
    "create_hue_client",
    "discover_bridges",
    "register_user",
    "CredentialStore",
    # Model
    "Sensor",
    "SensorType",
    # Codec
    "read_value",
    "apply_value",
    "state_update",
    # Errors
    "HubError",
    "HubConnectionError",
    "HubAuthError",
    "HubAPIError",
    "SensorNotFoundError",
    "LinkButtonNotPressedError",
]
