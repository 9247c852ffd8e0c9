"""Pytest configuration and fixtures for Hue MQTT sensors tests."""

from typing import Any, Dict
from unittest.mock import Mock

import pytest

from hue_mqtt_sensors.config import AppConfig, HueConfig, MQTTConfig, PollErrorPolicy
from hue_mqtt_sensors.hue import Sensor

# ============================================================================
# Helper Functions for Creating Test Configurations
# ============================================================================


def create_test_mqtt_config(
    url: str = "mqtt://localhost:1883",
    topic_prefix: str = "hue-sensors",
    client_id: str = "",
    keepalive: int = 60,
    qos: int = 0,
    retain: bool = False,
) -> MQTTConfig:
    """Create an MQTTConfig for testing with sensible defaults."""
    return MQTTConfig(
        url=url,
        topic_prefix=topic_prefix,
        client_id=client_id,
        keepalive=keepalive,
        qos=qos,
        retain=retain,
    )


def create_test_hue_config(**kwargs) -> HueConfig:
    """Create a local-mode HueConfig that needs neither discovery nor pairing."""
    values = {"bridge_address": "192.168.1.2", "bridge_username": "test_user"}
    values.update(kwargs)
    return HueConfig(**values)


def create_test_app_config(
    mqtt_config: MQTTConfig = None,
    hue_config: HueConfig = None,
    interval: float = 60,
    poll_error_policy: PollErrorPolicy = PollErrorPolicy.CONTINUE,
    commands_enabled: bool = True,
    http_port: int = 8000,
) -> AppConfig:
    """Create an AppConfig for testing with sensible defaults.

    Examples:
        >>> config = create_test_app_config()
        >>> config = create_test_app_config(mqtt_config=create_test_mqtt_config(topic_prefix="home"))
    """
    return AppConfig(
        mqtt=mqtt_config or create_test_mqtt_config(),
        hue=hue_config or create_test_hue_config(),
        interval=interval,
        poll_error_policy=poll_error_policy,
        commands_enabled=commands_enabled,
        http_port=http_port,
    )


def hue_sensor_data(sensor_type: str, state: Dict[str, Any], name: str = "Sensor") -> Dict[str, Any]:
    """Build a Hue v1 API sensor object."""
    return {
        "state": state,
        "config": {"on": True, "reachable": True},
        "name": name,
        "type": sensor_type,
        "modelid": "TEST",
        "manufacturername": "Philips",
        "swversion": "1.0",
    }


def make_sensor(sensor_id: str, sensor_type: str, **state) -> Sensor:
    """Build a Sensor with the given state fields and a fixed timestamp."""
    state.setdefault("lastupdated", "2024-01-01T10:00:00")
    return Sensor.from_hue(sensor_id, hue_sensor_data(sensor_type, state))


def create_mock_mqtt_client() -> Mock:
    """Mock paho client whose publishes succeed."""
    client = Mock()
    client.publish.return_value = Mock(rc=0)
    return client


# ============================================================================
# Pytest Fixtures
# ============================================================================


@pytest.fixture
def test_app_config():
    """Fixture providing a standard AppConfig for testing."""
    return create_test_app_config()


@pytest.fixture
def mock_mqtt_client():
    """Fixture providing a mock MQTT client with successful publishes."""
    return create_mock_mqtt_client()


@pytest.fixture
def mock_hub():
    """Fixture providing a mock hub client."""
    return Mock()
