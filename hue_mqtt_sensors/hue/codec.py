"""Translation between sensor state and MQTT values."""

from typing import Any, Dict, Optional

from .models import Sensor
from .sensor_types import SensorType


def read_value(sensor: Sensor) -> Optional[Any]:
    """Return the primary reading of a sensor.

    Unknown sensor types yield None rather than an error.
    """
    sensor_type = SensorType.from_tag(sensor.type)
    if sensor_type is None:
        return None
    return sensor.state.get(sensor_type.field)


def apply_value(sensor: Sensor, raw: bytes) -> Sensor:
    """Apply an inbound command payload to a sensor.

    Only writable sensor types are changed; the field is overwritten with the
    payload decoded as UTF-8 text, with undecodable bytes replaced. Any other
    sensor is returned untouched.

    Args:
        sensor: Sensor fetched from the hub
        raw: Raw MQTT payload

    Returns:
        The same sensor object
    """
    sensor_type = SensorType.from_tag(sensor.type)
    if sensor_type is None or not sensor_type.writable:
        return sensor

    value = raw.decode("utf-8", errors="replace") if isinstance(raw, (bytes, bytearray)) else str(raw)
    sensor.state[sensor_type.field] = value
    return sensor


def state_update(sensor: Sensor) -> Dict[str, Any]:
    """Build the state body that pushes a sensor's writable field to the hub.

    The hub stores generic status as an integer, so numeric strings are sent
    as integers.

    Returns:
        Body for the hub's sensor state endpoint, empty for read-only types
    """
    sensor_type = SensorType.from_tag(sensor.type)
    if sensor_type is None or not sensor_type.writable or sensor_type.field not in sensor.state:
        return {}

    value = sensor.state[sensor_type.field]
    if isinstance(value, str):
        try:
            value = int(value.strip())
        except ValueError:
            pass  # Non-numeric text is passed through for the hub to reject
    return {sensor_type.field: value}
