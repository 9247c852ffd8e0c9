"""Tests for status message publishing."""

import json
import threading
from unittest.mock import Mock

import paho.mqtt.client as mqtt

from hue_mqtt_sensors.mqtt import StatusPublisher, build_status_message
from tests.conftest import create_mock_mqtt_client, make_sensor


class TestBuildStatusMessage:
    """Test status message construction."""

    def test_message_keys(self):
        sensor = make_sensor("5", "ZLLTemperature", temperature=2150)
        message = build_status_message(sensor)

        assert set(message) == {"val", "ts", "payload"}
        assert message["val"] == 2150
        assert message["ts"] == "2024-01-01T10:00:00"
        assert message["payload"]["state"]["temperature"] == 2150

    def test_unknown_type_has_null_value(self):
        sensor = make_sensor("7", "ZLLSwitch", buttonevent=1002)
        message = build_status_message(sensor)

        assert message["val"] is None
        assert json.loads(json.dumps(message))["val"] is None


class TestStatusPublisher:
    """Test publishing sensors on status topics."""

    def test_publish_topic_and_payload(self):
        """Test one message on P/status/{type}/{id} with val, ts and payload."""
        client = create_mock_mqtt_client()
        publisher = StatusPublisher(client, "P")
        sensor = make_sensor("5", "ZLLTemperature", temperature=2150)

        publisher.publish(sensor)

        client.publish.assert_called_once()
        args, kwargs = client.publish.call_args
        assert args[0] == "P/status/ZLLTemperature/5"
        decoded = json.loads(args[1])
        assert set(decoded) == {"val", "ts", "payload"}
        assert kwargs == {"qos": 0, "retain": False}

    def test_publish_uses_configured_qos_and_retain(self):
        client = create_mock_mqtt_client()
        publisher = StatusPublisher(client, "hue-sensors", qos=1, retain=True)

        publisher.publish(make_sensor("1", "Daylight", daylight=True))

        _, kwargs = client.publish.call_args
        assert kwargs == {"qos": 1, "retain": True}

    def test_prefix_trailing_slash_stripped(self):
        publisher = StatusPublisher(create_mock_mqtt_client(), "hue-sensors/")
        sensor = make_sensor("1", "Daylight", daylight=True)

        assert publisher.status_topic(sensor) == "hue-sensors/status/Daylight/1"

    def test_publish_twice_is_identical(self):
        """Test publishing a snapshot has no side effect on the sensor."""
        client = create_mock_mqtt_client()
        publisher = StatusPublisher(client, "hue-sensors")
        sensor = make_sensor("2", "ZLLPresence", presence=False)
        before = sensor.model_copy(deep=True)

        publisher.publish(sensor)
        publisher.publish(sensor)

        first, second = client.publish.call_args_list
        assert first == second
        assert json.loads(first[0][1]) == json.loads(second[0][1])
        assert sensor == before

    def test_publish_failure_is_not_raised(self):
        """Test a failed publish is logged, not raised."""
        client = Mock()
        client.publish.return_value = Mock(rc=mqtt.MQTT_ERR_NO_CONN)
        publisher = StatusPublisher(client, "hue-sensors")

        publisher.publish(make_sensor("1", "Daylight", daylight=True))

        assert publisher.sensors_published == 0

    def test_publish_client_error_is_not_raised(self):
        client = Mock()
        client.publish.side_effect = ValueError("Invalid topic")
        publisher = StatusPublisher(client, "hue-sensors")

        publisher.publish(make_sensor("1", "Daylight", daylight=True))

        assert publisher.sensors_published == 0

    def test_publish_all_in_order(self):
        client = create_mock_mqtt_client()
        publisher = StatusPublisher(client, "hue-sensors")
        sensors = [
            make_sensor("1", "Daylight", daylight=True),
            make_sensor("2", "ZLLPresence", presence=False),
            make_sensor("3", "CLIPGenericStatus", status=0),
        ]

        count = publisher.publish_all(sensors)

        assert count == 3
        topics = [c[0][0] for c in client.publish.call_args_list]
        assert topics == [
            "hue-sensors/status/Daylight/1",
            "hue-sensors/status/ZLLPresence/2",
            "hue-sensors/status/CLIPGenericStatus/3",
        ]
        assert publisher.sensors_published == 3

    def test_publish_all_continues_after_failure(self):
        """Test each publish is independent of the others."""
        client = Mock()
        client.publish.side_effect = [ValueError("boom"), Mock(rc=0)]
        publisher = StatusPublisher(client, "hue-sensors")

        count = publisher.publish_all(
            [make_sensor("1", "Daylight", daylight=True), make_sensor("2", "ZLLPresence", presence=False)]
        )

        assert count == 2
        assert client.publish.call_count == 2
        assert publisher.sensors_published == 1

    def test_concurrent_publishes_are_all_counted(self):
        """Test the counter is exact when the poller and command threads publish at once."""
        publisher = StatusPublisher(create_mock_mqtt_client(), "hue-sensors")
        sensor = make_sensor("1", "Daylight", daylight=True)

        threads = [
            threading.Thread(target=lambda: [publisher.publish(sensor) for _ in range(100)]) for _ in range(8)
        ]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert publisher.sensors_published == 800
