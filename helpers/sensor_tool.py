#!/usr/bin/env python3
"""Helper script to watch sensor status and send set commands to the Hue MQTT sensors bridge."""

import argparse
import json
import time
from typing import Optional

import paho.mqtt.client as mqtt


class SensorTester:
    """Helper class for exercising the bridge over MQTT."""

    def __init__(self, broker_host: str = "localhost", broker_port: int = 1883,
                 username: Optional[str] = None, password: Optional[str] = None,
                 prefix: str = "hue-sensors"):
        """Initialize the tester.

        Args:
            broker_host: MQTT broker host
            broker_port: MQTT broker port
            username: MQTT username (optional)
            password: MQTT password (optional)
            prefix: Topic prefix the bridge uses
        """
        self.prefix = prefix
        self.client = mqtt.Client(callback_api_version=mqtt.CallbackAPIVersion.VERSION2)

        if username and password:
            self.client.username_pw_set(username, password)

        self.client.on_connect = self._on_connect
        self.client.on_message = self._on_message

        self.client.connect(broker_host, broker_port, 60)
        self.client.loop_start()
        print(f"Connected to MQTT broker at {broker_host}:{broker_port}")

    def _on_connect(self, client, userdata, flags, reason_code, properties=None):
        """Subscribe to every status topic once connected."""
        if reason_code == 0:
            client.subscribe(f"{self.prefix}/status/#")
        else:
            print(f"Failed to connect: {reason_code}")

    def _on_message(self, client, userdata, message):
        """Print status messages."""
        try:
            data = json.loads(message.payload.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError):
            print(f"{message.topic}: {message.payload!r}")
            return
        print(f"{message.topic}: val={data.get('val')!r} ts={data.get('ts')}")

    def set_value(self, sensor_type: str, sensor_id: str, value: str):
        """Send a set command for a sensor.

        Args:
            sensor_type: Sensor type tag, e.g. CLIPGenericStatus
            sensor_id: Sensor id on the hub
            value: Value to set
        """
        topic = f"{self.prefix}/set/{sensor_type}/{sensor_id}"
        self.client.publish(topic, value)
        print(f"Sent '{value}' to {topic}")

    def disconnect(self):
        """Disconnect from MQTT broker."""
        self.client.loop_stop()
        self.client.disconnect()


def main():
    """Main function with CLI interface."""
    parser = argparse.ArgumentParser(description="Hue MQTT Sensors Bridge Tester")
    parser.add_argument("--host", default="localhost", help="MQTT broker host")
    parser.add_argument("--port", type=int, default=1883, help="MQTT broker port")
    parser.add_argument("--username", help="MQTT username")
    parser.add_argument("--password", help="MQTT password")
    parser.add_argument("--prefix", default="hue-sensors", help="Bridge topic prefix")
    parser.add_argument("--set", nargs=3, metavar=("TYPE", "ID", "VALUE"),
                        help="Send a set command, e.g. --set CLIPGenericStatus 3 42")
    parser.add_argument("--watch", type=int, default=5, metavar="SECONDS",
                        help="How long to print status messages")

    args = parser.parse_args()

    tester = SensorTester(args.host, args.port, args.username, args.password, args.prefix)
    try:
        time.sleep(1)  # Allow connection to establish
        if args.set:
            tester.set_value(*args.set)
        time.sleep(args.watch)
    finally:
        tester.disconnect()

    return 0


if __name__ == "__main__":
    exit(main())
