"""Hue Local API client implementation."""

import logging
from typing import Dict, List

import requests

from .base import BaseHueClient, raise_for_hue_error
from .exceptions import HubConnectionError, HubError

DISCOVERY_URL = "https://discovery.meethue.com/"


class LocalHueClient(BaseHueClient):
    """Client for a Hue bridge on the local network."""

    def __init__(self, address: str, username: str, timeout: float = 10.0):
        """Initialize the Local API client.

        Args:
            address: Bridge hostname or IP address
            username: Whitelisted bridge username
            timeout: Timeout in seconds for every hub request
        """
        super().__init__(timeout=timeout)
        self.address = address
        self.username = username
        self.logger.info(f"Initialized Local API client for bridge at {address}")

    @property
    def base_url(self) -> str:
        return f"http://{self.address}/api/{self.username}"


def discover_bridges(timeout: float = 10.0) -> List[Dict[str, str]]:
    """Find Hue bridges on the local network through the discovery service.

    Returns:
        List of dicts with "id" and "internalipaddress" keys

    Raises:
        HubConnectionError: If the discovery service cannot be reached
    """
    logger = logging.getLogger(__name__)
    try:
        response = requests.get(DISCOVERY_URL, timeout=timeout)
        response.raise_for_status()
        bridges = response.json()
    except (requests.RequestException, ValueError) as e:
        raise HubConnectionError(f"Bridge discovery failed: {e}") from e

    logger.info(f"Discovered {len(bridges)} Hue bridge(s)")
    return bridges


def register_user(address: str, device_type: str, timeout: float = 10.0) -> str:
    """Create a whitelisted username on a bridge.

    The bridge link button must have been pressed shortly before.

    Args:
        address: Bridge hostname or IP address
        device_type: Name the bridge records for the new user, e.g. "hue-mqtt-sensors#myhost"
        timeout: Request timeout in seconds

    Returns:
        The new username

    Raises:
        LinkButtonNotPressedError: If the link button was not pressed
        HubError: On any other failure
    """
    logger = logging.getLogger(__name__)
    url = f"http://{address}/api"
    try:
        response = requests.post(url, json={"devicetype": device_type}, timeout=timeout)
        response.raise_for_status()
        body = response.json()
    except (requests.RequestException, ValueError) as e:
        raise HubConnectionError(f"Pairing with bridge at {address} failed: {e}") from e

    raise_for_hue_error(body)

    for item in body:
        username = item.get("success", {}).get("username")
        if username:
            logger.info(f"Registered new user on bridge at {address}")
            return username

    raise HubError(f"Bridge at {address} did not return a username: {body}")
