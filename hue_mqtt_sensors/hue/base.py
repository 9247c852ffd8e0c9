"""Base class for Hue hub clients."""

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

import requests

from .codec import state_update
from .exceptions import (
    HubAPIError,
    HubAuthError,
    HubConnectionError,
    LinkButtonNotPressedError,
    SensorNotFoundError,
)
from .models import Sensor

# Hue v1 API error types
ERROR_UNAUTHORIZED_USER = 1
ERROR_RESOURCE_NOT_AVAILABLE = 3
ERROR_LINK_BUTTON_NOT_PRESSED = 101


def raise_for_hue_error(body: Any) -> None:
    """Raise if a Hue v1 response body carries an error object.

    The v1 API answers errors with HTTP 200 and a list such as
    ``[{"error": {"type": 3, "address": "/sensors/9", "description": "..."}}]``.

    Raises:
        HubAuthError: For unauthorized user errors
        SensorNotFoundError: For unavailable resources
        LinkButtonNotPressedError: When pairing without pressing the link button
        HubAPIError: For every other error type
    """
    if not isinstance(body, list):
        return

    for item in body:
        if not isinstance(item, dict) or "error" not in item:
            continue

        error = item["error"]
        error_type = error.get("type")
        description = error.get("description", "unknown error")
        address = error.get("address")

        if error_type == ERROR_UNAUTHORIZED_USER:
            raise HubAuthError(f"Unauthorized user: {description}")
        if error_type == ERROR_RESOURCE_NOT_AVAILABLE:
            raise SensorNotFoundError(error_type, description, address)
        if error_type == ERROR_LINK_BUTTON_NOT_PRESSED:
            raise LinkButtonNotPressedError(error_type, description, address)
        raise HubAPIError(error_type, description, address)


class BaseHueClient(ABC):
    """Sensor access over the Hue v1 REST API.

    Subclasses supply the base URL and the request headers for their
    authentication scheme.
    """

    def __init__(self, timeout: float = 10.0):
        """Initialize the client.

        Args:
            timeout: Timeout in seconds for every hub request
        """
        self.timeout = timeout
        self.logger = logging.getLogger(__name__)

    @property
    @abstractmethod
    def base_url(self) -> str:
        """URL of the authenticated API root, without trailing slash."""
        ...

    def _headers(self) -> Dict[str, str]:
        """Headers sent with every request."""
        return {"Content-Type": "application/json"}

    def _send(self, method: str, url: str, json_body: Optional[Dict] = None) -> requests.Response:
        """Send one HTTP request, translating transport failures.

        Raises:
            HubConnectionError: If the request fails or the hub answers with an HTTP error
        """
        try:
            response = requests.request(
                method, url, headers=self._headers(), json=json_body, timeout=self.timeout
            )
        except requests.RequestException as e:
            raise HubConnectionError(f"{method} {url} failed: {e}") from e

        if response.status_code == 401:
            raise HubAuthError(f"{method} {url} was rejected with HTTP 401")

        try:
            response.raise_for_status()
        except requests.HTTPError as e:
            raise HubConnectionError(f"{method} {url} failed: {e}") from e

        return response

    def _request(self, method: str, path: str, json_body: Optional[Dict] = None) -> Any:
        """Call an API path and return the decoded body.

        Args:
            method: HTTP method
            path: Path below the API root, e.g. "/sensors"
            json_body: Optional JSON body

        Returns:
            Decoded JSON body

        Raises:
            HubError: On transport, HTTP or Hue API errors
        """
        url = f"{self.base_url}{path}"
        self.logger.debug(f"{method} {url}")

        response = self._send(method, url, json_body)
        try:
            body = response.json()
        except ValueError as e:
            raise HubConnectionError(f"{method} {url} returned invalid JSON: {e}") from e

        raise_for_hue_error(body)
        return body

    def list_sensors(self) -> List[Sensor]:
        """Fetch all sensors, in the order the hub lists them."""
        body = self._request("GET", "/sensors")
        sensors = [Sensor.from_hue(sensor_id, data) for sensor_id, data in body.items()]
        self.logger.debug(f"Fetched {len(sensors)} sensors")
        return sensors

    def get_sensor(self, sensor_id: str) -> Sensor:
        """Fetch a single sensor by id.

        Raises:
            SensorNotFoundError: If the hub has no sensor with this id
        """
        body = self._request("GET", f"/sensors/{sensor_id}")
        return Sensor.from_hue(sensor_id, body)

    def update_sensor(self, sensor: Sensor) -> None:
        """Push a sensor's writable state back to the hub.

        Sensors without writable state are left alone; no request is made.
        """
        body = state_update(sensor)
        if not body:
            self.logger.debug(f"Sensor {sensor.id} ({sensor.type}) has no writable state")
            return

        self._request("PUT", f"/sensors/{sensor.id}/state", body)
        self.logger.info(f"Updated sensor {sensor.id} state: {body}")
