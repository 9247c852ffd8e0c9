"""Hue Remote API client implementation."""

import threading
from typing import Any, Dict, Optional

import requests

from .base import BaseHueClient
from .exceptions import HubAuthError, HubConnectionError


class RemoteHueClient(BaseHueClient):
    """Client for a Hue bridge reached through the Hue Remote API."""

    BASE_URL = "https://api.meethue.com/bridge"
    TOKEN_URL = "https://api.meethue.com/v2/oauth2/token"

    def __init__(
        self,
        access_token: str,
        refresh_token: str,
        bridge_username: str,
        client_id: Optional[str] = None,
        client_secret: Optional[str] = None,
        timeout: float = 10.0,
    ):
        """Initialize the Remote API client.

        Args:
            access_token: OAuth access token
            refresh_token: OAuth refresh token
            bridge_username: Whitelisted bridge username
            client_id: OAuth client ID, needed to refresh tokens
            client_secret: OAuth client secret, needed to refresh tokens
            timeout: Timeout in seconds for every hub request
        """
        super().__init__(timeout=timeout)
        self.access_token = access_token
        self.refresh_token = refresh_token
        self.bridge_username = bridge_username
        self.client_id = client_id
        self.client_secret = client_secret
        self._token_lock = threading.Lock()
        self.logger.info("Initialized Remote API client")

    @property
    def base_url(self) -> str:
        return f"{self.BASE_URL}/{self.bridge_username}"

    def _headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self.access_token}",
            "Content-Type": "application/json",
        }

    def _send(self, method: str, url: str, json_body: Optional[Dict] = None) -> requests.Response:
        """Send a request, refreshing the access token once on HTTP 401."""
        used_token = self.access_token
        try:
            return super()._send(method, url, json_body)
        except HubAuthError:
            if not (self.client_id and self.client_secret):
                raise
            self.logger.info("Access token rejected, refreshing")
            self._refresh_if_unchanged(used_token)
            return super()._send(method, url, json_body)

    def _refresh_if_unchanged(self, used_token: str) -> None:
        # Concurrent poll and command requests may both see the 401
        with self._token_lock:
            if self.access_token == used_token:
                self.refresh_tokens()

    def refresh_tokens(self) -> Dict[str, Any]:
        """Exchange the refresh token for a new token pair.

        Returns:
            Token response body

        Raises:
            HubAuthError: If the token endpoint rejects the refresh token
            HubConnectionError: If the token endpoint cannot be reached
        """
        try:
            response = requests.post(
                self.TOKEN_URL,
                data={"grant_type": "refresh_token", "refresh_token": self.refresh_token},
                auth=(self.client_id, self.client_secret),
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise HubConnectionError(f"Token refresh failed: {e}") from e

        if response.status_code in (400, 401):
            raise HubAuthError(f"Token refresh rejected with HTTP {response.status_code}")

        try:
            response.raise_for_status()
            tokens = response.json()
        except (requests.HTTPError, ValueError) as e:
            raise HubConnectionError(f"Token refresh failed: {e}") from e

        self.access_token = tokens["access_token"]
        self.refresh_token = tokens.get("refresh_token", self.refresh_token)
        self.logger.info("Refreshed Remote API access token")
        return tokens
