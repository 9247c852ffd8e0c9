"""Exceptions raised by the Hue hub clients."""

from typing import Optional


class HubError(Exception):
    """Base exception for Hue hub errors."""

    pass


class HubConnectionError(HubError):
    """The hub could not be reached or answered with an HTTP error."""

    pass


class HubAuthError(HubError):
    """The hub rejected the credentials (unauthorized user or expired token)."""

    pass


class HubAPIError(HubError):
    """The hub answered with an error object in its JSON body."""

    def __init__(self, error_type: int, description: str, address: Optional[str] = None):
        self.error_type = error_type
        self.description = description
        self.address = address
        super().__init__(f"Hue API error {error_type} at {address or '?'}: {description}")


class SensorNotFoundError(HubAPIError):
    """The requested sensor id does not exist on the hub."""

    pass


class LinkButtonNotPressedError(HubAPIError):
    """Pairing was attempted without pressing the bridge link button."""

    pass
