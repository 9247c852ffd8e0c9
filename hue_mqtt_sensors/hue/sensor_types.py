"""Hue sensor type definitions."""

from enum import Enum
from typing import Optional


class SensorType(Enum):
    """Known Hue sensor types with the state field holding their primary reading."""

    TEMPERATURE = ("ZLLTemperature", "temperature", False)
    DAYLIGHT = ("Daylight", "daylight", False)
    PRESENCE = ("ZLLPresence", "presence", False)
    LIGHT_LEVEL = ("ZLLLightLevel", "lightlevel", False)
    GENERIC_STATUS = ("CLIPGenericStatus", "status", True)  # Only type settable over MQTT

    def __init__(self, tag: str, field: str, writable: bool):
        self._tag = tag
        self._field = field
        self._writable = writable

    @property
    def tag(self) -> str:
        """Type tag as reported by the hub."""
        return self._tag

    @property
    def field(self) -> str:
        """Name of the state field holding the primary reading."""
        return self._field

    @property
    def writable(self) -> bool:
        """Whether the primary field may be set through command topics."""
        return self._writable

    @classmethod
    def from_tag(cls, tag: Optional[str]) -> Optional["SensorType"]:
        """Look up a sensor type by its hub type tag.

        Args:
            tag: Type tag, e.g. "ZLLTemperature" (case-sensitive, as the hub reports it)

        Returns:
            SensorType member, or None for tags the bridge does not know

        Examples:
            >>> SensorType.from_tag("Daylight")
            SensorType.DAYLIGHT
            >>> SensorType.from_tag("ZHASwitch") is None
            True
        """
        return _BY_TAG.get(tag)

    def __str__(self) -> str:
        return self.tag

    def __repr__(self) -> str:
        return f"SensorType.{self.name}"


_BY_TAG = {member.tag: member for member in SensorType}
