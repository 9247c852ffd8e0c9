"""Sensor model for data fetched from the Hue hub."""

import copy
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field


class Sensor(BaseModel):
    """Transient copy of a hub sensor, fetched per poll or per command."""

    id: str
    type: str
    name: str = ""
    state: Dict[str, Any] = Field(default_factory=dict)
    config: Dict[str, Any] = Field(default_factory=dict)
    raw: Dict[str, Any] = Field(default_factory=dict, description="Remaining fields of the hub payload")

    @classmethod
    def from_hue(cls, sensor_id: str, data: Dict[str, Any]) -> "Sensor":
        """Build a sensor from a Hue v1 API sensor object.

        Args:
            sensor_id: Id the sensor is keyed by in the hub's listing
            data: Sensor JSON object as returned by the hub

        Returns:
            Sensor instance
        """
        data = copy.deepcopy(data)
        return cls(
            id=str(sensor_id),
            type=data.pop("type", ""),
            name=data.pop("name", ""),
            state=data.pop("state", {}) or {},
            config=data.pop("config", {}) or {},
            raw=data,
        )

    @property
    def last_updated(self) -> Optional[str]:
        """Hub-assigned timestamp of the last state change."""
        return self.state.get("lastupdated")

    def hue_payload(self) -> Dict[str, Any]:
        """Full hub payload for this sensor, as the hub would serve it."""
        return {
            **copy.deepcopy(self.raw),
            "type": self.type,
            "name": self.name,
            "state": copy.deepcopy(self.state),
            "config": copy.deepcopy(self.config),
        }
