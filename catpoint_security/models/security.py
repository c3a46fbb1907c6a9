"""Security system data models."""

import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Tuple


class AlarmStatus(Enum):
    """Alert level of the security system."""
    NO_ALARM = "Cool and Good"
    PENDING_ALARM = "I'm in Danger..."
    ALARM = "Awooga!"

    @property
    def description(self) -> str:
        return self.value


class ArmingStatus(Enum):
    """Whether the system is monitoring."""
    DISARMED = "Disarmed"
    ARMED_HOME = "Armed - At Home"
    ARMED_AWAY = "Armed - Away"

    @property
    def description(self) -> str:
        return self.value


class SensorType(Enum):
    """Kind of physical sensor."""
    DOOR = "door"
    WINDOW = "window"
    MOTION = "motion"


class SensorEvent(Enum):
    """Sensor change that can move the alarm status."""
    ACTIVATED = "activated"
    DEACTIVATED = "deactivated"


@dataclass(eq=False)
class Sensor:
    """A named, typed contact or presence detector.

    Identity is ``(name, sensor_type)``. The ``active`` flag is mutable
    state and never takes part in equality, hashing or ordering, so a
    sensor can be updated in place while it sits in a set.
    """
    name: str
    sensor_type: SensorType
    active: bool = False
    sensor_id: str = field(default_factory=lambda: str(uuid.uuid4()))

    @property
    def key(self) -> Tuple[str, str]:
        return (self.name, self.sensor_type.value)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Sensor):
            return NotImplemented
        return self.key == other.key

    def __hash__(self) -> int:
        return hash(self.key)

    def __lt__(self, other: "Sensor") -> bool:
        if not isinstance(other, Sensor):
            return NotImplemented
        return self.key < other.key

    def to_dict(self) -> Dict[str, Any]:
        """Serialize sensor to a plain dictionary."""
        return {
            "sensor_id": self.sensor_id,
            "name": self.name,
            "sensor_type": self.sensor_type.name,
            "active": self.active,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Sensor":
        """Create a sensor from a dictionary produced by ``to_dict``."""
        kwargs = {
            "name": data["name"],
            "sensor_type": SensorType[data["sensor_type"]],
            "active": bool(data.get("active", False)),
        }
        if data.get("sensor_id"):
            kwargs["sensor_id"] = data["sensor_id"]
        return cls(**kwargs)
