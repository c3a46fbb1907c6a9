"""Service interfaces and abstract base classes."""

from abc import ABC, abstractmethod
from typing import Any, Set

from ..models.security import AlarmStatus, ArmingStatus, Sensor


class SecurityRepositoryInterface(ABC):
    """Interface for the store of sensors, alarm status and arming status."""

    @abstractmethod
    def get_alarm_status(self) -> AlarmStatus:
        """Get the stored alarm status."""
        pass

    @abstractmethod
    def set_alarm_status(self, alarm_status: AlarmStatus) -> None:
        """Store the alarm status."""
        pass

    @abstractmethod
    def get_arming_status(self) -> ArmingStatus:
        """Get the stored arming status."""
        pass

    @abstractmethod
    def set_arming_status(self, arming_status: ArmingStatus) -> None:
        """Store the arming status."""
        pass

    @abstractmethod
    def get_sensors(self) -> Set[Sensor]:
        """Get all known sensors."""
        pass

    @abstractmethod
    def update_sensor(self, sensor: Sensor) -> None:
        """Persist the current state of a sensor."""
        pass

    @abstractmethod
    def add_sensor(self, sensor: Sensor) -> None:
        """Add a sensor."""
        pass

    @abstractmethod
    def remove_sensor(self, sensor: Sensor) -> None:
        """Remove a sensor."""
        pass


class ImageServiceInterface(ABC):
    """Interface for the image analysis capability."""

    @abstractmethod
    def image_contains_cat(self, image: Any, confidence_threshold: float) -> bool:
        """Return True if a cat is found with at least ``confidence_threshold`` percent confidence."""
        pass


class StatusListener(ABC):
    """Interface for subscribers to security status changes."""

    @abstractmethod
    def on_alarm_status_changed(self, status: AlarmStatus) -> None:
        """Called after the alarm status is written."""
        pass

    @abstractmethod
    def on_cat_detected(self, cat: bool) -> None:
        """Called with every image analysis verdict."""
        pass

    @abstractmethod
    def on_sensor_statuses_reset(self) -> None:
        """Called once after all sensors were deactivated by arming."""
        pass
