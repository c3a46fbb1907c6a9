"""In-memory security repository."""

import threading
from typing import Dict, Iterable, Optional, Set, Tuple

from ..models.config import SecurityConfig
from ..models.security import AlarmStatus, ArmingStatus, Sensor
from .interfaces import SecurityRepositoryInterface
from ..logging_config import get_logger

logger = get_logger("repository")


class InMemorySecurityRepository(SecurityRepositoryInterface):
    """Repository holding sensors and statuses in process memory.

    Sensors are keyed by ``Sensor.key`` so updating a sensor's ``active``
    flag never changes where it is stored.
    """

    def __init__(self,
                 sensors: Optional[Iterable[Sensor]] = None,
                 alarm_status: AlarmStatus = AlarmStatus.NO_ALARM,
                 arming_status: ArmingStatus = ArmingStatus.DISARMED):
        self._lock = threading.RLock()
        self._sensors: Dict[Tuple[str, str], Sensor] = {}
        self._alarm_status = alarm_status
        self._arming_status = arming_status

        for sensor in sensors or ():
            self._sensors[sensor.key] = sensor

    @classmethod
    def from_config(cls, config: SecurityConfig) -> "InMemorySecurityRepository":
        """Create an empty repository with the configured initial statuses."""
        return cls(
            alarm_status=AlarmStatus[config.initial_alarm_status],
            arming_status=ArmingStatus[config.initial_arming_status]
        )

    def get_alarm_status(self) -> AlarmStatus:
        with self._lock:
            return self._alarm_status

    def set_alarm_status(self, alarm_status: AlarmStatus) -> None:
        with self._lock:
            self._alarm_status = alarm_status
        logger.debug(f"Alarm status stored: {alarm_status.name}")

    def get_arming_status(self) -> ArmingStatus:
        with self._lock:
            return self._arming_status

    def set_arming_status(self, arming_status: ArmingStatus) -> None:
        with self._lock:
            self._arming_status = arming_status
        logger.debug(f"Arming status stored: {arming_status.name}")

    def get_sensors(self) -> Set[Sensor]:
        with self._lock:
            return set(self._sensors.values())

    def update_sensor(self, sensor: Sensor) -> None:
        with self._lock:
            self._sensors[sensor.key] = sensor
        logger.debug(f"Sensor updated: {sensor.name} active={sensor.active}")

    def add_sensor(self, sensor: Sensor) -> None:
        with self._lock:
            self._sensors[sensor.key] = sensor
        logger.info(f"Sensor added: {sensor.name} ({sensor.sensor_type.name})")

    def remove_sensor(self, sensor: Sensor) -> None:
        with self._lock:
            removed = self._sensors.pop(sensor.key, None)
        if removed is not None:
            logger.info(f"Sensor removed: {sensor.name} ({sensor.sensor_type.name})")
