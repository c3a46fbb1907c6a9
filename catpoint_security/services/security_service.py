"""Alarm decision engine for the security monitor."""

from typing import Any, Dict, Iterable, List, Optional, Set, Tuple

from ..config.defaults import SYSTEM_CONSTANTS
from ..models.security import AlarmStatus, ArmingStatus, Sensor, SensorEvent
from .interfaces import ImageServiceInterface, SecurityRepositoryInterface, StatusListener
from .error_handler import ErrorHandler, ErrorSeverity, global_error_handler, with_error_handling
from ..logging_config import get_logger

logger = get_logger("security_service")

COMPONENT_NAME = "security_service"

# (current alarm status, sensor event) -> next alarm status.
# Pairs not listed leave the alarm status untouched.
ALARM_TRANSITIONS: Dict[Tuple[AlarmStatus, SensorEvent], AlarmStatus] = {
    (AlarmStatus.NO_ALARM, SensorEvent.ACTIVATED): AlarmStatus.PENDING_ALARM,
    (AlarmStatus.PENDING_ALARM, SensorEvent.ACTIVATED): AlarmStatus.ALARM,
    (AlarmStatus.PENDING_ALARM, SensorEvent.DEACTIVATED): AlarmStatus.NO_ALARM,
}


class SecurityService:
    """Turns sensor and camera events into alarm status changes.

    Arming and alarm status live in the repository and are read on every
    call; the only state held here is the listener list and the verdict of
    the last processed image. Operations are synchronous and take no locks,
    so callers that share an instance across threads must serialize calls
    themselves.
    """

    def __init__(self,
                 security_repository: SecurityRepositoryInterface,
                 image_service: ImageServiceInterface,
                 status_listeners: Optional[Iterable[StatusListener]] = None,
                 confidence_threshold: float = SYSTEM_CONSTANTS["CAT_CONFIDENCE_THRESHOLD"],
                 error_handler: Optional[ErrorHandler] = None):
        self.security_repository = security_repository
        self.image_service = image_service
        self.confidence_threshold = confidence_threshold
        self.error_handler = error_handler or global_error_handler
        self._status_listeners: List[StatusListener] = []
        self._cat_detected = False

        for listener in status_listeners or ():
            self.add_status_listener(listener)

        self.error_handler.register_component(COMPONENT_NAME)

    @property
    def cat_detected(self) -> bool:
        """Verdict of the most recently processed image."""
        return self._cat_detected

    @property
    def status_listeners(self) -> List[StatusListener]:
        return list(self._status_listeners)

    @with_error_handling(COMPONENT_NAME, ErrorSeverity.CRITICAL)
    def set_arming_status(self, arming_status: ArmingStatus) -> None:
        """Set the arming status, resetting sensors when arming a disarmed system.

        Arming requests made while ARMED_HOME are ignored: no status is
        written and sensors keep their state.
        """
        if arming_status == ArmingStatus.DISARMED:
            self.security_repository.set_arming_status(arming_status)
            logger.info("System disarmed")
            self.set_alarm_status(AlarmStatus.NO_ALARM)
            return

        current = self.security_repository.get_arming_status()
        if current == ArmingStatus.DISARMED:
            self.security_repository.set_arming_status(arming_status)
            logger.info(f"System armed: {arming_status.name}")
            self._deactivate_all_sensors()
            self._alarm_if_cat_at_home(arming_status)
        elif current == ArmingStatus.ARMED_AWAY:
            self.security_repository.set_arming_status(arming_status)
            logger.info(f"System re-armed: {current.name} -> {arming_status.name}")
            self._alarm_if_cat_at_home(arming_status)
        else:
            logger.debug(f"Arming change {current.name} -> {arming_status.name} ignored")

    @with_error_handling(COMPONENT_NAME, ErrorSeverity.CRITICAL)
    def change_sensor_activation_status(self, sensor: Sensor, active: bool) -> None:
        """Update a sensor's state and move the alarm status accordingly."""
        self._change_sensor_activation_status(sensor, active)

    @with_error_handling(COMPONENT_NAME, ErrorSeverity.CRITICAL)
    def process_image(self, image: Any) -> None:
        """Analyze a camera image for a cat and update the alarm status."""
        cat = self.image_service.image_contains_cat(image, self.confidence_threshold)
        self._cat_detected = cat

        if cat and self.security_repository.get_arming_status() == ArmingStatus.ARMED_HOME:
            self.set_alarm_status(AlarmStatus.ALARM)
        elif not cat and self._all_sensors_inactive():
            self.set_alarm_status(AlarmStatus.NO_ALARM)

        for listener in list(self._status_listeners):
            listener.on_cat_detected(cat)

    def set_alarm_status(self, alarm_status: AlarmStatus) -> None:
        """Store the alarm status and notify every listener."""
        self.security_repository.set_alarm_status(alarm_status)
        logger.info(f"Alarm status set to {alarm_status.name}")
        for listener in list(self._status_listeners):
            listener.on_alarm_status_changed(alarm_status)

    def add_status_listener(self, status_listener: StatusListener) -> None:
        if status_listener not in self._status_listeners:
            self._status_listeners.append(status_listener)

    def remove_status_listener(self, status_listener: StatusListener) -> None:
        if status_listener in self._status_listeners:
            self._status_listeners.remove(status_listener)

    def get_alarm_status(self) -> AlarmStatus:
        return self.security_repository.get_alarm_status()

    def get_arming_status(self) -> ArmingStatus:
        return self.security_repository.get_arming_status()

    def get_sensors(self) -> Set[Sensor]:
        return self.security_repository.get_sensors()

    def add_sensor(self, sensor: Sensor) -> None:
        self.security_repository.add_sensor(sensor)

    def remove_sensor(self, sensor: Sensor) -> None:
        self.security_repository.remove_sensor(sensor)

    def _change_sensor_activation_status(self, sensor: Sensor, active: bool) -> None:
        if self.security_repository.get_alarm_status() != AlarmStatus.ALARM:
            if active and self.security_repository.get_arming_status() != ArmingStatus.DISARMED:
                # Fires for an already active sensor too
                self._handle_sensor_event(SensorEvent.ACTIVATED)
            elif not active and sensor.active:
                self._handle_sensor_event(SensorEvent.DEACTIVATED)

        sensor.active = active
        self.security_repository.update_sensor(sensor)

    def _handle_sensor_event(self, event: SensorEvent) -> None:
        current = self.security_repository.get_alarm_status()
        next_status = ALARM_TRANSITIONS.get((current, event))
        if next_status is not None:
            logger.debug(f"Sensor {event.value}: {current.name} -> {next_status.name}")
            self.set_alarm_status(next_status)

    def _deactivate_all_sensors(self) -> None:
        for sensor in sorted(self.security_repository.get_sensors()):
            self._change_sensor_activation_status(sensor, False)
        for listener in list(self._status_listeners):
            listener.on_sensor_statuses_reset()

    def _alarm_if_cat_at_home(self, arming_status: ArmingStatus) -> None:
        if arming_status == ArmingStatus.ARMED_HOME and self._cat_detected:
            self.set_alarm_status(AlarmStatus.ALARM)

    def _all_sensors_inactive(self) -> bool:
        return not any(sensor.active for sensor in self.security_repository.get_sensors())
