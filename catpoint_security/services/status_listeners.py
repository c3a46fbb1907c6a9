"""Status listener that writes security events to the log."""

from typing import Optional

from ..models.security import AlarmStatus
from .interfaces import StatusListener
from ..logging_config import get_logger

logger = get_logger("status")


class LoggingStatusListener(StatusListener):
    """Logs every notification and remembers the most recent values."""

    def __init__(self):
        self.last_alarm_status: Optional[AlarmStatus] = None
        self.last_cat_verdict: Optional[bool] = None
        self.sensor_reset_count = 0

    def on_alarm_status_changed(self, status: AlarmStatus) -> None:
        self.last_alarm_status = status
        if status == AlarmStatus.ALARM:
            logger.warning(f"Alarm status: {status.name} ({status.description})")
        else:
            logger.info(f"Alarm status: {status.name} ({status.description})")

    def on_cat_detected(self, cat: bool) -> None:
        self.last_cat_verdict = cat
        logger.info("Cat detected in camera image" if cat else "No cat in camera image")

    def on_sensor_statuses_reset(self) -> None:
        self.sensor_reset_count += 1
        logger.info("All sensors reset to inactive")
