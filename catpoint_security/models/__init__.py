"""Data models for the security monitor."""

from .security import AlarmStatus, ArmingStatus, SensorType, SensorEvent, Sensor
from .config import SecurityConfig

__all__ = ['AlarmStatus', 'ArmingStatus', 'SensorType', 'SensorEvent', 'Sensor', 'SecurityConfig']
