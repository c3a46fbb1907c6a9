"""
Catpoint Security Monitor

Alarm decision engine for a home security system: door, window and motion
sensors plus camera images checked for cats drive the alarm status, gated
by the arming status.
"""

__version__ = "1.0.0"

from .config_manager import ConfigManager
from .exceptions import CatpointError, ImageAnalysisError, ConfigurationError
from .models import (
    AlarmStatus,
    ArmingStatus,
    SensorType,
    SensorEvent,
    Sensor,
    SecurityConfig
)
from .services import (
    SecurityRepositoryInterface,
    ImageServiceInterface,
    StatusListener,
    SecurityService,
    InMemorySecurityRepository,
    FakeImageService,
    OpenCVImageService,
    LoggingStatusListener
)
from .security_system import create_security_service

__all__ = [
    # Core management
    'ConfigManager',
    'create_security_service',

    # Errors
    'CatpointError',
    'ImageAnalysisError',
    'ConfigurationError',

    # Data models
    'AlarmStatus',
    'ArmingStatus',
    'SensorType',
    'SensorEvent',
    'Sensor',
    'SecurityConfig',

    # Services
    'SecurityRepositoryInterface',
    'ImageServiceInterface',
    'StatusListener',
    'SecurityService',
    'InMemorySecurityRepository',
    'FakeImageService',
    'OpenCVImageService',
    'LoggingStatusListener'
]
