"""Services for the security monitor."""

from .interfaces import (
    SecurityRepositoryInterface,
    ImageServiceInterface,
    StatusListener
)
from .security_service import SecurityService, ALARM_TRANSITIONS
from .repository import InMemorySecurityRepository
from .image_service import FakeImageService, OpenCVImageService, create_image_service
from .status_listeners import LoggingStatusListener

__all__ = [
    'SecurityRepositoryInterface',
    'ImageServiceInterface',
    'StatusListener',
    'SecurityService',
    'ALARM_TRANSITIONS',
    'InMemorySecurityRepository',
    'FakeImageService',
    'OpenCVImageService',
    'create_image_service',
    'LoggingStatusListener'
]
