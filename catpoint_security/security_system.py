"""Wires the alarm engine to its collaborators from configuration."""

from typing import Iterable, Optional

from .config_manager import ConfigManager
from .logging_config import get_logger, setup_logging
from .services.error_handler import ErrorHandler
from .services.image_service import create_image_service
from .services.interfaces import ImageServiceInterface, SecurityRepositoryInterface, StatusListener
from .services.repository import InMemorySecurityRepository
from .services.security_service import SecurityService
from .services.status_listeners import LoggingStatusListener

logger = get_logger("security_system")


def create_security_service(config_manager: Optional[ConfigManager] = None,
                            security_repository: Optional[SecurityRepositoryInterface] = None,
                            image_service: Optional[ImageServiceInterface] = None,
                            status_listeners: Optional[Iterable[StatusListener]] = None,
                            config_path: Optional[str] = None,
                            error_handler: Optional[ErrorHandler] = None) -> SecurityService:
    """Build a SecurityService from configuration.

    Without a config_manager, one is created for ``config_path``; when that
    is also omitted the default ``catpoint_config.json`` in the current
    directory is used, and written with defaults if it does not exist.

    Collaborators passed in explicitly take precedence over the ones the
    configuration describes. A LoggingStatusListener is always subscribed.

    Raises:
        ConfigurationError: the configuration file is invalid
    """
    config_manager = config_manager or ConfigManager(config_path)
    config = config_manager.get_config()

    setup_logging(config.log_level, config.log_dir)

    repository = security_repository or InMemorySecurityRepository.from_config(config)
    analyzer = image_service or create_image_service(config)

    listeners = [LoggingStatusListener()]
    listeners.extend(status_listeners or ())

    service = SecurityService(
        repository,
        analyzer,
        status_listeners=listeners,
        confidence_threshold=config.cat_confidence_threshold,
        error_handler=error_handler
    )
    logger.info(f"Security service ready (image service: {type(analyzer).__name__}, "
                f"threshold: {config.cat_confidence_threshold:.1f}%)")
    return service
