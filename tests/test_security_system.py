"""Tests for status logging, logging setup and service wiring."""

import logging
import os
import shutil
import tempfile
import unittest
from unittest.mock import Mock
import sys

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from catpoint_security import logging_config
from catpoint_security.config_manager import ConfigManager
from catpoint_security.exceptions import ConfigurationError
from catpoint_security.logging_config import get_logger, setup_logging
from catpoint_security.models.security import AlarmStatus, ArmingStatus, Sensor, SensorType
from catpoint_security.security_system import create_security_service
from catpoint_security.services.error_handler import ErrorHandler
from catpoint_security.services.image_service import FakeImageService
from catpoint_security.services.interfaces import ImageServiceInterface, StatusListener
from catpoint_security.services.repository import InMemorySecurityRepository
from catpoint_security.services.status_listeners import LoggingStatusListener


class TestLoggingStatusListener(unittest.TestCase):
    """Test cases for LoggingStatusListener."""

    def setUp(self):
        """Set up test fixtures."""
        self.listener = LoggingStatusListener()

    def test_alarm_logged_as_warning(self):
        """A full alarm is logged at warning level."""
        with self.assertLogs("catpoint.status", level="WARNING") as logs:
            self.listener.on_alarm_status_changed(AlarmStatus.ALARM)

        self.assertIn("ALARM", logs.output[0])
        self.assertEqual(self.listener.last_alarm_status, AlarmStatus.ALARM)

    def test_tracks_last_values(self):
        """The listener remembers what it was told."""
        with self.assertLogs("catpoint.status", level="INFO"):
            self.listener.on_cat_detected(True)
            self.listener.on_sensor_statuses_reset()
            self.listener.on_sensor_statuses_reset()

        self.assertTrue(self.listener.last_cat_verdict)
        self.assertEqual(self.listener.sensor_reset_count, 2)


class TestLoggingConfig(unittest.TestCase):
    """Test cases for logging setup."""

    def setUp(self):
        """Set up test fixtures."""
        self.test_dir = tempfile.mkdtemp()

    def tearDown(self):
        """Clean up test fixtures."""
        setup_logging("INFO")
        shutil.rmtree(self.test_dir, ignore_errors=True)

    def test_component_loggers(self):
        """Component loggers live under the package logger and are cached."""
        logger = get_logger("unit_test")
        self.assertEqual(logger.name, "catpoint.unit_test")
        self.assertIs(get_logger("unit_test"), logger)

    def test_file_logging(self):
        """A log directory adds rotating main and error logs."""
        manager = setup_logging("DEBUG", os.path.join(self.test_dir, "logs"))
        get_logger("unit_test").error("disk full")

        for handler in logging.getLogger("catpoint").handlers:
            handler.flush()

        stats = manager.get_log_stats()
        self.assertEqual(stats["log_level"], "DEBUG")
        self.assertIn("catpoint.log", stats["log_files"])
        self.assertIn("errors.log", stats["log_files"])
        with open(manager.error_log_file) as f:
            self.assertIn("disk full", f.read())
        with open(manager.main_log_file) as f:
            content = f.read()
        self.assertIn("component=unit_test", content)
        self.assertIn(f"pid={os.getpid()}", content)

    def test_setup_keeps_component_loggers(self):
        """Reconfiguring keeps already handed out loggers registered."""
        get_logger("kept")
        setup_logging("WARNING")
        self.assertIn("kept", logging_config.logging_manager.component_loggers)
        self.assertEqual(logging.getLogger("catpoint").level, logging.WARNING)


class TestCreateSecurityService(unittest.TestCase):
    """Test cases for create_security_service."""

    def setUp(self):
        """Set up test fixtures."""
        self.test_dir = tempfile.mkdtemp()
        self.config_manager = ConfigManager(os.path.join(self.test_dir, "config.json"))

    def tearDown(self):
        """Clean up test fixtures."""
        setup_logging("INFO")
        shutil.rmtree(self.test_dir, ignore_errors=True)

    def test_builds_from_config(self):
        """Collaborators and threshold follow the configuration."""
        self.config_manager.update_config(
            image_service="fake",
            cat_confidence_threshold=80.0,
            initial_arming_status="ARMED_AWAY"
        )

        service = create_security_service(self.config_manager)

        self.assertIsInstance(service.image_service, FakeImageService)
        self.assertIsInstance(service.security_repository, InMemorySecurityRepository)
        self.assertEqual(service.confidence_threshold, 80.0)
        self.assertEqual(service.get_arming_status(), ArmingStatus.ARMED_AWAY)
        self.assertIsInstance(service.status_listeners[0], LoggingStatusListener)

    def test_explicit_collaborators(self):
        """Passed collaborators replace the configured ones."""
        repository = InMemorySecurityRepository(arming_status=ArmingStatus.ARMED_HOME)
        image_service = Mock(spec=ImageServiceInterface)
        image_service.image_contains_cat.return_value = True
        listener = Mock(spec=StatusListener)

        service = create_security_service(
            self.config_manager,
            security_repository=repository,
            image_service=image_service,
            status_listeners=[listener]
        )
        service.add_sensor(Sensor("Door", SensorType.DOOR))
        service.process_image(object())

        image_service.image_contains_cat.assert_called_once()
        self.assertEqual(repository.get_alarm_status(), AlarmStatus.ALARM)
        listener.on_alarm_status_changed.assert_called_once_with(AlarmStatus.ALARM)
        listener.on_cat_detected.assert_called_once_with(True)

    def test_config_path_is_created(self):
        """A config path without a manager is written with defaults."""
        config_path = os.path.join(self.test_dir, "site", "catpoint.json")

        service = create_security_service(config_path=config_path, image_service=Mock(spec=ImageServiceInterface))

        self.assertTrue(os.path.exists(config_path))
        self.assertEqual(service.confidence_threshold, 50.0)

    def test_default_config_written_to_working_directory(self):
        """With no arguments the default config file lands in the working directory."""
        previous_cwd = os.getcwd()
        os.chdir(self.test_dir)
        try:
            create_security_service(image_service=Mock(spec=ImageServiceInterface))
            self.assertTrue(os.path.exists(os.path.join(self.test_dir, "catpoint_config.json")))
        finally:
            os.chdir(previous_cwd)

    def test_invalid_config_file_raises(self):
        """An invalid config file stops the service from being built."""
        config_path = os.path.join(self.test_dir, "bad.json")
        with open(config_path, 'w') as f:
            f.write('{"initial_alarm_status": "BOGUS"}')

        with self.assertRaises(ConfigurationError):
            create_security_service(config_path=config_path)

    def test_error_handler_passed_through(self):
        """Failures are recorded on the given error handler."""
        error_handler = ErrorHandler()
        image_service = Mock(spec=ImageServiceInterface)
        image_service.image_contains_cat.side_effect = ValueError("bad frame")

        service = create_security_service(
            self.config_manager,
            image_service=image_service,
            error_handler=error_handler
        )
        with self.assertRaises(ValueError):
            service.process_image(object())

        self.assertIs(service.error_handler, error_handler)
        self.assertEqual(error_handler.component_error_counts["security_service"], 1)


if __name__ == '__main__':
    unittest.main()
