"""Unit tests for error handling."""

import unittest
from datetime import datetime, timedelta
import sys
import os

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from catpoint_security.services.error_handler import (
    ErrorHandler, ErrorSeverity, ComponentStatus, with_error_handling
)


class TestErrorHandler(unittest.TestCase):
    """Test error handler functionality."""

    def setUp(self):
        """Set up test fixtures."""
        self.error_handler = ErrorHandler(max_error_history=3)

    def test_register_component(self):
        """Registered components start healthy with no errors."""
        self.error_handler.register_component("repository")

        self.assertEqual(self.error_handler.component_error_counts["repository"], 0)
        self.assertEqual(self.error_handler.get_component_health()["repository"], ComponentStatus.HEALTHY)

    def test_handle_error(self):
        """Errors are recorded with type and severity."""
        record = self.error_handler.handle_error("repository", ValueError("boom"), ErrorSeverity.HIGH)

        self.assertEqual(record.error_type, "ValueError")
        self.assertEqual(record.severity, ErrorSeverity.HIGH)
        self.assertEqual(self.error_handler.component_error_counts["repository"], 1)
        self.assertEqual(self.error_handler.component_status["repository"], ComponentStatus.DEGRADED)

    def test_critical_error_marks_failed(self):
        """Critical errors mark the component failed."""
        self.error_handler.handle_error("camera", RuntimeError("gone"), ErrorSeverity.CRITICAL)
        self.assertEqual(self.error_handler.component_status["camera"], ComponentStatus.FAILED)

    def test_history_is_bounded(self):
        """Only the newest records are kept."""
        for i in range(5):
            self.error_handler.handle_error("repository", ValueError(str(i)), ErrorSeverity.LOW)

        self.assertEqual(len(self.error_handler.error_records), 3)
        self.assertEqual(str(self.error_handler.error_records[0].error), "2")
        self.assertEqual(self.error_handler.get_error_stats()["component_error_counts"]["repository"], 5)

    def test_reset_error_counts(self):
        """Resetting restores healthy status."""
        self.error_handler.handle_error("a", ValueError(), ErrorSeverity.CRITICAL)
        self.error_handler.handle_error("b", ValueError(), ErrorSeverity.HIGH)

        self.error_handler.reset_error_counts("a")
        self.assertEqual(self.error_handler.component_error_counts["a"], 0)
        self.assertEqual(self.error_handler.component_status["a"], ComponentStatus.HEALTHY)
        self.assertEqual(self.error_handler.component_error_counts["b"], 1)

        self.error_handler.reset_error_counts()
        self.assertEqual(self.error_handler.component_error_counts["b"], 0)

    def test_error_summary(self):
        """The summary only counts recent errors."""
        self.error_handler.handle_error("a", ValueError(), ErrorSeverity.LOW)
        self.error_handler.handle_error("a", ValueError(), ErrorSeverity.MEDIUM)
        old = self.error_handler.handle_error("b", ValueError(), ErrorSeverity.LOW)
        old.timestamp = datetime.now() - timedelta(hours=48)

        summary = self.error_handler.get_error_summary(hours=24)

        self.assertEqual(summary["total_errors"], 2)
        self.assertEqual(summary["component_counts"], {"a": 2})
        self.assertEqual(summary["severity_counts"]["low"], 1)
        self.assertEqual(summary["severity_counts"]["medium"], 1)

    def test_clear_error_history(self):
        """Clearing drops records and counts."""
        self.error_handler.handle_error("a", ValueError(), ErrorSeverity.LOW)
        self.error_handler.clear_error_history()

        self.assertEqual(self.error_handler.get_error_stats()["total_errors"], 0)
        self.assertEqual(self.error_handler.component_error_counts, {})


class TestWithErrorHandling(unittest.TestCase):
    """Test the error handling decorator."""

    def setUp(self):
        """Set up test fixtures."""
        self.error_handler = ErrorHandler()

    def test_critical_errors_are_reraised(self):
        """Critical failures are recorded and propagate unchanged."""
        error = KeyError("sensor")

        @with_error_handling("engine", ErrorSeverity.CRITICAL, error_handler=self.error_handler)
        def failing():
            raise error

        with self.assertRaises(KeyError) as context:
            failing()

        self.assertIs(context.exception, error)
        self.assertEqual(self.error_handler.component_error_counts["engine"], 1)

    def test_non_critical_errors_return_none(self):
        """Lower severities are recorded and swallowed."""
        @with_error_handling("engine", ErrorSeverity.LOW, error_handler=self.error_handler)
        def failing():
            raise ValueError("ignored")

        self.assertIsNone(failing())
        self.assertEqual(self.error_handler.component_error_counts["engine"], 1)

    def test_success_passes_through(self):
        """Return values are untouched."""
        @with_error_handling("engine", error_handler=self.error_handler)
        def add(a, b):
            return a + b

        self.assertEqual(add(2, 3), 5)
        self.assertEqual(add.__name__, "add")
        self.assertEqual(self.error_handler.get_error_stats()["total_errors"], 0)

    def test_methods_use_instance_error_handler(self):
        """Methods record into their instance's error_handler attribute."""
        class Engine:
            def __init__(self, error_handler):
                self.error_handler = error_handler

            @with_error_handling("engine", ErrorSeverity.CRITICAL)
            def run(self):
                raise RuntimeError("stalled")

        other_handler = ErrorHandler()
        Engine(other_handler)
        with self.assertRaises(RuntimeError):
            Engine(self.error_handler).run()

        self.assertEqual(self.error_handler.component_error_counts["engine"], 1)
        self.assertNotIn("engine", other_handler.component_error_counts)


if __name__ == '__main__':
    unittest.main()
