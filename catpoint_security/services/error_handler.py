"""Collaborator failure bookkeeping for the security monitor."""

import functools
import threading
import traceback
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from enum import Enum
from typing import Dict, List, Optional, Any

from ..logging_config import get_logger

logger = get_logger("error_handler")


class ErrorSeverity(Enum):
    """Error severity levels."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class ComponentStatus(Enum):
    """Component status levels."""
    HEALTHY = "healthy"
    DEGRADED = "degraded"
    FAILED = "failed"
    UNKNOWN = "unknown"


@dataclass
class ErrorRecord:
    """Record of an error occurrence."""
    component_name: str
    error: Exception
    severity: ErrorSeverity
    timestamp: datetime = field(default_factory=datetime.now)
    traceback_str: str = ""

    @property
    def error_type(self) -> str:
        return type(self.error).__name__


class ErrorHandler:
    """Records failures raised by collaborators, per component.

    The handler never recovers from or suppresses anything on its own;
    whether an error propagates is decided by ``with_error_handling``.
    """

    def __init__(self, max_error_history: int = 1000):
        self.max_error_history = max_error_history
        self.error_records: List[ErrorRecord] = []
        self.component_error_counts: Dict[str, int] = {}
        self.component_status: Dict[str, ComponentStatus] = {}
        self._lock = threading.Lock()

    def register_component(self, component_name: str) -> None:
        """Register a component for error tracking."""
        with self._lock:
            self.component_error_counts.setdefault(component_name, 0)
            self.component_status.setdefault(component_name, ComponentStatus.HEALTHY)
        logger.debug(f"Component registered: {component_name}")

    def handle_error(self, component_name: str, error: Exception, severity: ErrorSeverity) -> ErrorRecord:
        """Record an error raised inside a component."""
        error_record = ErrorRecord(
            component_name=component_name,
            error=error,
            severity=severity,
            traceback_str=traceback.format_exc()
        )

        with self._lock:
            self.error_records.append(error_record)
            if len(self.error_records) > self.max_error_history:
                del self.error_records[:-self.max_error_history]

            self.component_error_counts[component_name] = \
                self.component_error_counts.get(component_name, 0) + 1

            if severity == ErrorSeverity.CRITICAL:
                self.component_status[component_name] = ComponentStatus.FAILED
            elif severity == ErrorSeverity.HIGH:
                self.component_status[component_name] = ComponentStatus.DEGRADED
            else:
                self.component_status.setdefault(component_name, ComponentStatus.HEALTHY)

        logger.error(f"Error in {component_name}: {error} (Severity: {severity.value})")
        return error_record

    def get_error_stats(self) -> Dict[str, Any]:
        """Get error statistics."""
        return {
            "total_errors": len(self.error_records),
            "component_error_counts": dict(self.component_error_counts),
            "component_status": {name: status.value for name, status in self.component_status.items()}
        }

    def reset_error_counts(self, component_name: Optional[str] = None) -> None:
        """Reset error counts for a component or all components."""
        with self._lock:
            if component_name:
                if component_name in self.component_error_counts:
                    self.component_error_counts[component_name] = 0
                    self.component_status[component_name] = ComponentStatus.HEALTHY
            else:
                for component in self.component_error_counts:
                    self.component_error_counts[component] = 0
                    self.component_status[component] = ComponentStatus.HEALTHY

    def clear_error_history(self) -> None:
        """Drop all error records and counts."""
        with self._lock:
            self.error_records.clear()
            self.component_error_counts.clear()
            self.component_status.clear()

    def get_component_health(self) -> Dict[str, ComponentStatus]:
        """Get health status of all known components."""
        return dict(self.component_status)

    def get_error_summary(self, hours: int = 24) -> Dict[str, Any]:
        """Get summary of errors in the last N hours."""
        cutoff_time = datetime.now() - timedelta(hours=hours)
        recent_errors = [e for e in self.error_records if e.timestamp >= cutoff_time]

        component_counts: Dict[str, int] = {}
        severity_counts = {severity.value: 0 for severity in ErrorSeverity}

        for error in recent_errors:
            component_counts[error.component_name] = component_counts.get(error.component_name, 0) + 1
            severity_counts[error.severity.value] += 1

        return {
            "total_errors": len(recent_errors),
            "component_counts": component_counts,
            "severity_counts": severity_counts,
            "time_period_hours": hours
        }


# Create global error handler instance
global_error_handler = ErrorHandler()


def with_error_handling(component_name: str, severity: ErrorSeverity = ErrorSeverity.MEDIUM,
                        error_handler: Optional[ErrorHandler] = None):
    """Decorator that records exceptions raised by the wrapped function.

    Critical errors are re-raised unchanged after being recorded; any other
    severity makes the wrapped call return None. Without an explicit
    error_handler, a method records into its instance's ``error_handler``
    attribute when it has one, otherwise into the global handler.
    """
    def decorator(func):
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            handler = error_handler or _instance_error_handler(args) or global_error_handler
            try:
                return func(*args, **kwargs)
            except Exception as e:
                handler.handle_error(component_name, e, severity)
                if severity == ErrorSeverity.CRITICAL:
                    raise
                return None
        return wrapper
    return decorator


def _instance_error_handler(args) -> Optional[ErrorHandler]:
    if args and isinstance(getattr(args[0], "error_handler", None), ErrorHandler):
        return args[0].error_handler
    return None
