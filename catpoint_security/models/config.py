"""Configuration data models."""

from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass
class SecurityConfig:
    """Security system configuration settings."""
    # Alarm engine settings
    cat_confidence_threshold: float = 50.0  # Percent
    initial_alarm_status: str = "NO_ALARM"
    initial_arming_status: str = "DISARMED"

    # Image analysis settings
    image_service: str = "opencv"  # opencv, fake
    cascade_path: Optional[str] = None  # None uses the OpenCV bundled cat cascade
    scale_factor: float = 1.1
    min_neighbors: int = 3
    min_detection_size: Tuple[int, int] = (30, 30)

    # Logging settings
    log_level: str = "INFO"
    log_dir: Optional[str] = None
