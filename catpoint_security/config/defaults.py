"""Default configuration values and constants."""

# System constants
SYSTEM_CONSTANTS = {
    "CAT_CONFIDENCE_THRESHOLD": 50.0,  # Percent, used by process_image
    "LOG_ROTATION_SIZE_MB": 10,
    "LOG_BACKUP_COUNT": 5
}

# File paths and directories
DEFAULT_PATHS = {
    "config_file": "catpoint_config.json"
}

# OpenCV cascade settings
IMAGE_ANALYSIS_SETTINGS = {
    "builtin_cascades": [
        "haarcascade_frontalcatface.xml",
        "haarcascade_frontalcatface_extended.xml"
    ],
    "max_detection_size": (300, 300),
    "base_score": 40.0,  # Percent awarded to any cascade hit
    "center_weight": 30.0,
    "size_weight": 30.0
}

VALID_IMAGE_SERVICES = ("opencv", "fake")
VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
