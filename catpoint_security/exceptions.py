"""Exception types raised by the security monitor's adapters."""


class CatpointError(Exception):
    """Base class for security monitor errors."""


class ImageAnalysisError(CatpointError):
    """The image analysis backend could not be initialized or run."""


class ConfigurationError(CatpointError):
    """A configuration file or value is invalid."""
