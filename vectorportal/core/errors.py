class VectorPortalError(Exception):
    """Base class for editor errors."""


class ConfigurationError(VectorPortalError, ValueError):
    """Raised when a session cannot start with the current drawing settings."""


class CurveError(VectorPortalError, ValueError):
    """Raised when a curve violates its kind's point contract."""


class CurveFormatError(VectorPortalError, ValueError):
    """Raised when a persisted curve record cannot be parsed."""


class UnknownCurveError(VectorPortalError, KeyError):
    """Raised when a curve id is not present in the store."""
