__all__ = ["ConfigurationError", "PreconditionError"]


class ConfigurationError(ValueError):
    """Raised when a strategy or classifier is built with parameters it cannot run with (k <= 0, unknown strategy...)."""


class PreconditionError(ValueError):
    """Raised when an operation receives degenerate input, e.g. the centroid of zero points or metrics over an empty matrix."""
