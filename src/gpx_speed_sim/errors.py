class InsufficientDataError(ValueError):
    """Raised when a route has too few points to simulate."""


class InvalidParameterError(ValueError):
    """Raised when a rider parameter is non-positive or not finite."""
