"""
Errors raised during city generation
"""


class GenerationError(Exception):
    """Base class for failures that discard a generation attempt"""


class GeometryFailure(GenerationError):
    """Degenerate geometry: bad cut, broken circumference, no gates, ugly citadel"""


class PathNotFound(GenerationError):
    """No street could be routed between a gate and its target"""


class ExhaustedRetries(Exception):
    """Every generation attempt failed; nothing usable was produced"""

    def __init__(self, attempts, last_failure=None):
        self.attempts = attempts
        self.last_failure = last_failure
        message = f"Failed to build city after {attempts} attempts"
        if last_failure is not None:
            message += f": {last_failure}"
        super().__init__(message)
