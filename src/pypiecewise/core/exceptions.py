"""Custom exceptions for pypiecewise core functionality."""
import logging
from typing import Optional, Sequence, Tuple

logger = logging.getLogger(__name__)


class ApproximationError(Exception):
    """Base exception for all approximation-related errors."""

    log_level = logging.ERROR

    def __init__(self, message):
        super().__init__(message)
        logger.log(self.log_level, "%s raised: %s", type(self).__name__, message)


class InvalidConstructionError(ApproximationError, ValueError):
    """Exception raised when an approximator cannot be built from its inputs."""


class OutOfDomainError(ApproximationError, ValueError):
    """Exception raised when a forward query lies outside [lo, hi)."""

    # Raised by queries; logged at debug level
    log_level = logging.DEBUG

    def __init__(self, message, value: Optional[float] = None,
                 domain: Optional[Tuple[float, float]] = None):
        self.value = value
        self.domain = domain
        super().__init__(message)


class OutOfRangeError(ApproximationError, ValueError):
    """Exception raised when an inverse query matches no inverse segment."""

    log_level = logging.DEBUG

    def __init__(self, message, value: Optional[float] = None):
        self.value = value
        super().__init__(message)


class NonInvertibleSegmentError(OutOfRangeError):
    """Exception raised when a value can only be reached through a flat segment."""

    def __init__(self, message, value: Optional[float] = None, segment_index: Optional[int] = None):
        self.segment_index = segment_index
        super().__init__(message, value=value)


class AmbiguousInverseError(OutOfRangeError):
    """Exception raised when a value is reached at more than one distinct x."""

    def __init__(self, message, value: Optional[float] = None, candidates: Sequence[float] = ()):
        self.candidates = tuple(candidates)
        super().__init__(message, value=value)


class ConfigurationError(ApproximationError, ValueError):
    """Exception raised when an approximation configuration file is invalid."""

    def __init__(self, message, key: Optional[str] = None):
        self.key = key
        super().__init__(message)
