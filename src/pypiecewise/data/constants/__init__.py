"""Processing constants for pypiecewise."""

from .processing_constants import ProcessingConstants, ErrorMessages

__all__ = [
    "ProcessingConstants",
    "ErrorMessages"
]
