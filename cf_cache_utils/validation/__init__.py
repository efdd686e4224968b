"""
cf-cache-utils - Input Validation Module

Pydantic-based validation for interactive action inputs.
"""

from .decorators import validate_input
from .schemas import ClearCacheInput

__all__ = [
    "validate_input",
    "ClearCacheInput",
]
