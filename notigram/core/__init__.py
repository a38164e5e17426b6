"""Core shared kernel.

This module provides foundational utilities used across all layers:
- Result types for railway-oriented programming
- Base error class and error codes
- Settings and fixed constants

The core module has NO dependencies on other package layers.
"""

from notigram.core.enums import Environment, ErrorCode
from notigram.core.errors import DomainError
from notigram.core.result import Failure, Result, Success

__all__ = [
    "DomainError",
    "Environment",
    "ErrorCode",
    "Failure",
    "Result",
    "Success",
]
