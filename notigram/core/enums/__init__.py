"""Core enums package.

Exports all core-level enums for convenient importing.

Usage:
    from notigram.core.enums import ErrorCode, Environment
"""

from notigram.core.enums.environment import Environment
from notigram.core.enums.error_code import ErrorCode

__all__ = ["ErrorCode", "Environment"]
