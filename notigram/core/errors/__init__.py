"""Core errors package.

Usage:
    from notigram.core.errors import DomainError
"""

from notigram.core.errors.domain_error import DomainError

__all__ = ["DomainError"]
