"""Runtime environment types.

Used by Settings to pick the logging renderer.

Environments:
- DEVELOPMENT: human-readable colored console logs
- TESTING: automated test execution, JSON logs
- CI: continuous integration, JSON logs
- PRODUCTION: JSON logs
"""

from enum import Enum


class Environment(str, Enum):
    """Runtime environment types."""

    DEVELOPMENT = "development"
    TESTING = "testing"
    CI = "ci"
    PRODUCTION = "production"
