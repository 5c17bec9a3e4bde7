"""Runtime environment types.

Used by Settings and the container to pick environment-specific adapters
(log renderer, database pool sizing).
"""

from enum import Enum


class Environment(str, Enum):
    """Runtime environment types."""

    DEVELOPMENT = "development"
    TESTING = "testing"
    CI = "ci"
    PRODUCTION = "production"
