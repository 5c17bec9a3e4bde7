"""Warden: role-based access-control resolution core."""

__version__ = "0.1.0"
