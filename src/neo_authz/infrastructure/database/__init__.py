"""Database connectivity for the permission store."""

from .connection import DatabaseManager

__all__ = ["DatabaseManager"]
