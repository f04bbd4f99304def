"""Configuration module for the Call Review API."""

from .settings import settings, get_settings
from .database import Base, Database, get_db

__all__ = ["settings", "get_settings", "Base", "Database", "get_db"]
