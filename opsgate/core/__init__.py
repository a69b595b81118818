"""Core app configuration and database."""

from opsgate.core.config import get_settings, settings
from opsgate.core.database import get_db

__all__ = ["get_settings", "settings", "get_db"]
