from .settings import Settings, settings
from .database import DatabaseManager, db_manager

__all__ = ["Settings", "settings", "DatabaseManager", "db_manager"]
