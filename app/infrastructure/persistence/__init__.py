"""Persistence layer for translation data and application settings.

Provides the async SQLite database, the JSON key/value application settings
store, and the error type raised for every driver failure.
"""

from infrastructure.persistence.app_settings import AppSettingsStore
from infrastructure.persistence.database import Database
from infrastructure.persistence.exceptions import DataStoreError

__all__ = ["AppSettingsStore", "Database", "DataStoreError"]
