"""Database infrastructure settings."""

from pydantic import Field

from infrastructure.configuration.base import InfrastructureSettings


class DatabaseSettings(InfrastructureSettings):
    """Relational store configuration.

    Environment Variables:
        DATABASE_PATH: Path of the SQLite database file (default: data/app.db)

    Example:
        ```python
        from infrastructure.services import get_settings

        path = get_settings().database.path
        ```
    """

    path: str = Field(default="data/app.db", alias="DATABASE_PATH")
