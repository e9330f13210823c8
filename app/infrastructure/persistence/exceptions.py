"""Exceptions raised by the persistence layer."""


class DataStoreError(Exception):
    """Raised when the relational store rejects a query or a connection.

    Wraps driver-specific errors so callers can recover without importing
    the database driver.

    Example:
        try:
            rows = await database.fetch_all("SELECT ...")
        except DataStoreError as e:
            logger.error("query_failed", error=str(e))
    """
