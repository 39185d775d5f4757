from sqlalchemy.exc import DBAPIError


class DbInspectError(Exception):
    """Base class for errors raised by the introspection and query layer."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class QueryGuardRejection(DbInspectError):
    """The SQL text matched a forbidden keyword and was never executed."""


class QueryExecutionError(DbInspectError):
    """The database refused or failed an approved query."""


def driver_message(error: Exception) -> str:
    """Message the database sent, without SQLAlchemy's wrapper text."""
    if isinstance(error, DBAPIError) and error.orig is not None:
        return str(error.orig)
    return str(error)
