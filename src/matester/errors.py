"""
Error taxonomy for the data-access layer.

Every failure coming out of a repository is one of these types, so callers
can decide whether to retry (ConnectivityFault), report to the user
(NotFound, ConstraintViolation) or give up.
"""

import psycopg


class RepositoryError(Exception):
    """Base class for all data-access errors."""


class NotFound(RepositoryError):
    """No row matches a unique lookup key."""

    def __init__(self, entity: str, key):
        self.entity = entity
        self.key = key
        super().__init__(f"{entity} {key!r} not found")


class ConstraintViolation(RepositoryError):
    """The store rejected a value (unique, foreign key, not null, check, bad data)."""


class ConnectivityFault(RepositoryError):
    """The store is unreachable or a statement could not be executed."""

    def __init__(self, message: str, retryable: bool = False):
        self.retryable = retryable
        super().__init__(message)


def translate_error(exc: psycopg.Error) -> RepositoryError:
    """Map a psycopg exception onto the repository error taxonomy."""
    if isinstance(exc, (psycopg.IntegrityError, psycopg.DataError)):
        return ConstraintViolation(str(exc))
    if isinstance(exc, (psycopg.OperationalError, psycopg.InterfaceError)):
        return ConnectivityFault(str(exc), retryable=True)
    return ConnectivityFault(str(exc))
