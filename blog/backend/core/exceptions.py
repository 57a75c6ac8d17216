"""
Custom Exceptions.

Two families of errors live here:

ApplicationError and its subclasses carry a message key (for example
``articleApi-1003``) that the exception handlers turn into a localised
response with the matching HTTP status. ``error`` holds the underlying
cause, reported as the ``extra`` field of the response.

TranslatableError and its subclasses are raised below the HTTP layer
(repositories, credential checks). Their message is a ``domain,layer,code``
triple which the response formatter translates into a second message
when it ends up as the cause of an ApplicationError.
"""

from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any


class ApplicationError(Exception):
    """Base exception for all application errors."""

    status_code = 500

    def __init__(self, key: str, error: Any = None, status_code: int | None = None) -> None:
        self.key = key
        self.error = error
        if status_code is not None:
            self.status_code = status_code
        super().__init__(key)


class NotFoundError(ApplicationError):
    """Raised when a resource cannot be found or has been soft deleted."""

    status_code = 400


class ValidationError(ApplicationError):
    """Raised when request data is unusable."""

    status_code = 400


class ConflictError(ApplicationError):
    """Raised when a unique value is already taken."""

    status_code = 400


class AuthenticationError(ApplicationError):
    """Raised when a session token is missing, invalid or expired."""

    status_code = 401


class ServerError(ApplicationError):
    """Raised when an operation fails unexpectedly."""

    status_code = 500


class TranslatableError(Exception):
    """Error whose message is a ``domain,layer,code`` triple."""

    def __init__(self, domain: str, layer: str, code: int) -> None:
        self.domain = domain
        self.layer = layer
        self.code = code
        super().__init__(f"{domain},{layer},{code}")


class EmptyInputError(TranslatableError):
    """Raised when a repository is asked to create a record from no data."""

    def __init__(self, collection: str) -> None:
        super().__init__(collection, "model", 1000)


class NilQueryError(TranslatableError):
    """Raised when a repository is asked to find with no query."""

    def __init__(self, collection: str) -> None:
        super().__init__(collection, "model", 1001)


class EmptyCredentialError(TranslatableError):
    """Raised when a password check is attempted with an empty value."""

    def __init__(self) -> None:
        super().__init__("auth", "controller", 1000)


@contextmanager
def endpoint_errors(key: str) -> Iterator[None]:
    """
    Report unexpected failures under an endpoint's server-error key.

    ApplicationError passes through untouched. Anything else becomes a
    ServerError carrying the original exception as its cause.

    Usage:
        with endpoint_errors("articleApi-1006"):
            article = await service.update_article(article_id, data)
    """
    try:
        yield
    except ApplicationError:
        raise
    except Exception as exc:
        raise ServerError(key, error=exc) from exc
