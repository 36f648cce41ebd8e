"""Library exceptions."""

from __future__ import annotations

from enum import Enum
from typing import Optional


class NotekeeperError(Exception):
    """Base notekeeper error."""


# ------------------------------- Transport -----------------------------------


class TransportErrorKind(str, Enum):
    NETWORK = "NETWORK"
    TIMEOUT = "TIMEOUT"
    CORS = "CORS"
    HTTP = "HTTP"


class TransportError(NotekeeperError):
    """A request that did not produce a usable 2xx response."""

    def __init__(
        self,
        message: str,
        kind: TransportErrorKind,
        *,
        status: Optional[int] = None,
        raw_body: Optional[object] = None,
        url: Optional[str] = None,
    ):
        super().__init__(message)
        self.kind = kind
        self.status = status
        self.raw_body = raw_body
        self.url = url

    @property
    def is_forbidden(self) -> bool:
        return self.kind is TransportErrorKind.HTTP and self.status == 403

    @property
    def is_not_found(self) -> bool:
        return self.kind is TransportErrorKind.HTTP and self.status == 404


# ------------------------------- Operations ----------------------------------


class OperationError(NotekeeperError):
    """
    A service operation failed.

    Wraps the underlying TransportError (when there is one) so status and
    body survive for diagnosis.
    """

    kind = "transport"

    def __init__(self, message: str, cause: Optional[TransportError] = None):
        super().__init__(message)
        self.cause = cause

    @property
    def status(self) -> Optional[int]:
        return self.cause.status if self.cause is not None else None

    @property
    def raw_body(self) -> Optional[object]:
        return self.cause.raw_body if self.cause is not None else None

    def __str__(self) -> str:
        base = super().__str__()
        if self.status is not None:
            return f"{base} (HTTP {self.status})"
        if self.cause is not None:
            return f"{base} ({self.cause.kind.value.lower()})"
        return base


class FetchError(OperationError):
    pass


class CreateError(OperationError):
    pass


class UpdateError(OperationError):
    pass


class DeleteError(OperationError):
    pass


class TagValidationError(CreateError):
    """Tag rejected locally; no request was issued."""

    kind = "validation"


class NoteValidationError(CreateError):
    """Note draft rejected locally; no request was issued."""

    kind = "validation"
