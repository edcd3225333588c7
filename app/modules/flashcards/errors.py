"""Error taxonomy for the OpenRouter flashcard generation client."""

from __future__ import annotations

import enum


class ErrorKind(str, enum.Enum):
    AUTHENTICATION = "authentication"
    RATE_LIMIT = "rate_limit"
    MODEL = "model"
    VALIDATION = "validation"
    GENERATION = "generation"
    NETWORK = "network"
    TIMEOUT = "timeout"
    UNKNOWN = "unknown"


# Transient faults worth another attempt; everything else is surfaced at once
RETRYABLE_KINDS: frozenset[ErrorKind] = frozenset(
    {ErrorKind.NETWORK, ErrorKind.RATE_LIMIT}
)

STATUS_KINDS: dict[int, ErrorKind] = {
    400: ErrorKind.VALIDATION,
    401: ErrorKind.AUTHENTICATION,
    429: ErrorKind.RATE_LIMIT,
    500: ErrorKind.MODEL,
}


def kind_for_status(status_code: int) -> ErrorKind:
    return STATUS_KINDS.get(status_code, ErrorKind.UNKNOWN)


class OpenRouterError(Exception):
    """Raised when a generation call fails; ``kind`` says why."""

    def __init__(
        self,
        kind: ErrorKind,
        message: str,
        *,
        original_error: BaseException | None = None,
    ) -> None:
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.original_error = original_error

    @property
    def retryable(self) -> bool:
        return self.kind in RETRYABLE_KINDS

    def __repr__(self) -> str:
        return f"OpenRouterError(kind={self.kind.value!r}, message={self.message!r})"


__all__ = [
    "ErrorKind",
    "RETRYABLE_KINDS",
    "STATUS_KINDS",
    "kind_for_status",
    "OpenRouterError",
]
