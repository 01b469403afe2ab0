"""Error taxonomy shared by the fetcher, the module index and the tool layer.

Every failure that leaves the extractor or the index client carries exactly
one ``ErrorCode``. The orchestrator never recovers from these; the server
turns them into a structured error envelope.
"""

from __future__ import annotations

from enum import StrEnum


class ErrorCode(StrEnum):
    NOT_FOUND = "NOT_FOUND"
    TIMEOUT = "TIMEOUT"
    NETWORK_ERROR = "NETWORK_ERROR"
    PARSE_ERROR = "PARSE_ERROR"
    # Raised only at the protocol boundary (argument validation, unknown tool)
    INVALID_INPUT = "INVALID_INPUT"


_RECOVERABLE = frozenset({ErrorCode.TIMEOUT, ErrorCode.NETWORK_ERROR})


class GoDocError(Exception):
    """A classified failure.

    The underlying exception, when there is one, is chained via
    ``raise GoDocError(...) from exc`` and is also available as ``cause``.
    """

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        *,
        suggestion: str | None = None,
        recoverable: bool | None = None,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.suggestion = suggestion
        self.recoverable = code in _RECOVERABLE if recoverable is None else recoverable
        self.cause = cause

    def __repr__(self) -> str:
        return f"GoDocError(code={self.code.value!r}, message={self.message!r})"


def not_found(message: str, *, suggestion: str | None = None) -> GoDocError:
    return GoDocError(ErrorCode.NOT_FOUND, message, suggestion=suggestion)


def timeout(message: str, *, cause: BaseException | None = None) -> GoDocError:
    return GoDocError(
        ErrorCode.TIMEOUT,
        message,
        suggestion="Retry the request; pkg.go.dev may be slow to respond.",
        cause=cause,
    )


def network_error(message: str, *, cause: BaseException | None = None) -> GoDocError:
    return GoDocError(ErrorCode.NETWORK_ERROR, message, cause=cause)


def parse_error(message: str, *, cause: BaseException | None = None) -> GoDocError:
    return GoDocError(ErrorCode.PARSE_ERROR, message, cause=cause)
