"""
Tagged result of a single relay call.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional

from ..errors import (
    AuthError,
    ChatError,
    EmptyResponseError,
    RateLimitError,
    UnknownRelayError,
)


class RelayErrorKind(str, Enum):
    UNAUTHORIZED = "unauthorized"
    RATE_LIMITED = "rate_limited"
    EMPTY_RESPONSE = "empty_response"
    UNKNOWN = "unknown"


_ERROR_TYPES = {
    RelayErrorKind.UNAUTHORIZED: lambda detail: AuthError("Invalid OpenAI API key", detail),
    RelayErrorKind.RATE_LIMITED: lambda detail: RateLimitError(detail=detail),
    RelayErrorKind.EMPTY_RESPONSE: lambda detail: EmptyResponseError(detail=detail),
    RelayErrorKind.UNKNOWN: lambda detail: UnknownRelayError(detail=detail),
}


@dataclass(frozen=True)
class RelayResult:
    """Either the assistant text or a classified error, never both."""
    text: Optional[str] = None
    error: Optional[RelayErrorKind] = None
    detail: str = ""
    usage: Optional[Dict[str, Any]] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, text: str, usage: Optional[Dict[str, Any]] = None) -> "RelayResult":
        return cls(text=text, usage=usage)

    @classmethod
    def failure(cls, kind: RelayErrorKind, detail: str = "") -> "RelayResult":
        return cls(error=kind, detail=detail)

    def to_error(self) -> ChatError:
        """Map a failed result onto the exception raised at the HTTP boundary."""
        if self.ok:
            raise ValueError("Successful relay result has no error")
        return _ERROR_TYPES[self.error](self.detail)
