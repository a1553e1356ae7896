"""Error taxonomy shared by both API surfaces.

* ValidationError: a required argument is missing, empty or out of range. Raised
  before rate limiting and before any request is built.
* TransportError: the HTTP dispatch itself failed (network, timeout, cancellation).
* ApiError: the remote service answered with its error envelope.
* ResponseDecodeError: the service answered with a body that is neither a valid
  success payload nor an error envelope.
"""

from typing import Any, Dict, List, Optional


class CmsClientError(Exception):
    """Base class for every error raised by cmsclient."""


class ValidationError(CmsClientError, ValueError):
    """Raised when arguments fail client-side validation."""


class TransportError(CmsClientError):
    """Raised when the request could not be delivered or no response arrived."""

    def __init__(self, message: str, original_exception: Optional[BaseException] = None):
        self.original_exception = original_exception
        super().__init__(message)


class ApiError(CmsClientError):
    """Error envelope reported by the API ({requestId, message, sys, details})."""

    def __init__(
        self,
        message: str = "",
        request_id: str = "",
        sys_type: str = "",
        sys_id: str = "",
        details: Optional[Dict[str, Any]] = None,
        status_code: Optional[int] = None,
    ):
        self.message = message
        self.request_id = request_id
        self.sys_type = sys_type
        self.sys_id = sys_id
        self.details = details or {}
        self.status_code = status_code
        super().__init__(str(self))

    @classmethod
    def from_dict(cls, data: Dict[str, Any], status_code: Optional[int] = None) -> "ApiError":
        sys = data.get("sys") if isinstance(data.get("sys"), dict) else {}
        details = data.get("details") if isinstance(data.get("details"), dict) else {}
        return cls(
            message=str(data.get("message") or ""),
            request_id=str(data.get("requestId") or ""),
            sys_type=str(sys.get("type") or ""),
            sys_id=str(sys.get("id") or ""),
            details=details,
            status_code=status_code,
        )

    @property
    def is_empty(self) -> bool:
        """True when the envelope carries neither a message nor a request id."""
        return not self.message and not self.request_id

    @property
    def errors(self) -> List[Any]:
        return list(self.details.get("errors", []))

    def __str__(self) -> str:
        parts = [self.message or self.sys_id or "API error"]
        if self.sys_id and self.message:
            parts.append(f"({self.sys_id})")
        if self.request_id:
            parts.append(f"[request {self.request_id}]")
        return " ".join(parts)


class ResponseDecodeError(CmsClientError):
    """Raised when a response body cannot be decoded into the expected shape."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.status_code = status_code
        super().__init__(message)
