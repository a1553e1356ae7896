"""Transport-level value objects exchanged between the request builder, the
transport and the response decoder."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

QueryParams = List[Tuple[str, str]]


@dataclass(frozen=True)
class ApiRequest:
    """A fully formed request, ready to be dispatched by an HttpTransport."""
    method: str
    url: str
    params: QueryParams = field(default_factory=list)
    headers: Dict[str, str] = field(default_factory=dict)
    json: Optional[Any] = None
    timeout: Optional[float] = None

    @property
    def query_string(self) -> str:
        return "&".join(f"{key}={value}" for key, value in self.params)


@dataclass(frozen=True)
class HttpResponse:
    """Raw response as received from the wire."""
    status_code: int
    headers: Dict[str, str] = field(default_factory=dict)
    content: bytes = b""

    @property
    def is_success(self) -> bool:
        return 200 <= self.status_code < 300
