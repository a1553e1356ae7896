"""Decodes raw responses into a tagged result.

The API answers success and failure inside the same HTTP transaction shape with
different JSON schemas, so every body is decoded into both the expected success
shape and the error envelope, then disambiguated:

1. A transport failure is surfaced verbatim; no body is interpreted.
2. An error envelope with a message or request id wins, even over a success
   value that decoded.
3. Otherwise the decoded success value is returned. An empty body is a
   success only for calls that expect no value.
"""

import json
import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, Generic, Optional, TypeVar, Union

from cmsclient.domain.models.errors import ApiError, CmsClientError, ResponseDecodeError, TransportError
from cmsclient.domain.models.http import HttpResponse

logger = logging.getLogger(__name__)

T = TypeVar("T")
Decoder = Callable[[Dict[str, Any]], T]


@dataclass(frozen=True)
class Success(Generic[T]):
    value: T

    @property
    def ok(self) -> bool:
        return True

    def unwrap(self) -> T:
        return self.value


@dataclass(frozen=True)
class Failure:
    error: CmsClientError

    @property
    def ok(self) -> bool:
        return False

    def unwrap(self):
        raise self.error


ApiResult = Union[Success[T], Failure]


class ResponseDecoder:
    """Turns an HttpResponse (or a transport failure) into an ApiResult."""

    def decode(
        self,
        response: Optional[HttpResponse],
        decode: Optional[Decoder] = None,
        transport_error: Optional[TransportError] = None,
    ) -> ApiResult:
        """Applies the precedence rules described in the module docstring.

        Args:
            response: The raw response, or None when dispatch failed.
            decode: Builds the success value from the JSON body. None for calls
                whose success carries no value (e.g. deletes).
            transport_error: The dispatch failure, if any.
        """
        if transport_error is not None:
            return Failure(transport_error)
        if response is None:
            return Failure(TransportError("No response received"))

        if not response.content or not response.content.strip():
            if decode is not None:
                return Failure(ResponseDecodeError(
                    f"HTTP {response.status_code}: expected a response body, got none",
                    status_code=response.status_code,
                ))
            return Success(None)

        try:
            body = json.loads(response.content)
        except ValueError as e:
            logger.debug(f"Response body is not JSON (status {response.status_code}): {e}")
            return Failure(ResponseDecodeError(
                f"HTTP {response.status_code}: response body is not valid JSON", status_code=response.status_code
            ))

        if not isinstance(body, dict):
            return Failure(ResponseDecodeError(
                f"HTTP {response.status_code}: expected a JSON object", status_code=response.status_code
            ))

        error = ApiError.from_dict(body, status_code=response.status_code)

        value: Any = None
        decode_failure: Optional[Exception] = None
        if decode is not None:
            try:
                value = decode(body)
            except (KeyError, TypeError, ValueError, AttributeError) as e:
                decode_failure = e

        if not error.is_empty:
            return Failure(error)
        if decode_failure is not None:
            return Failure(ResponseDecodeError(
                f"HTTP {response.status_code}: unexpected response shape: {decode_failure}",
                status_code=response.status_code,
            ))
        return Success(value)
