"""HttpTransport backed by httpx."""

import logging
from typing import Optional

import httpx

from cmsclient.domain.interfaces.http_transport import HttpTransport
from cmsclient.domain.models.errors import TransportError
from cmsclient.domain.models.http import ApiRequest, HttpResponse

logger = logging.getLogger(__name__)


class HttpxTransport(HttpTransport):
    """Dispatches requests through an `httpx.Client`.

    The library defines no default timeout: a client created here waits
    indefinitely unless `timeout` (or a per-request timeout) is given. An
    injected client belongs to the caller and is not closed by `close()`.
    Every httpx failure, including redirect loops, undecodable content
    encodings and malformed URLs, surfaces as a TransportError.
    """

    def __init__(self, http_client: Optional[httpx.Client] = None, timeout: Optional[float] = None):
        self._client = http_client or httpx.Client(timeout=timeout)
        self._owns_client = http_client is None

    def send(self, request: ApiRequest) -> HttpResponse:
        kwargs = {}
        if request.timeout is not None:
            kwargs["timeout"] = request.timeout
        try:
            http_request = self._client.build_request(
                request.method,
                request.url,
                params=request.params or None,
                headers=request.headers,
                json=request.json,
                **kwargs,
            )
            response = self._client.send(http_request)
            content = response.content
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.debug(f"{request.method} {request.url} raised {type(e).__name__}: {e}")
            raise TransportError(f"{request.method} {request.url} failed: {e}", original_exception=e) from e

        return HttpResponse(
            status_code=response.status_code,
            headers=dict(response.headers),
            content=content,
        )

    def close(self) -> None:
        if self._owns_client:
            self._client.close()
