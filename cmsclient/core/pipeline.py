"""Rate-limited typed request/response pipeline shared by every endpoint method.

Control flow for one call: acquire a rate-limit slot -> build the request ->
dispatch through the injected transport -> decode into a tagged result ->
return the value or raise the normalized error. Input validation happens in
the endpoint services, before `execute` is reached.
"""

import logging
import time
from typing import Any, Mapping, Optional

from cmsclient.domain.interfaces.http_transport import HttpTransport
from cmsclient.domain.interfaces.rate_limiter import RateLimiter
from cmsclient.domain.models.errors import TransportError
from cmsclient.infrastructure.http.request_builder import PageRequest, RequestBuilder
from cmsclient.infrastructure.http.response_decoder import Decoder, ResponseDecoder

logger = logging.getLogger(__name__)


class RequestPipeline:
    """Executes single best-effort round trips. Nothing is retried or cached."""

    def __init__(
        self,
        builder: RequestBuilder,
        transport: HttpTransport,
        rate_limiter: RateLimiter,
        decoder: Optional[ResponseDecoder] = None,
    ):
        self.builder = builder
        self.transport = transport
        self.rate_limiter = rate_limiter
        self.decoder = decoder or ResponseDecoder()

    @property
    def surface_name(self) -> str:
        return self.builder.surface.name

    def page(self, limit: int, skip: int, operation: str) -> PageRequest:
        return self.builder.page(limit, skip, operation)

    def execute(
        self,
        method: str,
        path: str,
        decode: Optional[Decoder] = None,
        *,
        params: Optional[Mapping[str, Any]] = None,
        page: Optional[PageRequest] = None,
        body: Optional[Any] = None,
        version: Optional[int] = None,
        headers: Optional[Mapping[str, str]] = None,
        localized: bool = False,
    ) -> Any:
        """Runs one request through the pipeline.

        Args:
            method: HTTP verb.
            path: Resource path relative to the surface base URL.
            decode: Builds the typed success value from the JSON body.
            params: Caller-supplied query parameters, passed through verbatim.
            page: Validated pagination, appended after `params`.
            body: JSON request body.
            version: Resource version sent as the optimistic-concurrency header.
            headers: Extra request headers.
            localized: Apply the surface's locale defaults to the query.

        Returns:
            The decoded value (None for calls without a response body).

        Raises:
            TransportError: The request could not be dispatched.
            ApiError: The API answered with its error envelope.
            ResponseDecodeError: The body matched neither shape.
        """
        self.rate_limiter.acquire()

        request = self.builder.build(
            method,
            path,
            params=params,
            page=page,
            body=body,
            version=version,
            headers=headers,
            localized=localized,
        )
        logger.debug(f"[{self.surface_name}] {request.method} {request.url} params={request.params}")

        start_time = time.perf_counter()
        response = None
        transport_error = None
        try:
            response = self.transport.send(request)
        except TransportError as e:
            transport_error = e
        latency_ms = (time.perf_counter() - start_time) * 1000

        if response is not None:
            logger.debug(f"[{self.surface_name}] {request.method} {request.url} -> {response.status_code} in {latency_ms:.1f}ms")

        result = self.decoder.decode(response, decode, transport_error=transport_error)
        return result.unwrap()
