"""Interface for dispatching built requests over HTTP.

Keeping the transport behind this contract lets callers inject middleware
(logging, proxies, recording fakes in tests) without touching the clients.
"""

import abc

from cmsclient.domain.models.http import ApiRequest, HttpResponse


class HttpTransport(abc.ABC):
    """Abstract Base Class for HTTP transports."""

    @abc.abstractmethod
    def send(self, request: ApiRequest) -> HttpResponse:
        """Sends a request and returns the raw response.

        Args:
            request: The request produced by the RequestBuilder.

        Returns:
            The HttpResponse, whatever its status code.

        Raises:
            TransportError: If no response could be obtained (connection failure,
                timeout, cancellation).
        """
        pass

    def close(self) -> None:
        """Releases any pooled connections. Optional for transports that hold none."""
        pass
