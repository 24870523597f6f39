"""HTTP transport used by the REST client."""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional

import httpx

from .exceptions import TransportError

logger = logging.getLogger(__name__)


@dataclass
class TransportResponse:
    """Status, raw body and headers of one HTTP exchange."""

    status: int
    content: bytes = b""
    headers: Dict[str, str] = field(default_factory=dict)

    def header(self, name: str) -> Optional[str]:
        """Case-insensitive header lookup."""
        lowered = name.lower()
        for key, value in self.headers.items():
            if key.lower() == lowered:
                return value
        return None


class BaseTransport(ABC):
    """Abstract base class for HTTP transports."""

    @abstractmethod
    async def send(
        self,
        method: str,
        url: str,
        headers: Mapping[str, str],
        body: Optional[bytes] = None,
    ) -> TransportResponse:
        """Perform one request/response exchange.

        Args:
            method: HTTP method
            url: Fully-qualified URL
            headers: Request headers
            body: Encoded request body, if any

        Returns:
            TransportResponse with status, body and headers

        Raises:
            TransportError: If no HTTP response could be obtained
        """
        pass

    async def post(
        self, url: str, headers: Mapping[str, str], body: Optional[bytes] = None
    ) -> TransportResponse:
        return await self.send("POST", url, headers, body)

    async def get(self, url: str, headers: Mapping[str, str]) -> TransportResponse:
        return await self.send("GET", url, headers)

    async def aclose(self) -> None:
        """Release pooled connections."""
        pass


class HttpxTransport(BaseTransport):
    """Transport backed by a pooled ``httpx.AsyncClient``."""

    def __init__(
        self,
        timeout: Optional[float] = 30.0,
        client: Optional[httpx.AsyncClient] = None,
        **client_kwargs: Any,
    ):
        """Initialize the transport.

        Args:
            timeout: Request timeout in seconds, None to disable
            client: Existing client to reuse; it is not closed by this transport
            **client_kwargs: Extra arguments for ``httpx.AsyncClient``
        """
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=timeout, **client_kwargs)

    async def send(
        self,
        method: str,
        url: str,
        headers: Mapping[str, str],
        body: Optional[bytes] = None,
    ) -> TransportResponse:
        try:
            response = await self._client.request(method, url, headers=dict(headers), content=body)
        except httpx.HTTPError as e:
            logger.warning(f"{method} {url} failed before a response was received: {e}")
            raise TransportError(f"HTTP request failed: {method} {url}: {e}", cause=e) from e

        return TransportResponse(
            status=response.status_code,
            content=response.content,
            headers=dict(response.headers),
        )

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()
