"""Blocking HTTP access for image hosts."""

import logging
from dataclasses import dataclass
from enum import Enum

import httpx

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30.0  # seconds

RawHeaders = dict[str, str]


class NetworkError(Enum):
    """Classification of a finished request."""

    NO_ERROR = "no_error"
    CONTENT_NOT_FOUND = "content_not_found"
    OTHER = "other"


@dataclass
class NetworkReply:
    """Outcome of a single request."""

    error: NetworkError
    data: bytes = b""
    status_code: int | None = None
    error_str: str = ""

    @property
    def ok(self) -> bool:
        return self.error is NetworkError.NO_ERROR

    @property
    def text(self) -> str:
        return self.data.decode("utf-8", errors="replace")


class NetworkAccess:
    """Issues one request per call and never raises for HTTP or transport failures."""

    def __init__(
        self,
        timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.BaseTransport | None = None,
    ):
        """
        Initialize network access.

        Args:
            timeout: Request timeout in seconds
            transport: Custom httpx transport (used by tests)
        """
        self.timeout = timeout
        self.transport = transport

    def request(self, url: str, headers: RawHeaders) -> NetworkReply:
        """GET ``url``."""
        return self._send("GET", url, headers)

    def put(self, url: str, headers: RawHeaders, data: bytes) -> NetworkReply:
        """PUT ``data`` to ``url``."""
        return self._send("PUT", url, headers, data)

    def delete_resource(self, url: str, headers: RawHeaders, data: bytes) -> NetworkReply:
        """DELETE ``url`` with ``data`` as request body."""
        return self._send("DELETE", url, headers, data)

    def _send(
        self, method: str, url: str, headers: RawHeaders, data: bytes | None = None
    ) -> NetworkReply:
        logger.debug("Request: %s %s", method, url)
        if data is not None:
            headers = {**headers, "Content-Type": "application/json"}
        try:
            with httpx.Client(
                timeout=self.timeout,
                follow_redirects=True,
                transport=self.transport,
            ) as client:
                response = client.request(method, url, headers=headers, content=data)
        except httpx.HTTPError as e:
            logger.warning("Request failed: %s %s: %s", method, url, e)
            return NetworkReply(error=NetworkError.OTHER, error_str=str(e))

        logger.debug("Response: %s %s (status=%d)", method, url, response.status_code)
        return NetworkReply(
            error=classify_status(response.status_code),
            data=response.content,
            status_code=response.status_code,
            error_str="" if response.is_success else f"{response.status_code} {response.reason_phrase}",
        )


def classify_status(status_code: int) -> NetworkError:
    """Map an HTTP status code to a NetworkError."""
    if 200 <= status_code < 300:
        return NetworkError.NO_ERROR
    if status_code == 404:
        return NetworkError.CONTENT_NOT_FOUND
    return NetworkError.OTHER
