"""RetrievalClient — the only component that talks to the network.

Sends a SearchQuery to the FDSN event service and hands back the parsed
JSON envelope.  Connection-level failures are retried with a linearly
increasing backoff; a non-200 answer is final and is never retried.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from typing import Any

import httpx

from quake_stats.domain.errors import FormatError, NetworkError, RemoteError
from quake_stats.domain.query import SearchQuery

logger = logging.getLogger(__name__)


class RetrievalClient:
    """Synchronous HTTP client for the USGS FDSN event query endpoint.

    Args:
        base_url: Query endpoint, without a query string.
        connect_timeout: Seconds allowed to establish a connection.
        read_timeout: Seconds allowed between bytes of the response.
        attempts: Total connection attempts before giving up.
        backoff_seconds: Attempt *k* that fails waits ``k * backoff_seconds``.
        transport: Optional httpx transport (tests pass ``httpx.MockTransport``).
        sleep: Injected for tests; defaults to ``time.sleep``.
    """

    def __init__(
        self,
        base_url: str,
        connect_timeout: float = 5.0,
        read_timeout: float = 10.0,
        attempts: int = 5,
        backoff_seconds: float = 1.0,
        transport: httpx.BaseTransport | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        if attempts < 1:
            raise ValueError("attempts must be at least 1")
        self._base_url = base_url
        self._timeout = httpx.Timeout(read_timeout, connect=connect_timeout)
        self._attempts = attempts
        self._backoff_seconds = backoff_seconds
        self._transport = transport
        self._sleep = sleep

    # ── Public API ───────────────────────────────────────────────────────

    def fetch(self, query: SearchQuery) -> dict[str, Any]:
        """GET *query* and return the decoded JSON envelope.

        Raises:
            NetworkError: If every attempt failed at the transport level.
            RemoteError: If the service answered with anything but 200 OK.
            FormatError: If the body is not a JSON object.
        """
        url = query.to_url(self._base_url)
        response = self._get_with_retry(url)

        if response.status_code != httpx.codes.OK:
            logger.warning("USGS api answered %d for %s", response.status_code, url)
            raise RemoteError(response.status_code, response.text)

        try:
            envelope = response.json()
        except ValueError as exc:
            raise FormatError("Server response is not valid JSON") from exc
        if not isinstance(envelope, dict):
            raise FormatError("Server response JSON is not an object")
        return envelope

    # ── Internals ────────────────────────────────────────────────────────

    def _get_with_retry(self, url: str) -> httpx.Response:
        last_error: httpx.TransportError | None = None
        with httpx.Client(timeout=self._timeout, transport=self._transport) as client:
            for attempt in range(1, self._attempts + 1):
                try:
                    response = client.get(url)
                except httpx.TransportError as exc:
                    last_error = exc
                    logger.warning(
                        "Attempt #%d of %d to reach the USGS api failed: %s",
                        attempt,
                        self._attempts,
                        exc,
                    )
                    if attempt < self._attempts:
                        self._sleep(attempt * self._backoff_seconds)
                    continue
                logger.debug("USGS api answered on attempt #%d", attempt)
                return response

        raise NetworkError(self._attempts, str(last_error))
