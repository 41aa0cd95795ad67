"""Where: src/magicreplace/platform/http/http_client.py
What: JSON-over-HTTP adapter used to reach the remote content store.
Why: Decouple network concerns from payload parsing in the gateway.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import Any, Protocol, cast

import requests

from magicreplace.config.settings import REQUEST_TIMEOUT, USER_AGENT
from magicreplace.platform.logging import logger


@dataclass(slots=True)
class HTTPResult:
    """Represent an HTTP response payload relevant to the content store client.

    ``data`` is ``None`` whenever the exchange failed: non-2xx status,
    transport error (``status == 0``) or an undecodable body.
    """

    status: int
    headers: dict[str, str]
    data: Any | None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300 and self.error is None


QueryParams = Sequence[tuple[str, str]]


class HTTPClient(Protocol):
    """Protocol for HTTP clients able to exchange JSON payloads."""

    def get_json(self, url: str, params: QueryParams) -> HTTPResult:
        ...

    def post_json(self, url: str, body: dict[str, Any]) -> HTTPResult:
        ...

    def close(self) -> None:
        ...


class ContentStoreHTTPClient:
    """Perform single-shot JSON requests; failures are reported, never retried."""

    _timeout: float | None
    _session: requests.Session

    def __init__(
        self,
        *,
        timeout: float | None = REQUEST_TIMEOUT,
        session: requests.Session | None = None,
    ) -> None:
        self._timeout = timeout
        self._session = session or requests.Session()

    def __enter__(self) -> ContentStoreHTTPClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        """Release the pooled connections of the underlying session."""

        self._session.close()

    def get_json(self, url: str, params: QueryParams) -> HTTPResult:
        return self._request("GET", url, params=list(params))

    def post_json(self, url: str, body: dict[str, Any]) -> HTTPResult:
        return self._request("POST", url, json=body)

    def _request(self, method: str, url: str, **kwargs: Any) -> HTTPResult:
        headers = {
            "Accept": "application/json",
            "User-Agent": USER_AGENT,
        }
        logger.debug("Content store %s %s", method, url)
        try:
            response = self._session.request(
                method,
                url,
                headers=headers,
                timeout=self._timeout,
                **kwargs,
            )
        except requests.RequestException as exc:
            logger.warning("Content store request error: %s", exc)
            return HTTPResult(status=0, headers={}, data=None, error=str(exc))

        status = int(response.status_code)
        header_items = cast(Iterable[tuple[str, str]], response.headers.items())
        response_headers = {str(key): str(value) for key, value in header_items}

        if not 200 <= status < 300:
            logger.warning("Content store HTTP error: status=%s (%s %s)", status, method, url)
            return HTTPResult(
                status=status,
                headers=response_headers,
                data=None,
                error=f"HTTP error! status: {status}",
            )

        try:
            data = response.json()
        except ValueError as exc:
            logger.warning("Content store JSON parse error: %s", exc)
            return HTTPResult(
                status=status,
                headers=response_headers,
                data=None,
                error=f"invalid JSON: {exc}",
            )

        return HTTPResult(status=status, headers=response_headers, data=data)


__all__ = [
    "ContentStoreHTTPClient",
    "HTTPClient",
    "HTTPResult",
    "QueryParams",
]
