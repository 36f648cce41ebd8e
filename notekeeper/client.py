"""
Low-level HTTP transport for the notes API.

Resource services sit on top of ``HttpTransport`` and never touch httpx
directly. Every failure leaves here as a classified ``TransportError``.
"""

from __future__ import annotations

import asyncio
import json
import logging
import os
import time
from typing import Any, Dict, Mapping, Optional, Set

import httpx

from .config import ApiConfig
from .exceptions import TransportError, TransportErrorKind

LOGGER = logging.getLogger(__name__)

# Header set for requests that carry or mutate state. Reads send none so they
# stay "simple" requests and never trigger a CORS pre-flight.
_WRITE_HEADERS = {"Content-Type": "application/json", "Accept": "application/json"}
_READ_METHODS = frozenset({"GET", "HEAD"})

_CORS_MARKERS = ("cors", "cross-origin", "access-control", "failed to fetch")


def _classify_network_failure(exc: BaseException) -> TransportErrorKind:
    message = str(exc).lower()
    if any(marker in message for marker in _CORS_MARKERS):
        return TransportErrorKind.CORS
    return TransportErrorKind.NETWORK


def _response_body(resp: httpx.Response) -> Optional[object]:
    try:
        return resp.json()
    except ValueError:
        return resp.text or None


class HttpTransport:
    """
    Minimal async HTTP transport:
      - JSON bodies via ``json=payload``
      - Explicit content-type/accept headers on writes only
      - Whole-request time bound (``config.timeout``)
      - Bounded debug dumps of failed exchanges (``config.debug_dump``)
    """

    def __init__(
        self,
        config: Optional[ApiConfig] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.config = config or ApiConfig()
        self._base_url = self.config.base_url.rstrip("/")
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            timeout=httpx.Timeout(self.config.timeout), follow_redirects=True
        )
        LOGGER.debug("Initialized HttpTransport with base_url: %s", self._base_url)

    @property
    def base_url(self) -> str:
        return self._base_url

    def _build_url(self, path: str) -> str:
        return f"{self._base_url}/{path.lstrip('/')}"

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> "HttpTransport":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    async def _send(
        self,
        method: str,
        url: str,
        *,
        body: Optional[object] = None,
        params: Optional[Mapping[str, str]] = None,
        timeout: Optional[float] = None,
    ) -> httpx.Response:
        bound = timeout if timeout is not None else self.config.timeout
        headers = None if method in _READ_METHODS else dict(_WRITE_HEADERS)
        kwargs: Dict[str, Any] = {"params": params, "headers": headers}
        if body is not None:
            kwargs["content"] = json.dumps(body)
        try:
            return await asyncio.wait_for(
                self._client.request(method, url, **kwargs), timeout=bound
            )
        except (asyncio.TimeoutError, httpx.TimeoutException) as e:
            LOGGER.error("%s to %s timed out after %.1fs", method, url, bound)
            raise TransportError(
                f"Request timed out after {bound:g}s",
                TransportErrorKind.TIMEOUT,
                url=url,
            ) from e
        except httpx.DecodingError as e:
            LOGGER.error("%s to %s returned an undecodable body: %s", method, url, e)
            raise TransportError(
                str(e) or "Undecodable response body", TransportErrorKind.HTTP, url=url
            ) from e
        except httpx.RequestError as e:
            kind = _classify_network_failure(e)
            LOGGER.error("%s to %s failed (%s): %s", method, url, kind.value, e)
            raise TransportError(str(e) or kind.value, kind, url=url) from e

    async def request(
        self,
        method: str,
        path: str,
        body: Optional[object] = None,
        params: Optional[Mapping[str, str]] = None,
    ) -> Any:
        """Perform a request and return the parsed JSON body (None when empty)."""
        method = method.upper()
        url = self._build_url(path)
        LOGGER.info("%s to %s", method, url)
        resp = await self._send(method, url, body=body, params=params)
        code = resp.status_code
        LOGGER.debug("%s to %s returned status %d", method, url, code)
        if not resp.is_success:
            self._dump_http_debug(method, path, url, body, resp)
            if code == 403:
                LOGGER.error(
                    "%s to %s forbidden (403); the server's security/CSRF "
                    "configuration likely rejects this endpoint",
                    method,
                    url,
                )
            else:
                LOGGER.error("%s to %s failed with code %d", method, url, code)
            raise TransportError(
                f"HTTP {code}",
                TransportErrorKind.HTTP,
                status=code,
                raw_body=_response_body(resp),
                url=url,
            )
        if code == 204 or not resp.content:
            return None
        try:
            return resp.json()
        except ValueError as e:
            self._dump_http_debug(method, path, url, body, resp)
            LOGGER.error("Failed to parse JSON response from %s", url)
            raise TransportError(
                "Invalid JSON response",
                TransportErrorKind.HTTP,
                status=code,
                raw_body=resp.text,
                url=url,
            ) from e

    async def is_reachable(self, path: str, timeout: Optional[float] = None) -> bool:
        """
        Plain GET with no custom headers. Any 2xx means online; anything else,
        including a timeout, means offline.
        """
        url = self._build_url(path)
        bound = timeout if timeout is not None else self.config.health_timeout
        LOGGER.debug("Checking backend health at: %s", url)
        try:
            resp = await self._send("GET", url, timeout=bound)
        except TransportError as e:
            if e.kind is TransportErrorKind.CORS:
                LOGGER.warning(
                    "Health check blocked by cross-origin policy; enable CORS "
                    "for this client on the server"
                )
            else:
                LOGGER.warning("Backend health check failed: %s", e)
            return False
        LOGGER.debug("Backend health check response: %d", resp.status_code)
        return resp.is_success

    def _dump_http_debug(
        self,
        method: str,
        path: str,
        url: str,
        payload: Optional[object],
        resp: httpx.Response,
    ) -> None:
        if not self.config.debug_dump:
            return
        ts = time.strftime("%Y%m%d-%H%M%S")
        op = f"{method.lower()}_{path.strip('/').replace('/', '_') or 'root'}"
        out_dir = self.config.debug_dir
        try:
            os.makedirs(out_dir, exist_ok=True)
            with open(
                os.path.join(out_dir, f"{ts}_{op}_http_request.json"),
                "w",
                encoding="utf-8",
            ) as f:
                json.dump(
                    {"method": method, "url": url, "payload": payload},
                    f,
                    ensure_ascii=False,
                    indent=2,
                )
            with open(
                os.path.join(out_dir, f"{ts}_{op}_http_response.txt"),
                "w",
                encoding="utf-8",
            ) as f:
                f.write(
                    f"status={resp.status_code}\nurl={url}\n"
                    f"headers={dict(resp.headers)}\n\n"
                )
                body_text = resp.text
                max_bytes = self.config.debug_max_bytes
                if len(body_text) > max_bytes:
                    f.write(body_text[:max_bytes] + "\n[truncated]\n")
                else:
                    f.write(body_text)
        except OSError as e:
            LOGGER.debug("Could not write HTTP debug dump: %s", e)


class ReachabilityProbe:
    """
    Single callable reachability check.

    Starting a check while a previous one is outstanding cancels the stale
    one; the superseded caller gets ``None`` instead of a verdict.
    """

    def __init__(self, transport: HttpTransport, path: str = "/notes"):
        self._transport = transport
        self._path = path
        self._inflight: Optional[asyncio.Future] = None
        self._superseded: Set[asyncio.Future] = set()

    async def check(self) -> Optional[bool]:
        stale = self._inflight
        if stale is not None and not stale.done():
            LOGGER.debug("Cancelling stale reachability check")
            self._superseded.add(stale)
            stale.cancel()
        task = asyncio.ensure_future(
            self._transport.is_reachable(
                self._path, self._transport.config.health_timeout
            )
        )
        self._inflight = task
        try:
            return await task
        except asyncio.CancelledError:
            if task in self._superseded:
                self._superseded.discard(task)
                return None
            raise
        finally:
            if self._inflight is task:
                self._inflight = None
