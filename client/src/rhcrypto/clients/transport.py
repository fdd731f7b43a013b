"""
HTTP transport used by the exchange client.

The client only needs one capability from the network: send raw bytes with
arbitrary headers and get back a status code and raw bytes.  The URL is
transmitted exactly as given, without requoting.  Anything that
implements :class:`Transport` can be plugged in; tests use in-memory fakes.
The default implementation is built on aiohttp.

Transports do not retry.  Connection errors and timeouts surface as
:class:`rhcrypto.errors.TransportError` and the caller decides what to do.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Dict, Optional

import aiohttp
from yarl import URL

from ..errors import TransportError

@dataclass(frozen=True)
class HttpResponse:
    status: int
    body: bytes

    def text(self) -> str:
        return self.body.decode("utf-8", errors="replace")


class Transport:
    """Abstract base class for HTTP transports."""

    async def send(
        self,
        method: str,
        url: str,
        headers: Dict[str, str],
        body: Optional[bytes] = None,
    ) -> HttpResponse:
        raise NotImplementedError

    async def close(self) -> None:
        return None


class AiohttpTransport(Transport):
    """aiohttp transport sharing one lazily created session."""

    def __init__(self, timeout: float = 10.0) -> None:
        self._timeout = aiohttp.ClientTimeout(total=timeout)
        self._session: Optional[aiohttp.ClientSession] = None

    def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(timeout=self._timeout)
        return self._session

    async def send(
        self,
        method: str,
        url: str,
        headers: Dict[str, str],
        body: Optional[bytes] = None,
    ) -> HttpResponse:
        session = self._get_session()
        # The url is already percent-encoded and signed as is; yarl must not requote it
        target = URL(url, encoded=True)
        try:
            async with session.request(method, target, headers=headers, data=body) as resp:
                payload = await resp.read()
                return HttpResponse(status=resp.status, body=payload)
        except asyncio.TimeoutError as exc:
            raise TransportError(f"{method} {url} timed out") from exc
        except aiohttp.ClientError as exc:
            raise TransportError(f"{method} {url} failed: {exc}") from exc

    async def close(self) -> None:
        if self._session is not None and not self._session.closed:
            await self._session.close()
        self._session = None
