from __future__ import annotations

import asyncio
import logging

from aiocoap import GET, Context, Message
from aiocoap import error as coap_error

from coiotlink.core.errors import TransportError
from coiotlink.domain.response import Response
from coiotlink.transports.base import DeviceTransport

COAP_PORT = 5683

logger = logging.getLogger(__name__)


class CoapTransport(DeviceTransport):
    """
    Blocking CoAP GET access to one device.

    Each request runs on its own short-lived event loop, so this class must
    not be used from inside a running asyncio loop.
    """

    def __init__(self, host: str, port: int = COAP_PORT, timeout: float = 10.0) -> None:
        if not host:
            raise ValueError("host must be a non-empty address")
        self.host = host
        self.port = port
        self.timeout = timeout

    @property
    def base_uri(self) -> str:
        host = f"[{self.host}]" if ":" in self.host and not self.host.startswith("[") else self.host
        return f"coap://{host}:{self.port}"

    # ---- helpers ----
    def _uri(self, path: str) -> str:
        return f"{self.base_uri}/{path.lstrip('/')}"

    async def _request(self, uri: str) -> Message:
        context = await Context.create_client_context()
        try:
            request = Message(code=GET, uri=uri)
            return await asyncio.wait_for(context.request(request).response, timeout=self.timeout)
        finally:
            await context.shutdown()

    # ---- DeviceTransport ----
    def get(self, path: str) -> Response:
        uri = self._uri(path)
        logger.debug("coap_get", extra={"details": {"uri": uri}})
        try:
            message = asyncio.run(self._request(uri))
        except asyncio.TimeoutError as exc:
            raise TransportError(f"No response from {uri} within {self.timeout}s") from exc
        except (coap_error.Error, OSError) as exc:
            raise TransportError(f"Request to {uri} failed: {exc}") from exc
        if not message.code.is_successful():
            raise TransportError(f"Request to {uri} failed: {message.code}")
        return Response(message)

    def __repr__(self) -> str:
        return f"CoapTransport({self.base_uri!r}, timeout={self.timeout})"
