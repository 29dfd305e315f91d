"""Channel over a websocket connection to the host."""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from dataclasses import dataclass, field

import aiohttp

from relay_runner.channels.base import Channel, RawMessage, encode_message
from relay_runner.models.base import Model

log = logging.getLogger(__name__)


@dataclass(frozen=True, kw_only=True)
class WebSocketChannel(Channel):
    """Exchanges JSON text frames with a host listening on a websocket."""

    ws: aiohttp.ClientWebSocketResponse = field(repr=False)

    @classmethod
    @asynccontextmanager
    async def from_url(cls, url: str) -> AsyncGenerator["WebSocketChannel", None]:
        """Connect to the host with a managed session lifecycle."""
        log.info("Connecting to host at %s", url)
        async with (
            aiohttp.ClientSession() as session,
            session.ws_connect(url) as ws,
        ):
            yield cls(ws=ws)

    async def receive(self) -> RawMessage | None:
        msg = await self.ws.receive()
        if msg.type in {aiohttp.WSMsgType.TEXT, aiohttp.WSMsgType.BINARY}:
            return msg.data
        if msg.type == aiohttp.WSMsgType.ERROR:
            log.error("Websocket error: %s", self.ws.exception())
        else:
            log.info("Websocket closed by host (type=%s)", msg.type.name)
        return None

    async def send(self, message: Model) -> None:
        await self.ws.send_str(encode_message(message))
