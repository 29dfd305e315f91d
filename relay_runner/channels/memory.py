"""In-memory channel backed by asyncio queues."""

import asyncio
from dataclasses import dataclass, field
from typing import Any

from relay_runner.channels.base import Channel, RawMessage
from relay_runner.models.base import Model


@dataclass(frozen=True, kw_only=True)
class QueueChannel(Channel):
    """Duplex channel for hosts living in the same process.

    The host puts raw messages with `put`, closes with `close`, and reads the
    wire form of reports with `get`.
    """

    inbox: asyncio.Queue[RawMessage | None] = field(default_factory=asyncio.Queue)
    outbox: asyncio.Queue[dict[str, Any]] = field(default_factory=asyncio.Queue)

    async def receive(self) -> RawMessage | None:
        return await self.inbox.get()

    async def send(self, message: Model) -> None:
        await self.outbox.put(message.to_wire())

    async def put(self, raw: RawMessage) -> None:
        """Deliver a message from the host."""
        await self.inbox.put(raw)

    async def close(self) -> None:
        """Signal that the host will send nothing more."""
        await self.inbox.put(None)

    async def get(self) -> dict[str, Any]:
        """Wait for the next report sent to the host."""
        return await self.outbox.get()

    def drain(self) -> list[dict[str, Any]]:
        """Return every report sent so far without waiting."""
        sent: list[dict[str, Any]] = []
        while not self.outbox.empty():
            sent.append(self.outbox.get_nowait())
        return sent
