"""Newline-delimited JSON channel over process streams."""

import asyncio
import logging
import sys
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from typing import TextIO

from relay_runner.channels.base import Channel, RawMessage, encode_message
from relay_runner.models.base import Model

log = logging.getLogger(__name__)

# Buffer size for the stdin reader. Longer lines are still read whole.
READ_LIMIT = 2**20


@dataclass(frozen=True, kw_only=True)
class StreamChannel(Channel):
    """Reads one message per line and writes one report per line."""

    reader: asyncio.StreamReader
    output: TextIO = field(repr=False)

    @classmethod
    @asynccontextmanager
    async def from_stdio(
        cls, limit: int = READ_LIMIT
    ) -> AsyncGenerator["StreamChannel", None]:
        """Create a channel over this process's stdin and stdout."""
        loop = asyncio.get_running_loop()
        reader = asyncio.StreamReader(limit=limit)
        transport, _ = await loop.connect_read_pipe(
            lambda: asyncio.StreamReaderProtocol(reader), sys.stdin
        )
        try:
            yield cls(reader=reader, output=sys.stdout)
        finally:
            transport.close()

    async def receive(self) -> RawMessage | None:
        while line := await self._read_line():
            if line.strip():
                return line
            log.debug("Skipping blank line")
        return None

    async def send(self, message: Model) -> None:
        self.output.write(encode_message(message) + "\n")
        self.output.flush()

    async def _read_line(self) -> bytes:
        """Read up to and including the next newline, however long the line is.

        Returns an empty bytes object at end of stream.
        """
        chunks: list[bytes] = []
        while True:
            try:
                chunks.append(await self.reader.readuntil(b"\n"))
            except asyncio.LimitOverrunError as e:
                # Nothing was consumed; take what is buffered and keep going.
                chunks.append(await self.reader.readexactly(e.consumed))
                continue
            except asyncio.IncompleteReadError as e:
                chunks.append(e.partial)
            return b"".join(chunks)
