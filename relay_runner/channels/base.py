"""Abstract duplex channel between the orchestrator and its host."""

import json
from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any

from relay_runner.models.base import Model

type RawMessage = str | bytes | Mapping[str, Any]


class Channel(ABC):
    """Receives control messages and sends report messages, one at a time."""

    @abstractmethod
    async def receive(self) -> RawMessage | None:
        """Wait for the next inbound message.

        Returns:
            The undecoded message, or None once the host has closed the channel

        """

    @abstractmethod
    async def send(self, message: Model) -> None:
        """Send one outbound message to the host."""


def encode_message(message: Model) -> str:
    """Serialize an outbound message as a single line of JSON."""
    return json.dumps(message.to_wire(), separators=(",", ":"))
