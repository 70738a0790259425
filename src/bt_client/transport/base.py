"""Transport contract consumed by the client."""

from __future__ import annotations

from typing import Protocol


class Transport(Protocol):
    """An already-addressed, byte-oriented duplex channel.

    ``receive`` returns between 0 and ``max_len`` bytes; an empty result
    means the peer closed the stream.
    """

    def connect(self) -> None: ...

    def send(self, data: bytes) -> None: ...

    def receive(self, max_len: int) -> bytes: ...

    def close(self) -> None: ...
