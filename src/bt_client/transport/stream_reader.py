"""Buffered exact-length reads on top of a stream transport.

A stream transport may hand a frame over in arbitrary pieces. The reader
keeps everything it has received in one growing buffer and serves
exact-length reads out of it, asking the transport for more only when the
buffered bytes run short.
"""

from __future__ import annotations

import logging
from typing import Protocol

from ..errors import UnexpectedEofError

logger = logging.getLogger(__name__)

MIN_READ_SIZE = 256


class Receiver(Protocol):
    """The receive half of a transport."""

    def receive(self, max_len: int) -> bytes: ...


class BufferedStreamReader:
    """Exact-length reader over a :class:`Receiver`.

    Each :meth:`read_exact` call performs at most one transport receive. If
    that single receive does not bring in enough bytes, the read fails with
    :class:`UnexpectedEofError` rather than waiting for more.

    Not safe to share between threads.
    """

    def __init__(self, transport: Receiver, min_read_size: int = MIN_READ_SIZE) -> None:
        self._transport = transport
        self._min_read_size = min_read_size
        self._buffer = bytearray()
        self._cursor = 0

    @property
    def buffered(self) -> int:
        """Number of received bytes not yet consumed."""
        return len(self._buffer) - self._cursor

    def read_exact(self, n: int) -> bytes:
        """Return exactly ``n`` bytes from the stream.

        Raises:
            ValueError: If ``n`` is negative.
            UnexpectedEofError: If ``n`` bytes are not available after one
                transport receive.
        """
        if n < 0:
            raise ValueError(f"read length must be non-negative, got {n}")

        if self.buffered < n:
            request = max(n, self._min_read_size)
            chunk = self._transport.receive(request)
            logger.debug("Requested %d bytes, received %d", request, len(chunk))
            self._buffer += chunk

            if self.buffered < n:
                raise UnexpectedEofError(n, self.buffered)

        start = self._cursor
        self._cursor += n
        return bytes(self._buffer[start:self._cursor])

    def compact(self) -> None:
        """Drop consumed bytes from the front of the buffer."""
        del self._buffer[:self._cursor]
        self._cursor = 0
