"""Request/response exchange over a connected transport."""

from __future__ import annotations

import logging

from .protocol.framing import encode
from .protocol.parser import FrameDecoder
from .protocol.values import Value
from .transport.base import Transport
from .transport.socket_connection import DEFAULT_TIMEOUT, create_connection
from .transport.stream_reader import BufferedStreamReader

logger = logging.getLogger(__name__)


class Client:
    """Sends messages and decodes the typed responses.

    The transport is handed in already built; the client owns one
    :class:`BufferedStreamReader` for the transport's lifetime so bytes that
    arrive ahead of the current frame are kept for the next one.

    Usage::

        with Client(SocketConnection("127.0.0.1", 8080)) as client:
            value = client.request("?ping")
    """

    def __init__(self, transport: Transport, decoder: FrameDecoder | None = None) -> None:
        self._transport = transport
        self._reader = BufferedStreamReader(transport)
        self._decoder = decoder or FrameDecoder()

    @property
    def transport(self) -> Transport:
        return self._transport

    def send(self, message: bytes | str) -> None:
        """Encode ``message`` and send it as one frame.

        Raises:
            DataTooLongError: Before anything is sent, if the message is too big.
        """
        self.send_frame(encode(message))

    def send_frame(self, frame: bytes) -> None:
        """Send an already encoded frame."""
        logger.debug("Sending frame of %d bytes", len(frame))
        self._transport.send(frame)

    def receive(self) -> Value:
        """Decode the next response frame."""
        return self._decoder.decode(self._reader)

    def request(self, message: bytes | str) -> Value:
        """Send ``message`` and return the decoded response value."""
        self.send(message)
        return self.receive()

    def close(self) -> None:
        self._transport.close()

    def __enter__(self) -> Client:
        self._transport.connect()
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


def send_message(
    address: str,
    message: bytes | str,
    timeout: float | None = DEFAULT_TIMEOUT,
) -> Value:
    """Connect to ``<NODE>:<PORT>``, run a single exchange, and disconnect.

    The message is encoded before connecting, so an oversized message never
    opens a connection.
    """
    frame = encode(message)
    with Client(create_connection(address, timeout=timeout)) as client:
        client.send_frame(frame)
        return client.receive()
