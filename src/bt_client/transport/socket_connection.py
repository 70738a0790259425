"""TCP socket connection to a bt server.

Two backends are supported, picked from the running platform:
``posix`` (shuts the read side down before closing) and ``winsock``
(closes directly). Python's ``socket`` module initializes the platform
socket library itself, so no process-wide setup is done here.
"""

from __future__ import annotations

import logging
import socket
import sys
from dataclasses import dataclass

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT: float | None = None  # block indefinitely
BACKENDS = ("posix", "winsock")


def default_backend() -> str:
    """Return the backend name matching the running platform."""
    return "winsock" if sys.platform.startswith("win") else "posix"


def parse_address(address: str) -> tuple[str, str]:
    """Split ``<NODE>:<PORT>`` on the last colon.

    IPv6 literals may be bracketed (``[::1]:8080``); the brackets are removed.

    Raises:
        ValueError: If there is no colon or either part is empty.
    """
    node, sep, port = address.rpartition(":")
    if not sep or not node or not port:
        raise ValueError(f"Invalid address: {address}")
    if node.startswith("[") and node.endswith("]"):
        node = node[1:-1]
    return node, port


@dataclass
class PeerInfo:
    """Where the connection ended up."""

    node: str
    port: str
    family: str = ""
    address: str = ""


class SocketConnection:
    """Manages a stream socket to the server.

    Usage::

        conn = SocketConnection("127.0.0.1", "8080")
        conn.connect()
        conn.send(frame_bytes)
        data = conn.receive(256)
        conn.close()
    """

    def __init__(
        self,
        node: str,
        port: str | int,
        timeout: float | None = DEFAULT_TIMEOUT,
        backend: str | None = None,
    ) -> None:
        backend = backend or default_backend()
        if backend not in BACKENDS:
            raise ValueError(f"Unknown backend: {backend}")

        self._node = node
        self._port = str(port)
        self._timeout = timeout
        self._backend = backend
        self._sock: socket.socket | None = None
        self._connected = False
        self._peer_info = PeerInfo(node=node, port=self._port)

    @property
    def connected(self) -> bool:
        return self._connected

    @property
    def backend(self) -> str:
        return self._backend

    @property
    def peer_info(self) -> PeerInfo:
        return self._peer_info

    def connect(self) -> PeerInfo:
        """Resolve the address and connect the first stream socket that works.

        Raises:
            ConnectionError: If resolution fails or no address accepts.
        """
        if self._connected:
            return self._peer_info

        try:
            infos = socket.getaddrinfo(
                self._node, self._port, type=socket.SOCK_STREAM
            )
        except socket.gaierror as e:
            raise ConnectionError(
                f"getaddrinfo error for {self._node}:{self._port}: {e}"
            ) from e

        last_error: OSError | None = None
        for family, socktype, proto, _canonname, sockaddr in infos:
            sock: socket.socket | None = None
            try:
                sock = socket.socket(family, socktype, proto)
                sock.settimeout(self._timeout)
                sock.connect(sockaddr)
            except OSError as e:
                logger.debug("connect to %s failed: %s", sockaddr, e)
                if sock is not None:
                    sock.close()
                last_error = e
                continue

            self._sock = sock
            self._connected = True
            self._peer_info = PeerInfo(
                node=self._node,
                port=self._port,
                family=socket.AddressFamily(family).name,
                address=str(sockaddr[0]),
            )
            logger.info(
                "Connected to %s:%s (%s, %s backend)",
                self._peer_info.address,
                self._port,
                self._peer_info.family,
                self._backend,
            )
            return self._peer_info

        raise ConnectionError(
            f"Could not connect to {self._node}:{self._port}. "
            f"Last error: {last_error}"
        ) from last_error

    def close(self) -> None:
        """Close the socket."""
        if self._sock is None:
            return

        try:
            if self._backend == "posix" and self._connected:
                self._sock.shutdown(socket.SHUT_RD)
        except OSError as e:
            logger.warning("Error shutting down socket: %s", e)
        finally:
            self._sock.close()
            self._sock = None
            self._connected = False
            logger.info("Disconnected")

    def send(self, data: bytes) -> None:
        """Send all of ``data``.

        Raises:
            ConnectionError: If not connected or the send fails.
        """
        sock = self._require_socket()
        try:
            sock.sendall(data)
        except OSError as e:
            raise ConnectionError(f"send error: {e}") from e
        logger.debug("Sent %d bytes", len(data))

    def receive(self, max_len: int) -> bytes:
        """Receive up to ``max_len`` bytes with a single ``recv`` call.

        An empty result means the peer closed the connection.

        Raises:
            ConnectionError: If not connected or the receive fails.
        """
        sock = self._require_socket()
        try:
            return sock.recv(max_len)
        except OSError as e:
            raise ConnectionError(f"recv error: {e}") from e

    def _require_socket(self) -> socket.socket:
        if not self._connected or self._sock is None:
            raise ConnectionError("Not connected")
        return self._sock

    def __enter__(self) -> SocketConnection:
        self.connect()
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


def create_connection(
    address: str,
    timeout: float | None = DEFAULT_TIMEOUT,
    backend: str | None = None,
) -> SocketConnection:
    """Build an unconnected :class:`SocketConnection` for ``<NODE>:<PORT>``."""
    node, port = parse_address(address)
    return SocketConnection(node, port, timeout=timeout, backend=backend)
