"""Transport layer: socket connections and buffered stream reads."""

from .base import Transport
from .socket_connection import SocketConnection, create_connection, parse_address
from .stream_reader import BufferedStreamReader
