"""Client for the bt length-prefixed binary protocol."""

from .client import Client, send_message
from .errors import (
    BtError,
    DataTooLongError,
    FrameError,
    InvalidMagicError,
    ProtocolError,
    UnexpectedEofError,
    UnsupportedTypeError,
)
from .protocol import (
    FloatValue,
    Frame,
    FrameDecoder,
    NullValue,
    StringValue,
    Tag,
    Value,
    decode_response,
    encode,
    parse_frame,
)
from .transport import BufferedStreamReader, SocketConnection, create_connection

__version__ = "0.1.0"
