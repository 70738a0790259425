"""Protocol layer: byte order, request framing, and response parsing."""

from .framing import Frame, encode, parse_frame
from .parser import FrameDecoder, decode_response
from .values import FloatValue, NullValue, StringValue, Tag, Value
