"""Command line entry point: ``bt <NODE>:<PORT> <MESSAGE>``."""

from __future__ import annotations

import argparse
import logging
import sys

from .client import Client
from .errors import (
    DataTooLongError,
    InvalidMagicError,
    UnexpectedEofError,
    UnsupportedTypeError,
)
from .protocol.framing import encode
from .transport.socket_connection import DEFAULT_TIMEOUT, create_connection

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bt",
        description="Send a message to a bt server and print the response.",
        epilog="Example: bt 127.0.0.1:8080 ?ping",
    )
    parser.add_argument("address", help="Server address as <NODE>:<PORT>")
    parser.add_argument("message", help="Message to send")
    parser.add_argument(
        "-t", "--timeout", type=float, default=DEFAULT_TIMEOUT,
        help="Socket timeout in seconds (default: wait forever)",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging"
    )
    return parser


def run(address: str, message: str, timeout: float | None = DEFAULT_TIMEOUT) -> int:
    """Run one exchange, print the result, and return the exit code."""
    try:
        frame = encode(message)
    except DataTooLongError:
        print("Fail to encode the message: data is too long")
        return EXIT_FAILURE

    try:
        transport = create_connection(address, timeout=timeout)
    except ValueError as e:
        print(e)
        return EXIT_FAILURE

    try:
        with Client(transport) as client:
            client.send_frame(frame)
            value = client.receive()
    except UnexpectedEofError as e:
        logger.debug("%s", e)
        print("Unexpected eof")
        return EXIT_FAILURE
    except InvalidMagicError as e:
        logger.debug("%s", e)
        print("Invalid magic")
        return EXIT_FAILURE
    except UnsupportedTypeError as e:
        print(f"Unsupported type: 0x{e.tag:02X}")
        return EXIT_FAILURE
    except ConnectionError as e:
        print(e)
        return EXIT_FAILURE

    print(value)
    return EXIT_OK


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        stream=sys.stderr,
    )
    return run(args.address, args.message, timeout=args.timeout)


if __name__ == "__main__":
    sys.exit(main())
