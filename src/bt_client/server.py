"""MCP server entry point for the bt client.

Exposes the client as tools via the Model Context Protocol using the
official Python MCP SDK with stdio transport.
"""

from __future__ import annotations

import logging
from typing import Any

from mcp.server.fastmcp import FastMCP

from .client import Client
from .errors import DataTooLongError, ProtocolError
from .protocol.framing import encode
from .protocol.values import Value, to_python
from .transport.socket_connection import create_connection

logger = logging.getLogger(__name__)

mcp = FastMCP(
    "bt-client",
    instructions="Send messages to a bt server and read typed responses",
)

# Global connection state
_client: Client | None = None


def _get_client() -> Client:
    """Get the active client, raising if not connected."""
    if _client is None:
        raise RuntimeError(
            "Not connected to a server. Use the 'connect' tool first."
        )
    return _client


def _describe(value: Value) -> dict[str, Any]:
    return {"type": value.tag.name.lower(), "value": to_python(value)}


@mcp.tool()
def connect(address: str, timeout: float | None = None) -> dict[str, Any]:
    """Open a TCP connection to a bt server.

    Args:
        address: Server address as <NODE>:<PORT>, e.g. "127.0.0.1:8080".
        timeout: Socket timeout in seconds. None waits forever.
    """
    global _client
    if _client is not None:
        return {"connected": True, "message": "Already connected"}

    transport = create_connection(address, timeout=timeout)
    info = transport.connect()
    _client = Client(transport)

    return {
        "connected": True,
        "address": info.address,
        "port": info.port,
        "family": info.family,
        "backend": transport.backend,
    }


@mcp.tool()
def disconnect() -> dict[str, bool]:
    """Close the connection to the server."""
    global _client
    if _client is None:
        return {"disconnected": True}
    _client.close()
    _client = None
    return {"disconnected": True}


@mcp.tool()
def send_message(message: str) -> dict[str, Any]:
    """Send a message and return the decoded response.

    The result has a "type" of "string", "float32" or "null" and the
    matching "value".

    Args:
        message: Text command to send, e.g. "?ping".
    """
    client = _get_client()
    try:
        frame = encode(message)
    except DataTooLongError as e:
        return {"error": str(e), "kind": type(e).__name__}

    try:
        client.send_frame(frame)
        return _describe(client.receive())
    except (ProtocolError, ConnectionError) as e:
        # The stream position is unknown after a failed exchange.
        logger.warning("Exchange failed, dropping connection: %s", e)
        disconnect()
        return {"error": str(e), "kind": type(e).__name__}


@mcp.tool()
def encode_message(message: str) -> dict[str, Any]:
    """Show the request frame that would be sent for a message.

    Args:
        message: Text command to encode.
    """
    try:
        frame = encode(message)
    except DataTooLongError as e:
        return {"error": str(e), "kind": type(e).__name__}
    return {"length": len(frame), "hex": frame.hex(" ")}


# ─── ENTRY POINT ─────────────────────────────────────────────────────

def main():
    """Run the MCP server with stdio transport."""
    logging.basicConfig(level=logging.INFO)
    mcp.run(transport="stdio")


if __name__ == "__main__":
    main()
