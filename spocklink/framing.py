"""Length-prefixed text messages over stream sockets.

A message is sent as a 32-bit little-endian length followed by that many
bytes: the UTF-8 text and a terminating NUL.
"""

from __future__ import annotations

import socket
import struct
from typing import Optional

MAX_BUFFER_SIZE = 200

_LENGTH = struct.Struct("<i")


class FrameError(ConnectionError):
    """Raised when a peer sends a malformed frame or closes in the middle of one."""


def encode_message(text: str) -> bytes:
    """Frame ``text`` as length prefix plus NUL-terminated UTF-8 payload."""
    payload = text.encode("utf-8") + b"\0"
    if len(payload) > MAX_BUFFER_SIZE:
        raise ValueError(f"message of {len(payload)} bytes exceeds {MAX_BUFFER_SIZE}")
    return _LENGTH.pack(len(payload)) + payload


def recv_exact(sock: socket.socket, size: int) -> bytes:
    """Read exactly ``size`` bytes from ``sock``.

    Raises ``EOFError`` if the peer closes before any byte arrives and
    ``FrameError`` if it closes part way through.
    """
    chunks = bytearray()
    while len(chunks) < size:
        chunk = sock.recv(size - len(chunks))
        if not chunk:
            if not chunks:
                raise EOFError("connection closed")
            raise FrameError(f"connection closed after {len(chunks)} of {size} bytes")
        chunks.extend(chunk)
    return bytes(chunks)


def read_message(sock: socket.socket) -> Optional[str]:
    """Read one framed message, or return ``None`` if the peer closed cleanly."""
    try:
        header = recv_exact(sock, _LENGTH.size)
    except EOFError:
        return None
    (length,) = _LENGTH.unpack(header)
    if not 0 < length <= MAX_BUFFER_SIZE:
        raise FrameError(f"invalid message length {length}")
    try:
        payload = recv_exact(sock, length)
    except EOFError as exc:
        raise FrameError("connection closed before the message body") from exc
    return payload.split(b"\0", 1)[0].decode("utf-8", errors="replace")