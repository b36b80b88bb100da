"""A two-party console chat over TCP with length-prefixed messages.

Each side reads lines from its input and sends them to the other, while a
background thread prints every message that arrives.
"""

from __future__ import annotations

import argparse
import socket
import sys
import threading
from typing import Iterable, Iterator, Optional, Sequence, TextIO

from spocklink.framing import MAX_BUFFER_SIZE, encode_message, read_message

PORT = 3200
HOST = "127.0.0.1"

_LINE_LIMIT = MAX_BUFFER_SIZE - 1


def _chunks(line: str) -> Iterator[str]:
    """Split ``line`` into pieces that fit one message, as a bounded line read would."""
    piece: list = []
    size = 0
    for char in line:
        width = len(char.encode("utf-8"))
        if piece and size + width > _LINE_LIMIT:
            yield "".join(piece)
            piece, size = [], 0
        piece.append(char)
        size += width
    if piece:
        yield "".join(piece)


class ChatPeer:
    """One end of a chat connection; ``label`` names the other party in output."""

    def __init__(self, sock: socket.socket, label: str) -> None:
        self._sock = sock
        self.label = label
        self._lock = threading.Lock()
        self._closed = False

    def receive_loop(self, output: TextIO) -> None:
        """Print each incoming message until the peer disconnects, then close."""
        try:
            while True:
                text = read_message(self._sock)
                if text is None:
                    break
                output.write(f"Ha recibido del {self.label} el siguiente mensaje: {text} \n")
                output.flush()
        except OSError as exc:
            if not self._closed:
                print(f"recv: {exc}", file=sys.stderr)
        finally:
            self.close()

    def send_lines(self, lines: Iterable[str]) -> int:
        """Send every line as framed messages; return how many messages went out."""
        sent = 0
        for line in lines:
            for piece in _chunks(line):
                try:
                    self._sock.sendall(encode_message(piece))
                except OSError:
                    self.close()
                    return sent
                sent += 1
        return sent

    def run(self, lines: Iterable[str], output: TextIO) -> None:
        """Receive in the background while sending ``lines``; wait for the peer to leave."""
        receiver = threading.Thread(target=self.receive_loop, args=(output,), daemon=True)
        receiver.start()
        self.send_lines(lines)
        receiver.join()

    def close(self) -> None:
        """Shut the connection down and release the socket."""
        with self._lock:
            if self._closed:
                return
            self._closed = True
        try:
            self._sock.shutdown(socket.SHUT_RDWR)
        except OSError:
            pass
        self._sock.close()


def accept_peer(host: str = HOST, port: int = PORT) -> ChatPeer:
    """Listen on ``host:port`` and return the first client that connects."""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as listener:
        listener.bind((host, port))
        listener.listen(10)
        connection, _ = listener.accept()
    return ChatPeer(connection, "cliente")


def connect_peer(host: str = HOST, port: int = PORT, local_port: Optional[int] = None) -> ChatPeer:
    """Connect to the server at ``host:port``, optionally from ``local_port``."""
    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    try:
        if local_port is not None:
            sock.bind(("", local_port))
        sock.connect((host, port))
    except OSError:
        sock.close()
        raise
    return ChatPeer(sock, "servidor")


def server_main(argv: Optional[Sequence[str]] = None) -> int:
    """Wait for one client and chat with it over standard input and output."""
    parser = argparse.ArgumentParser(description="Chat server.")
    parser.add_argument("--host", default=HOST)
    parser.add_argument("--port", type=int, default=PORT)
    args = parser.parse_args(argv)
    try:
        peer = accept_peer(args.host, args.port)
    except OSError as exc:
        print(f"accept: {exc}", file=sys.stderr)
        return 1
    peer.run(sys.stdin, sys.stdout)
    return 0


def client_main(argv: Optional[Sequence[str]] = None) -> int:
    """Connect to the server and chat over standard input and output."""
    parser = argparse.ArgumentParser(description="Chat client.")
    parser.add_argument("--host", default=HOST)
    parser.add_argument("--port", type=int, default=PORT)
    parser.add_argument("--local-port", type=int, default=PORT + 1)
    args = parser.parse_args(argv)
    try:
        peer = connect_peer(args.host, args.port, args.local_port)
    except OSError as exc:
        print(f"connect: {exc}", file=sys.stderr)
        return 1
    peer.run(sys.stdin, sys.stdout)
    return 0


if __name__ == "__main__":
    sys.exit(server_main())