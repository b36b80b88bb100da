"""A multi-client relay: every message a client sends is passed to all the others.

The server watches its listening socket and every connected client with
``select``. A new connection is accepted and announced; a message from a
client is printed and forwarded, frame for frame, to every other client.
A client that disconnects or fails is closed and dropped.
"""

from __future__ import annotations

import select
import socket
import struct
import sys
import threading
from typing import Iterable, Iterator, List, Optional, Sequence, TextIO, Tuple

from spocklink.chat import ChatPeer
from spocklink.framing import MAX_BUFFER_SIZE, read_message, recv_exact

HOST = "127.0.0.1"

_LENGTH = struct.Struct("<i")
_POLL_INTERVAL = 0.5

_SERVER_USAGE = "Cantidad invalida de argumentos debe ingresar el puerto como parametro!"
_CLIENT_USAGE = (
    "Cantidad invalida de argumentos, debe ingresar primero el puerto servidor "
    "y luego el puerto cliente como parametro!"
)


class BroadcastServer:
    """Accepts any number of clients and relays each message to the rest."""

    def __init__(self, host: str = HOST, port: int = 0, output: Optional[TextIO] = None) -> None:
        self._output = output if output is not None else sys.stdout
        self._listener = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        try:
            self._listener.bind((host, port))
            self._listener.listen(10)
        except OSError:
            self._listener.close()
            raise
        self._clients: List[socket.socket] = []
        self._closed = False
        self._say("Servidor listo para escuchar conexiones")

    def __enter__(self) -> "BroadcastServer":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _say(self, line: str) -> None:
        self._output.write(line + "\n")
        self._output.flush()

    def address(self) -> Tuple[str, int]:
        """Return the host and port the server is listening on."""
        host, port = self._listener.getsockname()[:2]
        return host, port

    def serve_once(self, timeout: Optional[float] = None) -> int:
        """Wait up to ``timeout`` seconds for activity and handle it.

        Returns the number of sockets that were ready.
        """
        if self._closed:
            raise ValueError("server is closed")
        readable, _, _ = select.select([self._listener, *self._clients], [], [], timeout)
        for sock in readable:
            if sock is self._listener:
                self._accept()
            elif sock in self._clients:
                self._handle(sock)
        return len(readable)

    def serve_forever(self) -> None:
        """Serve until the server is closed or waiting for activity fails."""
        while not self._closed:
            try:
                self.serve_once(_POLL_INTERVAL)
            except (OSError, ValueError) as exc:
                if not self._closed:
                    print(f"select: {exc}", file=sys.stderr)
                break

    def close(self) -> None:
        """Disconnect every client and stop listening."""
        if self._closed:
            return
        self._closed = True
        clients, self._clients = self._clients, []
        for client in clients:
            client.close()
        self._listener.close()

    def _accept(self) -> None:
        try:
            client, _ = self._listener.accept()
        except OSError as exc:
            print(f"accept: {exc}", file=sys.stderr)
            return
        self._clients.append(client)
        self._say(f"El socket {client.fileno()} se ha conectado al servidor.")

    def _drop(self, sock: socket.socket, descriptor: int) -> None:
        self._say(f"El socket {descriptor} ha producido un error y ha sido desconectado.")
        if sock in self._clients:
            self._clients.remove(sock)
        sock.close()

    def _handle(self, sock: socket.socket) -> None:
        descriptor = sock.fileno()
        try:
            header = recv_exact(sock, _LENGTH.size)
            (length,) = _LENGTH.unpack(header)
            if not 0 < length <= MAX_BUFFER_SIZE:
                raise ValueError(f"invalid message length {length}")
            payload = recv_exact(sock, length)
        except EOFError:
            self._drop(sock, descriptor)
            return
        except (OSError, ValueError) as exc:
            print(f"recv: {exc}", file=sys.stderr)
            self._drop(sock, descriptor)
            return

        text = payload.split(b"\0", 1)[0].decode("utf-8", errors="replace")
        self._say(f"Ha recibido del cliente el siguiente mensaje: {text}  ")

        frame = header + payload
        for other in list(self._clients):
            if other is sock:
                continue
            other_descriptor = other.fileno()
            self._say(f"Enviando mensaje {text} al socket {other_descriptor}")
            try:
                other.sendall(frame)
            except OSError:
                self._drop(other, other_descriptor)


def _port(text: str) -> Optional[int]:
    try:
        value = int(text)
    except ValueError:
        return None
    return value if 0 <= value <= 0xFFFF else None


def server_main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the relay server on the port given as the only argument."""
    args = list(sys.argv[1:] if argv is None else argv)
    port = _port(args[0]) if len(args) == 1 else None
    if port is None:
        print(_SERVER_USAGE)
        return 1
    try:
        server = BroadcastServer(HOST, port)
    except OSError as exc:
        print(f"bind: {exc}", file=sys.stderr)
        return 1
    with server:
        server.serve_forever()
    return 0


def _pieces(line: str) -> Iterator[str]:
    limit = MAX_BUFFER_SIZE - 1
    raw = line.encode("utf-8")
    while raw:
        cut = min(limit, len(raw))
        while cut > 0 and cut < len(raw) and (raw[cut] & 0xC0) == 0x80:
            cut -= 1
        if cut == 0:
            cut = min(limit, len(raw))
        yield raw[:cut].decode("utf-8", errors="replace")
        raw = raw[cut:]


def _bounded_lines(lines: Iterable[str]) -> Iterator[str]:
    for line in lines:
        yield from _pieces(line)


def _client_receive(sock: socket.socket, peer: ChatPeer, output: TextIO) -> None:
    descriptor = sock.fileno()
    try:
        while True:
            text = read_message(sock)
            if text is None:
                break
            output.write(f"Ha recibido del servidor el siguiente mensaje: {text} \n")
            output.flush()
    except OSError as exc:
        print(f"recv: {exc}", file=sys.stderr)
    output.write(f"Ha ocurrido un error con el socket {descriptor} y ha sido desconectado \n")
    output.flush()
    peer.close()


def client_main(argv: Optional[Sequence[str]] = None) -> int:
    """Connect to the relay (server port, then local port) and chat over the console."""
    args = list(sys.argv[1:] if argv is None else argv)
    ports = [_port(arg) for arg in args] if len(args) == 2 else []
    if len(ports) != 2 or None in ports:
        print(_CLIENT_USAGE)
        return 1
    server_port, client_port = ports

    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    try:
        sock.bind(("", client_port))
        sock.connect((HOST, server_port))
    except OSError as exc:
        sock.close()
        print(f"connect: {exc}", file=sys.stderr)
        return 1

    peer = ChatPeer(sock, "servidor")
    print("Cliente esperando respuestas")
    receiver = threading.Thread(
        target=_client_receive, args=(sock, peer, sys.stdout), daemon=True
    )
    receiver.start()
    print("Cliente listo para recibir mensajes por consola")
    peer.send_lines(_bounded_lines(sys.stdin))
    receiver.join()
    return 0


if __name__ == "__main__":
    sys.exit(server_main())