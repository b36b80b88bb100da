# spocklink

A small toolkit made of four parts:

* records (a pet, a mission, a villain) that pack to a compact binary layout
  and unpack from one;
* a length-prefixed message format for stream sockets;
* a two-party console chat and a multi-client broadcast relay over TCP that
  use that format;
* a singly linked list and FIFO queues built on it.

It has no runtime dependencies beyond the standard library.

## Installation

```
pip install .
```

To run the test suite:

```
pip install ".[test]"
pytest
```

## Binary records

`spocklink.models` holds three frozen dataclasses, each with `to_bytes()` and a
`from_bytes(data)` class method. `from_bytes` returns a pair: the record and the
number of bytes it used, so records can be read one after another from a
larger buffer.

* `Pet(nickname, spins, age)` packs as one signed age byte, one flag byte,
  then the NUL-terminated UTF-8 nickname.
* `Mission(info, length)` packs as the NUL-terminated info followed by a
  32-bit little-endian length. `Mission.create(message)` sets the length to
  the encoded size of the message.
* `Villain(name, age)` packs as a NUL-padded 25-byte name field followed by a
  16-bit little-endian age. `Villain.create(name, age)` keeps at most the first
  24 bytes of the name.

```python
from spocklink.models import Pet, Mission, Villain

data = Pet("Babu", True, 5).to_bytes() + Mission.create("ABCDEFGHI").to_bytes()
pet, used = Pet.from_bytes(data)
mission, _ = Mission.from_bytes(data[used:])
```

Values that do not fit their fields raise `ValueError` on construction.
Malformed input to `from_bytes` raises `spocklink.models.DecodeError`.

## Length-prefixed messages

`spocklink.framing` holds the wire format shared by the network tools: a
4-byte little-endian length followed by the NUL-terminated UTF-8 text, at most
200 bytes of payload.

```python
from spocklink.framing import encode_message, read_message

frame = encode_message("hello\n")
# sock.sendall(frame) on one side, read_message(sock) on the other
```

`encode_message` raises `ValueError` for text too long for one message.
`read_message` waits for the full frame, returns `None` when the peer closes
cleanly between messages, and raises `spocklink.framing.FrameError` if the peer
goes away mid-message or sends an invalid length. `recv_exact(sock, size)`
reads exactly `size` bytes.

## Two-way chat

```
spocklink-chat-server
spocklink-chat-client
```

The server listens on `127.0.0.1:3200` (`--host`, `--port`) and accepts a
single peer; the client binds local port 3201 (`--local-port`) and connects to
the server (`--host`, `--port`). Once connected, each side sends every line
read from standard input, split into several messages if it is longer than one
message allows, and prints every message it receives from the other side.

From Python, `accept_peer(host, port)` and `connect_peer(host, port,
local_port)` in `spocklink.chat` return a `ChatPeer`, whose `run(lines,
output)` sends the lines while printing incoming messages, and whose
`send_lines`, `receive_loop` and `close` can be used separately.

## Broadcast chat

```
spocklink-broadcast-server 3300
spocklink-broadcast-client 3300 3301
spocklink-broadcast-client 3300 3302
```

The server takes the port to listen on at `127.0.0.1`. It accepts any number
of clients and relays each message it receives to every other connected
client, dropping clients whose connection fails. A client takes the server
port and then its own local port; it sends what is typed on standard input and
prints what the server relays. Wrong arguments print a usage message and exit
with status 1.

The server can also be embedded:

```python
import sys
from spocklink.broadcast import BroadcastServer

with BroadcastServer("127.0.0.1", 0, sys.stdout) as server:
    host, port = server.address()
    server.serve_once(timeout=1.0)   # or server.serve_forever()
```

## Collections

`spocklink.linkedlist.LinkedList` is a singly linked list with index access,
insertion, replacement, search by predicate and removal, plus variants that
hand removed or replaced elements to a callback. `spocklink.queues.Queue` is a
FIFO queue on top of it, and `SyncQueue` is the thread-safe variant, guarding
`push` and `pop` with a lock.

## What it does not do

The package has no record that combines a pet, a mission and a list of
villains into one object, and no commands or functions that write such an
object to a file and read it back. The record types above can be packed and
concatenated by hand, but saving and loading a whole crew member is left to
the caller.