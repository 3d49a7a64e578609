# udpchat

A small UDP chat toolkit built on `asyncio`, with no runtime dependencies. It has four modules:

- **`udpchat.protocol`**: a wire format for chat frames. A frame is at most 4096 bytes. Byte 0 holds the length of the user name (0–255). The user name follows as that many UTF-8 bytes. The rest of the frame is the UTF-8 message body.
- **`udpchat.transport`**: `UdpSocket`, a bound UDP socket with awaitable `recv_from` and `send_to`. It is also an async context manager.
- **`udpchat.client_manager`**: `ClientManager`, a thread-safe table of clients keyed by user name. Clients that stay silent past a timeout are dropped.
- **`udpchat.server`** and **`udpchat.client`**: an echo server on UDP port 9001 and a one-shot client.

## Installation

```
pip install .
```

Python 3.10 or newer is required.

## Command-line use

### Server

```
udpchat-server [--host HOST] [--port PORT] [--timeout SECONDS]
```

The defaults are `--host 0.0.0.0`, `--port 9001` and `--timeout 30`.

For each datagram the server does the following:

1. It decodes the datagram as UTF-8, replacing invalid bytes.
2. If the text is empty, it sends nothing back.
3. Otherwise it works out a user name. If the datagram is a valid protocol frame, it uses the frame's user name. If not, it uses the first whitespace-separated word, or `anonymous` when there is none.
4. It records that user and the sender's address in a `ClientManager`.
5. It sends the text back to the sender and prints how many clients are active.

Once a second, clients that have been silent for the timeout are removed. Stop the server with Ctrl+C.

### Client

```
udpchat-client
```

The client asks for two things: the server's address and a message. It binds a socket to that same address on port 9050. It then sends the message as plain UTF-8 text to port 9001 of the address and prints the echoed reply.

Because the client binds its own socket to the address you type, that address must be one the local machine owns, such as `127.0.0.1`.

## Library use

### Frames

```python
from udpchat.protocol import MessageProtocol, ProtocolError

msg = MessageProtocol(user_name="bob", body="hello")
frame = msg.serialize()                # b"\x03bobhello"
decoded = MessageProtocol.deserialize(frame)
print(decoded)                         # <bob>: hello
```

`MessageProtocol` is a frozen dataclass. Every error is a subclass of `ProtocolError`:

| Error | Raised when |
|---|---|
| `UsernameTooLongError` | the encoded user name is longer than 255 bytes |
| `BufferTooLargeError` | the frame is longer than 4096 bytes |
| `TruncatedError` | the frame is empty or shorter than its length byte says |
| `UsernameUtf8Error` | the user-name bytes are not valid UTF-8 |
| `BodyUtf8Error` | the body bytes are not valid UTF-8 |

### Tracking clients

```python
from udpchat.client_manager import ClientInfo, ClientManager

manager = ClientManager(timeout_duration=30.0)     # seconds or a datetime.timedelta
manager.upsert_client(ClientInfo(user_name="alice", socket_addr=("127.0.0.1", 8080)))
manager.active_client_count()                      # 1
manager.update_client_activity("alice")            # ClientNotFoundError if unknown
manager.cleanup_inactive_clients()
```

`ClientInfo.last_message_time` is a `time.monotonic()` value. By default it is the moment the object is created.

Inside a running event loop, `ClientManager.with_background_cleanup(timeout)` creates a manager and starts a task that prunes the table once a second. `stop_background_cleanup()` cancels that task.

### Server and client from code

```python
import asyncio
from udpchat.server import serve_with_manager, run_forever

asyncio.run(serve_with_manager("0.0.0.0", 9001, 30.0))  # echo and track clients
# asyncio.run(run_forever("0.0.0.0", 9001))             # plain echo, no tracking
```

The server also provides lower-level functions:

- `set_up_server(host, port)` binds a `UdpSocket`.
- `handle_client(sock)` handles one datagram and returns its text.
- `handle_client_with_manager(sock, manager)` does the same and also records the sender in `manager`.

The client side provides these functions:

- `set_up_client(input_func, client_port)` takes `input_func` as the source of prompts, so input can be supplied from code.
- `send_message(sock, message, server_address, server_port)` returns the number of bytes sent.
- `receive_message(sock)` returns the echoed text.
- `run_once(input_func)` performs one full round trip.

## What it does not do

- The server only echoes each message back to its sender. It does not relay messages between clients.
- The client table is kept only in memory.
- The client sends plain text, not protocol frames. The server therefore names such a client by the first word of its message.

## Running the tests

```
pip install ".[test]"
pytest
```