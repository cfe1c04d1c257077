# pairchat

A small terminal chat for two people. A relay server listens on TCP port
27007, waits for two clients, learns each one's numeric ID and the ID of the
person it wants to talk to, and then passes messages between them. Either side
ends the conversation by sending `STOP`.

## Installing

```
pip install .
```

## Running the server

```
pairchat-server [--host HOST] [--port PORT]
```

By default the server binds to every network interface on port 27007. It
prints `Connection...` while it waits for each of the two clients. When a
client connects it reports the client's address, then the sender and
recipient IDs that client registers. An ID is the number formed by the
leading decimal digits of what the client sent (at most seven digits); input
with no leading digits counts as `0`.

Once both clients are registered, every message is shown as
`Message from client: ...` and forwarded to the other client. When one side
sends `STOP`, the server prints `Client left the chat`, then
`Server successfully finished on port ...`, and exits.

If the first client's interlocutor ID does not match the ID of any connected
client, or a socket error occurs, the server prints `Server error: ...` and
exits with status 1.

## Running a client

Give the server's IPv4 address as the argument:

```
pairchat-client 192.168.1.104 [--port PORT]
```

The client asks for two things:

1. `Enter your ID:` a number that identifies you.
2. `Enter your interlocutor's ID:` the number the other person entered as
   their own ID.

After that, each line you type is sent to the other person (up to 1023
bytes), and whatever they send shows up as `Message from server: ...`. Type
`STOP` to leave; when the other side sends `STOP` you see
`Interlocutor finish the chat` and the client exits. Reaching the end of
standard input also ends the chat.

Without an IP address the client prints `No IP address given` and exits with
status 1; a malformed address or a failed connection also gives status 1.

The client waits on standard input and the socket together with `select`, so
it needs a POSIX system.

## What it does not do

A server run handles exactly one conversation between exactly two clients and
then exits. There are no chat rooms, no more than two participants, no
accounts or authentication, no encryption and no message history.

## Library helpers

`pairchat.paint` colours text with ANSI escape sequences: `Color`, `Style`,
`color_string`, `style_string`, `colorize`, `color_print`, `format_error` and
`print_error`.

```python
from pairchat.paint import Color, Style, colorize

print(colorize(Style.BOLD, Color.GREEN, "connected"))
```

`pairchat.textutil` has `read_line`, which returns one line without its
newline and raises `EOFError` at the end of the stream, and `discard_line`,
which skips the rest of the current line.

## Running the tests

```
pip install .[test]
pytest
```