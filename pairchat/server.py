"""Relay server that pairs two chat clients by their IDs and passes messages between them."""

from __future__ import annotations

import argparse
import select
import socket
from contextlib import ExitStack
from dataclasses import dataclass
from itertools import takewhile
from typing import Sequence, TextIO

from pairchat.paint import Color, Style, color_print

PORT = 27007
BACKLOG = 2
BUFFER_SIZE = 1024
STOP_WORD = "STOP"

# An ID is read from at most this many leading digits.
_MAX_ID_DIGITS = 7


@dataclass
class ClientRecord:
    """A connected client together with its own ID and the ID it wants to talk to."""

    sock: socket.socket
    sender_id: int = 0
    recipient_id: int = 0


def _say(out: TextIO | None, color: Color, text: str) -> None:
    color_print(Style.NOMODE, color, text, out)


def _text_of(data: bytes) -> str:
    return data.split(b"\0", 1)[0].decode("utf-8", errors="replace")


def parse_id(data: bytes | str) -> int:
    """Return the number formed by the leading decimal digits of data, or 0 if there are none."""
    text = data.decode("latin-1") if isinstance(data, bytes) else data
    digits = "".join(takewhile(lambda ch: "0" <= ch <= "9", text[:_MAX_ID_DIGITS]))
    return int(digits) if digits else 0


def create_server(
    host: str = "", port: int = PORT, backlog: int = BACKLOG
) -> socket.socket:
    """Open a listening IPv4 TCP socket bound to host and port."""
    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    try:
        sock.bind((host, port))
        sock.listen(backlog)
    except OSError:
        sock.close()
        raise
    return sock


def accept_client(server_sock: socket.socket, out: TextIO | None = None) -> socket.socket:
    """Wait for one client to connect and return its socket."""
    conn, address = server_sock.accept()
    _say(out, Color.GREEN, f"Connection client: {address[0]}\n")
    return conn


def _recv_field(sock: socket.socket) -> bytes:
    """Read one NUL-terminated field without consuming anything after it."""
    collected = bytearray()
    while len(collected) < BUFFER_SIZE - 1:
        byte = sock.recv(1)
        if not byte:
            if collected:
                break
            raise ConnectionError("client closed the connection during registration")
        if byte == b"\0":
            break
        collected += byte
    return bytes(collected)


def register_client(sock: socket.socket, out: TextIO | None = None) -> ClientRecord:
    """Read a client's own ID and its interlocutor's ID from the socket."""
    sender_id = parse_id(_recv_field(sock))
    _say(out, Color.BLUE, f"senders ID: {sender_id}\n")
    recipient_id = parse_id(_recv_field(sock))
    _say(out, Color.BLUE, f"recipient ID: {recipient_id}\n")
    return ClientRecord(sock, sender_id, recipient_id)


def find_recipient(
    clients: Sequence[ClientRecord], index: int
) -> socket.socket | None:
    """Return the socket of the client that clients[index] wants to talk to, if connected."""
    wanted = clients[index].recipient_id
    return next((client.sock for client in clients if client.sender_id == wanted), None)


def relay(
    clients: Sequence[ClientRecord], index: int, out: TextIO | None = None
) -> None:
    """Pass messages between clients[index] and its interlocutor until one sends STOP."""
    sender = clients[index].sock
    recipient = find_recipient(clients, index)
    if recipient is None:
        raise LookupError(f"no connected client has ID {clients[index].recipient_id}")

    while True:
        readable, _, _ = select.select([sender, recipient], [], [])
        if recipient in readable:
            sender, recipient = recipient, sender

        data = sender.recv(BUFFER_SIZE - 1)
        if not data:
            _say(out, Color.RED, "Client closed the connection\n")
            return
        text = _text_of(data)
        _say(out, Color.PURPLE, f"Message from client: {text}\n")

        recipient.sendall(data.ljust(BUFFER_SIZE, b"\0"))
        if text == STOP_WORD:
            _say(out, Color.YELLOW, "Client left the chat\n")
            return

        sender, recipient = recipient, sender


def serve(host: str = "", port: int = PORT, out: TextIO | None = None) -> None:
    """Accept a pair of clients, register them and relay their chat."""
    with ExitStack() as stack:
        server_sock = stack.enter_context(create_server(host, port, BACKLOG))
        clients = []
        for _ in range(BACKLOG):
            _say(out, Color.YELLOW, "Connection...\n")
            conn = stack.enter_context(accept_client(server_sock, out))
            clients.append(register_client(conn, out))

        for index in range(BACKLOG // 2):
            relay(clients, index, out)

        _say(out, Color.GREEN, f"Server successfully finished on port {port}\n")


def main(argv: Sequence[str] | None = None) -> int:
    """Run the chat server from the command line."""
    parser = argparse.ArgumentParser(
        prog="pairchat-server", description="Relay a chat between two clients."
    )
    parser.add_argument("--host", default="", help="address to bind (all interfaces by default)")
    parser.add_argument("--port", type=int, default=PORT, help="port to listen on")
    args = parser.parse_args(argv)

    try:
        serve(args.host, args.port)
    except (OSError, LookupError) as exc:
        _say(None, Color.RED, f"Server error: {exc}\n")
        return 1
    return 0