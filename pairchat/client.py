"""Chat client that registers with the relay server and exchanges messages."""

from __future__ import annotations

import argparse
import select
import socket
import sys
from enum import Enum
from typing import Sequence, TextIO

from pairchat.paint import Color, Style, color_print
from pairchat.server import BUFFER_SIZE, PORT, STOP_WORD
from pairchat.textutil import read_line


class ChatStatus(Enum):
    """Whether the chat goes on after a step."""

    STOP = 0
    CONTINUE = 1


def _say(out: TextIO | None, color: Color, text: str) -> None:
    color_print(Style.NOMODE, color, text, out)


def _text_of(data: bytes) -> str:
    return data.split(b"\0", 1)[0].decode("utf-8", errors="replace")


def server_address(ip_address: str, port: int = PORT) -> tuple[str, int]:
    """Return the (host, port) pair for an IPv4 address; raise ValueError if it is malformed."""
    try:
        socket.inet_pton(socket.AF_INET, ip_address)
    except OSError as exc:
        raise ValueError(f"invalid IPv4 address: {ip_address!r}") from exc
    return ip_address, port


def register(sock: socket.socket, stream: TextIO, out: TextIO | None = None) -> bool:
    """Ask for this user's ID and the interlocutor's ID and send both to the server.

    Returns False if the input ends before both IDs are read.
    """
    for prompt in ("Enter your ID: ", "Enter your interlocutor's ID: "):
        _say(out, Color.BLUE, prompt)
        try:
            line = read_line(stream)
        except EOFError:
            _say(out, Color.RED, "Error of reading an ID: input ended\n")
            return False
        sock.sendall(line.encode() + b"\0")
    return True


def read_from_server(sock: socket.socket, out: TextIO | None = None) -> ChatStatus:
    """Receive one message from the server and show it."""
    try:
        data = sock.recv(BUFFER_SIZE)
    except OSError as exc:
        _say(out, Color.RED, f"Recv error: {exc}\n")
        return ChatStatus.STOP
    if not data:
        _say(out, Color.RED, "Recv error: connection closed\n")
        return ChatStatus.STOP

    text = _text_of(data)
    if text == STOP_WORD:
        _say(out, Color.YELLOW, "Interlocutor finish the chat\n")
        return ChatStatus.STOP
    _say(out, Color.PURPLE, f"Message from server: {text}\n")
    return ChatStatus.CONTINUE


def send_to_server(
    sock: socket.socket, stream: TextIO, out: TextIO | None = None
) -> ChatStatus:
    """Read one line of input and send it to the server; STOP ends the chat."""
    try:
        line = read_line(stream)
    except EOFError:
        return ChatStatus.STOP

    sock.sendall(line.encode()[: BUFFER_SIZE - 1] + b"\0")
    if line == STOP_WORD:
        _say(out, Color.YELLOW, "Interlocutor finish the chat\n")
        return ChatStatus.STOP
    return ChatStatus.CONTINUE


def communicate(
    sock: socket.socket, stream: TextIO, out: TextIO | None = None
) -> ChatStatus:
    """Register, then exchange messages until either side stops the chat."""
    if not register(sock, stream, out):
        return ChatStatus.STOP

    while True:
        readable, _, _ = select.select([sock, stream], [], [])
        if sock in readable and read_from_server(sock, out) is ChatStatus.STOP:
            return ChatStatus.STOP
        if stream in readable and send_to_server(sock, stream, out) is ChatStatus.STOP:
            return ChatStatus.STOP


def main(argv: Sequence[str] | None = None) -> int:
    """Connect to the chat server given on the command line and chat over standard input."""
    parser = argparse.ArgumentParser(
        prog="pairchat-client", description="Chat with another client through the server."
    )
    parser.add_argument("ip_address", nargs="?", help="IPv4 address of the server")
    parser.add_argument("--port", type=int, default=PORT, help="port of the server")
    args = parser.parse_args(argv)

    if args.ip_address is None:
        _say(None, Color.RED, "No IP address given\n")
        return 1
    try:
        address = server_address(args.ip_address, args.port)
    except ValueError as exc:
        _say(None, Color.RED, f"{exc}\n")
        return 1

    try:
        with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
            sock.connect(address)
            communicate(sock, sys.stdin, sys.stdout)
    except OSError as exc:
        _say(None, Color.RED, f"Error of connect client with server: {exc}\n")
        return 1
    return 0