import io
import os
import socket

import pytest

from pairchat.client import (
    ChatStatus,
    communicate,
    main,
    read_from_server,
    register,
    send_to_server,
    server_address,
)
from pairchat.server import BUFFER_SIZE, PORT


def _block(payload):
    return payload.ljust(BUFFER_SIZE, b"\0")


def _recv_exactly(sock, size):
    sock.settimeout(5)
    data = b""
    while len(data) < size:
        chunk = sock.recv(size - len(data))
        if not chunk:
            break
        data += chunk
    return data


def test_server_address_uses_default_port():
    assert server_address("127.0.0.1") == ("127.0.0.1", PORT)


def test_server_address_keeps_given_port():
    assert server_address("10.0.0.1", 4000) == ("10.0.0.1", 4000)


@pytest.mark.parametrize("bad", ["999.1.1.1", "localhost", ""])
def test_server_address_rejects_malformed(bad):
    with pytest.raises(ValueError):
        server_address(bad)


def test_register_sends_both_ids():
    ours, theirs = socket.socketpair()
    with ours, theirs:
        out = io.StringIO()
        assert register(ours, io.StringIO("12\n34\n"), out) is True
        assert _recv_exactly(theirs, 6) == b"12\x0034\x00"
    assert "Enter your ID: " in out.getvalue()
    assert "Enter your interlocutor's ID: " in out.getvalue()


def test_register_fails_on_end_of_input():
    ours, theirs = socket.socketpair()
    with ours, theirs:
        out = io.StringIO()
        assert register(ours, io.StringIO(""), out) is False
    assert "Error" in out.getvalue()


def test_read_from_server_shows_message():
    ours, theirs = socket.socketpair()
    with ours, theirs:
        theirs.sendall(_block(b"hi"))
        out = io.StringIO()
        assert read_from_server(ours, out) is ChatStatus.CONTINUE
    assert "Message from server: hi" in out.getvalue()


def test_read_from_server_stop():
    ours, theirs = socket.socketpair()
    with ours, theirs:
        theirs.sendall(_block(b"STOP"))
        out = io.StringIO()
        assert read_from_server(ours, out) is ChatStatus.STOP
    assert "Interlocutor finish the chat" in out.getvalue()


def test_read_from_server_closed_connection():
    ours, theirs = socket.socketpair()
    with ours:
        theirs.close()
        out = io.StringIO()
        assert read_from_server(ours, out) is ChatStatus.STOP
    assert "Recv error" in out.getvalue()


def test_send_to_server_sends_terminated_line():
    ours, theirs = socket.socketpair()
    with ours, theirs:
        status = send_to_server(ours, io.StringIO("hello\n"), io.StringIO())
        assert status is ChatStatus.CONTINUE
        assert _recv_exactly(theirs, 6) == b"hello\0"


def test_send_to_server_stop_ends_chat():
    ours, theirs = socket.socketpair()
    with ours, theirs:
        status = send_to_server(ours, io.StringIO("STOP\n"), io.StringIO())
        assert status is ChatStatus.STOP
        assert _recv_exactly(theirs, 5) == b"STOP\0"


def test_send_to_server_end_of_input_stops():
    ours, theirs = socket.socketpair()
    with ours, theirs:
        assert send_to_server(ours, io.StringIO(""), io.StringIO()) is ChatStatus.STOP


def test_communicate_stops_when_server_says_stop():
    ours, theirs = socket.socketpair()
    read_fd, write_fd = os.pipe()
    out = io.StringIO()
    with ours, theirs, os.fdopen(read_fd) as stream, os.fdopen(write_fd, "w") as writer:
        writer.write("1\n2\n")
        writer.flush()
        theirs.sendall(_block(b"hi"))
        theirs.sendall(_block(b"STOP"))
        status = communicate(ours, stream, out)
        registration = _recv_exactly(theirs, 4)
    assert status is ChatStatus.STOP
    assert registration == b"1\x002\x00"
    assert "Message from server: hi" in out.getvalue()
    assert "Interlocutor finish the chat" in out.getvalue()


def test_communicate_stops_when_registration_fails():
    ours, theirs = socket.socketpair()
    with ours, theirs:
        assert communicate(ours, io.StringIO(""), io.StringIO()) is ChatStatus.STOP


def test_main_without_address(capsys):
    assert main([]) == 1
    assert "No IP address given" in capsys.readouterr().out


def test_main_with_malformed_address(capsys):
    assert main(["999.1.1.1"]) == 1
    assert "invalid IPv4 address" in capsys.readouterr().out