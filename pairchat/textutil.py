"""Line-oriented helpers for reading from text streams."""

from __future__ import annotations

from typing import TextIO


def read_line(stream: TextIO) -> str:
    """Read one line and return it without its trailing newline.

    Raises EOFError when the stream has nothing left to read.
    """
    line = stream.readline()
    if not line:
        raise EOFError("no more input")
    if line.endswith("\n"):
        line = line[:-1]
    return line


def discard_line(stream: TextIO) -> str:
    """Skip the rest of the current line, newline included, and return what was skipped."""
    return stream.readline()