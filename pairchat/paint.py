"""Coloured terminal output using ANSI escape sequences."""

from __future__ import annotations

import sys
from enum import IntEnum
from typing import TextIO

RESET = "\033[0m"
_DEFAULT_STYLE = "\033["


class Color(IntEnum):
    """Foreground colours available for printing."""

    PURPLE = 0
    YELLOW = 1
    GREEN = 2
    BLUE = 3
    RED = 4


class Style(IntEnum):
    """Text styles; NOMODE applies the colour alone."""

    BOLD = 0
    FADED = 1
    ITALICS = 2
    UNDERLINED = 3
    BLINKING = 4
    CROSSEDOUT = 5
    NOMODE = 69


_COLOR_CODES = {
    Color.PURPLE: "35m",
    Color.YELLOW: "33m",
    Color.GREEN: "32m",
    Color.BLUE: "34m",
    Color.RED: "31m",
}

_STYLE_CODES = {
    Style.BOLD: "\033[1;",
    Style.FADED: "\033[2;",
    Style.ITALICS: "\033[3;",
    Style.UNDERLINED: "\033[4;",
    Style.BLINKING: "\033[5;",
    Style.CROSSEDOUT: "\033[9;",
    Style.NOMODE: "\033[",
}


def color_string(color: Color | int) -> str:
    """Return the escape-sequence tail for a colour, or "" if it is unknown."""
    try:
        return _COLOR_CODES[Color(color)]
    except ValueError:
        return ""


def style_string(style: Style | int) -> str:
    """Return the escape-sequence head for a style; unknown styles get the plain one."""
    try:
        return _STYLE_CODES[Style(style)]
    except ValueError:
        return _DEFAULT_STYLE


def colorize(style: Style | int, color: Color | int, text: str) -> str:
    """Wrap text in the escape sequences for style and colour, then reset."""
    return f"{style_string(style)}{color_string(color)}{text}{RESET}"


def color_print(
    style: Style | int, color: Color | int, text: str, file: TextIO | None = None
) -> None:
    """Write styled text to file (standard output by default) without a newline."""
    out = sys.stdout if file is None else file
    out.write(colorize(style, color, text))
    out.flush()


def format_error(file: str, function: str, line: int, message: str) -> str:
    """Build a red error report naming where it came from."""
    body = f"\nError in {file}, in function {function}, in line {line}\n{message}"
    return colorize(Style.NOMODE, Color.RED, body)


def print_error(
    file: str, function: str, line: int, message: str, stream: TextIO | None = None
) -> None:
    """Write an error report to stream (standard output by default)."""
    out = sys.stdout if stream is None else stream
    out.write(format_error(file, function, line, message))
    out.flush()