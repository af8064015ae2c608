"""Terminal colouring, hex dumps and small colour helpers."""

from __future__ import annotations

import subprocess
import sys
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Union

_RESET = "\033[0m"

_BINARY_HEADER = "L\\B\t00  01  02  03  04  05  06  07  |  00 01 02 03 04 05 06 07  |"
_BINARY_RULE = "---------------------------------------------------------------------"
_BYTES_PER_LINE = 8


class Color(Enum):
    """Named terminal colours with their ANSI SGR prefixes."""

    NONE = "0"
    BLACK = "30"
    GRAY = "1;30"
    RED = "31"
    LIGHT_RED = "1;31"
    GREEN = "32"
    LIGHT_GREEN = "1;32"
    YELLOW = "33"
    LIGHT_YELLOW = "1;33"
    BLUE = "34"
    LIGHT_BLUE = "1;34"
    PURPLE = "35"
    LIGHT_PURPLE = "1;35"
    CYAN = "36"
    LIGHT_CYAN = "1;36"
    LIGHT_GRAY = "37"
    WHITE = "1;37"


class Style(Enum):
    """Text styles with their ANSI SGR codes."""

    NORMAL = "0"
    BOLD = "1"
    ITALIC = "3"
    UNDERLINE = "4"
    SPLASH = "5"
    INVERSE = "7"
    STRIKETHROUGH = "9"


@dataclass(frozen=True)
class RGBColor:
    """A colour given by its 8-bit channels."""

    red: int
    green: int
    blue: int
    alpha: int = 255


def get_color_string(
    raw_text: str,
    color: Union[Color, RGBColor],
    styles: Union[Style, Iterable[Style]] = Style.NORMAL,
) -> str:
    """Wrap text in ANSI escape codes for the given colour and styles."""
    if isinstance(styles, Style):
        styles = (styles,)
    if isinstance(color, RGBColor):
        prefix = f"\033[38;2;{color.red};{color.green};{color.blue}"
    else:
        prefix = f"\033[{color.value}"
    prefix += "".join(f";{style.value}" for style in styles)
    return f"{prefix}m{raw_text}{_RESET}"


def in_warning_style(raw_text: str) -> str:
    return get_color_string(raw_text, RGBColor(255, 253, 85), Style.BOLD)


def in_error_style(raw_text: str) -> str:
    return get_color_string(raw_text, Color.RED, Style.BOLD)


def in_success_style(raw_text: str) -> str:
    return get_color_string(raw_text, Color.GREEN, Style.BOLD)


def in_notice_style(raw_text: str) -> str:
    return get_color_string(raw_text, Color.BLUE, Style.BOLD)


def print_line(msg: str) -> None:
    """Write one line to the debug stream (standard error)."""
    print(msg, file=sys.stderr)


def get_line() -> str:
    """Read one line from standard input without its line ending."""
    return sys.stdin.readline().rstrip("\r\n")


def _char_cell(byte: int) -> str:
    if 0x20 <= byte <= 0x7E:
        return f" {chr(byte)} "
    return {0x0A: "\\n ", 0x0D: "\\r ", 0x09: "\\t "}.get(byte, " . ")


def format_binary(data: bytes) -> list[str]:
    """Return the lines of a hex dump of data, eight bytes per line."""
    if not data:
        return []
    lines = [_BINARY_HEADER, _BINARY_RULE]
    count = 0
    for start in range(0, len(data), _BYTES_PER_LINE):
        row = data[start:start + _BYTES_PER_LINE]
        count += len(row)
        raw_text = "".join(f"{byte:02X}  " for byte in row)
        char_text = "".join(_char_cell(byte) for byte in row)
        missing = _BYTES_PER_LINE - len(row)
        raw_text += "    " * missing
        char_text += "   " * missing
        lines.append(f"{count}\t{raw_text}|  {char_text} |")
    lines.append(_BINARY_RULE)
    return lines


def print_binary(data: bytes) -> None:
    for line in format_binary(data):
        print_line(line)


def exec_command(cmd: str) -> int:
    """Run a shell command and return its exit status."""
    return subprocess.call(cmd, shell=True)


def to_rgb_string(color: RGBColor) -> str:
    return f"rgb({color.red},{color.green},{color.blue})"


def to_rgba_string(color: RGBColor) -> str:
    return f"rgba({color.red},{color.green},{color.blue},{color.alpha})"


def reverse_color(color: RGBColor) -> RGBColor:
    return RGBColor(255 - color.red, 255 - color.green, 255 - color.blue, color.alpha)


def is_light_color(color: RGBColor) -> bool:
    """Weighted-brightness test for whether a colour counts as light."""
    return (5 * color.green + 2 * color.red + color.blue) > 8 * 128