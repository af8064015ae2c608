"""Well-known paths, directory sizes, readable sizes and file search."""

from __future__ import annotations

import fnmatch
import os
import sys
import tempfile
import webbrowser
from enum import IntEnum
from pathlib import Path
from typing import Sequence


class BinarySizeFormat(IntEnum):
    IEC = 1024
    SI = 1000


class BinarySizeUnit(IntEnum):
    BIT = 1
    BYTE = 8


class CountingUnit(IntEnum):
    NONE = 1
    K = 2
    M = 3
    G = 4
    T = 5
    P = 6
    E = 7
    Z = 8
    Y = 9


def get_working_path() -> str:
    return os.getcwd()


def get_program_path() -> str:
    """Directory of the running program."""
    program = sys.argv[0] if sys.argv and sys.argv[0] else ""
    if not program:
        return os.getcwd()
    return os.path.dirname(os.path.abspath(program))


def get_package_root_path() -> str:
    return get_program_path() + "/package"


def get_home_path() -> str:
    return str(Path.home())


def get_user_name() -> str:
    return Path.home().name


def get_temp_path() -> str:
    return tempfile.gettempdir()


def get_root_path() -> str:
    return os.path.abspath(os.sep)


def get_size_of(path: str) -> int:
    """Total size in bytes of the files below path; 0 if it cannot be read."""
    total = 0
    try:
        entries = list(os.scandir(path))
    except OSError:
        return 0
    for entry in entries:
        try:
            if entry.is_file():
                total += entry.stat().st_size
            elif entry.is_dir(follow_symlinks=False):
                total += get_size_of(entry.path)
        except OSError:
            continue
    return total


def get_counting_unit_str(unit: int) -> str:
    """The prefix letter of a counting unit; empty for none or out of range."""
    try:
        unit = CountingUnit(unit)
    except ValueError:
        return ""
    return "" if unit is CountingUnit.NONE else unit.name


def get_readable_size(
    raw_size: float,
    unit: BinarySizeUnit = BinarySizeUnit.BYTE,
    counting: int = CountingUnit.NONE,
    size_format: BinarySizeFormat = BinarySizeFormat.IEC,
) -> str:
    """Format a size with two decimals and a prefix such as KiB or MB."""
    counting = int(counting)
    while raw_size >= int(size_format):
        raw_size /= int(size_format)
        counting += 1
    text = f"{raw_size:.2f}" + get_counting_unit_str(counting)
    if size_format == BinarySizeFormat.IEC and counting != CountingUnit.NONE:
        text += "i"
    text += "B" if unit == BinarySizeUnit.BYTE else "b"
    return text


def _matches(name: str, filters: Sequence[str]) -> bool:
    if not filters:
        return True
    lowered = name.lower()
    return any(fnmatch.fnmatchcase(lowered, pattern.lower()) for pattern in filters)


def files_filter(
    root: str, filters: Sequence[str], consider_sub_directories: bool = True
) -> list[str]:
    """Paths of files under root whose names match any wildcard filter."""
    found: list[str] = []
    if consider_sub_directories:
        for directory, _, files in os.walk(root):
            found.extend(os.path.join(directory, name) for name in files if _matches(name, filters))
    else:
        try:
            entries = list(os.scandir(root))
        except OSError:
            return []
        found.extend(
            entry.path for entry in entries if entry.is_file() and _matches(entry.name, filters)
        )
    return sorted(found)


def open_explorer(path: str) -> bool:
    """Open a local path with the desktop's default handler."""
    return webbrowser.open(Path(path).resolve().as_uri())


def open_browser(url: str) -> bool:
    return webbrowser.open(url)