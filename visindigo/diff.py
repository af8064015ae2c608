"""Line difference analysis between two documents."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Sequence

from .console import print_line


@dataclass
class DifferenceData:
    previous_document: list[str] = field(default_factory=list)
    current_document: list[str] = field(default_factory=list)
    removed_lines: list[int] = field(default_factory=list)
    added_lines: list[int] = field(default_factory=list)
    lcs_previous: list[int] = field(default_factory=list)
    lcs_current: list[int] = field(default_factory=list)


def analyze(previous: Sequence[str], current: Sequence[str]) -> DifferenceData:
    """Match lines greedily, then report unmatched line indices."""
    data = DifferenceData(list(previous), list(current))
    prev_doc, cur_doc = data.previous_document, data.current_document
    p = c = 0
    advance_previous = True
    while p < len(prev_doc) and c < len(cur_doc):
        if prev_doc[p] == cur_doc[c]:
            data.lcs_previous.append(p)
            data.lcs_current.append(c)
            advance_previous = not advance_previous
            p += 1
            c += 1
        elif advance_previous:
            p += 1
            if p == len(prev_doc):
                p = data.lcs_previous[-1] if data.lcs_previous else 0
                c += 1
                if c == len(cur_doc):
                    break
        else:
            c += 1
            if c == len(cur_doc):
                c = data.lcs_current[-1] if data.lcs_current else 0
                p += 1
                if p == len(prev_doc):
                    break
    matched_previous = set(data.lcs_previous)
    matched_current = set(data.lcs_current)
    data.removed_lines = [i for i in range(len(prev_doc)) if i not in matched_previous]
    data.added_lines = [i for i in range(len(cur_doc)) if i not in matched_current]
    return data


def _read_lines(path: str) -> list[str]:
    with open(path, encoding="utf-8") as handle:
        return [raw.rstrip("\r\n") for raw in handle]


def analyze_files(previous_path: str, current_path: str) -> DifferenceData:
    """Compare two UTF-8 text files line by line."""
    return analyze(_read_lines(previous_path), _read_lines(current_path))


def format_difference(data: DifferenceData) -> list[str]:
    lines = ["Previous Document Removed Lines: "]
    lines.extend(data.previous_document[i] for i in data.removed_lines)
    lines.append("Current Document Added Lines: ")
    lines.extend(data.current_document[i] for i in data.added_lines)
    return lines


def debug_print(data: DifferenceData) -> None:
    for line in format_difference(data):
        print_line(line)