"""A reader for RIFF container files."""

from __future__ import annotations

import struct
from dataclasses import dataclass, field
from enum import Enum
from typing import Sequence, Union

from .console import in_notice_style, in_success_style, print_line

RIFF_ID = 0x46464952
LIST_ID = 0x5453494C

ChunkId = Union[int, str]


class ChunkType(Enum):
    RIFF = "RIFF"
    LIST = "LIST"
    CHUNK = "Chunk"


def _fourcc_to_int(value: ChunkId) -> int:
    if isinstance(value, int):
        return value
    raw = value.encode("utf-8")[:4].ljust(4, b"\0")
    return int.from_bytes(raw, "little")


def _int_to_fourcc(value: int) -> str:
    return (value & 0xFFFFFFFF).to_bytes(4, "little").decode("latin-1")


def _read_header(data: bytes, offset: int = 0) -> tuple[int, int]:
    if len(data) - offset < 8:
        raise ValueError("truncated RIFF chunk header")
    chunk_id, size = struct.unpack_from("<Ii", data, offset)
    if size < 0:
        raise ValueError(f"negative RIFF chunk size {size}")
    return chunk_id, size


def _read_form(data: bytes, offset: int) -> int:
    if len(data) - offset < 4:
        raise ValueError("truncated RIFF form type")
    return struct.unpack_from("<I", data, offset)[0]


@dataclass
class RiffChunk:
    """One chunk; RIFF and LIST chunks hold sub chunks, others hold data."""

    chunk_id: int = 0
    chunk_size: int = 0
    chunk_type: ChunkType = ChunkType.CHUNK
    form_type: int = 0
    data: bytes = b""
    sub_chunks: list["RiffChunk"] = field(default_factory=list)

    @property
    def name(self) -> str:
        return _int_to_fourcc(self.chunk_id)

    @property
    def form_name(self) -> str:
        return _int_to_fourcc(self.form_type)

    @classmethod
    def from_file(cls, path: str) -> "RiffChunk":
        with open(path, "rb") as handle:
            data = handle.read()
        print_line(in_notice_style("Loading from file: " + path))
        return cls.from_bytes(data)

    @classmethod
    def from_bytes(cls, data: bytes) -> "RiffChunk":
        """Parse a whole file; the outer chunk's children take the rest of the data."""
        data = bytes(data)
        chunk_id, size = _read_header(data)
        chunk = cls(chunk_id=chunk_id, chunk_size=size)
        if chunk_id in (RIFF_ID, LIST_ID):
            chunk.chunk_type = ChunkType.RIFF if chunk_id == RIFF_ID else ChunkType.LIST
            chunk.form_type = _read_form(data, 8)
            chunk.sub_chunks = cls._parse_children(data[12:])
        else:
            chunk.data = data[8:8 + size]
        return chunk

    @classmethod
    def _parse_children(cls, data: bytes) -> list["RiffChunk"]:
        children = []
        offset = 0
        while offset < len(data):
            child, consumed = cls._parse_sub(data[offset:])
            children.append(child)
            offset += consumed
        return children

    @classmethod
    def _parse_sub(cls, data: bytes) -> tuple["RiffChunk", int]:
        chunk_id, size = _read_header(data)
        body = data[8:8 + size]
        chunk = cls(chunk_id=chunk_id, chunk_size=size)
        if chunk_id in (RIFF_ID, LIST_ID):
            chunk.chunk_type = ChunkType.RIFF if chunk_id == RIFF_ID else ChunkType.LIST
            chunk.form_type = _read_form(body, 0)
            chunk.sub_chunks = cls._parse_children(body[4:])
        else:
            chunk.data = body
        return chunk, 8 + size

    def _tree_lines(self, level: int) -> list[str]:
        indent = "\t" * level
        mark = "├" if level else ""
        lead = indent + mark
        lines = [
            in_notice_style(f"{lead}ChunkID: {self.name}"),
            f"{lead}ChunkSize: {self.chunk_size} Bytes",
        ]
        if self.chunk_type is ChunkType.CHUNK:
            abstract = "".join(
                (" " if i % 2 == 0 else "") + f"{byte:02X}"
                for i, byte in enumerate(self.data[:32])
            )
            lines.append(f"{lead}Data: {abstract}...")
            return lines
        label = "FormType" if self.chunk_type is ChunkType.RIFF else "ListType"
        lines.append(f"{lead}{label}: {self.form_name}")
        lines.append(in_success_style(f"{lead}SubChunks:"))
        for child in self.sub_chunks:
            lines.extend(child._tree_lines(level + 1))
        return lines

    def tree_lines(self) -> list[str]:
        """The lines of an indented description of the chunk tree."""
        return self._tree_lines(0)

    def print_tree(self) -> None:
        for line in self.tree_lines():
            print_line(line)

    def get_data_of_chunk(self, chunk_id: Union[ChunkId, Sequence[ChunkId]]) -> bytes:
        """Data of a direct sub chunk, or of a nested one given a path of ids."""
        if isinstance(chunk_id, (list, tuple)):
            ids = [_fourcc_to_int(part) for part in chunk_id]
        else:
            ids = [_fourcc_to_int(chunk_id)]
        return self._data_by_path(ids)

    def _data_by_path(self, ids: list[int]) -> bytes:
        if not ids:
            return b""
        first, rest = ids[0], ids[1:]
        for child in self.sub_chunks:
            if child.chunk_id == first:
                return child._data_by_path(rest) if rest else child.data
        return b""