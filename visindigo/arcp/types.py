"""Type names of data chunks and conversions between values and chunks."""

from __future__ import annotations

import struct
from enum import IntEnum

from .protocol import ArcpError, DataChunk, Status


class TypeName(IntEnum):
    UNKNOWN = 0
    ANY = 1
    NONE = 2
    UINT32 = 3
    INT32 = 4
    UINT64 = 5
    INT64 = 6
    BOOL = 7
    FLOAT = 8
    DOUBLE = 9
    STRING = 10
    JSON = 11
    BINARY = 12
    USER_START = 1000
    USER_END = 10000


_BUILTIN_NAMES = {
    TypeName.UNKNOWN: "Unknown",
    TypeName.ANY: "Any",
    TypeName.NONE: "None",
    TypeName.UINT32: "UInt32",
    TypeName.INT32: "Int32",
    TypeName.UINT64: "UInt64",
    TypeName.INT64: "Int64",
    TypeName.BOOL: "Bool",
    TypeName.FLOAT: "Float",
    TypeName.DOUBLE: "Double",
    TypeName.STRING: "String",
}
_BUILTIN_REVERSE = {name: type_name for type_name, name in _BUILTIN_NAMES.items()}

_user_names: dict[int, str] = {}
_user_reverse: dict[str, int] = {}


def get_type_name_string(type_name: int) -> str:
    """The wire name of a built-in or registered type, else "Unknown"."""
    try:
        builtin = TypeName(type_name)
    except ValueError:
        builtin = None
    if builtin in _BUILTIN_NAMES:
        return _BUILTIN_NAMES[builtin]
    return _user_names.get(int(type_name), "Unknown")


def register_new_type_name(name: str) -> int:
    """Register a user type name; registering it again returns the same number."""
    if name in _user_reverse:
        return _user_reverse[name]
    number = len(_user_names) + int(TypeName.USER_START) + 1
    _user_names[number] = name
    _user_reverse[name] = number
    return number


def get_type_name_from_string(name: str) -> int:
    if name in _BUILTIN_REVERSE:
        return _BUILTIN_REVERSE[name]
    return _user_reverse.get(name, TypeName.UNKNOWN)


def check_data(chunk: DataChunk, type_name: int) -> Status:
    """Whether a chunk carries the given type and enough data."""
    expected = get_type_name_string(type_name).encode("utf-8")
    if chunk.type_name_length != len(expected):
        return Status.PARAMETER_TYPE_MISMATCH
    if chunk.type_name != expected:
        return Status.PARAMETER_TYPE_MISMATCH
    if chunk.data_length + chunk.type_name_length > len(chunk.all_data):
        return Status.CHUNK_PARSE_FAILED
    return Status.SUCCESS


def create_chunk(data: bytes, type_name: int) -> DataChunk:
    """A chunk holding data followed by the type's name."""
    name = get_type_name_string(type_name).encode("utf-8")
    data = bytes(data)
    return DataChunk(data_length=len(data), type_name_length=len(name), all_data=data + name)


def _pack(fmt: str, value, type_name: TypeName) -> DataChunk:
    try:
        raw = struct.pack(fmt, value)
    except struct.error as exc:
        raise ValueError(f"{value!r} does not fit {get_type_name_string(type_name)}") from exc
    return create_chunk(raw, type_name)


def _unpack(fmt: str, chunk: DataChunk, type_name: TypeName):
    status = check_data(chunk, type_name)
    if status is not Status.SUCCESS:
        raise ArcpError(status)
    size = struct.calcsize(fmt)
    if len(chunk.all_data) - chunk.type_name_length < size:
        raise ArcpError(Status.CHUNK_PARSE_FAILED)
    return struct.unpack_from(fmt, chunk.all_data)[0]


def from_uint32(value: int) -> DataChunk:
    return _pack("<I", value, TypeName.UINT32)


def to_uint32(chunk: DataChunk) -> int:
    return _unpack("<I", chunk, TypeName.UINT32)


def from_int32(value: int) -> DataChunk:
    return _pack("<i", value, TypeName.INT32)


def to_int32(chunk: DataChunk) -> int:
    return _unpack("<i", chunk, TypeName.INT32)


def from_uint64(value: int) -> DataChunk:
    return _pack("<Q", value, TypeName.UINT64)


def to_uint64(chunk: DataChunk) -> int:
    return _unpack("<Q", chunk, TypeName.UINT64)


def from_int64(value: int) -> DataChunk:
    return _pack("<q", value, TypeName.INT64)


def to_int64(chunk: DataChunk) -> int:
    return _unpack("<q", chunk, TypeName.INT64)


def from_float(value: float) -> DataChunk:
    return _pack("<f", value, TypeName.FLOAT)


def to_float(chunk: DataChunk) -> float:
    return _unpack("<f", chunk, TypeName.FLOAT)


def from_double(value: float) -> DataChunk:
    return _pack("<d", value, TypeName.DOUBLE)


def to_double(chunk: DataChunk) -> float:
    return _unpack("<d", chunk, TypeName.DOUBLE)


def from_bool(value: bool) -> DataChunk:
    return _pack("<?", bool(value), TypeName.BOOL)


def to_bool(chunk: DataChunk) -> bool:
    return _unpack("<?", chunk, TypeName.BOOL)


def from_string(value: str) -> DataChunk:
    return create_chunk(value.encode("utf-8"), TypeName.STRING)


def to_string(chunk: DataChunk) -> str:
    status = check_data(chunk, TypeName.STRING)
    if status is not Status.SUCCESS:
        raise ArcpError(status)
    return chunk.payload.decode("utf-8", errors="replace")