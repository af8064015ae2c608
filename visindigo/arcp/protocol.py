"""Wire constants, status codes and chunk layouts of the remote call protocol."""

from __future__ import annotations

import struct
from dataclasses import dataclass
from enum import IntEnum
from typing import Optional

ARCP_UINT32_8 = 0x00000008
ARCP_UINT16_2 = 0x0002
ARCP_CONST_ARCPRNRN = 0x415243500D0A0D0A
ARCP_CONST_CALL = 0x43414C4C
ARCP_CONST_RETN = 0x5245544E

DATA_HEADER = struct.Struct("<IH")
HEAD_LAYOUT = struct.Struct("<IHQH")
CALL_LAYOUT = struct.Struct("<IHII")
RETN_LAYOUT = struct.Struct("<IHIIH")


class ProtocolVersion(IntEnum):
    V1_0 = 0x0001
    LATEST = 0x0001


class Status(IntEnum):
    SUCCESS = 0x0000
    UNKNOWN_ERROR = 0x0001
    INTERNAL_ERROR = 0x0002
    CONNECTION_LOST = 0x0003
    UNKNOWN_FUNCTION = 0x0101
    PARAMETER_TYPE_MISMATCH = 0x0102
    PARAMETER_COUNT_MISMATCH = 0x0103
    THROW_EXCEPTION = 0x0104
    CHUNK_PARSE_FAILED = 0x0201
    MISSING_CALL_CHUNK = 0x0202
    MISSING_RETN_CHUNK = 0x0203
    INCORRECT_CALL_OR_RETN_CHUNK = 0x0204
    HEAD_CHUNK_LENGTH_IS_NOT_ARCP = 0x0301
    HEAD_CHUNK_IS_NOT_ARCP = 0x0302
    UNKNOWN_PROTOCOL_VERSION = 0x0303
    UNKNOWN_STATUS_CODE = 0xFFFF


_STATUS_NAMES = {
    Status.SUCCESS: "Success",
    Status.UNKNOWN_ERROR: "UnknownError",
    Status.INTERNAL_ERROR: "InternalError",
    Status.CONNECTION_LOST: "ConnectionLost",
    Status.UNKNOWN_FUNCTION: "UnknownFunction",
    Status.PARAMETER_TYPE_MISMATCH: "ParameterTypeMismatch",
    Status.PARAMETER_COUNT_MISMATCH: "ParmeterCountMismatch",
    Status.THROW_EXCEPTION: "ThrowException",
    Status.CHUNK_PARSE_FAILED: "ChunkParseFailed",
    Status.MISSING_CALL_CHUNK: "MissingCALLChunk",
    Status.MISSING_RETN_CHUNK: "MissingRETNChunk",
    Status.INCORRECT_CALL_OR_RETN_CHUNK: "IncorrectCALLorRETNChunk",
    Status.HEAD_CHUNK_LENGTH_IS_NOT_ARCP: "HeadChunkLengthIsNotARCP",
    Status.HEAD_CHUNK_IS_NOT_ARCP: "HeadChunkIsNotARCP",
    Status.UNKNOWN_PROTOCOL_VERSION: "UnknownProtocalVersion",
    Status.UNKNOWN_STATUS_CODE: "UnknownStatusCode",
}


def status_str(code: int) -> str:
    """The protocol name of a status code, or "Unknown Status Code"."""
    try:
        return _STATUS_NAMES[Status(code)]
    except ValueError:
        return "Unknown Status Code"


class ArcpError(Exception):
    """A protocol failure carrying its status code."""

    def __init__(self, status: Status, message: Optional[str] = None) -> None:
        self.status = Status(status)
        super().__init__(message or status_str(self.status))


@dataclass
class DataChunk:
    """A length-prefixed chunk: data bytes followed by a type name."""

    data_length: int = 0
    type_name_length: int = 0
    all_data: bytes = b""

    @property
    def payload(self) -> bytes:
        return self.all_data[: self.data_length]

    @property
    def type_name(self) -> bytes:
        if self.type_name_length == 0:
            return b""
        return self.all_data[-self.type_name_length:]

    def to_bytes(self) -> bytes:
        return DATA_HEADER.pack(self.data_length, self.type_name_length) + bytes(self.all_data)


@dataclass
class HeadChunk:
    """The first chunk of every message, tagging it and naming the version."""

    data_length: int = ARCP_UINT32_8
    version_name_length: int = ARCP_UINT16_2
    tag_data: int = ARCP_CONST_ARCPRNRN
    version: int = ProtocolVersion.LATEST

    def to_bytes(self) -> bytes:
        return HEAD_LAYOUT.pack(
            self.data_length, self.version_name_length, self.tag_data, int(self.version)
        )


@dataclass
class CallChunk:
    """The second chunk of a call message: parameter count and function name."""

    data_length: int = ARCP_UINT32_8
    function_name_length: int = 0
    tag_data: int = ARCP_CONST_CALL
    para_count: int = 0
    function_name: bytes = b""

    def to_bytes(self) -> bytes:
        return CALL_LAYOUT.pack(
            self.data_length, self.function_name_length, self.tag_data, self.para_count
        ) + bytes(self.function_name)


@dataclass
class RetnChunk:
    """The second chunk of a return message: parameter count and status code."""

    data_length: int = ARCP_UINT32_8
    status_code_length: int = ARCP_UINT16_2
    tag_data: int = ARCP_CONST_RETN
    para_count: int = 0
    status_code: int = Status.SUCCESS

    def to_bytes(self) -> bytes:
        return RETN_LAYOUT.pack(
            self.data_length,
            self.status_code_length,
            self.tag_data,
            self.para_count,
            int(self.status_code),
        )