import struct

from visindigo.arcp.protocol import (
    ARCP_CONST_ARCPRNRN,
    ARCP_CONST_CALL,
    ARCP_CONST_RETN,
    ArcpError,
    CallChunk,
    DataChunk,
    HeadChunk,
    ProtocolVersion,
    RetnChunk,
    Status,
    status_str,
)


def test_status_str_known_names():
    assert status_str(Status.SUCCESS) == "Success"
    assert status_str(Status.PARAMETER_COUNT_MISMATCH) == "ParmeterCountMismatch"
    assert status_str(0x0303) == "UnknownProtocalVersion"


def test_status_str_unknown_code():
    assert status_str(0x1234) == "Unknown Status Code"


def test_status_values():
    assert Status(0x0101) is Status.UNKNOWN_FUNCTION
    assert Status.UNKNOWN_STATUS_CODE == 0xFFFF


def test_head_chunk_carries_latest_version():
    version = struct.unpack("<IHQH", HeadChunk().to_bytes())[3]
    assert version == ProtocolVersion.LATEST == ProtocolVersion.V1_0 == 1


def test_head_chunk_bytes():
    raw = HeadChunk().to_bytes()
    assert raw == b"\x08\x00\x00\x00\x02\x00" + b"\n\r\n\rPCRA" + b"\x01\x00"
    assert struct.unpack("<IHQH", raw)[2] == ARCP_CONST_ARCPRNRN


def test_call_chunk_bytes():
    chunk = CallChunk(function_name_length=8, para_count=2, function_name=b"terminal")
    raw = chunk.to_bytes()
    assert len(raw) == 14 + len(b"terminal")
    assert struct.unpack_from("<IHII", raw) == (8, 8, ARCP_CONST_CALL, 2)
    assert raw.endswith(b"terminal")
    assert raw[6:10] == b"LLAC"


def test_retn_chunk_bytes():
    raw = RetnChunk(para_count=3, status_code=Status.UNKNOWN_FUNCTION).to_bytes()
    assert len(raw) == 16
    assert struct.unpack("<IHIIH", raw) == (8, 2, ARCP_CONST_RETN, 3, Status.UNKNOWN_FUNCTION)


def test_data_chunk_bytes_and_views():
    chunk = DataChunk(data_length=3, type_name_length=6, all_data=b"abcString")
    raw = chunk.to_bytes()
    assert struct.unpack_from("<IH", raw) == (3, 6)
    assert raw[6:] == b"abcString"
    assert chunk.payload == b"abc"
    assert chunk.type_name == b"String"


def test_data_chunk_without_type_name():
    chunk = DataChunk(data_length=2, type_name_length=0, all_data=b"xy")
    assert chunk.type_name == b""
    assert chunk.payload == b"xy"


def test_arcp_error_carries_status():
    err = ArcpError(Status.CHUNK_PARSE_FAILED)
    assert err.status is Status.CHUNK_PARSE_FAILED
    assert str(err) == status_str(Status.CHUNK_PARSE_FAILED) == "ChunkParseFailed"