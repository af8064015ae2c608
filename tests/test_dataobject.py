import struct

import pytest

from visindigo.arcp import types
from visindigo.arcp.dataobject import CallDataObject, DataObject, ReturnDataObject
from visindigo.arcp.protocol import ARCP_CONST_CALL, ARCP_CONST_RETN, HeadChunk, Status
from visindigo.arcp.types import TypeName


def test_data_object_is_abstract():
    with pytest.raises(TypeError):
        DataObject()


def test_call_function_name_round_trip():
    call = CallDataObject("terminal")
    assert call.function_name == "terminal"
    assert call.call.function_name_length == len("terminal")


def test_function_name_length_counts_utf8_bytes():
    call = CallDataObject()
    call.function_name = "调用"
    assert call.call.function_name_length == len("调用".encode("utf-8"))
    assert call.function_name == "调用"


def test_call_para_count_follows_chunks():
    call = CallDataObject("terminal")
    call.add_data_chunk(types.from_string("Visindigo ARCP Client"))
    call.add_data_chunk(types.from_uint32(7))
    assert call.call.para_count == 2
    assert len(call) == 2
    call.clear_chunks()
    assert call.call.para_count == 0
    assert call.chunks == []


def test_add_typed_chunk():
    call = CallDataObject("f")
    call.add_typed_chunk(TypeName.STRING, b"abc")
    chunk = call.chunks[0]
    assert chunk.all_data == b"abcString"
    assert types.to_string(chunk) == "abc"
    assert call.call.para_count == 1


def test_call_to_bytes_layout():
    call = CallDataObject("terminal")
    first = types.from_string("hi")
    second = types.from_int32(-3)
    call.add_data_chunk(first)
    call.add_data_chunk(second)
    raw = call.to_bytes()
    head = HeadChunk().to_bytes()
    assert raw.startswith(head)
    offset = len(head)
    assert struct.unpack_from("<IHII", raw, offset) == (8, len("terminal"), ARCP_CONST_CALL, 2)
    offset += 14
    assert raw[offset:offset + len("terminal")] == b"terminal"
    offset += len("terminal")
    assert raw[offset:] == first.to_bytes() + second.to_bytes()


def test_return_defaults_and_status():
    ret = ReturnDataObject()
    assert ret.status_code is Status.SUCCESS
    ret.status_code = Status.UNKNOWN_FUNCTION
    assert ret.status_code is Status.UNKNOWN_FUNCTION
    ret.add_data_chunk(types.from_bool(True))
    assert ret.retn.para_count == 1
    ret.clear_chunks()
    assert ret.status_code is Status.SUCCESS
    assert ret.retn.para_count == 0


def test_return_to_bytes_layout():
    ret = ReturnDataObject()
    ret.status_code = Status.PARAMETER_COUNT_MISMATCH
    value = types.from_double(2.5)
    ret.add_data_chunk(value)
    raw = ret.to_bytes()
    head = HeadChunk().to_bytes()
    assert raw.startswith(head)
    fields = struct.unpack_from("<IHIIH", raw, len(head))
    assert fields == (8, 2, ARCP_CONST_RETN, 1, Status.PARAMETER_COUNT_MISMATCH)
    assert raw[len(head) + 16:] == value.to_bytes()


def test_objects_built_from_parts_keep_chunks():
    chunks = [types.from_uint64(9), types.from_string("x")]
    ret = ReturnDataObject(chunks=chunks)
    assert ret.retn.para_count == 2
    assert types.to_uint64(ret.chunks[0]) == 9
    call = CallDataObject("g", chunks=chunks)
    assert call.call.para_count == 2
    assert types.to_string(call.chunks[1]) == "x"