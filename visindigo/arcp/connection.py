"""A stream parser for protocol messages and an asyncio connection that uses it."""

from __future__ import annotations

import asyncio
import random
import string
import struct
from datetime import datetime
from typing import Callable, Optional, Union

from ..console import format_binary, in_error_style, in_warning_style, print_line
from .dataobject import CallDataObject, ReturnDataObject
from .protocol import (
    ARCP_CONST_ARCPRNRN,
    ARCP_CONST_CALL,
    ARCP_CONST_RETN,
    ARCP_UINT32_8,
    DATA_HEADER,
    HEAD_LAYOUT,
    ArcpError,
    CallChunk,
    DataChunk,
    HeadChunk,
    ProtocolVersion,
    RetnChunk,
    Status,
    status_str,
)
from .types import TypeName, check_data, from_string

Message = Union[CallDataObject, ReturnDataObject]

GREETING_FUNCTION = "terminal"
GREETING_CLIENT_NAME = "Visindigo ARCP Client"
_MAX_CACHE = 0xFFFFFFFF
_READ_SIZE = 65536


def random_string(length: int = 32) -> str:
    """A string of random upper-case letters."""
    return "".join(random.choice(string.ascii_uppercase) for _ in range(length))


def _describe_params(obj: Message) -> list[str]:
    lines = []
    for index, chunk in enumerate(obj.chunks):
        type_text = chunk.type_name.decode("utf-8", errors="replace")
        if check_data(chunk, TypeName.STRING) is Status.SUCCESS:
            value = chunk.payload.decode("utf-8", errors="replace")
        else:
            value = chunk.payload.hex()
        lines.append(f"\t para {index} (type: {type_text}): {value}")
    return lines


def describe_message(obj: Message, received: bool) -> list[str]:
    """Log lines describing a call or return message that was sent or received."""
    verb = "Get" if received else "Send"
    if isinstance(obj, CallDataObject):
        first = f"{verb} Remote Call: {obj.function_name}"
    else:
        code = obj.retn.status_code
        first = f"{verb} Remote Return: {int(code):x} ({status_str(code)})"
    return [first, *_describe_params(obj)]


class ChunkStreamParser:
    """Turns a byte stream into complete call and return messages."""

    def __init__(self) -> None:
        self._cache = bytearray()
        self._chunks: list[DataChunk] = []
        self._head = HeadChunk()
        self._call = CallChunk()
        self._retn = RetnChunk()
        self._is_call = False
        self._para_count = 0
        self.completed: list[Message] = []

    def reset(self) -> None:
        """Forget buffered bytes and any half-read message."""
        self._cache.clear()
        self._chunks = []

    def feed(self, data: bytes) -> list[Message]:
        """Add bytes; return the messages they complete.

        Raises ArcpError on a malformed stream; the messages completed before
        the error stay in ``completed``.
        """
        self.completed = []
        self._cache.extend(data)
        if len(self._cache) >= _MAX_CACHE:
            self.reset()
            raise ArcpError(Status.CHUNK_PARSE_FAILED, "Cache is too large")
        header = DATA_HEADER.size
        while len(self._cache) >= header:
            data_length, type_length = DATA_HEADER.unpack_from(self._cache)
            total = header + data_length + type_length
            if len(self._cache) < total:
                break
            chunk = DataChunk(data_length, type_length, bytes(self._cache[header:total]))
            del self._cache[:total]
            try:
                message = self._on_chunk(chunk)
            except ArcpError:
                self.reset()
                raise
            if message is not None:
                self.completed.append(message)
        return list(self.completed)

    def _on_chunk(self, chunk: DataChunk) -> Optional[Message]:
        if not self._chunks:
            self._head = self._parse_head(chunk)
        elif len(self._chunks) == 1:
            self._parse_second(chunk)
        self._chunks.append(chunk)
        if len(self._chunks) >= 2 and len(self._chunks) - 2 == self._para_count:
            params = self._chunks[2:]
            self._chunks = []
            if self._is_call:
                return CallDataObject(head=self._head, call=self._call, chunks=params)
            return ReturnDataObject(head=self._head, retn=self._retn, chunks=params)
        return None

    @staticmethod
    def _parse_head(chunk: DataChunk) -> HeadChunk:
        expected = HEAD_LAYOUT.size - DATA_HEADER.size
        if chunk.data_length + chunk.type_name_length != expected:
            raise ArcpError(Status.HEAD_CHUNK_LENGTH_IS_NOT_ARCP, "Head length error")
        (tag,) = struct.unpack_from("<Q", chunk.all_data, 0)
        (version,) = struct.unpack_from("<H", chunk.all_data, 8)
        if tag != ARCP_CONST_ARCPRNRN:
            raise ArcpError(Status.HEAD_CHUNK_IS_NOT_ARCP, "Head is not ARCP")
        if version != ProtocolVersion.LATEST:
            raise ArcpError(Status.UNKNOWN_PROTOCOL_VERSION, "Unknown protocol version")
        return HeadChunk(chunk.data_length, chunk.type_name_length, tag, version)

    def _parse_second(self, chunk: DataChunk) -> None:
        if chunk.data_length != ARCP_UINT32_8 or len(chunk.all_data) < 8:
            raise ArcpError(Status.INCORRECT_CALL_OR_RETN_CHUNK, "CALL or RETN length error")
        tag, para_count = struct.unpack_from("<II", chunk.all_data, 0)
        if tag == ARCP_CONST_RETN:
            if len(chunk.all_data) < 10:
                raise ArcpError(Status.INCORRECT_CALL_OR_RETN_CHUNK, "RETN length error")
            (status,) = struct.unpack_from("<H", chunk.all_data, 8)
            self._retn = RetnChunk(
                chunk.data_length, chunk.type_name_length, tag, para_count, status
            )
            self._is_call = False
        elif tag == ARCP_CONST_CALL:
            self._call = CallChunk(
                chunk.data_length,
                chunk.type_name_length,
                tag,
                para_count,
                chunk.all_data[chunk.data_length:],
            )
            self._is_call = True
        else:
            raise ArcpError(Status.INCORRECT_CALL_OR_RETN_CHUNK)
        self._para_count = para_count


CallHandler = Callable[["ArcpConnection", CallDataObject], None]
ReturnHandler = Callable[["ArcpConnection", ReturnDataObject], None]
ConnectionHandler = Callable[["ArcpConnection"], None]


class ArcpConnection:
    """One TCP connection carrying protocol messages in both directions."""

    def __init__(
        self,
        reader: asyncio.StreamReader,
        writer: asyncio.StreamWriter,
        as_server: bool = False,
        host: Optional[str] = None,
        port: Optional[int] = None,
    ) -> None:
        self._reader = reader
        self._writer = writer
        self.as_server = as_server
        self.host = host
        self.port = port
        self.max_reconnect = 5
        self.reconnect_count = 0
        self.parser = ChunkStreamParser()
        self.random_string = ""
        self.received_count = 0
        self.verbose = True
        self.on_call: Optional[CallHandler] = None
        self.on_return: Optional[ReturnHandler] = None
        self.on_connected: Optional[ConnectionHandler] = None
        self.on_disconnected: Optional[ConnectionHandler] = None
        self._closed = False
        self._disconnect_reported = False
        self.name = self._peer_name()

    def _peer_name(self) -> str:
        peer = self._writer.get_extra_info("peername")
        if isinstance(peer, tuple) and len(peer) >= 2:
            return f"{peer[0]}:{peer[1]}"
        return f"{self.host}:{self.port}"

    def _log(self, message: str) -> None:
        if self.verbose:
            print_line(f"[{datetime.now():%H:%M:%S}]ArcpConnection({self.name}):{message}")

    @property
    def closed(self) -> bool:
        return self._closed

    @classmethod
    async def open(cls, host: str, port: int) -> "ArcpConnection":
        """Connect to a peer and send the greeting call."""
        reader, writer = await asyncio.open_connection(host, port)
        connection = cls(reader, writer, host=host, port=port)
        connection._handle_connected()
        return connection

    def _handle_connected(self) -> None:
        if self.on_connected is not None:
            self.on_connected(self)
        self.reconnect_count = 0
        self.send_greeting()

    def send(self, obj: Message) -> None:
        """Write a message; raises ArcpError if the connection is closed."""
        if self._closed or self._writer.is_closing():
            raise ArcpError(Status.CONNECTION_LOST)
        self._writer.write(obj.to_bytes())
        for line in describe_message(obj, received=False):
            self._log(line)

    def send_greeting(self) -> CallDataObject:
        """Announce this client with a fresh random string."""
        greeting = CallDataObject(GREETING_FUNCTION)
        greeting.add_data_chunk(from_string(GREETING_CLIENT_NAME))
        self.random_string = random_string()
        greeting.add_data_chunk(from_string(self.random_string))
        self.send(greeting)
        return greeting

    def _dispatch(self, message: Message) -> None:
        self.received_count += 1
        for line in describe_message(message, received=True):
            self._log(line)
        if isinstance(message, CallDataObject):
            if self.on_call is not None:
                self.on_call(self, message)
        elif self.on_return is not None:
            self.on_return(self, message)

    async def serve(self) -> None:
        """Read and dispatch messages until the connection ends."""
        while not self._closed:
            try:
                data = await self._reader.read(_READ_SIZE)
            except (ConnectionError, OSError) as exc:
                self._log(in_error_style(f"Socket error occurred: {exc}"))
                if not self.as_server and not self._closed and await self.reconnect():
                    continue
                break
            if not data:
                break
            if self.verbose:
                for line in format_binary(data):
                    print_line(line)
            try:
                messages = self.parser.feed(data)
            except ArcpError as exc:
                self._log(in_warning_style(str(exc)))
                for message in self.parser.completed:
                    self._dispatch(message)
                await self.close()
                break
            for message in messages:
                self._dispatch(message)
        self._handle_disconnected()

    def _handle_disconnected(self) -> None:
        if self._disconnect_reported:
            return
        self._disconnect_reported = True
        self._log("Connection lost")
        self.parser.reset()
        if self.on_disconnected is not None:
            self.on_disconnected(self)

    async def reconnect(self) -> bool:
        """Reconnect to the same peer, at most max_reconnect times in a row."""
        if not self.host or self.port is None:
            return False
        while True:
            if self.reconnect_count >= self.max_reconnect:
                self._log(in_error_style("Max auto reconnect count reached, aborting."))
                return False
            self.reconnect_count += 1
            self._log(in_warning_style(
                f"Auto reconnecting, count: {self.reconnect_count}, max: {self.max_reconnect}"
            ))
            try:
                reader, writer = await asyncio.open_connection(self.host, self.port)
            except OSError as exc:
                self._log(in_error_style(f"Socket error occurred: {exc}"))
                continue
            self._reader, self._writer = reader, writer
            self._closed = False
            self._disconnect_reported = False
            self.parser.reset()
            self._handle_connected()
            return True

    async def close(self) -> None:
        """Close the connection; safe to call more than once."""
        if self._closed:
            return
        self._closed = True
        self._writer.close()
        try:
            await self._writer.wait_closed()
        except (ConnectionError, OSError):
            pass