"""Call and return messages built from head, call/return and data chunks."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Iterable, Optional

from .protocol import CallChunk, DataChunk, HeadChunk, RetnChunk, Status
from .types import create_chunk


class DataObject(ABC):
    """A message's head chunk and its list of data chunks."""

    def __init__(
        self, head: Optional[HeadChunk] = None, chunks: Optional[Iterable[DataChunk]] = None
    ) -> None:
        self.head = head if head is not None else HeadChunk()
        self.chunks: list[DataChunk] = list(chunks or [])

    def __len__(self) -> int:
        return len(self.chunks)

    def clear_chunks(self) -> None:
        self.chunks.clear()

    def add_data_chunk(self, chunk: DataChunk) -> None:
        self.chunks.append(chunk)

    def add_typed_chunk(self, type_name: int, data: bytes) -> None:
        """Add data tagged with a type name."""
        self.add_data_chunk(create_chunk(data, type_name))

    def _data_bytes(self) -> bytes:
        return b"".join(chunk.to_bytes() for chunk in self.chunks)

    @abstractmethod
    def to_bytes(self) -> bytes:
        """The whole message as sent on the wire."""


class CallDataObject(DataObject):
    """A remote call: function name and parameters."""

    def __init__(
        self,
        function_name: str = "",
        head: Optional[HeadChunk] = None,
        call: Optional[CallChunk] = None,
        chunks: Optional[Iterable[DataChunk]] = None,
    ) -> None:
        super().__init__(head, chunks)
        self.call = call if call is not None else CallChunk()
        if call is None:
            self.call.para_count = len(self.chunks)
        if function_name:
            self.function_name = function_name

    @property
    def function_name(self) -> str:
        return self.call.function_name.decode("utf-8", errors="replace")

    @function_name.setter
    def function_name(self, name: str) -> None:
        encoded = name.encode("utf-8")
        self.call.function_name = encoded
        self.call.function_name_length = len(encoded)

    def clear_chunks(self) -> None:
        super().clear_chunks()
        self.call.para_count = 0

    def add_data_chunk(self, chunk: DataChunk) -> None:
        super().add_data_chunk(chunk)
        self.call.para_count = len(self.chunks)

    def to_bytes(self) -> bytes:
        return self.head.to_bytes() + self.call.to_bytes() + self._data_bytes()


class ReturnDataObject(DataObject):
    """A reply: status code and returned values."""

    def __init__(
        self,
        head: Optional[HeadChunk] = None,
        retn: Optional[RetnChunk] = None,
        chunks: Optional[Iterable[DataChunk]] = None,
    ) -> None:
        super().__init__(head, chunks)
        self.retn = retn if retn is not None else RetnChunk()
        if retn is None:
            self.retn.para_count = len(self.chunks)

    @property
    def status_code(self) -> Status:
        return Status(self.retn.status_code)

    @status_code.setter
    def status_code(self, status: Status) -> None:
        self.retn.status_code = int(status)

    def clear_chunks(self) -> None:
        """Drop the values and reset the status to success."""
        super().clear_chunks()
        self.retn.para_count = 0
        self.retn.status_code = Status.SUCCESS

    def add_data_chunk(self, chunk: DataChunk) -> None:
        super().add_data_chunk(chunk)
        self.retn.para_count = len(self.chunks)

    def to_bytes(self) -> bytes:
        return self.head.to_bytes() + self.retn.to_bytes() + self._data_bytes()