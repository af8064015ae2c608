"""Objects that answer remote calls and objects that make them."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Iterable, Optional

from .dataobject import CallDataObject, ReturnDataObject
from .protocol import ArcpError, DataChunk, Status
from .types import check_data

if TYPE_CHECKING:
    from .peer import PeerPort


class RemoteCallRouter(ABC):
    """Answers calls of one function name after checking the parameter types."""

    def __init__(self, function_name: str = "", type_names: Optional[Iterable[int]] = None) -> None:
        self.function_name = function_name
        self.type_names: list[int] = list(type_names or [])
        self.who: Any = None
        self._ret = ReturnDataObject()

    @abstractmethod
    def on_remote_call(self, params: list[DataChunk], who: Any) -> None:
        """Do the work; fill the reply with set_status_code and add_return_data."""

    @staticmethod
    def _reply_status(who: Any, status: Status) -> None:
        reply = ReturnDataObject()
        reply.status_code = status
        who.send(reply)

    def handle_call(self, obj: CallDataObject, who: Any) -> Status:
        """Check a call, run it and send the reply to who; returns the reply status."""
        self.who = who
        if len(obj.chunks) != len(self.type_names):
            self._reply_status(who, Status.PARAMETER_COUNT_MISMATCH)
            return Status.PARAMETER_COUNT_MISMATCH
        for chunk, type_name in zip(obj.chunks, self.type_names):
            status = check_data(chunk, type_name)
            if status is not Status.SUCCESS:
                self._reply_status(who, status)
                return status
        try:
            self.on_remote_call(list(obj.chunks), who)
        except ArcpError as exc:
            self._ret.clear_chunks()
            self._reply_status(who, exc.status)
            return exc.status
        except Exception:
            self._ret.clear_chunks()
            self._reply_status(who, Status.THROW_EXCEPTION)
            return Status.THROW_EXCEPTION
        status = self._ret.status_code
        who.send(self._ret)
        self._ret.clear_chunks()
        return status

    def set_status_code(self, code: Status) -> None:
        self._ret.status_code = code

    def add_return_data(self, chunk: DataChunk) -> None:
        self._ret.add_data_chunk(chunk)


class RemoteCaller(ABC):
    """Builds a call, sends it through a peer port and receives the reply."""

    def __init__(
        self, function_name: str = "", who: Any = None, port: Optional["PeerPort"] = None
    ) -> None:
        self.who = who
        self.port = port
        self.call = CallDataObject(function_name)
        self.type_names: list[int] = []
        self.last_status: Optional[int] = None

    def set_function_name(self, name: str) -> None:
        self.call.function_name = name

    def add_data_chunk(self, chunk: DataChunk) -> None:
        self.call.add_data_chunk(chunk)

    def do_remote_call(self) -> bool:
        """Send the call; the parameters are cleared afterwards. False if it could not go."""
        if self.port is None or self.who is None:
            return False
        sent = self.port.do_remote_call(self)
        self.call.clear_chunks()
        return sent

    def handle_return(self, obj: ReturnDataObject) -> None:
        self.last_status = obj.retn.status_code
        self.on_return(list(obj.chunks))

    @abstractmethod
    def on_return(self, params: list[DataChunk]) -> None:
        """Receive the returned values."""