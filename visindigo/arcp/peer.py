"""A peer that listens for connections, routes calls and tracks outstanding calls."""

from __future__ import annotations

import asyncio
from collections import deque
from datetime import datetime
from typing import Optional

from ..console import in_warning_style, print_line
from .connection import ArcpConnection
from .dataobject import CallDataObject, ReturnDataObject
from .protocol import Status
from .remote import RemoteCallRouter, RemoteCaller

DEFAULT_PORT = 11450
_DEFAULT_BACKLOG = 100


class PeerPort:
    """Holds connections, routers by function name and a queue of calls per connection."""

    def __init__(
        self, enable_listening: bool = True, local: bool = True, listen_port: int = DEFAULT_PORT
    ) -> None:
        self.enable_listening = enable_listening
        self.local = local
        self.listen_port = listen_port
        self.connections: list[ArcpConnection] = []
        self.routers: dict[str, RemoteCallRouter] = {}
        self.remote_calls: dict[ArcpConnection, deque[RemoteCaller]] = {}
        self.max_connection_count: Optional[int] = 1 if enable_listening else None
        self.name = f"Server {listen_port}" if enable_listening else "Client"
        self._server: Optional[asyncio.AbstractServer] = None
        self._tasks: set[asyncio.Task] = set()

    def _log(self, message: str) -> None:
        print_line(f"[{datetime.now():%H:%M:%S}]PeerPort({self.name}):{message}")

    @property
    def port(self) -> int:
        """The port actually listened on, once started."""
        if self._server is not None and self._server.sockets:
            return self._server.sockets[0].getsockname()[1]
        return self.listen_port

    async def start(self) -> None:
        """Begin listening, if this peer listens at all."""
        if not self.enable_listening or self._server is not None:
            return
        host = "127.0.0.1" if self.local else "0.0.0.0"
        self._server = await asyncio.start_server(
            self._on_new_connection,
            host,
            self.listen_port,
            backlog=self.max_connection_count or _DEFAULT_BACKLOG,
        )

    async def close(self) -> None:
        """Close every connection and stop listening."""
        for connection in list(self.connections):
            await connection.close()
        if self._server is not None:
            self._server.close()
            await self._server.wait_closed()
            self._server = None
        if self._tasks:
            await asyncio.gather(*self._tasks, return_exceptions=True)

    def register_router(self, router: RemoteCallRouter) -> bool:
        """Register a router; False if it has no name or the name is taken."""
        if router.function_name == "":
            return False
        if router.function_name in self.routers:
            self._log(in_warning_style(
                "Peerport has already saved a routing object with function name :"
                + router.function_name
            ))
            return False
        self.routers[router.function_name] = router
        return True

    async def connect_to_server(self, host: str, port: int) -> ArcpConnection:
        """Open a connection to another peer and start reading from it."""
        self._log(f"Connecting to {host}:{port}")
        connection = await ArcpConnection.open(host, port)
        connection.on_call = self._on_remote_call
        connection.on_return = self._on_remote_return
        self.connections.append(connection)
        task = asyncio.create_task(connection.serve())
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return connection

    def do_remote_call(self, caller: RemoteCaller) -> bool:
        """Send a caller's call and queue it for the reply; False if it has no live connection."""
        if caller.who is None:
            return False
        if caller.who not in self.connections:
            caller.who = None
            return False
        self.remote_calls.setdefault(caller.who, deque()).append(caller)
        self._send_remote_call(caller.call, caller.who)
        return True

    def set_max_connection_count(self, count: int) -> None:
        """Set the listening backlog; takes effect when listening starts."""
        if not self.enable_listening:
            return
        self.max_connection_count = count

    @staticmethod
    def _send_remote_call(call: CallDataObject, connection: ArcpConnection) -> None:
        connection.send(call)

    async def _on_new_connection(
        self, reader: asyncio.StreamReader, writer: asyncio.StreamWriter
    ) -> None:
        self._log("New connection")
        connection = ArcpConnection(reader, writer, as_server=True)
        connection.on_call = self._on_remote_call
        connection.on_return = self._on_remote_return
        connection.on_disconnected = self._on_disconnected
        self.connections.append(connection)
        await connection.serve()

    def _on_disconnected(self, connection: ArcpConnection) -> None:
        if connection in self.connections:
            self.connections.remove(connection)
        self.remote_calls.pop(connection, None)

    def _on_remote_return(self, connection: ArcpConnection, obj: ReturnDataObject) -> None:
        queue = self.remote_calls.get(connection)
        if not queue:
            return
        queue.popleft().handle_return(obj)

    def _on_remote_call(self, connection: ArcpConnection, obj: CallDataObject) -> None:
        router = self.routers.get(obj.function_name)
        if router is not None:
            router.handle_call(obj, connection)
            return
        reply = ReturnDataObject()
        reply.status_code = Status.UNKNOWN_FUNCTION
        connection.send(reply)