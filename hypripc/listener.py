"""Listening to the Hyprland event socket: handler-based listeners and an event stream."""

from __future__ import annotations

import asyncio
import inspect
import socket
from typing import Any, AsyncIterator, Callable, Dict, Iterator, List, Union

from hypripc.events import Event, EventKind, parse_events
from hypripc.primer import ActiveWindowBuffer
from hypripc.shared import SocketType, socket_path

_READ_SIZE = 4096

_INTERNAL_KINDS = frozenset(
    {EventKind.ACTIVE_WINDOW_CHANGED_V1, EventKind.ACTIVE_WINDOW_CHANGED_V2}
)
_HANDLED_KINDS = tuple(kind for kind in EventKind if kind not in _INTERNAL_KINDS)

Handler = Callable[..., Any]


def _handler_kind(kind: Union[EventKind, str]) -> EventKind:
    kind = EventKind(kind)
    if kind in _INTERNAL_KINDS:
        raise ValueError(f"no handlers can be added for {kind.name}")
    return kind


def _read_chunks() -> Iterator[str]:
    path = socket_path(SocketType.LISTENER)
    with socket.socket(socket.AF_UNIX, socket.SOCK_STREAM) as sock:
        sock.connect(str(path))
        while True:
            chunk = sock.recv(_READ_SIZE)
            if not chunk:
                return
            yield chunk.decode("utf-8")


async def _read_chunks_async() -> AsyncIterator[str]:
    path = socket_path(SocketType.LISTENER)
    reader, writer = await asyncio.open_unix_connection(str(path))
    try:
        while True:
            chunk = await reader.read(_READ_SIZE)
            if not chunk:
                return
            yield chunk.decode("utf-8")
    finally:
        writer.close()
        try:
            await writer.wait_closed()
        except OSError:
            pass


def _call_args(event: Event) -> tuple:
    if event.kind is EventKind.CONFIG_RELOADED:
        return ()
    return (event.data,)


class EventListener:
    """Runs plain callables when Hyprland reports events.

    Handlers of ``CONFIG_RELOADED`` are called without arguments; every
    other handler receives the event's data.
    """

    def __init__(self) -> None:
        self._handlers: Dict[EventKind, List[Handler]] = {
            kind: [] for kind in _HANDLED_KINDS
        }
        self._buffer = ActiveWindowBuffer()

    def add_handler(self, kind: Union[EventKind, str], handler: Handler) -> None:
        """Register ``handler`` to run on every event of ``kind``."""
        self._handlers[_handler_kind(kind)].append(handler)

    def handle(self, event: Event) -> None:
        """Run the handlers registered for the event's kind, in order."""
        args = _call_args(event)
        for handler in self._handlers.get(event.kind, ()):
            handler(*args)

    def feed(self, text: str) -> None:
        """Parse raw event socket output and run the matching handlers."""
        for event in parse_events(text):
            for ready in self._buffer.feed(event):
                self.handle(ready)

    def start_listener(self) -> None:
        """Listen on the event socket until it closes, blocking."""
        self._buffer = ActiveWindowBuffer()
        for text in _read_chunks():
            self.feed(text)

    async def start_listener_async(self) -> None:
        """Listen on the event socket until it closes, without blocking the loop."""
        self._buffer = ActiveWindowBuffer()
        async for text in _read_chunks_async():
            self.feed(text)


class AsyncEventListener:
    """Runs coroutine functions when Hyprland reports events."""

    def __init__(self) -> None:
        self._handlers: Dict[EventKind, List[Handler]] = {
            kind: [] for kind in _HANDLED_KINDS
        }
        self._buffer = ActiveWindowBuffer()

    def add_handler(self, kind: Union[EventKind, str], handler: Handler) -> None:
        """Register ``handler`` to be awaited on every event of ``kind``."""
        self._handlers[_handler_kind(kind)].append(handler)

    async def handle(self, event: Event) -> None:
        """Await the handlers registered for the event's kind, one after another."""
        args = _call_args(event)
        for handler in self._handlers.get(event.kind, ()):
            result = handler(*args)
            if inspect.isawaitable(result):
                await result

    async def feed(self, text: str) -> None:
        """Parse raw event socket output and await the matching handlers."""
        for event in parse_events(text):
            for ready in self._buffer.feed(event):
                await self.handle(ready)

    async def start_listener_async(self) -> None:
        """Listen on the event socket until it closes."""
        self._buffer = ActiveWindowBuffer()
        async for text in _read_chunks_async():
            await self.feed(text)


class EventStream:
    """An async iterator over the events Hyprland reports.

    The socket is opened on the first iteration; an error ends the stream.
    """

    def __init__(self) -> None:
        self._events = self._run()

    async def _run(self) -> AsyncIterator[Event]:
        buffer = ActiveWindowBuffer()
        async for text in _read_chunks_async():
            for event in parse_events(text):
                for ready in buffer.feed(event):
                    yield ready

    def __aiter__(self) -> "EventStream":
        return self

    async def __anext__(self) -> Event:
        return await self._events.__anext__()