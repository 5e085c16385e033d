"""Shared types and socket helpers for talking to the Hyprland IPC sockets."""

from __future__ import annotations

import asyncio
import enum
import os
import socket
from dataclasses import dataclass
from pathlib import Path
from typing import Awaitable, Callable, Optional, Union

_BUF_SIZE = 8192


class HyprError(Exception):
    """Base class for every error raised by this package."""


class InternalError(HyprError):
    """An internal error of the Hyprland IPC layer."""


class OtherError(HyprError):
    """An error that fits no other category."""


class NotOkDispatchError(HyprError):
    """A dispatcher answered with something other than ``ok``."""

    def __init__(self, reply: str) -> None:
        self.reply = reply
        super().__init__(
            "A dispatcher returned a non-`ok`, value which is probably an error: "
            f"{reply}"
        )


@dataclass(frozen=True, order=True)
class Address:
    """A window address, always carrying the ``0x`` prefix."""

    value: str

    @classmethod
    def new(cls, value: object) -> "Address":
        """Build an address from anything printable, adding ``0x`` if missing."""
        text = str(value)
        if text.startswith("0x"):
            return cls(text)
        return cls("0x" + text)

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, order=True)
class RegularWorkspace:
    """A regular, named workspace."""

    name: str

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class SpecialWorkspace:
    """The special workspace, optionally with a name."""

    name: Optional[str] = None

    def __str__(self) -> str:
        if self.name is None:
            return "special"
        return "special:" + self.name


WorkspaceType = Union[RegularWorkspace, SpecialWorkspace]
WorkspaceId = int
MonitorId = int


def workspace_from_id(value: int) -> RegularWorkspace:
    """Turn a positive workspace id into a regular workspace."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"workspace id must be an int, not {type(value).__name__}")
    if value >= 1:
        return RegularWorkspace(str(value))
    raise InternalError("Conversion error: Unrecognised id")


def parse_workspace_name(text: str) -> WorkspaceType:
    """Parse a workspace name as Hyprland reports it in events."""
    if text == "special":
        return SpecialWorkspace(None)
    if text.startswith("special:"):
        return SpecialWorkspace(text.split(":")[1])
    return RegularWorkspace(text)


class SocketType(enum.Enum):
    """The sockets Hyprland and hyprpaper expose."""

    COMMAND = "command"
    LISTENER = "listener"
    HYPRPAPER = "hyprpaper"

    def socket_name(self) -> str:
        """File name of the socket inside the instance directory."""
        return _SOCKET_NAMES[self]


_SOCKET_NAMES = {
    SocketType.COMMAND: ".socket.sock",
    SocketType.LISTENER: ".socket2.sock",
    SocketType.HYPRPAPER: ".hyprpaper.sock",
}


def _instance_dir() -> Path:
    instance = os.environ.get("HYPRLAND_INSTANCE_SIGNATURE")
    if instance is None:
        raise InternalError("Could not get socket path! (Is Hyprland running??)")
    try:
        instance.encode("utf-8")
    except UnicodeEncodeError:
        raise InternalError(
            "Corrupted Hyprland socket variable: Invalid unicode!"
        ) from None

    runtime_dir = os.environ.get("XDG_RUNTIME_DIR")
    if runtime_dir is not None:
        candidate = Path(runtime_dir) / "hypr" / instance
        if candidate.exists():
            return candidate

    uid = os.environ.get("UID")
    if uid is not None:
        candidate = Path("/run/user/" + uid) / "hypr" / instance
        if candidate.exists():
            return candidate

    legacy = Path("/tmp/hypr/" + instance)
    if legacy.exists():
        return legacy

    raise InternalError("No xdg runtime path found!")


def socket_path(socket_type: SocketType) -> Path:
    """Locate the socket of the given type for the running Hyprland instance."""
    return _instance_dir() / socket_type.socket_name()


class CommandFlag(enum.Enum):
    """Flag put in front of a command sent to Hyprland."""

    JSON = "j"
    EMPTY = ""


@dataclass
class CommandContent:
    """A command: a flag and the command text."""

    flag: CommandFlag = CommandFlag.JSON
    data: str = ""

    def __str__(self) -> str:
        return f"{self.flag.value}/{self.data}"

    def to_bytes(self) -> bytes:
        """The command as it goes over the wire."""
        return str(self).encode("utf-8")


def _payload(socket_type: SocketType, content: CommandContent) -> bytes:
    if socket_type is SocketType.HYPRPAPER:
        return content.data.encode("utf-8")
    return content.to_bytes()


def _read_reply_sync(read: Callable[[int], bytes]) -> str:
    chunks = []
    while True:
        chunk = read(_BUF_SIZE)
        chunks.append(chunk)
        if len(chunk) != _BUF_SIZE:
            break
    return b"".join(chunks).decode("utf-8")


async def _read_reply_async(read: Callable[[int], Awaitable[bytes]]) -> str:
    chunks = []
    while True:
        chunk = await read(_BUF_SIZE)
        chunks.append(chunk)
        if len(chunk) != _BUF_SIZE:
            break
    return b"".join(chunks).decode("utf-8")


def write_to_socket_sync(socket_type: SocketType, content: CommandContent) -> str:
    """Send a command to a socket and return the reply."""
    path = socket_path(socket_type)
    with socket.socket(socket.AF_UNIX, socket.SOCK_STREAM) as sock:
        sock.connect(str(path))
        sock.sendall(_payload(socket_type, content))
        return _read_reply_sync(sock.recv)


async def write_to_socket(socket_type: SocketType, content: CommandContent) -> str:
    """Send a command to a socket and return the reply, asynchronously."""
    path = socket_path(socket_type)
    reader, writer = await asyncio.open_unix_connection(str(path))
    try:
        writer.write(_payload(socket_type, content))
        await writer.drain()
        return await _read_reply_async(reader.read)
    finally:
        writer.close()
        try:
            await writer.wait_closed()
        except OSError:
            pass