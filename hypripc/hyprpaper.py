"""Commands for the hyprpaper wallpaper daemon and parsing of its replies."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import List, Optional, Union

from hypripc.shared import (
    CommandContent,
    CommandFlag,
    HyprError,
    SocketType,
    write_to_socket,
    write_to_socket_sync,
)


class HyprpaperError(HyprError):
    """hyprpaper answered with something unexpected."""


class NotOkError(HyprpaperError):
    """A command was not carried out, e.g. bad input or a missing file."""

    def __init__(self, reply: str) -> None:
        self.reply = reply
        super().__init__(reply)


class FailedToParseActiveWallpapersError(HyprpaperError):
    """A line of the active wallpaper listing could not be parsed."""

    def __init__(self, line: str) -> None:
        self.line = line
        super().__init__(line)


class NoWallpapersActiveError(HyprpaperError):
    """No wallpapers are active."""

    def __init__(self) -> None:
        super().__init__("NoWallpapersActive")


class NoWallpapersLoadedError(HyprpaperError):
    """No wallpapers are loaded."""

    def __init__(self) -> None:
        super().__init__("NoWallpapersLoaded")


@dataclass(frozen=True)
class MonitorPort:
    """A monitor identified by its port, such as ``DP-1``."""

    port: str

    def __str__(self) -> str:
        return self.port


@dataclass(frozen=True)
class MonitorDescription:
    """A monitor identified by its description."""

    description: str

    def __str__(self) -> str:
        return "desc:" + self.description


Monitor = Union[MonitorPort, MonitorDescription]


class WallpaperMode(enum.Enum):
    """How the wallpaper fills the screen."""

    CONTAIN = "contain:"
    TILE = "tile:"

    def __str__(self) -> str:
        return self.value


def _target(monitor: Optional[Monitor], mode: Optional[WallpaperMode], path: str) -> str:
    monitor_text = str(monitor) if monitor is not None else ""
    mode_text = str(mode) if mode is not None else ""
    return f"{monitor_text},{mode_text}{path}"


@dataclass(frozen=True)
class Preload:
    """Preload a wallpaper into memory."""

    path: str

    def __str__(self) -> str:
        return f"preload {self.path}"


@dataclass(frozen=True)
class Reload:
    """Swap in a new wallpaper: preload it, set it and unload the old one."""

    path: str
    monitor: Optional[Monitor] = None
    mode: Optional[WallpaperMode] = None

    def __str__(self) -> str:
        return "reload " + _target(self.monitor, self.mode, self.path)


@dataclass(frozen=True)
class Unload:
    """Unload one wallpaper, or all of them when ``path`` is None."""

    path: Optional[str] = None

    @classmethod
    def all(cls) -> "Unload":
        """Unload every wallpaper."""
        return cls(None)

    def __str__(self) -> str:
        return "unload " + ("all" if self.path is None else self.path)


@dataclass(frozen=True)
class Wallpaper:
    """Set a preloaded wallpaper, on one monitor or on all of them."""

    path: str
    monitor: Optional[Monitor] = None
    mode: Optional[WallpaperMode] = None

    def __str__(self) -> str:
        return "wallpaper " + _target(self.monitor, self.mode, self.path)


@dataclass(frozen=True)
class ListActive:
    """Ask for the active wallpapers."""

    def __str__(self) -> str:
        return "listactive"


@dataclass(frozen=True)
class ListLoaded:
    """Ask for the loaded wallpapers."""

    def __str__(self) -> str:
        return "listloaded"


HyprpaperKeyword = Union[Preload, Reload, Unload, Wallpaper, ListActive, ListLoaded]


@dataclass(frozen=True)
class WallpaperListing:
    """An active wallpaper and the monitor it is shown on, if any."""

    monitor: Optional[str]
    wallpaper_path: str

    @classmethod
    def parse(cls, line: str) -> "WallpaperListing":
        """Parse a ``monitor = path`` line of the active listing."""
        monitor, sep, path = line.partition("=")
        if not sep:
            raise FailedToParseActiveWallpapersError(line)
        monitor = monitor.strip()
        return cls(monitor=monitor or None, wallpaper_path=path.strip())


def _lines(text: str) -> List[str]:
    parts = text.split("\n")
    if parts and parts[-1] == "":
        parts.pop()
    return [part[:-1] if part.endswith("\r") else part for part in parts]


def parse_response(
    keyword: HyprpaperKeyword, response: str
) -> Union[None, List[WallpaperListing], List[str]]:
    """Check hyprpaper's reply to ``keyword`` and return what it carries.

    Commands return None, ``listactive`` a list of listings and
    ``listloaded`` a list of paths.
    """
    if isinstance(keyword, ListActive):
        if response.strip() == "no wallpapers active":
            raise NoWallpapersActiveError()
        return [WallpaperListing.parse(line) for line in _lines(response)]
    if isinstance(keyword, ListLoaded):
        if response.strip() == "no wallpapers loaded":
            raise NoWallpapersLoadedError()
        return _lines(response)
    if isinstance(keyword, (Preload, Reload, Unload, Wallpaper)):
        if response.strip() == "ok":
            return None
        raise NotOkError(response)
    raise TypeError(f"not a hyprpaper keyword: {keyword!r}")


def _content(keyword: HyprpaperKeyword) -> CommandContent:
    return CommandContent(CommandFlag.EMPTY, str(keyword))


def hyprpaper(keyword: HyprpaperKeyword) -> Union[None, List[WallpaperListing], List[str]]:
    """Send a keyword to hyprpaper and return the parsed reply."""
    response = write_to_socket_sync(SocketType.HYPRPAPER, _content(keyword))
    return parse_response(keyword, response)


async def hyprpaper_async(
    keyword: HyprpaperKeyword,
) -> Union[None, List[WallpaperListing], List[str]]:
    """Send a keyword to hyprpaper and return the parsed reply, asynchronously."""
    response = await write_to_socket(SocketType.HYPRPAPER, _content(keyword))
    return parse_response(keyword, response)