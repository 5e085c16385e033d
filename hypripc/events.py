"""Hyprland events and the parser for the text the event socket sends."""

from __future__ import annotations

import enum
import re
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

from hypripc.shared import (
    Address,
    InternalError,
    MonitorId,
    OtherError,
    WorkspaceId,
    WorkspaceType,
    parse_workspace_name,
)


class EventKind(enum.Enum):
    """Every kind of event, including the two halves of the active window event."""

    UNKNOWN = "unknown"
    WORKSPACE_CHANGED = "workspace_changed"
    WORKSPACE_DELETED = "workspace_deleted"
    WORKSPACE_ADDED = "workspace_added"
    WORKSPACE_MOVED = "workspace_moved"
    WORKSPACE_RENAMED = "workspace_renamed"
    ACTIVE_WINDOW_CHANGED_V1 = "active_window_changed_v1"
    ACTIVE_WINDOW_CHANGED_V2 = "active_window_changed_v2"
    ACTIVE_WINDOW_CHANGED = "active_window_changed"
    ACTIVE_MONITOR_CHANGED = "active_monitor_changed"
    FULLSCREEN_STATE_CHANGED = "fullscreen_state_changed"
    MONITOR_ADDED = "monitor_added"
    MONITOR_REMOVED = "monitor_removed"
    WINDOW_OPENED = "window_opened"
    WINDOW_CLOSED = "window_closed"
    WINDOW_MOVED = "window_moved"
    SPECIAL_REMOVED = "special_removed"
    CHANGED_SPECIAL = "changed_special"
    LAYOUT_CHANGED = "layout_changed"
    SUB_MAP_CHANGED = "sub_map_changed"
    LAYER_OPENED = "layer_opened"
    LAYER_CLOSED = "layer_closed"
    FLOAT_STATE_CHANGED = "float_state_changed"
    URGENT_STATE_CHANGED = "urgent_state_changed"
    WINDOW_TITLE_CHANGED = "window_title_changed"
    SCREENCAST = "screencast"
    CONFIG_RELOADED = "config_reloaded"
    IGNORE_GROUP_LOCK_STATE_CHANGED = "ignore_group_lock_state_changed"
    LOCK_GROUPS_STATE_CHANGED = "lock_groups_state_changed"
    WINDOW_PINNED = "window_pinned"
    GROUP_TOGGLED = "group_toggled"
    WINDOW_MOVED_INTO_GROUP = "window_moved_into_group"
    WINDOW_MOVED_OUT_OF_GROUP = "window_moved_out_of_group"


@dataclass(frozen=True)
class Event:
    """An event: its kind and the data that comes with it (None if there is none)."""

    kind: EventKind
    data: Any = None


@dataclass(frozen=True)
class ScreencastEventData:
    """Screencast state of a client."""

    turning_on: bool
    monitor: bool


@dataclass(frozen=True)
class WindowMoveEvent:
    """A window was moved to another workspace."""

    window_address: Address
    workspace_id: WorkspaceId
    workspace_name: WorkspaceType


@dataclass(frozen=True)
class WindowOpenEvent:
    """A window was opened."""

    window_address: Address
    workspace_name: str
    window_class: str
    window_title: str


@dataclass(frozen=True)
class LayoutEvent:
    """The layout of a keyboard changed."""

    keyboard_name: str
    layout_name: str


@dataclass(frozen=True)
class WorkspaceEventData:
    """A workspace and its id."""

    name: WorkspaceType
    id: WorkspaceId


@dataclass(frozen=True)
class NonSpecialWorkspaceEventData:
    """A workspace that cannot be special, and its id."""

    name: str
    id: WorkspaceId


@dataclass(frozen=True)
class WorkspaceMovedEventData:
    """A workspace moved to a monitor."""

    name: WorkspaceType
    id: WorkspaceId
    monitor: str


@dataclass(frozen=True)
class WindowEventData:
    """The newly active window."""

    window_class: str
    title: str
    address: Address


@dataclass(frozen=True)
class MonitorEventData:
    """The newly focused monitor and its workspace, if known."""

    monitor_name: str
    workspace_name: Optional[WorkspaceType]


@dataclass(frozen=True)
class ChangedSpecialEventData:
    """The special workspace shown on a monitor changed."""

    monitor_name: str
    workspace_name: str


@dataclass(frozen=True)
class MonitorAddedEventData:
    """A monitor was connected."""

    id: MonitorId
    name: str
    description: str


@dataclass(frozen=True)
class WindowFloatEventData:
    """The floating state of a window changed."""

    address: Address
    floating: bool


@dataclass(frozen=True)
class WindowPinEventData:
    """The pinned state of a window changed."""

    address: Address
    pinned: bool


@dataclass(frozen=True)
class WindowTitleEventData:
    """The title of a window changed."""

    address: Address
    title: str


def _splitn(text: str, count: int) -> List[str]:
    if count <= 0:
        return []
    return text.split(",", count - 1)


@dataclass(frozen=True)
class UnknownEventData:
    """An event this package has no dedicated type for."""

    name: str
    args: str

    def parse_args(self, count: int) -> List[str]:
        """Split the arguments into at most ``count`` parts; the last keeps its commas."""
        return _splitn(self.args, count)


@dataclass(frozen=True)
class GroupToggledEventData:
    """A group was toggled; ``toggled`` is False when it was destroyed."""

    toggled: bool
    window_addresses: Tuple[Address, ...] = field(default_factory=tuple)


_INT_RE = re.compile(r"[+-]?[0-9]+")


def _parse_int(text: str, event: str, bits: int = 32) -> int:
    if text == "":
        reason = "cannot parse integer from empty string"
    elif not _INT_RE.fullmatch(text):
        reason = "invalid digit found in string"
    else:
        value = int(text)
        limit = 1 << (bits - 1)
        if value >= limit:
            reason = "number too large to fit in target type"
        elif value < -limit:
            reason = "number too small to fit in target type"
        else:
            return value
    raise InternalError(f"{event}: invalid integer error: {reason}")


def _arg(args: Sequence[str], index: int) -> str:
    try:
        return args[index]
    except IndexError:
        raise InternalError(f"could not get the event arg of index {index}") from None


_Builder = Callable[[Sequence[str]], Event]


def _workspace_builder(kind: EventKind, label: str) -> _Builder:
    def build(args: Sequence[str]) -> Event:
        return Event(
            kind,
            WorkspaceEventData(
                id=_parse_int(_arg(args, 0), label),
                name=parse_workspace_name(_arg(args, 1)),
            ),
        )

    return build


def _workspace_moved(args: Sequence[str]) -> Event:
    return Event(
        EventKind.WORKSPACE_MOVED,
        WorkspaceMovedEventData(
            id=_parse_int(_arg(args, 0), "WorkspaceMovedV2"),
            name=parse_workspace_name(_arg(args, 1)),
            monitor=_arg(args, 2),
        ),
    )


def _workspace_renamed(args: Sequence[str]) -> Event:
    return Event(
        EventKind.WORKSPACE_RENAMED,
        NonSpecialWorkspaceEventData(
            id=_parse_int(_arg(args, 0), "WorkspaceRenamed"),
            name=_arg(args, 1),
        ),
    )


def _active_monitor(args: Sequence[str]) -> Event:
    monitor_name = _arg(args, 0)
    workspace = _arg(args, 1)
    return Event(
        EventKind.ACTIVE_MONITOR_CHANGED,
        MonitorEventData(
            monitor_name=monitor_name,
            workspace_name=None if workspace == "?" else parse_workspace_name(workspace),
        ),
    )


def _active_window_v1(args: Sequence[str]) -> Event:
    window_class = _arg(args, 0)
    title = _arg(args, 1)
    if window_class and title:
        return Event(EventKind.ACTIVE_WINDOW_CHANGED_V1, (window_class, title))
    return Event(EventKind.ACTIVE_WINDOW_CHANGED_V1, None)


def _active_window_v2(args: Sequence[str]) -> Event:
    addr = _arg(args, 0)
    if addr != ",":
        return Event(EventKind.ACTIVE_WINDOW_CHANGED_V2, Address.new(addr))
    return Event(EventKind.ACTIVE_WINDOW_CHANGED_V2, None)


def _monitor_added(args: Sequence[str]) -> Event:
    return Event(
        EventKind.MONITOR_ADDED,
        MonitorAddedEventData(
            id=_parse_int(_arg(args, 0), "MonitorAddedV2", bits=128),
            name=_arg(args, 1),
            description=_arg(args, 2),
        ),
    )


def _window_opened(args: Sequence[str]) -> Event:
    return Event(
        EventKind.WINDOW_OPENED,
        WindowOpenEvent(
            window_address=Address.new(_arg(args, 0)),
            workspace_name=_arg(args, 1),
            window_class=_arg(args, 2),
            window_title=_arg(args, 3),
        ),
    )


def _window_moved(args: Sequence[str]) -> Event:
    return Event(
        EventKind.WINDOW_MOVED,
        WindowMoveEvent(
            window_address=Address("0x" + _arg(args, 0)),
            workspace_id=_parse_int(_arg(args, 1), "WindowMoved"),
            workspace_name=parse_workspace_name(_arg(args, 2)),
        ),
    )


def _active_special(args: Sequence[str]) -> Event:
    workspace_name = _arg(args, 0)
    monitor_name = _arg(args, 1)
    if not workspace_name:
        return Event(EventKind.SPECIAL_REMOVED, monitor_name)
    return Event(
        EventKind.CHANGED_SPECIAL,
        ChangedSpecialEventData(monitor_name=monitor_name, workspace_name=workspace_name),
    )


def _layout_changed(args: Sequence[str]) -> Event:
    return Event(
        EventKind.LAYOUT_CHANGED,
        LayoutEvent(keyboard_name=_arg(args, 0), layout_name=_arg(args, 1)),
    )


def _float_state(args: Sequence[str]) -> Event:
    floating = _arg(args, 1) == "0"
    return Event(
        EventKind.FLOAT_STATE_CHANGED,
        WindowFloatEventData(address=Address.new(_arg(args, 0)), floating=floating),
    )


def _screencast(args: Sequence[str]) -> Event:
    return Event(
        EventKind.SCREENCAST,
        ScreencastEventData(turning_on=_arg(args, 0) == "1", monitor=_arg(args, 1) == "1"),
    )


def _window_title(args: Sequence[str]) -> Event:
    return Event(
        EventKind.WINDOW_TITLE_CHANGED,
        WindowTitleEventData(address=Address.new(_arg(args, 0)), title=_arg(args, 1)),
    )


def _pin(args: Sequence[str]) -> Event:
    return Event(
        EventKind.WINDOW_PINNED,
        WindowPinEventData(address=Address.new(_arg(args, 0)), pinned=_arg(args, 1) == "1"),
    )


def _toggle_group(args: Sequence[str]) -> Event:
    toggled = _arg(args, 0) == "1"
    addresses = tuple(Address.new(part) for part in _arg(args, 1).split(","))
    return Event(
        EventKind.GROUP_TOGGLED,
        GroupToggledEventData(toggled=toggled, window_addresses=addresses),
    )


def _single(kind: EventKind, convert: Callable[[str], Any] = str) -> _Builder:
    def build(args: Sequence[str]) -> Event:
        return Event(kind, convert(_arg(args, 0)))

    return build


def _flag(text: str) -> bool:
    return text == "1"


_EVENTS: Dict[str, Tuple[int, _Builder]] = {
    "workspacev2": (2, _workspace_builder(EventKind.WORKSPACE_CHANGED, "WorkspaceChangedV2")),
    "destroyworkspacev2": (
        2,
        _workspace_builder(EventKind.WORKSPACE_DELETED, "WorkspaceDeletedV2"),
    ),
    "createworkspacev2": (2, _workspace_builder(EventKind.WORKSPACE_ADDED, "WorkspaceAddedV2")),
    "moveworkspacev2": (3, _workspace_moved),
    "renameworkspace": (2, _workspace_renamed),
    "focusedmon": (2, _active_monitor),
    "activewindow": (2, _active_window_v1),
    "activewindowv2": (1, _active_window_v2),
    "fullscreen": (1, _single(EventKind.FULLSCREEN_STATE_CHANGED, lambda s: s != "0")),
    "monitorremoved": (1, _single(EventKind.MONITOR_REMOVED)),
    "monitoraddedv2": (3, _monitor_added),
    "openwindow": (4, _window_opened),
    "closewindow": (1, _single(EventKind.WINDOW_CLOSED, Address.new)),
    "movewindowv2": (3, _window_moved),
    "activelayout": (2, _layout_changed),
    "activespecial": (2, _active_special),
    "submap": (1, _single(EventKind.SUB_MAP_CHANGED)),
    "openlayer": (1, _single(EventKind.LAYER_OPENED)),
    "closelayer": (1, _single(EventKind.LAYER_CLOSED)),
    "changefloatingmode": (2, _float_state),
    "screencast": (2, _screencast),
    "urgent": (1, _single(EventKind.URGENT_STATE_CHANGED, Address.new)),
    "windowtitlev2": (2, _window_title),
    "configreloaded": (0, lambda args: Event(EventKind.CONFIG_RELOADED)),
    "ignoregrouplock": (1, _single(EventKind.IGNORE_GROUP_LOCK_STATE_CHANGED, _flag)),
    "lockgroups": (1, _single(EventKind.LOCK_GROUPS_STATE_CHANGED, _flag)),
    "pin": (2, _pin),
    "togglegroup": (2, _toggle_group),
    "moveintogroup": (1, _single(EventKind.WINDOW_MOVED_INTO_GROUP, Address.new)),
    "moveoutofgroup": (1, _single(EventKind.WINDOW_MOVED_OUT_OF_GROUP, Address.new)),
}


def _parse_line(line: str) -> Event:
    name, sep, rest = line.partition(">>")
    if not sep:
        raise OtherError(
            "could not get event name from Hyprland IPC data (not hyprland-rs)"
        )
    known = _EVENTS.get(name)
    if known is None:
        return Event(EventKind.UNKNOWN, UnknownEventData(name=name, args=rest))
    count, build = known
    return build(_splitn(rest, count))


def _lines(text: str) -> List[str]:
    stripped = text.strip()
    if not stripped:
        return []
    return [line[:-1] if line.endswith("\r") else line for line in stripped.split("\n")]


def parse_events(text: str) -> List[Event]:
    """Parse a chunk of event socket output into events, one per non-empty line.

    Raises on the first line that cannot be parsed; no events are returned then.
    """
    return [_parse_line(line) for line in _lines(text) if line]