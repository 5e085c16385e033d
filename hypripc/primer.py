"""Merging the two halves of Hyprland's active window event into one event."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List, Optional

from hypripc.events import Event, EventKind, WindowEventData


class _Empty:
    """Marks a slot that has not received a value yet."""

    _instance: Optional["_Empty"] = None

    def __new__(cls) -> "_Empty":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "EMPTY"


EMPTY = _Empty()


@dataclass
class ActiveWindowState:
    """The pieces of one active window change collected so far.

    Each slot is ``EMPTY`` until its event arrives, then holds either the
    value or None when Hyprland reported that no window is active.
    """

    window_class: Any = EMPTY
    title: Any = EMPTY
    addr: Any = EMPTY

    def ready(self) -> bool:
        """True once every slot has been filled."""
        return all(
            value is not EMPTY for value in (self.window_class, self.title, self.addr)
        )

    def reset(self) -> None:
        """Empty every slot."""
        self.window_class = EMPTY
        self.title = EMPTY
        self.addr = EMPTY

    def take_event(self) -> Optional[Event]:
        """Build the merged event from the collected pieces, if they agree.

        With all three values present the state is emptied and the event
        carries the window; with all three None the event carries None.
        Any other mix gives no event.
        """
        slots = (self.title, self.window_class, self.addr)
        if all(value is not None and value is not EMPTY for value in slots):
            event = Event(
                EventKind.ACTIVE_WINDOW_CHANGED,
                WindowEventData(
                    window_class=str(self.window_class),
                    title=str(self.title),
                    address=self.addr,
                ),
            )
            self.reset()
            return event
        if all(value is None for value in slots):
            return Event(EventKind.ACTIVE_WINDOW_CHANGED, None)
        return None


@dataclass
class ActiveWindowBuffer:
    """Collects ``activewindow`` and ``activewindowv2`` halves into whole events."""

    states: List[ActiveWindowState] = field(default_factory=list)

    def _remove(self, index: int) -> None:
        last = self.states.pop()
        if index < len(self.states):
            self.states[index] = last

    def _complete(self, fill) -> List[Event]:
        events: List[Event] = []
        for index, state in enumerate(self.states):
            fill(state)
            if state.ready():
                event = state.take_event()
                if event is not None:
                    events.append(event)
                self._remove(index)
                break
        return events

    def feed(self, event: Event) -> List[Event]:
        """Take one parsed event and return the events ready to be delivered."""
        if not self.states:
            self.states.append(ActiveWindowState())

        if event.kind is EventKind.ACTIVE_WINDOW_CHANGED_V1:
            if event.data is None:
                window_class, title = None, None
            else:
                window_class, title = event.data

            def fill_v1(state: ActiveWindowState) -> None:
                if state.title is EMPTY and state.window_class is EMPTY:
                    state.window_class = window_class
                    state.title = title

            return self._complete(fill_v1)

        if event.kind is EventKind.ACTIVE_WINDOW_CHANGED_V2:
            address = event.data

            def fill_v2(state: ActiveWindowState) -> None:
                if state.addr is EMPTY:
                    state.addr = address

            return self._complete(fill_v2)

        return [event]