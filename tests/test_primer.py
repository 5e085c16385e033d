from hypripc.events import Event, EventKind, WindowEventData, parse_events
from hypripc.primer import EMPTY, ActiveWindowBuffer, ActiveWindowState
from hypripc.shared import Address


def _feed_text(buffer, text):
    out = []
    for event in parse_events(text):
        out.extend(buffer.feed(event))
    return out


def test_v1_then_v2_merges_into_one_event():
    buffer = ActiveWindowBuffer()
    events = _feed_text(buffer, "activewindow>>kitty,my title\nactivewindowv2>>55aa\n")
    assert events == [
        Event(
            EventKind.ACTIVE_WINDOW_CHANGED,
            WindowEventData(window_class="kitty", title="my title", address=Address("0x55aa")),
        )
    ]
    assert buffer.states == []


def test_v2_then_v1_merges_too():
    buffer = ActiveWindowBuffer()
    events = _feed_text(buffer, "activewindowv2>>55aa\nactivewindow>>kitty,a,b\n")
    assert len(events) == 1
    data = events[0].data
    assert data.window_class == "kitty"
    assert data.title == "a,b"
    assert data.address == Address("0x55aa")


def test_half_event_yields_nothing_yet():
    buffer = ActiveWindowBuffer()
    assert _feed_text(buffer, "activewindow>>kitty,title") == []
    assert len(buffer.states) == 1
    assert buffer.states[0].window_class == "kitty"
    assert buffer.states[0].addr is EMPTY


def test_no_active_window_gives_none_event():
    buffer = ActiveWindowBuffer()
    events = _feed_text(buffer, "activewindow>>,\nactivewindowv2>>,\n")
    assert events == [Event(EventKind.ACTIVE_WINDOW_CHANGED, None)]
    assert buffer.states == []


def test_mixed_halves_give_no_event_and_clear_state():
    buffer = ActiveWindowBuffer()
    events = _feed_text(buffer, "activewindow>>,\nactivewindowv2>>55aa\n")
    assert events == []
    assert buffer.states == []


def test_second_v1_before_v2_is_ignored():
    buffer = ActiveWindowBuffer()
    events = _feed_text(
        buffer, "activewindow>>first,one\nactivewindow>>second,two\nactivewindowv2>>abc\n"
    )
    assert len(events) == 1
    assert events[0].data.window_class == "first"
    assert events[0].data.title == "one"


def test_other_events_pass_through():
    buffer = ActiveWindowBuffer()
    [event] = parse_events("submap>>resize")
    assert buffer.feed(event) == [event]


def test_consecutive_windows_each_produce_event():
    buffer = ActiveWindowBuffer()
    text = (
        "activewindow>>kitty,t1\nactivewindowv2>>1\n"
        "activewindow>>firefox,t2\nactivewindowv2>>2\n"
    )
    events = _feed_text(buffer, text)
    assert [e.data.window_class for e in events] == ["kitty", "firefox"]
    assert [e.data.address for e in events] == [Address("0x1"), Address("0x2")]


def test_state_ready_and_take_event():
    state = ActiveWindowState()
    assert not state.ready()
    assert state.take_event() is None
    state.window_class = "kitty"
    state.title = "t"
    assert not state.ready()
    state.addr = Address("0xff")
    assert state.ready()
    event = state.take_event()
    assert event == Event(
        EventKind.ACTIVE_WINDOW_CHANGED,
        WindowEventData(window_class="kitty", title="t", address=Address("0xff")),
    )
    assert state.window_class is EMPTY
    assert state.title is EMPTY
    assert state.addr is EMPTY


def test_state_all_none_keeps_values():
    state = ActiveWindowState(window_class=None, title=None, addr=None)
    assert state.ready()
    assert state.take_event() == Event(EventKind.ACTIVE_WINDOW_CHANGED, None)
    assert state.addr is None