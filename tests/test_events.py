import pytest

from hypripc.events import (
    ChangedSpecialEventData,
    Event,
    EventKind,
    GroupToggledEventData,
    MonitorAddedEventData,
    MonitorEventData,
    NonSpecialWorkspaceEventData,
    UnknownEventData,
    WindowFloatEventData,
    WindowMoveEvent,
    WindowOpenEvent,
    WorkspaceEventData,
    WorkspaceMovedEventData,
    parse_events,
)
from hypripc.shared import (
    Address,
    InternalError,
    OtherError,
    RegularWorkspace,
    SpecialWorkspace,
)


def single(text):
    events = parse_events(text)
    assert len(events) == 1
    return events[0]


@pytest.mark.parametrize(
    "name, kind",
    [
        ("workspacev2", EventKind.WORKSPACE_CHANGED),
        ("destroyworkspacev2", EventKind.WORKSPACE_DELETED),
        ("createworkspacev2", EventKind.WORKSPACE_ADDED),
    ],
)
def test_workspace_events(name, kind):
    event = single(f"{name}>>3,web")
    assert event == Event(kind, WorkspaceEventData(name=RegularWorkspace("web"), id=3))


def test_special_workspace_name():
    event = single("workspacev2>>-98,special:scratch")
    assert event.data.name == SpecialWorkspace("scratch")
    assert event.data.id == -98


def test_bare_special_workspace_name():
    event = single("createworkspacev2>>-99,special")
    assert event.data.name == SpecialWorkspace(None)


def test_workspace_moved_and_renamed():
    moved, renamed = parse_events("moveworkspacev2>>4,code,DP-1\nrenameworkspace>>4,notes")
    assert moved == Event(
        EventKind.WORKSPACE_MOVED,
        WorkspaceMovedEventData(name=RegularWorkspace("code"), id=4, monitor="DP-1"),
    )
    assert renamed == Event(
        EventKind.WORKSPACE_RENAMED, NonSpecialWorkspaceEventData(name="notes", id=4)
    )


def test_focused_monitor_unknown_workspace():
    event = single("focusedmon>>DP-1,?")
    assert event == Event(
        EventKind.ACTIVE_MONITOR_CHANGED,
        MonitorEventData(monitor_name="DP-1", workspace_name=None),
    )


def test_focused_monitor_with_workspace():
    event = single("focusedmon>>HDMI-A-1,2")
    assert event.data.workspace_name == RegularWorkspace("2")


def test_active_window_title_keeps_commas():
    event = single("activewindow>>kitty,hello, world, again")
    assert event == Event(
        EventKind.ACTIVE_WINDOW_CHANGED_V1, ("kitty", "hello, world, again")
    )


def test_active_window_empty_is_none():
    event = single("activewindow>>,")
    assert event == Event(EventKind.ACTIVE_WINDOW_CHANGED_V1, None)


def test_active_window_v2():
    assert single("activewindowv2>>55aa").data == Address("0x55aa")
    assert single("activewindowv2>>,").data is None


def test_fullscreen():
    on, off = parse_events("fullscreen>>1\nfullscreen>>0")
    assert on.data is True
    assert off.data is False


def test_monitor_added_uses_wide_ids():
    event = single("monitoraddedv2>>2147483648,DP-2,Some Desc, Inc")
    assert event == Event(
        EventKind.MONITOR_ADDED,
        MonitorAddedEventData(id=2147483648, name="DP-2", description="Some Desc, Inc"),
    )


def test_window_opened():
    event = single("openwindow>>abc,1,firefox,Page, with commas")
    assert event.data == WindowOpenEvent(
        window_address=Address("0xabc"),
        workspace_name="1",
        window_class="firefox",
        window_title="Page, with commas",
    )


def test_window_moved_prefixes_address():
    event = single("movewindowv2>>abc,2,ws")
    assert event.data == WindowMoveEvent(
        window_address=Address("0xabc"),
        workspace_id=2,
        workspace_name=RegularWorkspace("ws"),
    )


def test_active_special():
    removed, changed = parse_events("activespecial>>,DP-1\nactivespecial>>special:x,DP-1")
    assert removed == Event(EventKind.SPECIAL_REMOVED, "DP-1")
    assert changed == Event(
        EventKind.CHANGED_SPECIAL,
        ChangedSpecialEventData(monitor_name="DP-1", workspace_name="special:x"),
    )


def test_float_state_zero_means_floating():
    event = single("changefloatingmode>>abc,0")
    assert event.data == WindowFloatEventData(address=Address("0xabc"), floating=True)


def test_toggle_group_addresses():
    event = single("togglegroup>>1,aa,bb")
    assert event.data == GroupToggledEventData(
        toggled=True, window_addresses=(Address("0xaa"), Address("0xbb"))
    )


def test_config_reloaded_has_no_data():
    assert single("configreloaded>>") == Event(EventKind.CONFIG_RELOADED)


def test_boolean_flags():
    events = parse_events("ignoregrouplock>>1\nlockgroups>>0\npin>>abc,1\nscreencast>>1,0")
    assert events[0].data is True
    assert events[1].data is False
    assert events[2].data.pinned is True
    assert events[3].data.turning_on is True
    assert events[3].data.monitor is False


def test_unknown_event_and_parse_args():
    event = single("someevent>>a,b,c")
    assert event == Event(EventKind.UNKNOWN, UnknownEventData(name="someevent", args="a,b,c"))
    assert event.data.parse_args(2) == ["a", "b,c"]
    assert event.data.parse_args(5) == ["a", "b", "c"]
    assert event.data.parse_args(0) == []


def test_lines_are_trimmed_and_blank_lines_skipped():
    text = "\n  submap>>resize\r\n\r\nopenlayer>>bar\n\ncloselayer>>bar\n  "
    events = parse_events(text)
    assert [e.kind for e in events] == [
        EventKind.SUB_MAP_CHANGED,
        EventKind.LAYER_OPENED,
        EventKind.LAYER_CLOSED,
    ]
    assert [e.data for e in events] == ["resize", "bar", "bar"]


def test_empty_text_gives_no_events():
    assert parse_events("   \n ") == []


def test_missing_separator_is_error():
    with pytest.raises(OtherError, match="could not get event name"):
        parse_events("workspacev2 3,web")


def test_invalid_integer_is_error():
    with pytest.raises(InternalError, match="WorkspaceChangedV2: invalid integer error"):
        parse_events("workspacev2>>x,web")


def test_integer_out_of_range_is_error():
    with pytest.raises(InternalError, match="WorkspaceAddedV2"):
        parse_events("createworkspacev2>>2147483648,web")


def test_missing_argument_is_error():
    with pytest.raises(InternalError, match="could not get the event arg of index 1"):
        parse_events("workspacev2>>3")


def test_one_bad_line_fails_whole_batch():
    with pytest.raises(InternalError):
        parse_events("submap>>resize\nmovewindowv2>>abc,nope,ws")