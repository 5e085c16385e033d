# hypripc

A small Python client for the IPC sockets of the Hyprland compositor and of
the hyprpaper wallpaper daemon. It reads and sets config options, controls
wallpapers and listens to compositor events. It uses only the standard
library.

## Install

```sh
pip install .
```

## Finding the sockets

The sockets are found through `HYPRLAND_INSTANCE_SIGNATURE`. The instance
directory is looked up under `$XDG_RUNTIME_DIR/hypr`, then
`/run/user/$UID/hypr`, then `/tmp/hypr`. Inside it the command socket is
`.socket.sock`, the event socket `.socket2.sock` and hyprpaper's socket
`.hyprpaper.sock` (see `hypripc.shared.SocketType` and `socket_path`).

If the variable is unset or no directory exists, `hypripc.shared.InternalError`
is raised. Every error this package raises derives from
`hypripc.shared.HyprError`.

The low-level `write_to_socket_sync` and `write_to_socket` (async) send a
`CommandContent` (a `CommandFlag` and a command text, sent as `j/<text>` or
`/<text>`) and return the reply as a string.

## Config options

```python
from hypripc.keyword import get_keyword, set_keyword

set_keyword("general:border_size", 2)
option = get_keyword("general:border_size")
print(option.option, option.value, option.set)
```

Values may be `int`, `float` or `str`. `get_keyword` returns a `Keyword`
whose `value` is whichever of the three the compositor reported; an
`InternalError` is raised if it reports none or more than one. The async
versions are `set_keyword_async` and `get_keyword_async`.

## Wallpapers with hyprpaper

```python
from hypripc.hyprpaper import (
    ListActive, MonitorPort, Preload, Wallpaper, WallpaperMode, hyprpaper,
)

hyprpaper(Preload(path="/home/me/wall.png"))
hyprpaper(Wallpaper(path="/home/me/wall.png", monitor=MonitorPort("DP-1"),
                    mode=WallpaperMode.CONTAIN))
for listing in hyprpaper(ListActive()):
    print(listing.monitor, listing.wallpaper_path)
```

The commands are `Preload`, `Reload`, `Unload` (`Unload.all()` for every
wallpaper), `Wallpaper`, `ListActive` and `ListLoaded`. A monitor is either
`MonitorPort("DP-1")` or `MonitorDescription("...")`. Commands return `None`
on `ok`; `ListActive` returns a list of `WallpaperListing`, `ListLoaded` a
list of paths. `hyprpaper_async` is the async version, and `parse_response`
checks a reply without touching a socket.

Unexpected replies raise a `HyprpaperError` subclass: `NotOkError`,
`FailedToParseActiveWallpapersError`, `NoWallpapersActiveError` or
`NoWallpapersLoadedError`.

## Events

Register handlers per event kind:

```python
from hypripc.events import EventKind
from hypripc.listener import EventListener

listener = EventListener()
listener.add_handler(EventKind.WORKSPACE_CHANGED, lambda data: print(data.name))
listener.start_listener()
```

Handlers receive the event's data; `CONFIG_RELOADED` handlers are called
with no arguments. `start_listener_async` listens without blocking the event
loop. `AsyncEventListener` does the same with handlers that return
awaitables. Both have `feed(text)` to process raw socket text directly.

Or iterate over events:

```python
import asyncio
from hypripc.listener import EventStream

async def main():
    async for event in EventStream():
        print(event.kind, event.data)

asyncio.run(main())
```

The raw `activewindow` and `activewindowv2` lines are merged into one
`ACTIVE_WINDOW_CHANGED` event (see `hypripc.primer.ActiveWindowBuffer`).
Lines for events without a dedicated type become `UNKNOWN` events carrying
`UnknownEventData`, whose `parse_args(count)` splits the arguments.
`hypripc.events.parse_events` parses socket text on its own.

## What it does not do

The package does not query compositor data (windows, monitors, workspaces),
call dispatchers or run other control commands; only config options,
hyprpaper commands and events are covered.

## Tests

```sh
pip install ".[test]"
pytest
```