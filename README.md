# ironbar

This package holds the core logic of a customisable desktop status bar. It does
not include the graphical toolkit. It provides:

- **IPC messages**: the commands and responses that control a running bar, and
  their compact JSON form.
- **IPC transport**: a client and server over a Unix socket.
- **Bar commands**: the server-side handling of requests to show and hide bars
  and their popups.
- **Launcher state**: the item and window bookkeeping behind an application
  launcher. This covers favourites, focus tracking and pagination.

## Installation

```sh
pip install .
```

To run the test suite:

```sh
pip install ".[test]"
pytest
```

## IPC messages

`ironbar.messages` defines one frozen dataclass per command:

- `Ping`
- `Inspect`
- `Reload`
- `LoadCss(path)`
- `SetVar(key, value)`
- `GetVar(key)`
- `ListVars(namespace=None)`
- `BarCommand(name, action, ...)`

A `BarCommand` takes a `BarAction`. Actions that need `widget_name`, `visible`
or `exclusive` must be given them, and other actions must not be given them.
Otherwise `ValueError` is raised.

```python
from ironbar.messages import Ping, Response, encode_command, decode_command

payload = encode_command(Ping())          # b'{"command":"ping"}'
assert decode_command(payload) == Ping()

reply = Response.ok_value("42")
assert Response.decode(reply.encode()) == reply
```

You build a `Response` with `Response.ok()`, `Response.ok_value(value)`,
`Response.multi(values)` or `Response.error(message)`. Its `kind` is a
`ResponseKind`. Input that cannot be decoded raises `MalformedMessageError`.

## IPC transport

`ironbar.ipc.Ipc` is bound to a socket path. By default this is
`default_socket_path()`, which is `$XDG_RUNTIME_DIR/ironbar-ipc.sock`, or
`/tmp/ironbar-ipc.sock` when `XDG_RUNTIME_DIR` is not set.

```python
from ironbar.ipc import Ipc
from ironbar.messages import Ping, Response

ipc = Ipc("/tmp/example.sock")

# server side (blocks until ipc.stop() is called)
ipc.serve(lambda command: Response.ok())

# client side
response = Ipc("/tmp/example.sock").send(Ping(), debug=False)
```

How `send` and `serve` behave:

- `send` raises `IpcConnectionError` when nothing is listening. With
  `debug=True` it prints the request JSON to standard error.
- `serve` first removes a socket file left over from an earlier run. It answers
  each connection with the handler's `Response`. If the handler raises, it
  answers with an error response that has no message.
- `serve` removes the socket file when it ends. `Ipc.shutdown(path)` removes a
  socket file and ignores any error.

## Bar commands

`ironbar.bar_commands.handle_bar_command(command, bars)` applies a `BarCommand`
to every `BarHandle` with a matching name and merges the responses:

- If no bar matches, the result is an error: `Invalid bar name`.
- When every command answers OK, the result is a single OK.
- Value queries on several bars give a `multi` response.

```python
from ironbar.bar_commands import BarHandle, handle_bar_command
from ironbar.messages import BarAction, BarCommand

bars = [BarHandle("main", popups={"clock": (1, 7)})]
handle_bar_command(BarCommand("main", BarAction.SHOW_POPUP, widget_name="clock"), bars)
assert bars[0].open_popup == (1, 7)
```

## Launcher

`ironbar.launcher.LauncherState` keeps the launcher's items in order. Its
methods are:

- `load_initial(toplevels)` merges the windows that are already open.
- `handle_event(ToplevelEvent(...))` applies a window event and returns the
  resulting updates: `AddItem`, `AddWindow`, `RemoveItem`, `RemoveWindow`,
  `Focus` and `Title`.
- `resolve_window(...)` picks the window that a `FocusItem`, `MinimizeItem` or
  `FocusWindow` request applies to.

`launch_app(desktop_file)` starts an application with `gtk-launch`.

```python
from ironbar.launcher import LauncherState, ToplevelEvent, ToplevelEventKind
from ironbar.launcher_items import ToplevelInfo
from ironbar.launcher_view import LauncherBar

state = LauncherState(favorites=["firefox"])
bar = LauncherBar(page_size=10)
for update in state.load_initial([]):
    bar.apply(update)

info = ToplevelInfo(1, "foot", "shell", focused=True)
for update in state.handle_event(ToplevelEvent(ToplevelEventKind.NEW, info)):
    bar.apply(update)

assert bar.order() == ["firefox", "foot"]
```

The remaining launcher modules are:

- `ironbar.launcher_items` holds `Item`, `Window`, `OpenState` and
  `click_action`. The last one maps a mouse button release to a `ClickAction`.
- `ironbar.launcher_view` holds `LauncherBar` and `LauncherPopup`. They track
  which buttons and popup windows are shown.
- `ironbar.pagination.Pagination` moves between pages of item buttons.

## What this package does not do

- It has no command-line tool and no running bar process.
- It has no store for the variables that `SetVar`, `GetVar` and `ListVars`
  refer to. A server that accepts those commands must supply its own handler.
- It does not draw widgets, read a configuration file or format a clock.