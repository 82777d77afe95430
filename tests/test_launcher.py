import subprocess
from unittest import mock

import pytest

from ironbar.launcher import (
    AddItem,
    AddWindow,
    Focus,
    FocusItem,
    FocusWindow,
    LauncherConfig,
    LauncherState,
    MinimizeItem,
    OpenItem,
    RemoveItem,
    RemoveWindow,
    Title,
    ToplevelEvent,
    ToplevelEventKind,
    launch_app,
)
from ironbar.launcher_items import OpenState, ToplevelInfo


def new(info):
    return ToplevelEvent(ToplevelEventKind.NEW, info)


def update(info):
    return ToplevelEvent(ToplevelEventKind.UPDATE, info)


def remove(info):
    return ToplevelEvent(ToplevelEventKind.REMOVE, info)


def test_config_defaults():
    config = LauncherConfig()
    assert config.page_size == 1000
    assert config.icon_size == 32
    assert config.pagination_icon_size == 16
    assert config.show_names is False
    assert config.minimize_focused is True


def test_favorites_start_closed():
    state = LauncherState(["firefox", "kitty"], {"kitty": "terminal"})
    assert list(state.items) == ["firefox", "kitty"]
    assert state.items["kitty"].icon_override == "terminal"
    assert state.items["firefox"].favorite is True
    assert state.items["firefox"].open_state is OpenState.CLOSED


def test_load_initial_merges_into_favorites():
    state = LauncherState(["firefox"], {})
    updates = state.load_initial(
        [
            ToplevelInfo(1, "firefox", "Browser", focused=True),
            ToplevelInfo(2, "kitty", "Shell"),
        ]
    )
    assert [u.item.app_id for u in updates] == ["firefox", "kitty"]
    assert all(isinstance(u, AddItem) for u in updates)
    assert updates[0].item.favorite is True
    assert updates[0].item.open_state is OpenState.FOCUSED
    assert 1 in updates[0].item.windows


def test_new_creates_item_with_override():
    state = LauncherState([], {"kitty": "terminal"})
    updates = state.handle_event(new(ToplevelInfo(1, "kitty", "Shell")))
    assert len(updates) == 1
    assert isinstance(updates[0], AddItem)
    assert updates[0].item.icon_override == "terminal"
    assert updates[0].item.name == "Shell"


def test_added_item_is_a_snapshot():
    state = LauncherState([], {})
    (added,) = state.handle_event(new(ToplevelInfo(1, "kitty", "Shell")))
    state.handle_event(new(ToplevelInfo(2, "kitty", "Other")))
    assert list(added.item.windows) == [1]
    assert list(state.items["kitty"].windows) == [1, 2]


def test_new_on_existing_item_adds_window():
    state = LauncherState([], {})
    state.handle_event(new(ToplevelInfo(1, "kitty", "Shell")))
    updates = state.handle_event(new(ToplevelInfo(2, "kitty", "Other")))
    assert len(updates) == 1
    assert isinstance(updates[0], AddWindow)
    assert updates[0].app_id == "kitty"
    assert updates[0].window.id == 2
    assert updates[0].window.name == "Other"


def test_update_sends_focus_and_title():
    state = LauncherState([], {})
    state.handle_event(new(ToplevelInfo(1, "kitty", "Shell")))
    updates = state.handle_event(update(ToplevelInfo(1, "kitty", "Renamed", focused=True)))
    assert updates == [Focus("kitty", True), Title("kitty", 1, "Renamed")]
    assert state.items["kitty"].name == "Renamed"


def test_update_unknown_item_is_not_focused():
    state = LauncherState([], {})
    updates = state.handle_event(update(ToplevelInfo(5, "ghost", "Title", focused=True)))
    assert updates == [Focus("ghost", False), Title("ghost", 5, "Title")]


def test_remove_window_then_item():
    state = LauncherState([], {})
    state.handle_event(new(ToplevelInfo(1, "kitty", "A")))
    state.handle_event(new(ToplevelInfo(2, "kitty", "B")))
    assert state.handle_event(remove(ToplevelInfo(1, "kitty", "A"))) == [
        RemoveWindow("kitty", 1)
    ]
    assert state.handle_event(remove(ToplevelInfo(2, "kitty", "B"))) == [
        RemoveItem("kitty")
    ]
    assert "kitty" not in state.items


def test_remove_unknown_gives_nothing():
    state = LauncherState([], {})
    assert state.handle_event(remove(ToplevelInfo(1, "kitty", "A"))) == []


def test_resolve_prefers_unfocused_window():
    state = LauncherState([], {})
    state.load_initial(
        [
            ToplevelInfo(1, "kitty", "A", focused=True),
            ToplevelInfo(2, "kitty", "B"),
        ]
    )
    assert state.resolve_window(FocusItem("kitty")).id == 2
    assert state.resolve_window(MinimizeItem("kitty")).id == 2


def test_resolve_falls_back_to_first_window():
    state = LauncherState([], {})
    state.load_initial([ToplevelInfo(1, "kitty", "A", focused=True)])
    assert state.resolve_window(FocusItem("kitty")).id == 1


def test_resolve_window_by_id_and_missing():
    state = LauncherState(["firefox"], {})
    state.load_initial([ToplevelInfo(7, "kitty", "A")])
    assert state.resolve_window(FocusWindow(7)).name == "A"
    assert state.resolve_window(FocusWindow(99)) is None
    assert state.resolve_window(FocusItem("firefox")) is None
    assert state.resolve_window(FocusItem("missing")) is None


def test_resolve_open_item_raises():
    state = LauncherState([], {})
    with pytest.raises(ValueError):
        state.resolve_window(OpenItem("kitty"))


def test_launch_app_runs_gtk_launch():
    with mock.patch("ironbar.launcher.subprocess.Popen") as popen:
        result = launch_app("/usr/share/applications/kitty.desktop")
    assert result is popen.return_value
    popen.assert_called_once_with(
        ["gtk-launch", "kitty.desktop"],
        stdout=subprocess.DEVNULL,
        stderr=subprocess.DEVNULL,
    )


def test_launch_app_failure_returns_none():
    with mock.patch("ironbar.launcher.subprocess.Popen", side_effect=OSError("missing")):
        assert launch_app("kitty.desktop") is None


def test_launch_app_without_file_name_raises():
    with pytest.raises(ValueError):
        launch_app("/")