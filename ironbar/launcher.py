"""Launcher controller: tracks application items from toplevel events."""

from __future__ import annotations

import copy
import logging
import os
import subprocess
import threading
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Iterable, Mapping, Union

from .launcher_items import Item, OpenState, ToplevelInfo, Window

logger = logging.getLogger(__name__)


class ToplevelEventKind(Enum):
    """What happened to a toplevel window."""

    NEW = "new"
    UPDATE = "update"
    REMOVE = "remove"


@dataclass(frozen=True)
class ToplevelEvent:
    """A change to a toplevel window reported by the compositor."""

    kind: ToplevelEventKind
    info: ToplevelInfo


@dataclass(frozen=True)
class AddItem:
    """An item was added."""

    item: Item


@dataclass(frozen=True)
class AddWindow:
    """A window was added to the item with ``app_id``."""

    app_id: str
    window: Window


@dataclass(frozen=True)
class RemoveItem:
    """The item with ``app_id`` was removed."""

    app_id: str


@dataclass(frozen=True)
class RemoveWindow:
    """A window was removed from the item with ``app_id``."""

    app_id: str
    window_id: int


@dataclass(frozen=True)
class Title:
    """A window of the item with ``app_id`` changed its title."""

    app_id: str
    window_id: int
    title: str


@dataclass(frozen=True)
class Focus:
    """The item with ``app_id`` gained or lost focus."""

    app_id: str
    focused: bool


@dataclass(frozen=True)
class Hover:
    """The item with ``app_id`` was hovered over."""

    app_id: str


LauncherUpdate = Union[AddItem, AddWindow, RemoveItem, RemoveWindow, Title, Focus, Hover]


@dataclass(frozen=True)
class FocusItem:
    """Focus a window of the item with ``app_id``."""

    app_id: str


@dataclass(frozen=True)
class FocusWindow:
    """Focus the window with ``window_id``."""

    window_id: int


@dataclass(frozen=True)
class OpenItem:
    """Launch the application with ``app_id``."""

    app_id: str


@dataclass(frozen=True)
class MinimizeItem:
    """Minimize a window of the item with ``app_id``."""

    app_id: str


ItemEvent = Union[FocusItem, FocusWindow, OpenItem, MinimizeItem]


@dataclass
class LauncherConfig:
    """Options for the launcher module."""

    favorites: list[str] | None = None
    show_names: bool = False
    show_icons: bool = True
    icon_size: int = 32
    reversed: bool = False
    minimize_focused: bool = True
    page_size: int = 1000
    icon_page_back: str = "󰅁"
    icon_page_forward: str = "󰅂"
    pagination_icon_size: int = 16
    truncate_popup_max_length: int = 25
    icon_overrides: dict[str, str] = field(default_factory=dict)


class LauncherState:
    """The launcher's items, kept in order and updated from toplevel events."""

    def __init__(
        self,
        favorites: Iterable[str] | None = None,
        icon_overrides: Mapping[str, str] | None = None,
    ) -> None:
        self._icon_overrides = dict(icon_overrides or {})
        self._lock = threading.Lock()
        self.items: dict[str, Item] = {
            app_id: Item(
                app_id,
                self._icon_overrides.get(app_id, ""),
                OpenState.CLOSED,
                True,
            )
            for app_id in favorites or ()
        }

    def _new_item(self, info: ToplevelInfo) -> Item:
        item = Item.from_toplevel(info)
        override = self._icon_overrides.get(info.app_id)
        if override is not None:
            item.icon_override = override
        return item

    def load_initial(self, toplevels: Iterable[ToplevelInfo]) -> list[AddItem]:
        """Merge the already open toplevels and return an update for every item."""
        with self._lock:
            for info in toplevels:
                item = self.items.get(info.app_id)
                if item is not None:
                    item.merge_toplevel(info)
                else:
                    self.items[info.app_id] = self._new_item(info)
            return [AddItem(copy.deepcopy(item)) for item in self.items.values()]

    def handle_event(self, event: ToplevelEvent) -> list[LauncherUpdate]:
        """Apply a toplevel event and return the updates it causes."""
        info = event.info
        with self._lock:
            match event.kind:
                case ToplevelEventKind.NEW:
                    item = self.items.get(info.app_id)
                    if item is None:
                        item = self._new_item(info)
                        self.items[info.app_id] = item
                        return [AddItem(copy.deepcopy(item))]
                    return [AddWindow(info.app_id, item.merge_toplevel(info))]
                case ToplevelEventKind.UPDATE:
                    # updates can arrive as a program closes; only focus open items
                    item = self.items.get(info.app_id)
                    if item is not None:
                        item.set_window_focused(info.id, info.focused)
                        item.set_window_name(info.id, info.title)
                        is_open = item.open_state.is_open()
                    else:
                        is_open = False
                    return [
                        Focus(info.app_id, is_open and info.focused),
                        Title(info.app_id, info.id, info.title),
                    ]
                case ToplevelEventKind.REMOVE:
                    item = self.items.get(info.app_id)
                    if item is None:
                        return []
                    item.unmerge_toplevel(info)
                    if not item.windows:
                        del self.items[info.app_id]
                        return [RemoveItem(info.app_id)]
                    return [RemoveWindow(info.app_id, info.id)]
        raise ValueError(f"unknown toplevel event kind: {event.kind!r}")

    def resolve_window(self, item_event: ItemEvent) -> Window | None:
        """Return the window a focus or minimize request applies to, if any.

        For an item, the first unfocused window is chosen, else its first window.
        """
        with self._lock:
            match item_event:
                case FocusItem(app_id=app_id) | MinimizeItem(app_id=app_id):
                    item = self.items.get(app_id)
                    if item is None:
                        return None
                    windows = list(item.windows.values())
                    chosen = next(
                        (win for win in windows if not win.open_state.is_focused()),
                        windows[0] if windows else None,
                    )
                    if chosen is None:
                        return None
                    window_id = chosen.id
                case FocusWindow(window_id=window_id):
                    pass
                case OpenItem():
                    raise ValueError("open requests do not resolve to a window")
                case _:
                    raise TypeError(f"not an item event: {item_event!r}")

            for item in self.items.values():
                window = item.windows.get(window_id)
                if window is not None:
                    return copy.copy(window)
            return None


def launch_app(desktop_file: str | os.PathLike[str]) -> subprocess.Popen | None:
    """Start the application described by ``desktop_file`` with ``gtk-launch``.

    Returns the started process, or ``None`` if the command could not be run.
    """
    name = Path(desktop_file).name
    if not name:
        raise ValueError("File segment missing from path to desktop file")
    try:
        return subprocess.Popen(
            ["gtk-launch", name],
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
        )
    except OSError as err:
        logger.error(
            "Failed to run gtk-launch command: %s. Perhaps the desktop file is invalid?",
            err,
        )
        return None