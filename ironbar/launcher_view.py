"""Bar and popup state of the launcher, driven by launcher updates."""

from __future__ import annotations

from dataclasses import dataclass

from .launcher import AddItem, AddWindow, Focus, Hover, LauncherUpdate, RemoveItem, RemoveWindow, Title
from .launcher_items import Item
from .pagination import Pagination


@dataclass
class BarButton:
    """The state of one item button on the bar."""

    app_id: str
    label: str = ""
    persistent: bool = False
    num_windows: int = 0
    open: bool = False
    focused: bool = False
    visible: bool = True


def _set_open(button: BarButton, open_: bool) -> None:
    button.open = open_
    if not open_:
        button.focused = False


class LauncherBar:
    """The row of item buttons on the bar, with its pagination controls."""

    def __init__(self, page_size: int = 1000, reversed: bool = False, show_names: bool = False) -> None:
        self.page_size = page_size
        self.reversed = reversed
        self.show_names = show_names
        self.pagination = Pagination(page_size)
        # all widgets show by default; the first update corrects this
        self.controls_visible = True
        self.buttons: dict[str, BarButton] = {}

    def _create_button(self, item: Item) -> BarButton:
        return BarButton(
            app_id=item.app_id,
            label=item.name if self.show_names else "",
            persistent=item.favorite,
            num_windows=len(item.windows),
            open=item.open_state.is_open(),
            focused=item.open_state.is_focused(),
        )

    def apply(self, update: LauncherUpdate) -> None:
        """Apply one launcher update to the bar."""
        if len(self.buttons) <= self.page_size:
            self.controls_visible = False

        match update:
            case AddItem(item=item):
                existing = self.buttons.get(item.app_id)
                if existing is not None:
                    _set_open(existing, True)
                    existing.focused = item.open_state.is_focused()
                    return
                button = self._create_button(item)
                count = len(self.buttons) + 1
                if count >= self.pagination.offset + self.page_size:
                    button.visible = False
                    self.pagination.fwd_sensitive = True
                if count > self.page_size:
                    self.controls_visible = True
                self.buttons[item.app_id] = button
            case AddWindow(app_id=app_id, window=window):
                button = self.buttons.get(app_id)
                if button is not None:
                    _set_open(button, True)
                    button.focused = window.open_state.is_focused()
                    button.num_windows += 1
            case RemoveItem(app_id=app_id):
                button = self.buttons.get(app_id)
                if button is not None:
                    if button.persistent:
                        _set_open(button, False)
                        if self.show_names:
                            button.label = app_id
                    else:
                        del self.buttons[app_id]
                if len(self.buttons) < self.pagination.offset + self.page_size:
                    self.pagination.fwd_sensitive = False
                if len(self.buttons) <= self.page_size:
                    self.controls_visible = False
            case RemoveWindow(app_id=app_id):
                button = self.buttons.get(app_id)
                if button is not None:
                    button.focused = False
                    button.num_windows -= 1
            case Focus(app_id=app_id, focused=focused):
                button = self.buttons.get(app_id)
                if button is not None:
                    button.focused = focused
            case Title(app_id=app_id, title=title):
                if self.show_names:
                    button = self.buttons.get(app_id)
                    if button is not None:
                        button.label = title
            case Hover():
                pass
            case _:
                raise TypeError(f"not a launcher update: {update!r}")

    def order(self) -> list[str]:
        """Return the app ids in the order their buttons are displayed."""
        ids = list(self.buttons)
        return ids[::-1] if self.reversed else ids

    def visible_items(self) -> list[str]:
        """Return the app ids of the visible buttons, in display order."""
        return [app_id for app_id in self.order() if self.buttons[app_id].visible]


@dataclass
class _PopupEntry:
    window_id: int
    label: str


class LauncherPopup:
    """The window list shown in the popup for the hovered item."""

    def __init__(self) -> None:
        self._buttons: dict[str, dict[int, _PopupEntry]] = {}
        self._shown: list[_PopupEntry] = []

    def apply(self, update: LauncherUpdate) -> None:
        """Apply one launcher update to the popup."""
        match update:
            case AddItem(item=item):
                self._buttons[item.app_id] = {
                    win.id: _PopupEntry(win.id, win.name) for win in item.windows.values()
                }
            case AddWindow(app_id=app_id, window=window):
                entries = self._buttons.get(app_id)
                if entries is not None:
                    entries[window.id] = _PopupEntry(window.id, window.name)
            case RemoveWindow(app_id=app_id, window_id=window_id):
                entries = self._buttons.get(app_id)
                if entries is not None:
                    entries.pop(window_id, None)
            case Title(app_id=app_id, window_id=window_id, title=title):
                entry = self._buttons.get(app_id, {}).get(window_id)
                if entry is not None:
                    entry.label = title
            case Hover(app_id=app_id):
                self._shown = list(self._buttons.get(app_id, {}).values())
            case _:
                pass

    def shown_windows(self) -> list[tuple[int, str]]:
        """Return the window ids and labels currently listed in the popup."""
        return [(entry.window_id, entry.label) for entry in self._shown]