"""Launcher items and windows, their open state, and button click handling."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable

BUTTON_PRIMARY = 1
BUTTON_MIDDLE = 2


@dataclass(frozen=True)
class ToplevelInfo:
    """What the compositor reports about one toplevel window."""

    id: int
    app_id: str
    title: str
    focused: bool = False


class OpenState(Enum):
    """Open state of a launcher item or one of its windows."""

    CLOSED = "closed"
    OPEN = "open"
    FOCUSED = "focused"

    @classmethod
    def of_focus(cls, focused: bool) -> OpenState:
        """Return an open state, focused or not."""
        return cls.FOCUSED if focused else cls.OPEN

    @classmethod
    def from_toplevel(cls, info: ToplevelInfo) -> OpenState:
        """Return the open state of a reported toplevel."""
        return cls.of_focus(info.focused)

    def is_open(self) -> bool:
        return self is not OpenState.CLOSED

    def is_focused(self) -> bool:
        return self is OpenState.FOCUSED

    @classmethod
    def merge_states(cls, states: Iterable[OpenState]) -> OpenState:
        """Combine states: open if any is open, focused if any is focused."""
        merged = cls.CLOSED
        for current in states:
            if merged.is_open() or current.is_open():
                merged = cls.of_focus(merged.is_focused() or current.is_focused())
            else:
                merged = cls.CLOSED
        return merged


@dataclass
class Window:
    """One window belonging to a launcher item."""

    id: int
    name: str
    open_state: OpenState

    @classmethod
    def from_toplevel(cls, info: ToplevelInfo) -> Window:
        return cls(info.id, info.title, OpenState.from_toplevel(info))


@dataclass
class Item:
    """A launcher entry for one application, with its open windows."""

    app_id: str
    icon_override: str = ""
    open_state: OpenState = OpenState.CLOSED
    favorite: bool = False
    windows: dict[int, Window] = field(default_factory=dict)
    name: str = ""

    @classmethod
    def from_toplevel(cls, info: ToplevelInfo) -> Item:
        """Create an item holding the single window ``info`` describes."""
        window = Window.from_toplevel(info)
        return cls(
            app_id=info.app_id,
            open_state=OpenState.from_toplevel(info),
            windows={info.id: window},
            name=info.title,
        )

    def merge_toplevel(self, info: ToplevelInfo) -> Window:
        """Add the window ``info`` describes and return a copy of it."""
        if not self.windows:
            self.name = info.title

        window = Window.from_toplevel(info)
        self.windows[info.id] = window
        self._recalculate_open_state()
        return dataclasses.replace(window)

    def unmerge_toplevel(self, info: ToplevelInfo) -> None:
        """Remove the window ``info`` describes, if present."""
        self.windows.pop(info.id, None)
        self._recalculate_open_state()

    def set_window_name(self, window_id: int, name: str) -> None:
        """Rename a window; the item takes the name if that window is focused."""
        window = self.windows.get(window_id)
        if window is None:
            return
        if window.open_state.is_focused():
            self.name = name
        window.name = name

    def set_window_focused(self, window_id: int, focused: bool) -> None:
        """Merge a focus flag into a window's state."""
        window = self.windows.get(window_id)
        if window is None:
            return
        window.open_state = OpenState.merge_states(
            [window.open_state, OpenState.of_focus(focused)]
        )
        self._recalculate_open_state()

    def icon_input(self) -> str:
        """Return the name used to look up this item's icon."""
        if self.icon_override:
            return self.icon_override
        if not self.app_id:
            return self.name
        return self.app_id

    def _recalculate_open_state(self) -> None:
        self.open_state = OpenState.merge_states(
            window.open_state for window in self.windows.values()
        )


class ClickAction(Enum):
    """What a click on a launcher item button asks for."""

    OPEN = "open"
    FOCUS = "focus"
    MINIMIZE = "minimize"


def click_action(
    button: int, is_open: bool, is_focused: bool, num_windows: int
) -> ClickAction | None:
    """Return the action for a mouse ``button`` release, or ``None`` to ignore it."""
    if button == BUTTON_PRIMARY:
        if not is_open:
            return ClickAction.OPEN
        if is_focused and num_windows == 1:
            return ClickAction.MINIMIZE
        return ClickAction.FOCUS
    if button == BUTTON_MIDDLE:
        return ClickAction.OPEN
    return None