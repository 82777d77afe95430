"""Server-side handling of bar IPC commands."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Optional, Tuple

from .messages import BarAction, BarCommand, Response, ResponseKind

PopupTarget = Tuple[int, Optional[int]]


@dataclass
class BarHandle:
    """The state of one bar that IPC commands can act on.

    ``popups`` maps a widget's configured name to its popup id and the
    id of the first button that opens it (``None`` if it has no button).
    """

    name: str
    visible: bool = True
    exclusive: bool = True
    popups: dict[str, PopupTarget] = field(default_factory=dict)
    open_popup: tuple[int, int] | None = None

    @property
    def popup_visible(self) -> bool:
        return self.open_popup is not None

    def set_visible(self, visible: bool) -> None:
        self.visible = visible

    def set_exclusive(self, exclusive: bool) -> None:
        self.exclusive = exclusive

    def find_popup(self, widget_name: str) -> PopupTarget | None:
        """Return the popup id and button id for ``widget_name``, if known."""
        return self.popups.get(widget_name)

    def show_popup(self, popup_id: int, button_id: int) -> None:
        self.open_popup = (popup_id, button_id)

    def hide_popup(self) -> None:
        self.open_popup = None


def _bool_str(value: bool) -> str:
    return "true" if value else "false"


def _set_visible(bar: BarHandle, visible: bool) -> Response:
    bar.set_visible(visible)
    return Response.ok()


def _show_popup(bar: BarHandle, widget_name: str) -> Response:
    # only one popup per bar, so hide any that is open for another widget
    bar.hide_popup()

    target = bar.find_popup(widget_name)
    if target is None:
        return Response.error("Invalid module name")

    popup_id, button_id = target
    if button_id is None:
        return Response.error("Module has no popup functionality")

    bar.show_popup(popup_id, button_id)
    return Response.ok()


def _hide_popup(bar: BarHandle) -> Response:
    bar.hide_popup()
    return Response.ok()


def _run(command: BarCommand, bar: BarHandle) -> Response:
    match command.action:
        case BarAction.SHOW:
            return _set_visible(bar, True)
        case BarAction.HIDE:
            return _set_visible(bar, False)
        case BarAction.SET_VISIBLE:
            return _set_visible(bar, bool(command.visible))
        case BarAction.TOGGLE_VISIBLE:
            return _set_visible(bar, not bar.visible)
        case BarAction.GET_VISIBLE:
            return Response.ok_value(_bool_str(bar.visible))
        case BarAction.SHOW_POPUP:
            return _show_popup(bar, command.widget_name or "")
        case BarAction.HIDE_POPUP:
            return _hide_popup(bar)
        case BarAction.SET_POPUP_VISIBLE:
            if command.visible:
                _show_popup(bar, command.widget_name or "")
            else:
                _hide_popup(bar)
            return Response.ok()
        case BarAction.TOGGLE_POPUP:
            if bar.popup_visible:
                _hide_popup(bar)
            else:
                _show_popup(bar, command.widget_name or "")
            return Response.ok()
        case BarAction.GET_POPUP_VISIBLE:
            return Response.ok_value(_bool_str(bar.popup_visible))
        case BarAction.SET_EXCLUSIVE:
            bar.set_exclusive(bool(command.exclusive))
            return Response.ok()
    raise ValueError(f"unknown bar action: {command.action!r}")


def _combine(acc: Response, response: Response) -> Response:
    if acc.kind is ResponseKind.OK:
        return Response.ok()
    if acc.kind is ResponseKind.OK_VALUE and response.kind is ResponseKind.OK_VALUE:
        return Response.multi([acc.value, response.value])
    if acc.kind is ResponseKind.MULTI and response.kind is ResponseKind.OK_VALUE:
        return Response.multi([*(acc.values or ()), response.value])
    raise RuntimeError(f"cannot combine responses {acc!r} and {response!r}")


def handle_bar_command(command: BarCommand, bars: Iterable[BarHandle]) -> Response:
    """Apply ``command`` to every bar with its name and merge the responses."""
    result: Response | None = None
    for bar in bars:
        if bar.name != command.name:
            continue
        response = _run(command, bar)
        result = response if result is None else _combine(result, response)

    if result is None:
        return Response.error("Invalid bar name")
    return result