"""Commands and responses exchanged over the IPC socket, with their JSON form."""

from __future__ import annotations

import json
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Union


class MalformedMessageError(ValueError):
    """Raised when a message cannot be decoded."""


@dataclass(frozen=True)
class Ping:
    """Ask the server to answer with an OK response."""


@dataclass(frozen=True)
class Inspect:
    """Open the GTK inspector."""


@dataclass(frozen=True)
class Reload:
    """Reload the configuration."""


@dataclass(frozen=True)
class LoadCss:
    """Load an additional stylesheet."""

    path: Path


@dataclass(frozen=True)
class SetVar:
    """Set an ironvar, creating it if it does not exist."""

    key: str
    value: str


@dataclass(frozen=True)
class GetVar:
    """Get the current value of an ironvar."""

    key: str


@dataclass(frozen=True)
class ListVars:
    """List all ironvars, optionally within a namespace."""

    namespace: str | None = None


class BarAction(Enum):
    SHOW = "show"
    HIDE = "hide"
    SET_VISIBLE = "set_visible"
    TOGGLE_VISIBLE = "toggle_visible"
    GET_VISIBLE = "get_visible"
    SHOW_POPUP = "show_popup"
    HIDE_POPUP = "hide_popup"
    SET_POPUP_VISIBLE = "set_popup_visible"
    TOGGLE_POPUP = "toggle_popup"
    GET_POPUP_VISIBLE = "get_popup_visible"
    SET_EXCLUSIVE = "set_exclusive"


_BAR_FIELDS: dict[BarAction, tuple[str, ...]] = {
    BarAction.SET_VISIBLE: ("visible",),
    BarAction.SHOW_POPUP: ("widget_name",),
    BarAction.SET_POPUP_VISIBLE: ("widget_name", "visible"),
    BarAction.TOGGLE_POPUP: ("widget_name",),
    BarAction.SET_EXCLUSIVE: ("exclusive",),
}

_FIELD_TYPES: dict[str, type] = {"widget_name": str, "visible": bool, "exclusive": bool}


@dataclass(frozen=True)
class BarCommand:
    """An action aimed at every bar with the given name."""

    name: str
    action: BarAction
    widget_name: str | None = None
    visible: bool | None = None
    exclusive: bool | None = None

    def __post_init__(self) -> None:
        required = _BAR_FIELDS.get(self.action, ())
        for field, kind in _FIELD_TYPES.items():
            value = getattr(self, field)
            if field in required:
                if not isinstance(value, kind):
                    raise ValueError(f"{self.action.value} requires `{field}`")
            elif value is not None:
                raise ValueError(f"{self.action.value} does not take `{field}`")


Command = Union[Ping, Inspect, Reload, LoadCss, SetVar, GetVar, ListVars, BarCommand]


class ResponseKind(Enum):
    OK = "ok"
    OK_VALUE = "ok_value"
    MULTI = "multi"
    ERR = "err"


@dataclass(frozen=True)
class Response:
    """A reply from the IPC server."""

    kind: ResponseKind
    value: str | None = None
    values: tuple[str, ...] | None = None
    message: str | None = None

    def __post_init__(self) -> None:
        if self.values is not None:
            object.__setattr__(self, "values", tuple(self.values))
        if self.kind is ResponseKind.OK_VALUE and not isinstance(self.value, str):
            raise ValueError("ok_value response requires a string value")
        if self.kind is ResponseKind.MULTI and (
            self.values is None or not all(isinstance(v, str) for v in self.values)
        ):
            raise ValueError("multi response requires a list of strings")
        if self.message is not None and not isinstance(self.message, str):
            raise ValueError("error message must be a string")

    @classmethod
    def ok(cls) -> Response:
        return cls(ResponseKind.OK)

    @classmethod
    def ok_value(cls, value: str) -> Response:
        return cls(ResponseKind.OK_VALUE, value=value)

    @classmethod
    def multi(cls, values) -> Response:
        return cls(ResponseKind.MULTI, values=tuple(values))

    @classmethod
    def error(cls, message: str) -> Response:
        return cls(ResponseKind.ERR, message=message)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"type": self.kind.value}
        if self.kind is ResponseKind.OK_VALUE:
            data["value"] = self.value
        elif self.kind is ResponseKind.MULTI:
            data["values"] = list(self.values or ())
        elif self.kind is ResponseKind.ERR:
            data["message"] = self.message
        return data

    @classmethod
    def from_dict(cls, data: Any) -> Response:
        if not isinstance(data, dict):
            raise MalformedMessageError("response must be an object")
        try:
            kind = ResponseKind(data.get("type"))
        except ValueError:
            raise MalformedMessageError(f"unknown response type {data.get('type')!r}") from None
        try:
            if kind is ResponseKind.OK_VALUE:
                return cls.ok_value(_require(data, "value", str))
            if kind is ResponseKind.MULTI:
                return cls.multi(_require(data, "values", list))
            if kind is ResponseKind.ERR:
                return cls(ResponseKind.ERR, message=data.get("message"))
        except MalformedMessageError:
            raise
        except ValueError as err:
            raise MalformedMessageError(str(err)) from err
        return cls.ok()

    def encode(self) -> bytes:
        return _dump(self.to_dict())

    @classmethod
    def decode(cls, data: bytes | str) -> Response:
        return cls.from_dict(_load(data))


def _require(data: dict[str, Any], key: str, kind: type) -> Any:
    if key not in data:
        raise MalformedMessageError(f"missing field `{key}`")
    value = data[key]
    if not isinstance(value, kind):
        raise MalformedMessageError(f"invalid type for field `{key}`")
    return value


def _dump(data: dict[str, Any]) -> bytes:
    return json.dumps(data, separators=(",", ":"), ensure_ascii=False).encode("utf-8")


def _load(data: bytes | str) -> Any:
    try:
        return json.loads(data)
    except (json.JSONDecodeError, UnicodeDecodeError) as err:
        raise MalformedMessageError(f"invalid JSON: {err}") from err


def command_to_dict(command: Command) -> dict[str, Any]:
    """Return the JSON object form of ``command``."""
    match command:
        case Ping():
            return {"command": "ping"}
        case Inspect():
            return {"command": "inspect"}
        case Reload():
            return {"command": "reload"}
        case LoadCss(path=path):
            return {"command": "load_css", "path": str(path)}
        case SetVar(key=key, value=value):
            return {"command": "var", "subcommand": "set", "key": key, "value": value}
        case GetVar(key=key):
            return {"command": "var", "subcommand": "get", "key": key}
        case ListVars(namespace=namespace):
            return {"command": "var", "subcommand": "list", "namespace": namespace}
        case BarCommand(name=name, action=action):
            data: dict[str, Any] = {"command": "bar", "name": name, "subcommand": action.value}
            for field in _BAR_FIELDS.get(action, ()):
                data[field] = getattr(command, field)
            return data
    raise TypeError(f"not a command: {command!r}")


def _var_from_dict(data: dict[str, Any]) -> Command:
    subcommand = data.get("subcommand")
    if subcommand == "set":
        return SetVar(_require(data, "key", str), _require(data, "value", str))
    if subcommand == "get":
        return GetVar(_require(data, "key", str))
    if subcommand == "list":
        namespace = data.get("namespace")
        if namespace is not None and not isinstance(namespace, str):
            raise MalformedMessageError("invalid type for field `namespace`")
        return ListVars(namespace)
    raise MalformedMessageError(f"unknown var subcommand {subcommand!r}")


def _bar_from_dict(data: dict[str, Any]) -> BarCommand:
    name = _require(data, "name", str)
    subcommand = data.get("subcommand")
    try:
        action = BarAction(subcommand)
    except ValueError:
        raise MalformedMessageError(f"unknown bar subcommand {subcommand!r}") from None
    fields = {
        field: _require(data, field, _FIELD_TYPES[field])
        for field in _BAR_FIELDS.get(action, ())
    }
    return BarCommand(name, action, **fields)


def command_from_dict(data: Any) -> Command:
    """Build a command from its JSON object form."""
    if not isinstance(data, dict):
        raise MalformedMessageError("command must be an object")
    tag = data.get("command")
    if tag == "ping":
        return Ping()
    if tag == "inspect":
        return Inspect()
    if tag == "reload":
        return Reload()
    if tag == "load_css":
        return LoadCss(Path(_require(data, "path", str)))
    if tag == "var":
        return _var_from_dict(data)
    if tag == "bar":
        return _bar_from_dict(data)
    raise MalformedMessageError(f"unknown command {tag!r}")


def encode_command(command: Command) -> bytes:
    """Serialise ``command`` to compact JSON bytes."""
    return _dump(command_to_dict(command))


def decode_command(data: bytes | str) -> Command:
    """Parse a command from JSON text or bytes."""
    return command_from_dict(_load(data))