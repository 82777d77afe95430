from pathlib import Path

import pytest

from ironbar.messages import (
    BarAction,
    BarCommand,
    GetVar,
    Inspect,
    ListVars,
    LoadCss,
    MalformedMessageError,
    Ping,
    Reload,
    Response,
    ResponseKind,
    SetVar,
    command_from_dict,
    command_to_dict,
    decode_command,
    encode_command,
)

ALL_COMMANDS = [
    Ping(),
    Inspect(),
    Reload(),
    LoadCss(Path("/tmp/style.css")),
    SetVar("key", "value"),
    GetVar("ns.key"),
    ListVars(),
    ListVars("ns"),
    BarCommand("main", BarAction.SHOW),
    BarCommand("main", BarAction.HIDE),
    BarCommand("main", BarAction.SET_VISIBLE, visible=False),
    BarCommand("main", BarAction.TOGGLE_VISIBLE),
    BarCommand("main", BarAction.GET_VISIBLE),
    BarCommand("main", BarAction.SHOW_POPUP, widget_name="clock"),
    BarCommand("main", BarAction.HIDE_POPUP),
    BarCommand("main", BarAction.SET_POPUP_VISIBLE, widget_name="clock", visible=True),
    BarCommand("main", BarAction.TOGGLE_POPUP, widget_name="clock"),
    BarCommand("main", BarAction.GET_POPUP_VISIBLE),
    BarCommand("main", BarAction.SET_EXCLUSIVE, exclusive=True),
]


@pytest.mark.parametrize("command", ALL_COMMANDS)
def test_command_round_trip(command):
    assert decode_command(encode_command(command)) == command
    assert command_from_dict(command_to_dict(command)) == command


def test_ping_wire_form():
    assert encode_command(Ping()) == b'{"command":"ping"}'


def test_var_set_is_flattened():
    assert command_to_dict(SetVar("k", "v")) == {
        "command": "var",
        "subcommand": "set",
        "key": "k",
        "value": "v",
    }


def test_bar_command_is_flattened():
    data = command_to_dict(BarCommand("main", BarAction.SET_VISIBLE, visible=True))
    assert data == {"command": "bar", "name": "main", "subcommand": "set_visible", "visible": True}


def test_list_without_namespace_field():
    assert decode_command('{"command":"var","subcommand":"list"}') == ListVars(None)


def test_unknown_fields_are_ignored():
    assert decode_command('{"command":"ping","extra":1}') == Ping()


@pytest.mark.parametrize(
    "payload",
    [
        b"not json",
        b"[]",
        b'{"command":"explode"}',
        b'{"command":"var","subcommand":"set","key":"k"}',
        b'{"command":"var","subcommand":"get","key":1}',
        b'{"command":"bar","name":"main","subcommand":"fly"}',
        b'{"command":"bar","name":"main","subcommand":"set_visible"}',
        b'{"command":"bar","name":"main","subcommand":"set_visible","visible":"yes"}',
        b'{"command":"load_css"}',
    ],
)
def test_malformed_commands(payload):
    with pytest.raises(MalformedMessageError):
        decode_command(payload)


def test_bar_command_requires_fields():
    with pytest.raises(ValueError):
        BarCommand("main", BarAction.SHOW_POPUP)


def test_bar_command_rejects_extra_fields():
    with pytest.raises(ValueError):
        BarCommand("main", BarAction.SHOW, visible=True)


def test_response_ok_wire_form():
    assert Response.ok().encode() == b'{"type":"ok"}'


def test_response_error_dict():
    assert Response.error("Invalid bar name").to_dict() == {
        "type": "err",
        "message": "Invalid bar name",
    }


@pytest.mark.parametrize(
    "response",
    [
        Response.ok(),
        Response.ok_value("true"),
        Response.multi(["a", "b"]),
        Response.error("nope"),
        Response(ResponseKind.ERR),
    ],
)
def test_response_round_trip(response):
    assert Response.decode(response.encode()) == response


def test_multi_values_stored_as_tuple():
    response = Response.multi(["x", "y"])
    assert response.values == ("x", "y")
    assert response.to_dict()["values"] == ["x", "y"]


@pytest.mark.parametrize(
    "payload",
    [b'{"type":"bogus"}', b'{"type":"ok_value"}', b'{"type":"multi","values":[1]}', b"{"],
)
def test_malformed_responses(payload):
    with pytest.raises(MalformedMessageError):
        Response.decode(payload)