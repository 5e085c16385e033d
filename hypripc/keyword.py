"""Reading and changing Hyprland configuration options at runtime."""

from __future__ import annotations

import json
import math
from collections.abc import Mapping
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Optional, Union

from hypripc.shared import (
    CommandContent,
    CommandFlag,
    HyprError,
    InternalError,
    SocketType,
    write_to_socket,
    write_to_socket_sync,
)

OptionValue = Union[int, float, str]


def _format_float(value: float) -> str:
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "inf" if value > 0 else "-inf"
    return format(Decimal(repr(value)).normalize(), "f")


def format_value(value: OptionValue) -> str:
    """Render an option value the way Hyprland expects it in a ``keyword`` command."""
    if isinstance(value, bool):
        raise TypeError("option values must be int, float or str, not bool")
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        return _format_float(value)
    if isinstance(value, str):
        return value
    raise TypeError(
        f"option values must be int, float or str, not {type(value).__name__}"
    )


@dataclass(frozen=True)
class Keyword:
    """A configuration option and its current value."""

    option: str
    value: OptionValue
    set: bool


def _debug(value: Any) -> str:
    if value is None:
        return "None"
    if isinstance(value, str):
        return f"Some({json.dumps(value)})"
    return f"Some({value!r})"


def _describe(option: str, int_value: Any, float_value: Any, str_value: Any,
              is_set: bool) -> str:
    return (
        f"Option {{ option: {option}, int: {_debug(int_value)}, "
        f"float: {_debug(float_value)}, str: {_debug(str_value)}, "
        f"set: {str(is_set).lower()} }}"
    )


def _field(raw: Mapping, name: str) -> Any:
    try:
        return raw[name]
    except KeyError:
        raise HyprError(f"missing field `{name}`") from None


def parse_option(raw: Mapping) -> Keyword:
    """Build a :class:`Keyword` from the JSON object ``getoption`` returns."""
    if not isinstance(raw, Mapping):
        raise HyprError("expected a JSON object describing an option")

    option = _field(raw, "option")
    is_set = _field(raw, "set")
    if not isinstance(option, str):
        raise HyprError("field `option` must be a string")
    if not isinstance(is_set, bool):
        raise HyprError("field `set` must be a boolean")

    int_value: Optional[int] = raw.get("int")
    float_value: Optional[float] = raw.get("float")
    str_value: Optional[str] = raw.get("str")

    if int_value is not None and (
        isinstance(int_value, bool) or not isinstance(int_value, int)
    ):
        raise HyprError("field `int` must be an integer")
    if float_value is not None:
        if isinstance(float_value, bool) or not isinstance(float_value, (int, float)):
            raise HyprError("field `float` must be a number")
        float_value = float(float_value)
    if str_value is not None and not isinstance(str_value, str):
        raise HyprError("field `str` must be a string")

    present = [v for v in (int_value, float_value, str_value) if v is not None]
    details = _describe(option, int_value, float_value, str_value, is_set)
    if len(present) > 1:
        raise InternalError(
            "Expected single value type, but received more than one: " + details
        )
    if not present:
        raise InternalError(
            "Expected either an 'int', a 'float' or a 'str', but received none: "
            + details
        )
    return Keyword(option=option, value=present[0], set=is_set)


def _set_command(key: object, value: OptionValue) -> CommandContent:
    return CommandContent(CommandFlag.EMPTY, f"keyword {key} {format_value(value)}")


def _get_command(key: object) -> CommandContent:
    return CommandContent(CommandFlag.JSON, f"getoption {key}")


def _decode(data: str) -> Any:
    try:
        return json.loads(data)
    except json.JSONDecodeError as exc:
        raise HyprError(f"invalid JSON reply: {exc}") from exc


def set_keyword(key: object, value: OptionValue) -> None:
    """Set a configuration option."""
    write_to_socket_sync(SocketType.COMMAND, _set_command(key, value))


async def set_keyword_async(key: object, value: OptionValue) -> None:
    """Set a configuration option, asynchronously."""
    await write_to_socket(SocketType.COMMAND, _set_command(key, value))


def get_keyword(key: object) -> Keyword:
    """Read the current value of a configuration option."""
    data = write_to_socket_sync(SocketType.COMMAND, _get_command(key))
    return parse_option(_decode(data))


async def get_keyword_async(key: object) -> Keyword:
    """Read the current value of a configuration option, asynchronously."""
    data = await write_to_socket(SocketType.COMMAND, _get_command(key))
    return parse_option(_decode(data))