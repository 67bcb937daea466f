"""TOML backend."""

import datetime
import tomllib
from typing import Any

from ..exceptions import ConfigParseError
from ..exceptions import InternalConsistencyError
from ..value import INT64_MAX
from ..value import INT64_MIN
from ..value import Table
from ..value import Value


def parse(origin: str | None, text: str) -> Table:
    """Parse a TOML document into a root table.

    Offset and local date-times, dates and times are kept as ISO 8601 strings.

    Raises:
        ConfigParseError: If text is not valid TOML
    """
    try:
        document = tomllib.loads(text)
    except tomllib.TOMLDecodeError as e:
        raise ConfigParseError(str(e), origin) from e
    except RecursionError as e:
        raise ConfigParseError("document nested too deeply", origin) from e

    try:
        return {key: from_toml_value(origin, item) for key, item in document.items()}
    except RecursionError as e:
        raise ConfigParseError("document nested too deeply", origin) from e


def from_toml_value(origin: str | None, value: Any) -> Value:
    """Convert a decoded TOML value into a Value tree."""
    if isinstance(value, bool):
        return Value.boolean(value, origin)
    if isinstance(value, str):
        return Value.string(value, origin)
    if isinstance(value, int):
        if not INT64_MIN <= value <= INT64_MAX:
            raise ConfigParseError(f"integer out of range: {value}", origin)
        return Value.integer(value, origin)
    if isinstance(value, float):
        return Value.floating(value, origin)
    if isinstance(value, (datetime.datetime, datetime.date, datetime.time)):
        return Value.string(value.isoformat(), origin)
    if isinstance(value, dict):
        return Value.table({key: from_toml_value(origin, item) for key, item in value.items()}, origin)
    if isinstance(value, list):
        return Value.array((from_toml_value(origin, item) for item in value), origin)
    raise InternalConsistencyError(f"TOML decoder produced unsupported value of type {type(value).__name__}")
