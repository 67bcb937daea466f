"""JSON backend."""

import json
import logging
import math
from typing import Any

from ..exceptions import ConfigParseError
from ..exceptions import InternalConsistencyError
from ..value import INT64_MAX
from ..value import INT64_MIN
from ..value import Table
from ..value import Value
from ..value import ValueKind

logger = logging.getLogger(__name__)


def _reject_constant(name: str) -> Any:
    raise ValueError(f"invalid number literal {name!r}")


def _parse_float(literal: str) -> float:
    value = float(literal)
    if not math.isfinite(value):
        raise ValueError(f"number out of range: {literal}")
    return value


def parse(origin: str | None, text: str) -> Table:
    """Parse a JSON document into a root table.

    A document whose root is not an object yields an empty table.

    Args:
        origin: Provenance tag copied onto every produced Value
        text: Complete document text

    Returns:
        Root table of the document

    Raises:
        ConfigParseError: If text is not valid JSON
    """
    try:
        document = json.loads(text, parse_float=_parse_float, parse_constant=_reject_constant)
    except ValueError as e:
        raise ConfigParseError(str(e), origin) from e
    except RecursionError as e:
        raise ConfigParseError("document nested too deeply", origin) from e

    try:
        value = from_json_value(origin, document)
    except RecursionError as e:
        raise ConfigParseError("document nested too deeply", origin) from e

    if value.kind is not ValueKind.TABLE:
        logger.debug(f"JSON root of {origin} is {value.kind.value}, not a table - using empty table")
        return {}
    return dict(value.payload)


def from_json_value(origin: str | None, value: Any) -> Value:
    """Convert a decoded JSON value into a Value tree."""
    if value is None:
        return Value.nil(origin)
    # bool before int: bool is an int subclass
    if isinstance(value, bool):
        return Value.boolean(value, origin)
    if isinstance(value, str):
        return Value.string(value, origin)
    if isinstance(value, int):
        if INT64_MIN <= value <= INT64_MAX:
            return Value.integer(value, origin)
        try:
            return Value.floating(float(value), origin)
        except OverflowError as e:
            raise ConfigParseError(f"number out of range: {value}", origin) from e
    if isinstance(value, float):
        return Value.floating(value, origin)
    if isinstance(value, dict):
        return Value.table({key: from_json_value(origin, item) for key, item in value.items()}, origin)
    if isinstance(value, list):
        return Value.array((from_json_value(origin, item) for item in value), origin)
    raise InternalConsistencyError(f"JSON decoder produced unsupported value of type {type(value).__name__}")
