"""YAML backend, built on PyYAML's safe loader."""

import datetime
import logging
from typing import Any

import yaml

from ..exceptions import ConfigParseError
from ..exceptions import InternalConsistencyError
from ..value import INT64_MAX
from ..value import INT64_MIN
from ..value import Table
from ..value import Value
from ..value import ValueKind

logger = logging.getLogger(__name__)


def parse(origin: str | None, text: str) -> Table:
    """Parse a single YAML document into a root table.

    An empty document, or one whose root is not a mapping, yields an empty
    table. Mapping keys that are not strings (numbers, booleans) are converted
    to their string form.

    Raises:
        ConfigParseError: If text is not valid YAML or holds several documents
    """
    try:
        document = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ConfigParseError(str(e), origin) from e
    except RecursionError as e:
        raise ConfigParseError("document nested too deeply", origin) from e

    if document is None:
        return {}

    try:
        value = from_yaml_value(origin, document)
    except RecursionError as e:
        raise ConfigParseError("document nested too deeply", origin) from e

    if value.kind is not ValueKind.TABLE:
        logger.debug(f"YAML root of {origin} is {value.kind.value}, not a table - using empty table")
        return {}
    return dict(value.payload)


def _key_to_str(key: Any) -> str:
    if isinstance(key, bool):
        return "true" if key else "false"
    if key is None:
        return "null"
    return str(key)


def from_yaml_value(origin: str | None, value: Any) -> Value:
    """Convert a loaded YAML value into a Value tree."""
    if value is None:
        return Value.nil(origin)
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
    if isinstance(value, (datetime.datetime, datetime.date)):
        return Value.string(value.isoformat(), origin)
    if isinstance(value, bytes):
        raise ConfigParseError("binary values are not supported", origin)
    if isinstance(value, dict):
        return Value.table({_key_to_str(key): from_yaml_value(origin, item) for key, item in value.items()}, origin)
    if isinstance(value, (list, set)):
        return Value.array((from_yaml_value(origin, item) for item in value), origin)
    raise InternalConsistencyError(f"YAML loader produced unsupported value of type {type(value).__name__}")
