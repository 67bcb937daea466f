"""Environment variable configuration source."""

import logging
import os
from collections.abc import Mapping
from typing import Any

from .value import Table
from .value import Value

logger = logging.getLogger(__name__)

ENVIRONMENT_ORIGIN = "the environment"


class Environment:
    """Collects configuration from environment variables.

    With a prefix of ``APP``, ``APP_DEBUG=1`` sets the ``debug`` key. With a
    separator of ``__``, ``APP_DATABASE__URL`` sets ``url`` inside the
    ``database`` table. Keys are lowercased and every value is a string.

    Args:
        prefix: Only variables starting with this prefix are collected, and the
            prefix is stripped from their keys (matched case-insensitively)
        separator: Splits keys into nested tables when set
        prefix_separator: Text between prefix and key (default: "_")
        ignore_empty: Skip variables whose value is empty
        source: Variables to read instead of os.environ
    """

    def __init__(
        self,
        prefix: str | None = None,
        separator: str | None = None,
        prefix_separator: str = "_",
        ignore_empty: bool = False,
        source: Mapping[str, str] | None = None,
    ):
        self.prefix = prefix
        self.separator = separator
        self.prefix_separator = prefix_separator
        self.ignore_empty = ignore_empty
        self.source = source

    @classmethod
    def with_prefix(cls, prefix: str) -> "Environment":
        return cls(prefix=prefix)

    def collect(self) -> Table:
        """Build a root table from the matching variables.

        Returns:
            Table of string values tagged with the environment origin
        """
        variables = self.source if self.source is not None else os.environ
        pattern = f"{self.prefix}{self.prefix_separator}".lower() if self.prefix else ""
        tree: dict[str, Any] = {}

        for name, value in variables.items():
            if self.ignore_empty and not value:
                continue

            key = name.lower()
            if pattern:
                if not key.startswith(pattern):
                    continue
                key = key[len(pattern) :]

            path = key.split(self.separator.lower()) if self.separator else [key]
            if not all(path):
                logger.debug(f"Skipping environment variable {name}: empty key segment")
                continue

            node = tree
            for segment in path[:-1]:
                child = node.get(segment)
                if not isinstance(child, dict):
                    child = node[segment] = {}
                node = child
            node[path[-1]] = value

        return {key: _to_value(item) for key, item in tree.items()}


def _to_value(item: dict[str, Any] | str) -> Value:
    if isinstance(item, dict):
        return Value.table({key: _to_value(child) for key, child in item.items()}, ENVIRONMENT_ORIGIN)
    return Value.string(item, ENVIRONMENT_ORIGIN)
