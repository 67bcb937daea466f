"""Configuration manager layering several sources into one value tree."""

import logging
from collections.abc import Sequence
from typing import Any
from typing import Protocol

from .utils import deep_merge
from .value import Table
from .value import Value
from .value import ValueKind
from .value import table_into_python

logger = logging.getLogger(__name__)


class Source(Protocol):
    """Anything that can be collected into a root table."""

    def collect(self) -> Table: ...


class ConfigManager:
    """Layers configuration sources in order.

    Sources are collected in the order given; each later source overrides the
    earlier ones. Nested tables merge key by key, any other value replaces
    what was there.

    Args:
        sources: Sources from lowest to highest priority

    Example:
        ```python
        from layerconf import ConfigManager, Environment, File

        config = ConfigManager([
            File.with_name("Settings"),
            Environment.with_prefix("APP"),
        ])
        debug = config.get("debug")
        ```
    """

    def __init__(self, sources: Sequence[Source]):
        self.sources = tuple(sources)

    # ===== Merged Settings =====

    def get_merged_table(self) -> dict[str, Value]:
        """Collect every source and merge them into a new root table.

        Raises:
            ConfigError: If any source fails to resolve or parse
        """
        merged: dict[str, Value] = {}

        for source in self.sources:
            table = source.collect()
            logger.info(f"Merging {len(table)} top-level keys from {source!r}")
            merged = deep_merge(merged, table)

        return merged

    def get_merged_settings(self) -> dict[str, Any]:
        """Get merged settings as plain Python data.

        Returns:
            Merged settings dictionary
        """
        return table_into_python(self.get_merged_table())

    def get(self, key: str) -> Value | None:
        """Look up a dotted key such as ``"database.url"``.

        Args:
            key: Dot-separated path through nested tables

        Returns:
            The Value found, or None if any segment is missing
        """
        return self._lookup(self.get_merged_table(), key.split("."))

    # ===== Private Helpers =====

    def _lookup(self, table: Table, path: list[str]) -> Value | None:
        value = table.get(path[0])
        if value is None or len(path) == 1:
            return value
        if value.kind is not ValueKind.TABLE:
            return None
        return self._lookup(value.payload, path[1:])
