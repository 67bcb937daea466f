"""Format backends and the format registry.

Every supported format is a member of the closed FileFormat enum, carrying its
parse function and recognized file extensions. The FormatRegistry is an ordered,
read-only table of (format, extensions) pairs used for extension-based format
inference and probing.

Registration order is part of the contract: when two formats claim the same
extension, the one registered first wins, both in lookup_by_extension and in
the resolver's probing loop.
"""

from collections.abc import Callable
from collections.abc import Iterable
from collections.abc import Iterator
from enum import Enum
from typing import Protocol
from typing import runtime_checkable

from ..value import Table
from . import ini_format
from . import json_format
from . import toml_format
from . import yaml_format


@runtime_checkable
class Format(Protocol):
    """Ingestion contract every format backend satisfies."""

    @property
    def extensions(self) -> tuple[str, ...]: ...

    def parse(self, origin: str | None, text: str) -> Table: ...


class FileFormat(Enum):
    """Compiled-in file formats."""

    TOML = "toml"
    JSON = "json"
    YAML = "yaml"
    INI = "ini"

    @property
    def extensions(self) -> tuple[str, ...]:
        """Recognized lowercase extensions, without the leading dot."""
        return _EXTENSIONS[self]

    def parse(self, origin: str | None, text: str) -> Table:
        """Parse text into a root table tagged with origin.

        Raises:
            ConfigParseError: If text is malformed for this format
        """
        return _PARSERS[self](origin, text)


_EXTENSIONS: dict[FileFormat, tuple[str, ...]] = {
    FileFormat.TOML: ("toml",),
    FileFormat.JSON: ("json",),
    FileFormat.YAML: ("yaml", "yml"),
    FileFormat.INI: ("ini",),
}

_PARSERS: dict[FileFormat, Callable[[str | None, str], Table]] = {
    FileFormat.TOML: toml_format.parse,
    FileFormat.JSON: json_format.parse,
    FileFormat.YAML: yaml_format.parse,
    FileFormat.INI: ini_format.parse,
}


class FormatRegistry:
    """Ordered table mapping formats to their recognized extensions.

    The registry is immutable after construction and safe to share between
    resolvers. Resolvers take it by injection so tests can substitute their own.

    Args:
        entries: (format, extensions) pairs in priority order
    """

    def __init__(self, entries: Iterable[tuple[Format, Iterable[str]]]):
        self._entries: tuple[tuple[Format, tuple[str, ...]], ...] = tuple(
            (fmt, tuple(extensions)) for fmt, extensions in entries
        )

    @classmethod
    def from_formats(cls, formats: Iterable[Format]) -> "FormatRegistry":
        """Build a registry from formats, using each format's own extensions."""
        return cls((fmt, fmt.extensions) for fmt in formats)

    def lookup_by_extension(self, ext: str) -> Format | None:
        """Return the first registered format recognizing ext.

        Matching is case-sensitive against the stored (lowercase) extensions;
        callers normalize case first.

        Args:
            ext: Extension without the leading dot

        Returns:
            The first matching format, or None
        """
        for fmt, extensions in self._entries:
            if ext in extensions:
                return fmt
        return None

    def all_extensions(self) -> list[tuple[Format, str]]:
        """Flatten the registry into (format, extension) pairs in probe order."""
        return [(fmt, ext) for fmt, extensions in self._entries for ext in extensions]

    def __iter__(self) -> Iterator[tuple[Format, tuple[str, ...]]]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"FormatRegistry({list(self._entries)!r})"


def build_default_registry() -> FormatRegistry:
    """Build the registry of every compiled-in format, in declaration order."""
    return FormatRegistry.from_formats(FileFormat)


DEFAULT_REGISTRY = build_default_registry()

__all__ = [
    "DEFAULT_REGISTRY",
    "FileFormat",
    "Format",
    "FormatRegistry",
    "build_default_registry",
]
