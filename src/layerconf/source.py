"""File-backed configuration sources.

FileSourceFile turns a logical name such as ``"Settings"`` into a concrete
path, format and content. The name is ambiguous until an extension is found or
confirmed, so resolution picks the file and the format together:

1. Exact match: ``<cwd>/<name>`` is a regular file. A format hint always wins;
   otherwise the file's extension must be registered.
2. Extension probing: the hint's extensions (or every registered extension, in
   registry order) replace the name's extension until an existing file turns up.
3. Nothing found: ConfigNotFoundError naming the original name.
"""

import logging
import os
from pathlib import Path
from typing import Protocol

from .exceptions import ConfigError
from .exceptions import ConfigIOError
from .exceptions import ConfigNotFoundError
from .exceptions import UnregisteredFormatError
from .formats import DEFAULT_REGISTRY
from .formats import Format
from .formats import FormatRegistry
from .models import FileSourceResult
from .utils import relative_path
from .value import Table

logger = logging.getLogger(__name__)


class FileSource(Protocol):
    """Anything that can produce text plus the format to parse it with."""

    def resolve(self, format_hint: Format | None = None) -> FileSourceResult: ...


def _current_dir() -> Path:
    try:
        return Path.cwd()
    except OSError as e:
        raise ConfigIOError(f"Failed to determine current directory: {e}") from e


class FileSourceFile:
    """Configuration file located on disk by logical name.

    Args:
        name: Path of the configuration file, with or without extension,
            relative to the current directory or absolute
        registry: Formats used for extension inference (default: every
            compiled-in format)
    """

    def __init__(self, name: str | os.PathLike[str], registry: FormatRegistry | None = None):
        self.name = Path(name)
        self.registry = registry if registry is not None else DEFAULT_REGISTRY

    def find_file(self, format_hint: Format | None = None) -> tuple[Path, Format]:
        """Locate the file and select its format.

        Args:
            format_hint: Format to use regardless of the file's extension

        Returns:
            Absolute path of the file and the format to parse it with

        Raises:
            UnregisteredFormatError: If an exact match has an unknown extension
                and no hint was given
            ConfigNotFoundError: If no candidate file exists
            ConfigIOError: If the current directory cannot be determined
        """
        filename = _current_dir() / self.name

        # Exact match
        if filename.is_file():
            if format_hint is not None:
                return filename, format_hint

            ext = filename.suffix[1:].lower()
            fmt = self.registry.lookup_by_extension(ext)
            if fmt is None:
                raise UnregisteredFormatError(filename)
            return filename, fmt

        # Extension probing
        if filename.name:
            if format_hint is not None:
                candidates = [(format_hint, ext) for ext in format_hint.extensions]
            else:
                candidates = self.registry.all_extensions()

            # "Settings." has an empty extension; replace it rather than append
            stem = filename
            if stem.name.endswith(".") and stem.name.strip("."):
                stem = stem.with_name(stem.name[:-1])

            for fmt, ext in candidates:
                candidate = stem.with_suffix(f".{ext}")
                logger.debug(f"Probing {candidate}")
                if candidate.is_file():
                    return candidate, fmt

        raise ConfigNotFoundError(self.name)

    def resolve(self, format_hint: Format | None = None) -> FileSourceResult:
        """Find, read and describe the configuration file.

        Args:
            format_hint: Format to use regardless of the file's extension

        Returns:
            Display uri, raw content and selected format

        Raises:
            ConfigNotFoundError: If no candidate file exists
            UnregisteredFormatError: If the file's format cannot be inferred
            ConfigIOError: If the file cannot be opened, read or decoded
        """
        filename, fmt = self.find_file(format_hint)

        # Prefer a path relative to the working directory for display
        uri = relative_path(filename, _current_dir())
        if uri is None:
            uri = filename

        try:
            with open(filename, encoding="utf-8") as f:
                content = f.read()
        except (OSError, UnicodeDecodeError) as e:
            raise ConfigIOError(f"Failed to read configuration from {filename}: {e}", filename) from e

        logger.info(f"Resolved configuration file {uri}")
        return FileSourceResult(uri=str(uri), content=content, format=fmt)

    def __repr__(self) -> str:
        return f"FileSourceFile({str(self.name)!r})"


class FileSourceString:
    """Configuration text supplied directly by the caller.

    Args:
        content: Complete document text
    """

    def __init__(self, content: str):
        self.content = content

    def resolve(self, format_hint: Format | None = None) -> FileSourceResult:
        """Wrap the text with the hinted format.

        Raises:
            ConfigError: If no format hint is given
        """
        if format_hint is None:
            raise ConfigError("A format is required to parse configuration from a string")
        return FileSourceResult(uri=None, content=self.content, format=format_hint)

    def __repr__(self) -> str:
        return f"FileSourceString(<{len(self.content)} chars>)"


class File:
    """Configuration source backed by a file or a string.

    Instances are immutable; ``required`` and ``format`` return new instances.

    Args:
        source: Where the text comes from
        format: Format hint passed to the source on resolution
        required: Whether a missing file is an error (default: True)

    Example:
        ```python
        table = File.with_name("Settings").required(False).collect()
        ```
    """

    def __init__(self, source: FileSource, format: Format | None = None, required: bool = True):
        self.source = source
        self.format_hint = format
        self.is_required = required

    @classmethod
    def with_name(cls, name: str | os.PathLike[str], registry: FormatRegistry | None = None) -> "File":
        """Source the file found for name, inferring its format."""
        return cls(FileSourceFile(name, registry))

    @classmethod
    def from_str(cls, content: str, format: Format) -> "File":
        """Source configuration text of the given format."""
        return cls(FileSourceString(content), format)

    def required(self, required: bool) -> "File":
        return File(self.source, self.format_hint, required)

    def format(self, format: Format) -> "File":
        return File(self.source, format, self.is_required)

    def collect(self) -> Table:
        """Resolve the source and parse it into a root table.

        Returns:
            Root table, or an empty table for a missing optional file

        Raises:
            ConfigError: On any resolution or parse failure
        """
        try:
            result = self.source.resolve(self.format_hint)
        except ConfigNotFoundError:
            if self.is_required:
                raise
            logger.debug(f"Optional configuration {self.source!r} not found - skipping")
            return {}

        return result.parse()

    def __repr__(self) -> str:
        return f"File({self.source!r}, format={self.format_hint!r}, required={self.is_required})"
