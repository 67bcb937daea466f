"""Data models for layerconf."""

from dataclasses import dataclass
from typing import TYPE_CHECKING

from .value import Table

if TYPE_CHECKING:
    from .formats import Format


@dataclass(frozen=True)
class FileSourceResult:
    """Outcome of resolving a file source.

    Handed to the caller that requested resolution; resolvers keep no
    reference to it.

    Attributes:
        uri: Display path of the source (relative to the working directory
            when possible), or None for sources without a location
        content: Raw text, untouched, kept for error reporting
        format: Backend selected to parse content
    """

    uri: str | None
    content: str
    format: "Format"

    def parse(self) -> Table:
        """Parse content with the selected format, tagging values with uri."""
        return self.format.parse(self.uri, self.content)
