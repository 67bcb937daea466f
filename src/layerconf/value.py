"""Provenance-tagged value tree for parsed configuration data."""

from collections.abc import Iterable
from collections.abc import Mapping
from dataclasses import dataclass
from dataclasses import field
from enum import Enum
from types import MappingProxyType
from typing import Any

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1


class ValueKind(Enum):
    """Closed set of payload kinds a Value can carry."""

    NIL = "nil"
    BOOLEAN = "boolean"
    INTEGER = "integer"
    FLOAT = "float"
    STRING = "string"
    ARRAY = "array"
    TABLE = "table"


# Root of a parsed document: string keys to Values
Table = Mapping[str, "Value"]


@dataclass(frozen=True)
class Value:
    """A node of the configuration tree.

    Values are immutable: arrays are stored as tuples and tables as read-only
    mappings. The origin names the source the node was parsed from (usually a
    display path) and is ignored when comparing values, so two trees parsed
    from different files compare equal when their structure matches.

    Attributes:
        kind: Which variant the payload belongs to
        payload: The Python representation of the data (None for NIL)
        origin: Optional provenance string, inherited from the parse call
    """

    kind: ValueKind
    payload: Any = None
    origin: str | None = field(default=None, compare=False)

    def __post_init__(self):
        if self.kind is ValueKind.ARRAY and not isinstance(self.payload, tuple):
            object.__setattr__(self, "payload", tuple(self.payload or ()))
        elif self.kind is ValueKind.TABLE and not isinstance(self.payload, MappingProxyType):
            object.__setattr__(self, "payload", MappingProxyType(dict(self.payload or {})))

    @classmethod
    def new(cls, origin: str | None, kind: ValueKind, payload: Any = None) -> "Value":
        """Construct a Value tagged with origin."""
        return cls(kind=kind, payload=payload, origin=origin)

    @classmethod
    def nil(cls, origin: str | None = None) -> "Value":
        return cls(ValueKind.NIL, None, origin)

    @classmethod
    def boolean(cls, value: bool, origin: str | None = None) -> "Value":
        return cls(ValueKind.BOOLEAN, value, origin)

    @classmethod
    def integer(cls, value: int, origin: str | None = None) -> "Value":
        return cls(ValueKind.INTEGER, value, origin)

    @classmethod
    def floating(cls, value: float, origin: str | None = None) -> "Value":
        return cls(ValueKind.FLOAT, value, origin)

    @classmethod
    def string(cls, value: str, origin: str | None = None) -> "Value":
        return cls(ValueKind.STRING, value, origin)

    @classmethod
    def array(cls, values: Iterable["Value"], origin: str | None = None) -> "Value":
        return cls(ValueKind.ARRAY, tuple(values), origin)

    @classmethod
    def table(cls, entries: Mapping[str, "Value"], origin: str | None = None) -> "Value":
        return cls(ValueKind.TABLE, entries, origin)

    # ===== Typed Accessors =====

    def as_table(self) -> Table:
        return self._expect(ValueKind.TABLE)

    def as_array(self) -> tuple["Value", ...]:
        return self._expect(ValueKind.ARRAY)

    def as_str(self) -> str:
        return self._expect(ValueKind.STRING)

    def as_int(self) -> int:
        return self._expect(ValueKind.INTEGER)

    def as_float(self) -> float:
        """Return the payload as a float, widening INTEGER values."""
        if self.kind is ValueKind.INTEGER:
            return float(self.payload)
        return self._expect(ValueKind.FLOAT)

    def as_bool(self) -> bool:
        return self._expect(ValueKind.BOOLEAN)

    def is_nil(self) -> bool:
        return self.kind is ValueKind.NIL

    def into_python(self) -> Any:
        """Convert this Value into plain Python data.

        Tables become dicts, arrays become lists and scalars their payload.

        Returns:
            Plain Python representation with provenance dropped
        """
        if self.kind is ValueKind.TABLE:
            return {key: value.into_python() for key, value in self.payload.items()}
        if self.kind is ValueKind.ARRAY:
            return [value.into_python() for value in self.payload]
        return self.payload

    def _expect(self, kind: ValueKind) -> Any:
        if self.kind is not kind:
            raise TypeError(f"expected {kind.value} value, found {self.kind.value} (origin: {self.origin})")
        return self.payload


def table_into_python(table: Table) -> dict[str, Any]:
    """Convert a root table into a plain dictionary."""
    return {key: value.into_python() for key, value in table.items()}
