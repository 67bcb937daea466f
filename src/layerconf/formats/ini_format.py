"""INI backend.

Keys that appear before the first section header belong to the root table;
each section becomes a nested table of string values. Key case is preserved,
interpolation is disabled and ``[DEFAULT]`` is an ordinary section.
"""

import configparser

from ..exceptions import ConfigParseError
from ..value import Table
from ..value import Value

_ROOT_SECTION = "__root__"
# Never matches a real header, so no section inherits another's keys
_NO_DEFAULT_SECTION = "\x00"


def parse(origin: str | None, text: str) -> Table:
    """Parse an INI document into a root table.

    Raises:
        ConfigParseError: If text is not valid INI
    """
    parser = configparser.ConfigParser(
        interpolation=None,
        default_section=_NO_DEFAULT_SECTION,
        strict=False,
    )
    parser.optionxform = str  # type: ignore[assignment,method-assign]

    try:
        parser.read_string(f"[{_ROOT_SECTION}]\n{text}", source=origin or "<string>")
    except configparser.ParsingError as e:
        # Line numbers count the synthetic root header
        details = "; ".join(f"[line {lineno - 1}]: {line}" for lineno, line in e.errors)
        raise ConfigParseError(f"invalid INI syntax: {details}", origin) from e
    except configparser.Error as e:
        raise ConfigParseError(str(e), origin) from e

    root: dict[str, Value] = {}
    for section in parser.sections():
        entries = {key: Value.string(item, origin) for key, item in parser.items(section, raw=True)}
        if section == _ROOT_SECTION:
            root.update(entries)
        else:
            root[section] = Value.table(entries, origin)
    return root
