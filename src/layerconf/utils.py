"""Utility functions for layerconf."""

import os
from pathlib import Path
from pathlib import PurePath

from .value import Table
from .value import Value
from .value import ValueKind


def deep_merge(base: Table, overlay: Table) -> dict[str, Value]:
    """Deep merge two value tables with overlay precedence.

    Recursively merges nested tables. Non-table values in overlay completely
    replace corresponding values in base. Merged tables keep the overlay's
    origin.

    Args:
        base: Base table
        overlay: Overlay table (takes precedence)

    Returns:
        New merged table (base and overlay are not modified)

    Examples:
        >>> base = {"a": Value.integer(1), "b": Value.table({"c": Value.integer(2)})}
        >>> overlay = {"b": Value.table({"d": Value.integer(3)})}
        >>> sorted(deep_merge(base, overlay)["b"].as_table())
        ['c', 'd']
    """
    result = dict(base)

    for key, value in overlay.items():
        existing = result.get(key)
        if existing is not None and existing.kind is ValueKind.TABLE and value.kind is ValueKind.TABLE:
            # Both sides hold a table at this key - recurse
            result[key] = Value.table(deep_merge(existing.payload, value.payload), value.origin)
        else:
            # Overlay wins - replace completely
            result[key] = value

    return result


def _components(path: str | os.PathLike[str]) -> list[str]:
    """Split path into components, keeping a leading current-directory marker."""
    parts = list(PurePath(path).parts)
    text = os.fspath(path)
    prefixes = tuple(os.curdir + sep for sep in (os.sep, os.altsep) if sep)
    if text == os.curdir or text.startswith(prefixes):
        parts.insert(0, os.curdir)
    return parts


def relative_path(path: str | os.PathLike[str], base: str | os.PathLike[str]) -> Path | None:
    """Express path relative to base.

    Purely lexical: the filesystem is never consulted and symlinks are not
    resolved.

    - An absolute path against a relative base is returned unchanged.
    - A relative path against an absolute base cannot be expressed: None.
    - A ``..`` in base after the paths diverge makes the result ambiguous: None.

    Args:
        path: Path to express
        base: Directory to express it from

    Returns:
        The relative path, or None when there is no valid relative form. Callers
        fall back to the absolute path on None.

    Examples:
        >>> relative_path("/home/u/project/Settings.toml", "/home/u/project")
        PosixPath('Settings.toml')
        >>> relative_path("/home/u/other/a.json", "/home/u/project")
        PosixPath('../other/a.json')
        >>> relative_path("config/app.json", "/abs/base") is None
        True
    """
    if PurePath(path).is_absolute() != PurePath(base).is_absolute():
        if PurePath(path).is_absolute():
            return Path(path)
        return None

    path_parts = iter(_components(path))
    base_parts = iter(_components(base))
    comps: list[str] = []

    while True:
        a = next(path_parts, None)
        b = next(base_parts, None)

        if a is None and b is None:
            break
        if b is None:
            # Base exhausted - the rest of path follows directly
            comps.append(a)
            comps.extend(path_parts)
            break
        if a is None:
            comps.append(os.pardir)
            continue
        if not comps and a == b:
            continue
        if b == os.curdir:
            comps.append(a)
            continue
        if b == os.pardir:
            return None

        # Diverged: climb out of what is left of base, then descend into path
        comps.append(os.pardir)
        comps.extend(os.pardir for _ in base_parts)
        comps.append(a)
        comps.extend(path_parts)
        break

    return Path(*comps)
