"""Exceptions for layerconf."""

from pathlib import Path


class ConfigError(Exception):
    """Base exception for configuration errors."""

    pass


class ConfigNotFoundError(ConfigError):
    """No exact or extension-probed file exists for a logical name."""

    def __init__(self, name: str | Path):
        super().__init__(f'configuration file "{name}" not found')
        self.name = name


class UnregisteredFormatError(ConfigError):
    """A file exists but its extension matches no registered format."""

    def __init__(self, path: Path):
        super().__init__(f'configuration file "{path}" is not of a registered file format')
        self.path = path


class ConfigIOError(ConfigError):
    """Error determining the working directory or reading a configuration file."""

    def __init__(self, message: str, path: Path | None = None):
        super().__init__(message)
        self.path = path


class ConfigParseError(ConfigError):
    """A format backend could not parse the configuration text."""

    def __init__(self, message: str, uri: str | None = None):
        location = uri if uri is not None else "<string>"
        super().__init__(f"{location}: {message}")
        self.uri = uri


class InternalConsistencyError(RuntimeError):
    """An upstream parser broke one of its guarantees.

    This signals a defect, not bad input. It deliberately sits outside the
    ConfigError family so ``except ConfigError`` handlers never recover it.
    """

    pass
