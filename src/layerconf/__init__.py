"""layerconf: layered configuration from files, strings and the environment.

This library discovers configuration files, parses them in one of several
formats and assembles the result into an immutable, provenance-tagged value
tree.

Public API:
    FileSourceFile: Locates a file by logical name and selects its format
    FileSourceString: Configuration text supplied directly
    File: Source wrapping either of the above, with an optional/required flag
    Environment: Source collecting prefixed environment variables
    ConfigManager: Layers sources in priority order
    FileFormat: Compiled-in formats (TOML, JSON, YAML, INI)
    FormatRegistry: Ordered table of formats and their extensions
    Value, ValueKind: The value tree
    relative_path: Lexical path relativization used for display paths
    ConfigError and subclasses: Exception types

Example:
    ```python
    from layerconf import ConfigManager, Environment, File

    # ./Settings.toml, ./Settings.json, ... whichever exists first
    config = ConfigManager([
        File.with_name("Settings"),
        Environment.with_prefix("APP"),
    ])
    print(config.get_merged_settings())
    ```
"""

from .environment import Environment
from .exceptions import ConfigError
from .exceptions import ConfigIOError
from .exceptions import ConfigNotFoundError
from .exceptions import ConfigParseError
from .exceptions import InternalConsistencyError
from .exceptions import UnregisteredFormatError
from .formats import DEFAULT_REGISTRY
from .formats import FileFormat
from .formats import Format
from .formats import FormatRegistry
from .formats import build_default_registry
from .manager import ConfigManager
from .models import FileSourceResult
from .source import File
from .source import FileSourceFile
from .source import FileSourceString
from .utils import deep_merge
from .utils import relative_path
from .value import Value
from .value import ValueKind

__version__ = "0.1.0"

__all__ = [
    "ConfigManager",
    "Environment",
    "File",
    "FileSourceFile",
    "FileSourceString",
    "FileSourceResult",
    "FileFormat",
    "Format",
    "FormatRegistry",
    "DEFAULT_REGISTRY",
    "build_default_registry",
    "Value",
    "ValueKind",
    "deep_merge",
    "relative_path",
    "ConfigError",
    "ConfigNotFoundError",
    "UnregisteredFormatError",
    "ConfigIOError",
    "ConfigParseError",
    "InternalConsistencyError",
]
