from .frozen_settings_error import FrozenSettingsError
from .load_error import LoadError, LoadIOError, LoadParseError
from .override_error import InvalidValue, OverrideError
from .parse_error import ParseError
from .schema_error import SchemaError
from .settings_error import SettingsError
from .settings_file_exists import SettingsFileExists

__all__ = (
    "SettingsError",
    "ParseError",
    "SchemaError",
    "LoadError",
    "LoadIOError",
    "LoadParseError",
    "OverrideError",
    "InvalidValue",
    "FrozenSettingsError",
    "SettingsFileExists",
)
