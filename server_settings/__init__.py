from server_settings.applier import apply_settings
from server_settings.builders import ServerBuilder, UvicornServerBuilder
from server_settings.config import DEFAULT_PORT, Address, FreezableModel, Mode, Settings
from server_settings.loader import parse
from server_settings.logging import init_logging
from server_settings.overrides import override_field, override_field_with_value, override_from_environment
from server_settings.schema import (
    DEFAULT_TEMPLATE,
    from_default_template,
    from_template,
    from_toml,
    to_toml,
    write_template,
)

__version__ = "0.1.0"

__all__ = (
    "Address",
    "DEFAULT_PORT",
    "DEFAULT_TEMPLATE",
    "FreezableModel",
    "Mode",
    "ServerBuilder",
    "Settings",
    "UvicornServerBuilder",
    "apply_settings",
    "from_default_template",
    "from_template",
    "from_toml",
    "init_logging",
    "override_field",
    "override_field_with_value",
    "override_from_environment",
    "parse",
    "to_toml",
    "write_template",
)
