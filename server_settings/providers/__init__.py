from .settings_provider import SettingsProvider

__all__ = (
    "SettingsProvider",
)
