from pathlib import Path

from server_settings.exceptions.settings_error import SettingsError


class SettingsFileExists(SettingsError, FileExistsError):
    """
    Файл настроек уже существует и не будет перезаписан шаблоном.
    """
    def __init__(self, path: Path):
        self.path: Path = path
        super().__init__(f"Settings file already exists: {path}")
