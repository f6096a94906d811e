from pathlib import Path

from server_settings.exceptions.settings_error import SettingsError


class LoadError(SettingsError):
    """
    Не удалось загрузить файл настроек.

    :param path: Путь до файла настроек.
    :param cause: Исходная ошибка.
    """
    def __init__(self, path: Path, cause: BaseException):
        self.path: Path = path
        self.cause: BaseException = cause
        super().__init__(f"Failed to load settings from {path}: {cause}")


class LoadIOError(LoadError):
    """
    Файл настроек невозможно прочитать (не существует, нет прав, является директорией).
    """


class LoadParseError(LoadError):
    """
    Файл прочитан, но его содержимое не удалось разобрать в настройки.
    Причина - ParseError или SchemaError.
    """
