from typing import Optional

from server_settings.exceptions.settings_error import SettingsError


class OverrideError(SettingsError):
    """
    Ошибка переопределения поля настроек.
    """


class InvalidValue(OverrideError):
    """
    Значение для переопределения не удалось привести к типу поля.

    :param field_name: Имя переопределяемого поля.
    :param value: Полученное текстовое значение.
    :param var_name: Имя переменной окружения, если значение взято из окружения.
    """
    def __init__(self, field_name: str, value: str, var_name: Optional[str] = None, reason: str = ""):
        self.field_name: str = field_name
        self.value: str = value
        self.var_name: Optional[str] = var_name
        self.reason: str = reason

        source: str = f"environment variable {var_name}" if var_name is not None else "override"
        message: str = f"Invalid value {value!r} from {source} for field {field_name!r}"
        if reason:
            message += f": {reason}"

        super().__init__(message)
