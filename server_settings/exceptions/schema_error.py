from typing import Any

from server_settings.exceptions.settings_error import SettingsError


class SchemaError(SettingsError):
    """
    Документ синтаксически верен, но не соответствует схеме настроек:
    отсутствуют обязательные поля, значения вне допустимых границ или неизвестные ключи.
    """
    def __init__(self, errors: list[dict[str, Any]]):
        self.errors: list[dict[str, Any]] = errors
        super().__init__(self.describe())

    def describe(self) -> str:
        """
        Собирает читаемое описание всех ошибок валидации.

        :return: Сообщение ошибки.
        """
        details: list[str] = []
        for error in self.errors:
            location: str = ".".join(str(part) for part in error.get("loc", ())) or "<root>"
            details.append(f"{location}: {error.get('msg', 'invalid value')}")

        return "Settings do not match schema: " + "; ".join(details)
