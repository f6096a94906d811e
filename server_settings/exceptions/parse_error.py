from server_settings.exceptions.settings_error import SettingsError


class ParseError(SettingsError):
    """
    Текст настроек не является корректным TOML документом.
    """
    def __init__(self, message: str):
        super().__init__(message)
        self.message: str = message

    def __repr__(self) -> str:
        return f"ParseError(message={self.message!r})"
