from server_settings.exceptions.settings_error import SettingsError


class FrozenSettingsError(SettingsError, TypeError):
    """
    Попытка изменить настройки после их публикации.
    """
    def __init__(self, model_name: str, field_name: str):
        self.model_name: str = model_name
        self.field_name: str = field_name
        super().__init__(f"{model_name} is frozen, can not assign {field_name!r}")
