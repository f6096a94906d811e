class SettingsError(Exception):
    """
    Базовая ошибка загрузки и применения настроек сервера.
    """
