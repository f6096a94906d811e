from dishka import Provider, Scope, provide

from server_settings.config import Settings


class SettingsProvider(Provider):
    """
    Предоставляет доступ к опубликованным настройкам сервера с помощью инжекции зависимостей.
    Все потребители получают один и тот же объект, доступный только для чтения.
    """

    def __init__(self, settings: Settings):
        super().__init__()
        self.settings: Settings = settings.freeze()

    @provide(scope=Scope.APP)
    def get_settings(self) -> Settings:
        return self.settings
