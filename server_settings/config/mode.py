from enum import StrEnum


class Mode(StrEnum):
    """
    Режим работы сервера. Влияет только на выбор уровня подробности логов.

    Значения в файле настроек указываются строго в нижнем регистре.
    """
    development = "development"
    production = "production"

    @property
    def log_profile(self) -> str:
        """
        Уровень логирования для режима.

        :return: Название уровня логирования.
        """
        if self is Mode.production:
            return "INFO"

        return "DEBUG"
