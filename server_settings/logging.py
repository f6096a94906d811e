"""
Инициализация логирования на основе настроек сервера.

Логирование настраивается не более одного раза за время жизни процесса.
"""
import sys
from typing import TYPE_CHECKING, Any

from loguru import logger

from server_settings.config import Settings

if TYPE_CHECKING:
    import loguru

LOG_FORMAT: str = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{extra[name]}</cyan> - <level>{message}</level>"
)
DEFAULT_LOGGER_NAME: str = "server_settings"

_configured: bool = False


def configure_logger(level: str = "INFO", sink: Any = None) -> None:
    """
    Заменяет обработчики loguru одним обработчиком с указанным уровнем.

    :param level: Уровень логирования.
    :param sink: Куда писать логи, по умолчанию stderr.
    :return: Ничего.
    """
    logger.remove()
    logger.configure(extra={"name": DEFAULT_LOGGER_NAME})
    logger.add(sink if sink is not None else sys.stderr, level=level, format=LOG_FORMAT)


def init_logging(settings: Settings, sink: Any = None) -> bool:
    """
    Настраивает логирование, если оно включено в настройках.
    Уровень логирования выбирается по режиму работы сервера.

    :param settings: Настройки сервера.
    :param sink: Куда писать логи, по умолчанию stderr.
    :return: Было ли логирование настроено этим вызовом.
    """
    global _configured

    if not settings.enable_log or _configured:
        return False

    configure_logger(settings.mode.log_profile, sink)
    _configured = True
    return True


def is_logging_configured() -> bool:
    return _configured


def get_logger(name: str) -> "loguru.Logger":
    return logger.bind(name=name)


def reset_logging() -> None:
    """
    Возвращает loguru в исходное состояние, чтобы логирование можно было настроить снова.

    :return: Ничего.
    """
    global _configured

    logger.remove()
    logger.configure(extra={"name": DEFAULT_LOGGER_NAME})
    logger.add(sys.stderr)
    _configured = False
