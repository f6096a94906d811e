from typing import TypeVar

from server_settings.builders.server_builder import ServerBuilder
from server_settings.config import Settings

BuilderT = TypeVar("BuilderT", bound=ServerBuilder)


def apply_settings(settings: Settings, builder: BuilderT) -> BuilderT:
    """
    Применяет настройки к конструктору сервера.

    Каждое заданное поле приводит ровно к одному вызову конструктора,
    для незаданных необязательных полей вызов пропускается и конструктор сохраняет свое значение.

    :param settings: Проверенные настройки сервера.
    :param builder: Конструктор сервера.
    :return: Тот же конструктор для дальнейших вызовов.
    """
    builder = builder.set_bind_addresses(settings.hosts)

    if settings.workers is not None:
        builder = builder.set_worker_count(settings.workers)

    if settings.backlog is not None:
        builder = builder.set_backlog(settings.backlog)

    if settings.max_connections is not None:
        builder = builder.set_connection_limits(max_connections=settings.max_connections)

    if settings.max_connection_rate is not None:
        builder = builder.set_connection_limits(max_connection_rate=settings.max_connection_rate)

    if settings.keep_alive is not None:
        builder = builder.set_keepalive(settings.keep_alive)

    if settings.client_timeout is not None:
        builder = builder.set_timeouts(client_timeout=settings.client_timeout)

    if settings.client_shutdown is not None:
        builder = builder.set_timeouts(client_shutdown=settings.client_shutdown)

    if settings.shutdown_timeout is not None:
        builder = builder.set_shutdown_timeout(settings.shutdown_timeout)

    return builder
