from typing import Optional, Protocol, Self, Sequence, runtime_checkable

from server_settings.config import Address


@runtime_checkable
class ServerBuilder(Protocol):
    """
    Конструктор HTTP сервера, к которому применяются настройки.
    Каждый метод изменяет конструктор и возвращает его для цепочки вызовов.
    """

    def set_bind_addresses(self, addresses: Sequence[Address]) -> Self:
        """
        Устанавливает адреса, на которых сервер принимает соединения.

        :param addresses: Адреса в порядке привязки.
        :return: Конструктор.
        """

    def set_worker_count(self, workers: int) -> Self:
        """
        Устанавливает количество обработчиков.

        :param workers: Количество обработчиков, больше 0.
        :return: Конструктор.
        """

    def set_backlog(self, backlog: int) -> Self:
        """
        Устанавливает размер очереди ожидающих подключений.

        :param backlog: Размер очереди.
        :return: Конструктор.
        """

    def set_connection_limits(
        self,
        max_connections: Optional[int] = None,
        max_connection_rate: Optional[int] = None
    ) -> Self:
        """
        Устанавливает ограничения на соединения. Незаданные ограничения не изменяются.

        :param max_connections: Максимум одновременных соединений на обработчик.
        :param max_connection_rate: Максимум одновременно устанавливаемых соединений на обработчик.
        :return: Конструктор.
        """

    def set_keepalive(self, seconds: int) -> Self:
        """
        Устанавливает время keep-alive.

        :param seconds: Время в секундах, 0 отключает keep-alive.
        :return: Конструктор.
        """

    def set_timeouts(
        self,
        client_timeout: Optional[int] = None,
        client_shutdown: Optional[int] = None
    ) -> Self:
        """
        Устанавливает время ожидания клиента. Незаданные значения не изменяются.

        :param client_timeout: Время ожидания заголовков первого запроса в миллисекундах.
        :param client_shutdown: Время закрытия соединения в миллисекундах.
        :return: Конструктор.
        """

    def set_shutdown_timeout(self, seconds: int) -> Self:
        """
        Устанавливает время плавной остановки обработчиков.

        :param seconds: Время в секундах.
        :return: Конструктор.
        """
