import socket
from typing import Any, Optional, Self, Sequence

import uvicorn
from uvicorn.supervisors import Multiprocess

from server_settings.config import Address
from server_settings.logging import get_logger

logger = get_logger(__name__)


class UvicornServerBuilder:
    """
    Конструктор сервера uvicorn, реализующий протокол ServerBuilder.

    Собирает параметры запуска и создает из них uvicorn.Config.
    Параметры, которые не были установлены, остаются значениями uvicorn по умолчанию.
    """

    def __init__(self, app: Any, **config_kwargs: Any) -> None:
        self.app: Any = app
        self.config_kwargs: dict[str, Any] = config_kwargs
        self.addresses: list[Address] = []

        # uvicorn has no equivalents for these, they are kept for introspection
        self.max_connection_rate: Optional[int] = None
        self.client_timeout: Optional[int] = None
        self.client_shutdown: Optional[int] = None

    def set_bind_addresses(self, addresses: Sequence[Address]) -> Self:
        self.addresses = list(addresses)
        return self

    def set_worker_count(self, workers: int) -> Self:
        self.config_kwargs["workers"] = workers
        return self

    def set_backlog(self, backlog: int) -> Self:
        self.config_kwargs["backlog"] = backlog
        return self

    def set_connection_limits(
        self,
        max_connections: Optional[int] = None,
        max_connection_rate: Optional[int] = None
    ) -> Self:
        if max_connections is not None:
            self.config_kwargs["limit_concurrency"] = max_connections

        if max_connection_rate is not None:
            logger.warning(
                f"uvicorn does not limit connection rate, max_connection_rate={max_connection_rate} is ignored"
            )
            self.max_connection_rate = max_connection_rate

        return self

    def set_keepalive(self, seconds: int) -> Self:
        self.config_kwargs["timeout_keep_alive"] = seconds
        return self

    def set_timeouts(
        self,
        client_timeout: Optional[int] = None,
        client_shutdown: Optional[int] = None
    ) -> Self:
        if client_timeout is not None:
            logger.warning(f"uvicorn has no client header timeout, client_timeout={client_timeout}ms is ignored")
            self.client_timeout = client_timeout

        if client_shutdown is not None:
            logger.warning(f"uvicorn has no client shutdown timeout, client_shutdown={client_shutdown}ms is ignored")
            self.client_shutdown = client_shutdown

        return self

    def set_shutdown_timeout(self, seconds: int) -> Self:
        self.config_kwargs["timeout_graceful_shutdown"] = seconds
        return self

    def build_config(self) -> uvicorn.Config:
        """
        Создает конфигурацию uvicorn. Адрес и порт берутся из первого адреса привязки.

        :return: Конфигурация сервера.
        """
        kwargs: dict[str, Any] = dict(self.config_kwargs)
        if self.addresses:
            kwargs["host"] = self.addresses[0].host
            kwargs["port"] = self.addresses[0].port

        return uvicorn.Config(self.app, **kwargs)

    def bind_sockets(self) -> list[socket.socket]:
        """
        Создает по одному сокету на каждый адрес привязки.

        :return: Привязанные сокеты.
        :raise OSError: Не удалось привязать один из адресов.
        """
        sockets: list[socket.socket] = []

        try:
            for address in self.addresses:
                family: socket.AddressFamily = socket.AF_INET6 if address.is_ipv6 else socket.AF_INET
                sock: socket.socket = socket.socket(family=family, type=socket.SOCK_STREAM)
                sockets.append(sock)

                sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
                sock.bind((address.host, address.port))
                sock.set_inheritable(True)

        except OSError:
            for sock in sockets:
                sock.close()

            raise

        return sockets

    def run(self) -> None:
        """
        Запускает сервер на всех адресах привязки.

        :return: Ничего.
        :raise ValueError: Несколько обработчиков запрошены для приложения, переданного не строкой импорта.
        """
        config: uvicorn.Config = self.build_config()
        if config.workers > 1 and not isinstance(self.app, str):
            raise ValueError("Running several workers requires the application as an import string")

        server: uvicorn.Server = uvicorn.Server(config)
        sockets: list[socket.socket] = self.bind_sockets()

        for address in self.addresses:
            logger.info(f"Listening on {address}")

        if config.workers > 1:
            Multiprocess(config, target=server.run, sockets=sockets).run()

        else:
            server.run(sockets=sockets)
