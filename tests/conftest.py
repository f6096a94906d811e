from typing import Any, Optional, Self, Sequence

import pytest

from server_settings.builders import UvicornServerBuilder, uvicorn_builder
from server_settings.config import Address, Settings
from server_settings.logging import reset_logging
from server_settings.schema import from_toml

FULL_SETTINGS_TOML: str = """
hosts = [["0.0.0.0", 9000], "localhost:9001"]
mode = "production"
enable_compression = true
enable_log = false
workers = 4
backlog = 1024
max_connections = 500
max_connection_rate = 64
keep_alive = 10
client_timeout = 3000
client_shutdown = 2000
shutdown_timeout = 15
"""

MINIMAL_SETTINGS_TOML: str = """
hosts = [["127.0.0.1", 8080]]
"""


class RecordingBuilder:
    """
    Конструктор сервера, который записывает все вызовы.
    """

    def __init__(self) -> None:
        self.calls: list[tuple[str, tuple[Any, ...], dict[str, Any]]] = []

    def record(self, name: str, *args: Any, **kwargs: Any) -> Self:
        self.calls.append((name, args, kwargs))
        return self

    def calls_named(self, name: str) -> list[tuple[str, tuple[Any, ...], dict[str, Any]]]:
        return [call for call in self.calls if call[0] == name]

    def set_bind_addresses(self, addresses: Sequence[Address]) -> Self:
        return self.record("set_bind_addresses", list(addresses))

    def set_worker_count(self, workers: int) -> Self:
        return self.record("set_worker_count", workers)

    def set_backlog(self, backlog: int) -> Self:
        return self.record("set_backlog", backlog)

    def set_connection_limits(
        self,
        max_connections: Optional[int] = None,
        max_connection_rate: Optional[int] = None
    ) -> Self:
        kwargs: dict[str, int] = {}
        if max_connections is not None:
            kwargs["max_connections"] = max_connections

        if max_connection_rate is not None:
            kwargs["max_connection_rate"] = max_connection_rate

        return self.record("set_connection_limits", **kwargs)

    def set_keepalive(self, seconds: int) -> Self:
        return self.record("set_keepalive", seconds)

    def set_timeouts(
        self,
        client_timeout: Optional[int] = None,
        client_shutdown: Optional[int] = None
    ) -> Self:
        kwargs: dict[str, int] = {}
        if client_timeout is not None:
            kwargs["client_timeout"] = client_timeout

        if client_shutdown is not None:
            kwargs["client_shutdown"] = client_shutdown

        return self.record("set_timeouts", **kwargs)

    def set_shutdown_timeout(self, seconds: int) -> Self:
        return self.record("set_shutdown_timeout", seconds)


class RecordingMultiprocess:
    """
    Заменяет uvicorn Multiprocess: запоминает запуск вместо создания процессов.
    """
    started: list["RecordingMultiprocess"] = []

    def __init__(self, config: Any, target: Any, sockets: list[Any]) -> None:
        self.config = config
        self.target = target
        self.sockets = sockets

    def run(self) -> None:
        self.started.append(self)


@pytest.fixture()
def full_settings() -> Settings:
    return from_toml(FULL_SETTINGS_TOML)


@pytest.fixture()
def minimal_settings() -> Settings:
    return from_toml(MINIMAL_SETTINGS_TOML)


@pytest.fixture()
def recording_builder() -> RecordingBuilder:
    return RecordingBuilder()


@pytest.fixture()
def clean_logging():
    reset_logging()
    yield
    reset_logging()


@pytest.fixture()
def multiprocess(monkeypatch) -> type[RecordingMultiprocess]:
    RecordingMultiprocess.started = []
    monkeypatch.setattr(uvicorn_builder, "Multiprocess", RecordingMultiprocess)
    monkeypatch.setattr(UvicornServerBuilder, "bind_sockets", lambda self: [])
    return RecordingMultiprocess
