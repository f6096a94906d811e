from typing import ClassVar, Optional

from pydantic import ConfigDict, Field

from server_settings.config.address import Address
from server_settings.config.freezable_model import FreezableModel
from server_settings.config.mode import Mode


class Settings(FreezableModel):
    """
    Хранит настройки сервера, которые применяются к конструктору HTTP сервера.

    Необязательные параметры, равные None, не передаются серверу:
    в этом случае используется значение сервера по умолчанию.
    Числовые параметры и флаги проверяются строго: строки, дробные числа
    и булевы значения вместо целых чисел отклоняются.
    """
    model_config: ClassVar[ConfigDict] = ConfigDict(
        extra="forbid",
        validate_assignment=True,
    )

    hosts: tuple[Address, ...] = Field(
        min_length=1,
        description="Адреса и порты, на которых сервер принимает соединения"
    )
    mode: Mode = Field(default=Mode.development)
    enable_compression: bool = Field(
        default=False, strict=True,
        description="Включает сжатие ответов gzip, иначе ответы отдаются без сжатия"
    )
    enable_log: bool = Field(
        default=True, strict=True,
        description="Включает инициализацию логирования"
    )

    workers: Optional[int] = Field(
        default=None, ge=1, strict=True,
        description="Количество процессов-обработчиков"
    )
    backlog: Optional[int] = Field(
        default=None, ge=0, strict=True,
        description="Максимальное количество ожидающих подключений"
    )
    max_connections: Optional[int] = Field(
        default=None, ge=0, strict=True,
        description="Максимальное количество одновременных соединений на обработчик"
    )
    max_connection_rate: Optional[int] = Field(
        default=None, ge=0, strict=True,
        description="Максимальное количество одновременно устанавливаемых соединений на обработчик"
    )
    keep_alive: Optional[int] = Field(
        default=None, ge=0, strict=True,
        description="Время keep-alive в секундах, 0 отключает keep-alive"
    )
    client_timeout: Optional[int] = Field(
        default=None, ge=0, strict=True,
        description="Время ожидания заголовков первого запроса в миллисекундах"
    )
    client_shutdown: Optional[int] = Field(
        default=None, ge=0, strict=True,
        description="Время на закрытие соединения с клиентом в миллисекундах"
    )
    shutdown_timeout: Optional[int] = Field(
        default=None, ge=0, strict=True,
        description="Время на плавную остановку обработчиков в секундах"
    )
