import tomllib
from pathlib import Path
from typing import Any, TypeVar

import tomli_w
from pydantic import BaseModel, ValidationError

from server_settings.config import Settings
from server_settings.exceptions import ParseError, SchemaError, SettingsFileExists

SchemaT = TypeVar("SchemaT", bound=BaseModel)

DEFAULT_TEMPLATE: str = """\
# Server settings.
# Optional tunables that are not set keep the HTTP server defaults.

hosts = [
    ["0.0.0.0", 9000],     # Either ["address", port] pairs or "address:port" strings.
]
mode = "development"       # Either "development" or "production" (lower case).
enable_compression = false # Compress responses with gzip.
enable_log = true          # Initialize logging on startup.

# The number of worker processes, an integer > 0.
# workers = 4

# The maximum number of pending connections.
# backlog = 2048

# The maximum per-worker number of concurrent connections.
# max_connections = 25000

# The maximum per-worker number of connections being established at once.
# max_connection_rate = 256

# Keep-alive in seconds, 0 disables keep-alive.
# keep_alive = 5

# Timeout for reading the first request headers, in milliseconds.
# client_timeout = 5000

# Timeout for connection shutdown, in milliseconds.
# client_shutdown = 5000

# Time for graceful workers shutdown, in seconds.
# shutdown_timeout = 30
"""


def from_toml(text: str, schema: type[SchemaT] = Settings) -> SchemaT:  # type: ignore[assignment]
    """
    Разбирает текст TOML в модель настроек.

    :param text: Текст документа.
    :param schema: Модель настроек, по умолчанию Settings.
    :return: Объект настроек.
    :raise ParseError: Текст не является корректным TOML.
    :raise SchemaError: Документ не соответствует схеме настроек.
    """
    try:
        data: dict[str, Any] = tomllib.loads(text)

    except tomllib.TOMLDecodeError as err:
        raise ParseError(str(err)) from err

    try:
        return schema.model_validate(data)

    except ValidationError as err:
        raise SchemaError(err.errors(include_url=False)) from err


def to_toml(settings: BaseModel) -> str:
    """
    Сериализует настройки в TOML. Незаданные необязательные поля не записываются.

    :param settings: Объект настроек.
    :return: Текст документа.
    """
    return tomli_w.dumps(settings.model_dump(mode="json", exclude_none=True))


def from_template(template: str, schema: type[SchemaT] = Settings) -> SchemaT:  # type: ignore[assignment]
    return from_toml(template, schema)


def from_default_template() -> Settings:
    """
    Создает настройки из шаблона по умолчанию.

    :return: Объект настроек.
    """
    return from_toml(DEFAULT_TEMPLATE)


def write_template(path: Path, template: str = DEFAULT_TEMPLATE) -> None:
    """
    Записывает шаблон настроек в новый файл.

    :param path: Путь до нового файла.
    :param template: Текст шаблона.
    :return: Ничего.
    :raise SettingsFileExists: Файл уже существует.
    """
    try:
        with open(path, mode="x", encoding="utf-8") as f:
            f.write(template)

    except FileExistsError as err:
        raise SettingsFileExists(path) from err
