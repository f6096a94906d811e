from fastapi import FastAPI
from fastapi.middleware.gzip import GZipMiddleware

from server_settings.config import Settings

COMPRESSION_ENCODING: str = "gzip"
IDENTITY_ENCODING: str = "identity"


def content_encoding(settings: Settings) -> str:
    """
    Кодировка ответов, которую ожидают настройки.

    :param settings: Настройки сервера.
    :return: "gzip" при включенном сжатии, иначе "identity".
    """
    return COMPRESSION_ENCODING if settings.enable_compression else IDENTITY_ENCODING


def install_compression(app: FastAPI, settings: Settings) -> FastAPI:
    """
    Подключает сжатие ответов, если оно включено в настройках.

    :param app: Приложение FastAPI.
    :param settings: Настройки сервера.
    :return: То же приложение.
    """
    if settings.enable_compression:
        app.add_middleware(GZipMiddleware, minimum_size=1000, compresslevel=5)

    return app
