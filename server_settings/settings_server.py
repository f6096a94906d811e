from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any, AsyncGenerator, Optional

from dishka import AsyncContainer, make_async_container
from dishka.integrations.fastapi import DishkaRoute, FastapiProvider, setup_dishka
from fastapi import APIRouter, FastAPI

from server_settings.applier import apply_settings
from server_settings.builders import UvicornServerBuilder
from server_settings.compression import install_compression
from server_settings.config import Settings
from server_settings.loader import parse
from server_settings.logging import init_logging
from server_settings.overrides import override_from_environment
from server_settings.providers import SettingsProvider


class SettingsServer:
    """
    Сервер FastAPI, запускаемый uvicorn с параметрами из настроек.
    """
    app: FastAPI

    def __init__(
        self,
        settings: Settings,
        app: Optional[FastAPI] = None,
        import_string: Optional[str] = None,
        **fastapi_app_config: Any
    ) -> None:
        """
        :param settings: Настройки сервера, будут заморожены.
        :param app: Готовое приложение FastAPI, по умолчанию создается новое.
        :param import_string: Строка импорта вида "module:attribute", по которой
            процессы-обработчики получают приложение self.app. Обязательна при workers > 1.
        :param fastapi_app_config: Параметры приложения FastAPI.
        """
        self.settings: Settings = settings.freeze()
        init_logging(self.settings)

        self.app = app if app is not None else FastAPI(lifespan=self.lifespan, **fastapi_app_config)
        install_compression(self.app, self.settings)

        container: AsyncContainer = make_async_container(
            SettingsProvider(self.settings),
            FastapiProvider(),
        )
        setup_dishka(container=container, app=self.app)

        self.router: APIRouter = APIRouter(route_class=DishkaRoute)
        self.import_string: Optional[str] = import_string

        # A single worker runs the app object, several workers import it in their own processes
        target: FastAPI | str = self.app
        if import_string is not None and (self.settings.workers or 1) > 1:
            target = import_string

        self.builder: UvicornServerBuilder = apply_settings(self.settings, UvicornServerBuilder(target))

    @classmethod
    def from_file(
        cls,
        path: Path | str,
        env_prefix: Optional[str] = None,
        import_string: Optional[str] = None,
        **fastapi_app_config: Any
    ) -> "SettingsServer":
        """
        Загружает настройки из файла, переопределяет их из окружения и создает сервер.

        :param path: Путь до файла настроек.
        :param env_prefix: Префикс переменных окружения, например APPLICATION.
            Если не указан, переменные окружения не используются.
        :param import_string: Строка импорта приложения для нескольких процессов-обработчиков.
        :param fastapi_app_config: Параметры приложения FastAPI.
        :return: Сервер.
        :raise LoadError: Файл настроек не удалось загрузить.
        :raise InvalidValue: Значение переменной окружения не подходит полю.
        """
        settings: Settings = parse(path)
        if env_prefix is not None:
            override_from_environment(settings, env_prefix)

        return cls(settings, import_string=import_string, **fastapi_app_config)

    def register_routes(self, new_router: APIRouter, prefix: str = "") -> None:
        """
        Добавляет новые эндпоинты к основному роутеру.

        :param new_router: Новый роутер для включения.
        :param prefix: Префикс для добавления роута.
        :return: Ничего.
        """
        self.router.include_router(new_router, prefix=prefix)

    def finish_setup(self) -> None:
        """
        Завершает подготовку FastAPI сервера для работы.

        :return: Ничего.
        """
        self.app.include_router(self.router)

    @asynccontextmanager
    async def lifespan(self, app: FastAPI) -> AsyncGenerator[None, Any]:
        yield
        await app.state.dishka_container.close()

    def start(self) -> None:
        """
        Запускает сервер. При нескольких обработчиках каждый процесс импортирует
        приложение по import_string.

        :return: Ничего.
        :raise ValueError: workers > 1, но import_string не указана.
        """
        self.builder.run()
