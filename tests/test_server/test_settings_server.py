from pathlib import Path

import pytest
import uvicorn
from dishka import make_container
from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, FastAPI
from fastapi.responses import PlainTextResponse
from fastapi.testclient import TestClient

from server_settings.builders import UvicornServerBuilder
from server_settings.compression import content_encoding
from server_settings.config import Settings
from server_settings.providers import SettingsProvider
from server_settings.settings_server import SettingsServer


@pytest.fixture(autouse=True)
def reset(clean_logging):
    yield


@pytest.fixture()
def text_app() -> FastAPI:
    app: FastAPI = FastAPI()

    @app.get("/text")
    async def text() -> PlainTextResponse:
        return PlainTextResponse("compressible " * 500)

    return app


def test_content_encoding(minimal_settings: Settings, full_settings: Settings):
    assert content_encoding(minimal_settings) == "identity"
    assert content_encoding(full_settings) == "gzip"


def test_compression_enabled(full_settings: Settings, text_app: FastAPI):
    server: SettingsServer = SettingsServer(full_settings, app=text_app)

    response = TestClient(server.app).get("/text", headers={"Accept-Encoding": "gzip"})

    assert response.headers.get("content-encoding") == "gzip"


def test_compression_disabled(minimal_settings: Settings, text_app: FastAPI):
    minimal_settings.enable_log = False
    server: SettingsServer = SettingsServer(minimal_settings, app=text_app)

    response = TestClient(server.app).get("/text", headers={"Accept-Encoding": "gzip"})

    assert "content-encoding" not in response.headers


def test_server_freezes_settings(full_settings: Settings):
    server: SettingsServer = SettingsServer(full_settings)

    assert server.settings is full_settings
    assert full_settings.is_frozen


def test_server_applies_settings(full_settings: Settings):
    server: SettingsServer = SettingsServer(full_settings)

    assert server.builder.build_config().workers == 4
    assert [str(address) for address in server.builder.addresses] == ["0.0.0.0:9000", "localhost:9001"]


def test_server_from_file_with_environment(tmp_path: Path, monkeypatch):
    path: Path = tmp_path / "Server.toml"
    path.write_text('hosts = ["127.0.0.1:8000"]\nenable_log = false\n', encoding="utf-8")
    monkeypatch.setenv("SERVER_TEST__WORKERS", "3")

    server: SettingsServer = SettingsServer.from_file(path, env_prefix="SERVER_TEST")

    assert server.settings.workers == 3
    assert server.builder.build_config().workers == 3


def test_routes_receive_shared_settings(full_settings: Settings):
    server: SettingsServer = SettingsServer(full_settings)
    router: APIRouter = APIRouter(route_class=DishkaRoute)

    @router.get("/workers")
    async def workers(settings: FromDishka[Settings]) -> dict[str, int | None]:
        return {"workers": settings.workers}

    server.register_routes(router, prefix="/api")
    server.finish_setup()

    with TestClient(server.app) as client:
        assert client.get("/api/workers").json() == {"workers": 4}


def test_settings_provider_shares_one_instance(minimal_settings: Settings):
    container = make_container(SettingsProvider(minimal_settings))

    assert container.get(Settings) is minimal_settings
    assert container.get(Settings).is_frozen


def test_start_with_several_workers(full_settings: Settings, multiprocess):
    server: SettingsServer = SettingsServer(full_settings, import_string="application:app")

    server.start()

    assert len(multiprocess.started) == 1
    assert multiprocess.started[0].config.app == "application:app"
    assert multiprocess.started[0].config.workers == 4


def test_from_file_with_several_workers(tmp_path: Path, multiprocess):
    path: Path = tmp_path / "Server.toml"
    path.write_text('hosts = ["127.0.0.1:8000"]\nworkers = 4\nenable_log = false\n', encoding="utf-8")

    SettingsServer.from_file(path, import_string="application:app").start()

    assert multiprocess.started[0].config.workers == 4


def test_single_worker_runs_application_object(minimal_settings: Settings, monkeypatch):
    served: list[object] = []
    monkeypatch.setattr(UvicornServerBuilder, "bind_sockets", lambda self: [])
    monkeypatch.setattr(uvicorn.Server, "run", lambda self, sockets=None: served.append(self.config.app))

    server: SettingsServer = SettingsServer(minimal_settings, import_string="application:app")
    server.start()

    assert served == [server.app]
