import socket

import pytest
import uvicorn
from fastapi import FastAPI

from server_settings.applier import apply_settings
from server_settings.builders import ServerBuilder, UvicornServerBuilder
from server_settings.config import Address, Settings


@pytest.fixture()
def builder() -> UvicornServerBuilder:
    return UvicornServerBuilder(FastAPI())


def test_uvicorn_builder_is_server_builder(builder: UvicornServerBuilder):
    assert isinstance(builder, ServerBuilder)


def test_full_settings_are_mapped(full_settings: Settings, builder: UvicornServerBuilder):
    config: uvicorn.Config = apply_settings(full_settings, builder).build_config()

    assert config.host == "0.0.0.0"
    assert config.port == 9000
    assert config.workers == 4
    assert config.backlog == 1024
    assert config.limit_concurrency == 500
    assert config.timeout_keep_alive == 10
    assert config.timeout_graceful_shutdown == 15


def test_options_without_uvicorn_equivalent_are_kept(full_settings: Settings, builder: UvicornServerBuilder):
    apply_settings(full_settings, builder)

    assert builder.max_connection_rate == 64
    assert builder.client_timeout == 3000
    assert builder.client_shutdown == 2000


def test_uvicorn_defaults_are_kept(minimal_settings: Settings, builder: UvicornServerBuilder):
    default_config: uvicorn.Config = uvicorn.Config(builder.app)
    config: uvicorn.Config = apply_settings(minimal_settings, builder).build_config()

    assert config.host == "127.0.0.1"
    assert config.port == 8080
    assert config.workers == default_config.workers
    assert config.backlog == default_config.backlog
    assert config.limit_concurrency == default_config.limit_concurrency
    assert config.timeout_keep_alive == default_config.timeout_keep_alive


def test_sockets_are_bound_for_every_address(builder: UvicornServerBuilder):
    builder.set_bind_addresses([
        Address(host="127.0.0.1", port=0),
        Address(host="127.0.0.1", port=0),
    ])

    sockets: list[socket.socket] = builder.bind_sockets()
    try:
        assert len(sockets) == 2
        assert all(sock.getsockname()[0] == "127.0.0.1" for sock in sockets)

    finally:
        for sock in sockets:
            sock.close()


def test_several_workers_run_import_string_in_processes(multiprocess):

    builder: UvicornServerBuilder = UvicornServerBuilder("application:app")
    builder.set_bind_addresses([Address(host="127.0.0.1", port=0)]).set_worker_count(3).run()

    assert len(multiprocess.started) == 1
    assert multiprocess.started[0].config.workers == 3
    assert multiprocess.started[0].config.app == "application:app"


def test_application_object_with_several_workers_binds_nothing(builder: UvicornServerBuilder, monkeypatch):
    bound: list[bool] = []
    monkeypatch.setattr(UvicornServerBuilder, "bind_sockets", lambda self: bound.append(True) or [])
    builder.set_bind_addresses([Address(host="127.0.0.1", port=0)]).set_worker_count(2)

    with pytest.raises(ValueError):
        builder.run()

    assert bound == []
