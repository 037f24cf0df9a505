"""Тесты DockerClientWrapper и преобразования ошибок."""

from __future__ import annotations

import pytest
from docker.errors import APIError, DockerException
from requests.exceptions import ConnectionError as RequestsConnectionError

from containerctl.connections.models import Connection
from containerctl.docker_api import client as client_module
from containerctl.docker_api.client import DockerClientWrapper
from containerctl.docker_api.exceptions import (
    DockerConnectionError,
    DockerOperationError,
    wrap_docker_error,
)


def test_create_client_uses_connection(monkeypatch: pytest.MonkeyPatch) -> None:
    captured = {}

    def fake_api_client(**kwargs):
        captured.update(kwargs)
        return object()

    monkeypatch.setattr(client_module.docker, "APIClient", fake_api_client)
    DockerClientWrapper(Connection(socket="tcp://10.0.0.5:2375", timeout=30, api_version="1.43"))
    assert captured == {"base_url": "tcp://10.0.0.5:2375", "version": "1.43", "timeout": 30}


def test_create_client_unreachable_daemon(monkeypatch: pytest.MonkeyPatch) -> None:
    def unreachable(**kwargs):
        raise DockerException("Error while fetching server API version")

    monkeypatch.setattr(client_module.docker, "APIClient", unreachable)
    with pytest.raises(DockerConnectionError) as excinfo:
        DockerClientWrapper(Connection(socket="unix:///tmp/missing.sock"))
    assert excinfo.value.endpoint == "unix:///tmp/missing.sock"


def test_context_manager_closes_client(wrapper: DockerClientWrapper, fake_api) -> None:
    with wrapper as client:
        assert client is wrapper
        assert fake_api.closed is False
    assert fake_api.closed is True


def test_close_failure_is_only_logged(
    wrapper: DockerClientWrapper, fake_api, caplog: pytest.LogCaptureFixture
) -> None:
    def broken_close() -> None:
        raise RequestsConnectionError("connection reset")

    fake_api.close = broken_close
    caplog.set_level("WARNING")
    wrapper.close()
    assert "Failed to close Docker client" in caplog.text


def test_wrap_api_error_keeps_explanation() -> None:
    error = wrap_docker_error(
        APIError("409 Client Error", explanation='Conflict. The container name "/demo" is in use'),
        operation="create container",
        target="busybox",
        endpoint="unix:///var/run/docker.sock",
    )
    assert isinstance(error, DockerOperationError)
    assert error.reason == 'Conflict. The container name "/demo" is in use'


def test_wrap_connection_error() -> None:
    error = wrap_docker_error(
        RequestsConnectionError("refused"),
        operation="stop container",
        target="abc",
        endpoint="tcp://127.0.0.1:2375",
    )
    assert isinstance(error, DockerConnectionError)
    assert "stop container" in str(error)
    assert "tcp://127.0.0.1:2375" in str(error)


def test_operation_error_is_logged(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level("ERROR")
    DockerOperationError("pull image", "busybox", "denied")
    assert "pull image failed for 'busybox': denied" in caplog.text
