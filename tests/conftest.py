"""Общие фикстуры: поддельный docker.APIClient и сброс глобального состояния."""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, Iterator, List, Tuple

import pytest

from containerctl.connections.models import Connection
from containerctl.docker_api.client import DockerClientWrapper
from containerctl.settings.registry import SettingsRegistry


class FakeAPIClient:
    """Записывает вызовы и отдаёт заранее заданные ответы."""

    def __init__(self) -> None:
        self.calls: List[Tuple[str, Tuple[Any, ...], Dict[str, Any]]] = []
        self.errors: Dict[str, BaseException] = {}
        self.container_list: List[Dict[str, Any]] = []
        self.pull_events: Iterable[Dict[str, Any]] = []
        self.log_chunks: Iterable[bytes] = []
        self.exec_chunks: Iterable[bytes] = []
        self.exec_output_read = False
        self.closed = False

    def _record(self, name: str, /, *args: Any, **kwargs: Any) -> None:
        self.calls.append((name, args, kwargs))
        if name in self.errors:
            raise self.errors[name]

    def called(self, name: str) -> List[Tuple[Tuple[Any, ...], Dict[str, Any]]]:
        return [(args, kwargs) for call, args, kwargs in self.calls if call == name]

    def containers(self, all: bool = False) -> List[Dict[str, Any]]:
        self._record("containers", all=all)
        return list(self.container_list)

    def pull(self, repository: str, tag: Any = None, **kwargs: Any) -> Iterator[Dict[str, Any]]:
        self._record("pull", repository, tag=tag, **kwargs)
        return iter(self.pull_events)

    def create_host_config(self, **kwargs: Any) -> Dict[str, Any]:
        self._record("create_host_config", **kwargs)
        return {"Binds": kwargs.get("binds")}

    def create_container(self, image: str, **kwargs: Any) -> Dict[str, Any]:
        self._record("create_container", image, **kwargs)
        return {"Id": "c0ffee", "Warnings": []}

    def start(self, container: str) -> None:
        self._record("start", container)

    def stop(self, container: str) -> None:
        self._record("stop", container)

    def logs(self, container: str, **kwargs: Any) -> Iterator[bytes]:
        self._record("logs", container, **kwargs)
        return iter(self.log_chunks)

    def exec_create(self, container: str, cmd: List[str], **kwargs: Any) -> Dict[str, Any]:
        self._record("exec_create", container, cmd, **kwargs)
        return {"Id": "exec-1"}

    def exec_start(self, exec_id: str, **kwargs: Any) -> Any:
        self._record("exec_start", exec_id, **kwargs)
        if kwargs.get("detach"):
            return b""
        return self._exec_stream()

    def _exec_stream(self) -> Iterator[bytes]:
        self.exec_output_read = True
        yield from self.exec_chunks

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def fake_api() -> FakeAPIClient:
    return FakeAPIClient()


@pytest.fixture
def wrapper(fake_api: FakeAPIClient) -> DockerClientWrapper:
    connection = Connection(socket="unix:///var/run/docker.sock")
    return DockerClientWrapper(connection, raw_client=fake_api)


@pytest.fixture(autouse=True)
def reset_global_state() -> Iterator[None]:
    SettingsRegistry._instance = None  # type: ignore[attr-defined]
    yield
    SettingsRegistry._instance = None  # type: ignore[attr-defined]
    logging.disable(logging.NOTSET)
