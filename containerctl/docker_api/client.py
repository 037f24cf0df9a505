"""Обёртка над низкоуровневым ``docker.APIClient``."""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, Iterator, List, Optional, Protocol, TypeVar

import docker
from docker.errors import DockerException
from requests.exceptions import RequestException

from containerctl.connections.models import Connection
from containerctl.docker_api.exceptions import (
    DockerAPIError,
    DockerConnectionError,
    wrap_docker_error,
)

LOGGER = logging.getLogger(__name__)

T = TypeVar("T")


class RuntimeAPI(Protocol):
    """Часть ``docker.APIClient``, которой пользуется containerctl."""

    def containers(self, all: bool = ...) -> List[Dict[str, Any]]: ...

    def pull(self, repository: str, tag: Optional[str] = ..., **kwargs: Any) -> Any: ...

    def create_host_config(self, **kwargs: Any) -> Dict[str, Any]: ...

    def create_container(self, image: str, **kwargs: Any) -> Dict[str, Any]: ...

    def start(self, container: str) -> None: ...

    def stop(self, container: str) -> None: ...

    def logs(self, container: str, **kwargs: Any) -> Iterator[bytes]: ...

    def exec_create(self, container: str, cmd: List[str], **kwargs: Any) -> Dict[str, Any]: ...

    def exec_start(self, exec_id: str, **kwargs: Any) -> Any: ...

    def close(self) -> None: ...


class DockerClientWrapper:
    """Одно подключение к Docker Engine на время одного вызова утилиты."""

    def __init__(self, connection: Connection, raw_client: RuntimeAPI | None = None) -> None:
        self.connection = connection
        self._client = raw_client or self._create_client()

    def _create_client(self) -> RuntimeAPI:
        LOGGER.debug("Connecting to Docker at %s", self.connection.socket)
        try:
            return docker.APIClient(
                base_url=self.connection.socket,
                version=self.connection.api_version,
                timeout=self.connection.timeout,
            )
        except (DockerException, RequestException) as exc:
            raise DockerConnectionError(self.connection.socket, str(exc)) from exc

    @property
    def endpoint(self) -> str:
        return self.connection.socket

    def get_raw_client(self) -> RuntimeAPI:
        return self._client

    def close(self) -> None:
        try:
            self._client.close()
        except (DockerException, RequestException, OSError) as exc:
            LOGGER.warning("Failed to close Docker client: %s", exc)

    def __enter__(self) -> "DockerClientWrapper":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    # ------------------------------------------------------------ errors --
    def wrap_error(self, exc: BaseException, operation: str, target: str) -> DockerAPIError:
        """Оборачивает ошибку SDK, добавляя операцию, цель и адрес Docker."""

        return wrap_docker_error(exc, operation=operation, target=target, endpoint=self.endpoint)

    def guard_stream(
        self,
        stream: Iterable[T],
        operation: str,
        target: str,
    ) -> Iterator[T]:
        """Отдаёт элементы потока по одному, переводя ошибки чтения в DockerAPIError."""

        iterator = iter(stream)
        while True:
            try:
                item = next(iterator)
            except StopIteration:
                return
            except (DockerException, RequestException, OSError) as exc:
                raise self.wrap_error(exc, operation, target) from exc
            yield item
