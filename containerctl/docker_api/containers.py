"""Операции над контейнерами: список, создание, запуск, остановка, логи, exec."""

from __future__ import annotations

import logging
from typing import Iterator, List, Sequence

from docker.errors import DockerException
from requests.exceptions import RequestException

from containerctl.docker_api.client import DockerClientWrapper
from containerctl.docker_api.models import (
    ContainerSummary,
    ExecAttached,
    ExecDetached,
    ExecResult,
    RunSpec,
)

LOGGER = logging.getLogger(__name__)


def list_containers(client: DockerClientWrapper) -> List[ContainerSummary]:
    """Возвращает все контейнеры (включая остановленные) в порядке ответа Docker."""

    raw = client.get_raw_client()
    try:
        entries = raw.containers(all=True)
    except (DockerException, RequestException) as exc:
        raise client.wrap_error(exc, "list containers", client.endpoint) from exc
    LOGGER.info("Listed %d containers", len(entries))
    return [ContainerSummary.from_api(entry) for entry in entries]


def create_container(client: DockerClientWrapper, spec: RunSpec) -> str:
    """Создаёт контейнер и возвращает его идентификатор."""

    raw = client.get_raw_client()
    try:
        host_config = raw.create_host_config(binds=list(spec.binds))
        response = raw.create_container(
            spec.image,
            environment=list(spec.environment) or None,
            host_config=host_config,
            name=spec.name,
        )
    except (DockerException, RequestException) as exc:
        raise client.wrap_error(exc, "create container", spec.image) from exc
    identifier = str(response.get("Id", ""))
    for warning in response.get("Warnings") or []:
        LOGGER.warning("Docker: %s", warning)
    LOGGER.info("Created container %s from %s", identifier, spec.image)
    return identifier


def start_container(client: DockerClientWrapper, container_id: str) -> None:
    raw = client.get_raw_client()
    try:
        raw.start(container_id)
    except (DockerException, RequestException) as exc:
        raise client.wrap_error(exc, "start container", container_id) from exc
    LOGGER.info("Started container %s", container_id)


def stop_container(client: DockerClientWrapper, container_id: str) -> None:
    """Останавливает контейнер с таймаутом Docker по умолчанию."""

    raw = client.get_raw_client()
    try:
        raw.stop(container_id)
    except (DockerException, RequestException) as exc:
        raise client.wrap_error(exc, "stop container", container_id) from exc
    LOGGER.info("Stopped container %s", container_id)


def fetch_logs(
    client: DockerClientWrapper,
    container_id: str,
    *,
    follow: bool = False,
) -> Iterator[bytes]:
    """Возвращает поток логов (stdout + stderr, вся история).

    С ``follow=True`` поток не заканчивается, пока жив контейнер.
    """

    raw = client.get_raw_client()
    try:
        stream = raw.logs(
            container_id,
            stdout=True,
            stderr=True,
            stream=True,
            follow=follow,
            tail="all",
        )
    except (DockerException, RequestException) as exc:
        raise client.wrap_error(exc, "fetch logs", container_id) from exc
    LOGGER.info("Streaming logs of %s (follow=%s)", container_id, follow)
    return client.guard_stream(stream, "fetch logs", container_id)


def create_exec(client: DockerClientWrapper, container_id: str, cmd: Sequence[str]) -> str:
    """Создаёт exec-сессию без TTY с подключёнными stdout и stderr."""

    raw = client.get_raw_client()
    try:
        response = raw.exec_create(
            container_id,
            list(cmd),
            stdout=True,
            stderr=True,
            tty=False,
        )
    except (DockerException, RequestException) as exc:
        raise client.wrap_error(exc, "create exec", container_id) from exc
    exec_id = str(response.get("Id", ""))
    LOGGER.info("Created exec %s in %s: %s", exec_id, container_id, list(cmd))
    return exec_id


def start_exec(
    client: DockerClientWrapper,
    exec_id: str,
    *,
    detach: bool = False,
) -> ExecResult:
    """Запускает exec-сессию.

    В отсоединённом режиме Docker не возвращает вывод, и результат не содержит
    потока.
    """

    raw = client.get_raw_client()
    try:
        response = raw.exec_start(exec_id, detach=detach, tty=False, stream=not detach)
    except (DockerException, RequestException) as exc:
        raise client.wrap_error(exc, "start exec", exec_id) from exc
    if detach:
        LOGGER.info("Exec %s started detached", exec_id)
        return ExecDetached(exec_id=exec_id)
    return ExecAttached(
        exec_id=exec_id,
        output=client.guard_stream(response, "exec", exec_id),
    )
