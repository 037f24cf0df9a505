"""Описание подключения к Docker Engine."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Any, Mapping, Optional

from containerctl.utils.helpers import normalize_socket_path

DEFAULT_SOCKET = "unix:///var/run/docker.sock"
DOCKER_HOST_ENV = "DOCKER_HOST"


@dataclass(slots=True)
class Connection:
    """Куда и как подключаться: адрес сокета, таймаут, версия API."""

    socket: str = DEFAULT_SOCKET
    timeout: int = 60
    api_version: str = "auto"


def resolve_connection(
    settings: Any,
    *,
    host_override: Optional[str] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> Connection:
    """Собирает Connection из настроек ``runtime``.

    Приоритет адреса: ``--host`` → ``runtime.base_url`` → ``DOCKER_HOST`` →
    локальный unix-сокет.
    """

    env = os.environ if environ is None else environ
    candidates = (
        host_override or "",
        settings.get_value("runtime", "base_url", default=""),
        env.get(DOCKER_HOST_ENV, ""),
    )
    socket = next((normalize_socket_path(value) for value in candidates if value.strip()), "")
    return Connection(
        socket=socket or DEFAULT_SOCKET,
        timeout=int(settings.get_value("runtime", "timeout_sec", default=60)),
        api_version=str(settings.get_value("runtime", "api_version", default="auto")),
    )
