"""Ошибки обращения к Docker Engine."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from docker.errors import APIError, DockerException
from requests.exceptions import RequestException

LOGGER = logging.getLogger(__name__)


class DockerAPIError(Exception):
    """Базовая ошибка адаптера Docker; контекст пишется в журнал при создании."""

    def __init__(self, message: str, *, context: Optional[Dict[str, Any]] = None) -> None:
        self.message = message
        self.context = context or {}
        super().__init__(message)
        LOGGER.error("%s | context=%s", message, self.context)


class DockerConnectionError(DockerAPIError):
    """Docker Engine недоступен по указанному адресу."""

    def __init__(self, endpoint: str, reason: str, *, operation: Optional[str] = None) -> None:
        self.endpoint = endpoint
        self.reason = reason
        self.operation = operation
        prefix = f"{operation}: " if operation else ""
        super().__init__(
            f"{prefix}cannot connect to the Docker daemon at {endpoint}: {reason}. "
            "Is the docker daemon running?",
            context={"endpoint": endpoint, "operation": operation, "reason": reason},
        )


class DockerOperationError(DockerAPIError):
    """Docker Engine отклонил запрос; ``reason`` содержит его текст без изменений."""

    def __init__(
        self,
        operation: str,
        target: str,
        reason: str,
        *,
        status_code: Optional[int] = None,
    ) -> None:
        self.operation = operation
        self.target = target
        self.reason = reason
        self.status_code = status_code
        super().__init__(
            f"{operation} failed for '{target}': {reason}",
            context={
                "operation": operation,
                "target": target,
                "status_code": status_code,
            },
        )


def wrap_docker_error(
    exc: BaseException,
    *,
    operation: str,
    target: str,
    endpoint: str,
) -> DockerAPIError:
    """Превращает исключение docker SDK / requests в ошибку адаптера."""

    if isinstance(exc, DockerAPIError):
        return exc
    if isinstance(exc, APIError):
        reason = exc.explanation or str(exc)
        if isinstance(reason, bytes):
            reason = reason.decode("utf-8", errors="replace")
        return DockerOperationError(
            operation,
            target,
            str(reason).strip(),
            status_code=exc.status_code,
        )
    if isinstance(exc, (RequestException, DockerException, ConnectionError)):
        return DockerConnectionError(endpoint, str(exc), operation=operation)
    return DockerOperationError(operation, target, str(exc))
