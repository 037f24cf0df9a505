"""Операции над образами."""

from __future__ import annotations

import logging
from typing import Iterator, Tuple

from docker.errors import DockerException
from docker.utils import parse_repository_tag
from requests.exceptions import RequestException

from containerctl.docker_api.client import DockerClientWrapper
from containerctl.docker_api.exceptions import DockerOperationError
from containerctl.docker_api.models import PullProgress

LOGGER = logging.getLogger(__name__)

DEFAULT_TAG = "latest"


def split_reference(reference: str) -> Tuple[str, str]:
    """Делит ссылку на образ на репозиторий и тег (или digest).

    Ссылка без тега получает ``latest``; digest передаётся как тег, как это
    делает docker SDK.
    """

    repository, tag = parse_repository_tag(reference)
    return repository, tag or DEFAULT_TAG


def pull_image(client: DockerClientWrapper, reference: str) -> Iterator[PullProgress]:
    """Скачивает образ, отдавая события прогресса по мере поступления.

    Событие с ключом ``error`` прерывает поток с DockerOperationError.
    """

    raw = client.get_raw_client()
    repository, tag = split_reference(reference)
    LOGGER.info("Pulling %s:%s", repository, tag)
    try:
        stream = raw.pull(repository, tag=tag, stream=True, decode=True)
    except (DockerException, RequestException) as exc:
        raise client.wrap_error(exc, "pull image", reference) from exc

    for event in client.guard_stream(stream, "pull image", reference):
        if "error" in event:
            detail = event.get("errorDetail") or {}
            raise DockerOperationError(
                "pull image",
                reference,
                str(detail.get("message") or event["error"]),
            )
        yield PullProgress.from_event(event)
    LOGGER.info("Pulled %s", reference)
