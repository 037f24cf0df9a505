"""Обработчики команд: вызов адаптера Docker и вывод результата в stdout."""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Type

import click

from containerctl.cli.commands import (
    Command,
    ExecCommand,
    ListCommand,
    LogsCommand,
    PullCommand,
    RunCommand,
    StopCommand,
)
from containerctl.docker_api import containers, images
from containerctl.docker_api.client import DockerClientWrapper
from containerctl.docker_api.models import ExecDetached, RunSpec

LOGGER = logging.getLogger(__name__)

Echo = Callable[..., Any]
Handler = Callable[[Any, DockerClientWrapper, Echo], None]


def handle_list(command: ListCommand, client: DockerClientWrapper, echo: Echo) -> None:
    for summary in containers.list_containers(client):
        echo(f"ID: {summary.identifier}, Image: {summary.image}, Status: {summary.status}")


def handle_pull(command: PullCommand, client: DockerClientWrapper, echo: Echo) -> None:
    for event in images.pull_image(client, command.image):
        echo(str(event))
    echo(f"Image {command.image} pulled")


def handle_run(command: RunCommand, client: DockerClientWrapper, echo: Echo) -> None:
    """Создаёт контейнер, затем запускает его; строки выводятся после каждого шага."""

    spec = RunSpec(
        image=command.image,
        environment=list(command.envs),
        binds=list(command.volumes),
        name=command.container_name,
    )
    identifier = containers.create_container(client, spec)
    echo(f"Created container {identifier}")
    containers.start_container(client, identifier)
    echo(f"Container started: {identifier}")


def handle_stop(command: StopCommand, client: DockerClientWrapper, echo: Echo) -> None:
    containers.stop_container(client, command.container_id)
    echo(f"Container stopped: {command.container_id}")


def handle_logs(command: LogsCommand, client: DockerClientWrapper, echo: Echo) -> None:
    # байты пишутся как есть: многобайтовый символ может прийти в разных фрагментах
    for chunk in containers.fetch_logs(client, command.container_id, follow=command.follow):
        echo(chunk, nl=False)


def handle_exec(command: ExecCommand, client: DockerClientWrapper, echo: Echo) -> None:
    """Создаёт и запускает exec-сессию; в фоновом режиме вывод не читается."""

    exec_id = containers.create_exec(client, command.container_id, command.cmd)
    result = containers.start_exec(client, exec_id, detach=command.detach)
    if isinstance(result, ExecDetached):
        echo(f"Exec {result.exec_id} started in detached mode")
        return
    for chunk in result.output:
        echo(chunk, nl=False)


HANDLERS: Dict[Type[Any], Handler] = {
    ListCommand: handle_list,
    PullCommand: handle_pull,
    RunCommand: handle_run,
    StopCommand: handle_stop,
    LogsCommand: handle_logs,
    ExecCommand: handle_exec,
}


def dispatch(command: Command, client: DockerClientWrapper, echo: Echo = click.echo) -> None:
    """Передаёт команду ровно одному обработчику."""

    try:
        handler = HANDLERS[type(command)]
    except KeyError:
        raise TypeError(f"No handler for command {command!r}") from None
    LOGGER.debug("Dispatching %s", command)
    handler(command, client, echo)
