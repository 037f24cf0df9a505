"""Разбор аргументов командной строки в типизированную команду.

Команды click здесь только возвращают значения из ``containerctl.cli.commands``;
никаких обращений к Docker на этапе разбора нет.
"""

from __future__ import annotations

from typing import Optional, Sequence, Tuple

import click

from containerctl import __version__
from containerctl.cli.commands import (
    Command,
    ExecCommand,
    GlobalOptions,
    Invocation,
    ListCommand,
    LogsCommand,
    PullCommand,
    RunCommand,
    StopCommand,
)
from containerctl.cli.exceptions import UsageError

PROG_NAME = "containerctl"
CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}


def _require_non_empty(
    ctx: click.Context, param: click.Parameter, value: Optional[str]
) -> Optional[str]:
    """Отклоняет пустые и состоящие из пробелов обязательные значения."""

    if value is not None and not value.strip():
        raise click.BadParameter("must not be empty", ctx=ctx, param=param)
    return value


def _command_tokens(
    ctx: click.Context, param: click.Parameter, value: Tuple[str, ...]
) -> Tuple[str, ...]:
    """Токены команды для ``exec``.

    После идентификатора контейнера click больше не разбирает опции, поэтому
    разделитель ``--`` приходит первым токеном и отбрасывается здесь.
    """

    tokens = value[1:] if value[:1] == ("--",) else value
    if not tokens:
        raise click.MissingParameter(ctx=ctx, param=param)
    if not tokens[0].strip():
        raise click.BadParameter("command must not be empty", ctx=ctx, param=param)
    return tokens


@click.group(
    context_settings=CONTEXT_SETTINGS,
    no_args_is_help=False,
    help="Manage Docker containers from the command line.",
)
@click.option(
    "-H",
    "--host",
    metavar="URL",
    help="Docker daemon socket, e.g. unix:///var/run/docker.sock or tcp://host:2375.",
)
@click.option("--debug", is_flag=True, help="Print debug logging to stderr.")
@click.version_option(__version__, "--version", prog_name=PROG_NAME)
def cli(host: Optional[str], debug: bool) -> None:
    """Группа команд; глобальные опции собираются в result_callback."""


@cli.result_callback()
def _attach_options(command: Command, host: Optional[str], debug: bool) -> Invocation:
    return Invocation(options=GlobalOptions(host=host, debug=debug), command=command)


@cli.command("ls", help="List all containers, including stopped ones.")
def ls_command() -> ListCommand:
    return ListCommand()


cli.add_command(ls_command, "list")


@cli.command("pull", help="Pull an image from a registry.")
@click.argument("image", callback=_require_non_empty)
def pull_command(image: str) -> PullCommand:
    return PullCommand(image=image)


@cli.command("run", help="Create and start a container.")
@click.argument("image", callback=_require_non_empty)
@click.option(
    "-e",
    "--env",
    "envs",
    multiple=True,
    metavar="KEY=VALUE",
    help="Set an environment variable (repeatable).",
)
@click.option(
    "-v",
    "--volume",
    "volumes",
    multiple=True,
    metavar="HOST:CONTAINER",
    help="Bind mount a host path (repeatable).",
)
@click.option("--name", "container_name", help="Container name (generated by Docker if omitted).")
def run_command(
    image: str,
    envs: Tuple[str, ...],
    volumes: Tuple[str, ...],
    container_name: Optional[str],
) -> RunCommand:
    if container_name is not None and not container_name.strip():
        raise click.BadParameter("must not be empty", param_hint="'--name'")
    return RunCommand(
        image=image,
        envs=list(envs),
        volumes=list(volumes),
        container_name=container_name,
    )


@cli.command("stop", help="Stop a running container.")
@click.argument("container_id", callback=_require_non_empty)
def stop_command(container_id: str) -> StopCommand:
    return StopCommand(container_id=container_id)


@cli.command("logs", help="Print container logs (stdout and stderr).")
@click.argument("container_id", callback=_require_non_empty)
@click.option("-f", "--follow", is_flag=True, help="Keep streaming new log output.")
def logs_command(container_id: str, follow: bool) -> LogsCommand:
    return LogsCommand(container_id=container_id, follow=follow)


@cli.command(
    "exec",
    help="Run a command in a running container: exec [-d] CONTAINER [--] CMD [ARGS]...",
    # опции exec только до CONTAINER; дальше всё относится к команде
    context_settings={"allow_interspersed_args": False},
)
@click.option("-d", "--detach", is_flag=True, help="Run the command in the background.")
@click.argument("container_id", callback=_require_non_empty)
@click.argument("cmd", nargs=-1, required=True, type=click.UNPROCESSED, callback=_command_tokens)
def exec_command(container_id: str, cmd: Tuple[str, ...], detach: bool) -> ExecCommand:
    return ExecCommand(container_id=container_id, cmd=list(cmd), detach=detach)


def parse_command(argv: Sequence[str]) -> Optional[Invocation]:
    """Разбирает аргументы (без имени программы).

    Возвращает ``None``, если click уже вывел справку или версию. Любая ошибка
    разбора превращается в UsageError с текстом, называющим неверный аргумент.
    """

    try:
        result = cli.main(args=list(argv), prog_name=PROG_NAME, standalone_mode=False)
    except click.UsageError as exc:
        usage = exc.ctx.get_usage() if exc.ctx is not None else None
        raise UsageError(exc.format_message(), usage=usage) from exc
    except click.Abort as exc:
        raise UsageError("Aborted") from exc
    if isinstance(result, Invocation):
        return result
    return None
