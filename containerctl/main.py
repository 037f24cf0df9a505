"""Точка входа containerctl."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Callable, Optional, Sequence

import click

from containerctl import __version__
from containerctl.cli.exceptions import UsageError
from containerctl.cli.handlers import dispatch
from containerctl.cli.router import PROG_NAME, parse_command
from containerctl.connections.models import Connection, resolve_connection
from containerctl.docker_api.client import DockerClientWrapper
from containerctl.docker_api.exceptions import DockerAPIError
from containerctl.settings.exceptions import SettingsError
from containerctl.settings.registry import SettingsRegistry
from containerctl.utils.logger import configure_logging
from containerctl.utils.paths import resolve_workdir

LOGGER = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_USAGE = 2
EXIT_INTERRUPTED = 130

ClientFactory = Callable[[Connection], DockerClientWrapper]


def initialize_workdir(base_dir: Path) -> bool:
    """Создаёт ``~/.containerctl`` и ``logs``."""

    try:
        (base_dir / "logs").mkdir(parents=True, exist_ok=True)
        return True
    except OSError as exc:
        LOGGER.error("Cannot create working directory %s: %s", base_dir, exc)
        return False


def initialize_settings(config_path: Path) -> SettingsRegistry:
    registry = SettingsRegistry(config_path=config_path)
    registry.load_from_disk()
    return registry


def setup_logging_from_settings(
    base_dir: Path,
    settings: SettingsRegistry,
    *,
    debug: bool = False,
) -> None:
    """Включает файловый журнал по группе ``logging``; ``--debug`` добавляет stderr."""

    console_level = "DEBUG" if debug else None
    logging_settings = settings.get_group("logging")
    if not logging_settings.get("enabled"):
        if debug:
            logging.disable(logging.NOTSET)
            configure_logging(None, console_level_name=console_level)
        else:
            logging.disable(logging.CRITICAL)
        return

    logging.disable(logging.NOTSET)
    configure_logging(
        base_dir / "logs",
        level_name=logging_settings.get("level"),
        console_level_name=console_level,
        max_bytes=logging_settings.get("max_file_size_mb") * 1024 * 1024,
        backup_count=logging_settings.get("max_archived_files"),
    )


def _report_usage_error(exc: UsageError) -> None:
    if exc.usage:
        click.echo(exc.usage, err=True)
        click.echo(f"Try '{PROG_NAME} -h' for help.\n", err=True)
    click.echo(f"Error: {exc.message}", err=True)


def run(
    argv: Sequence[str],
    *,
    base_dir: Optional[Path] = None,
    client_factory: ClientFactory = DockerClientWrapper,
) -> int:
    """Выполняет одну команду и возвращает код завершения процесса."""

    try:
        invocation = parse_command(argv)
    except UsageError as exc:
        _report_usage_error(exc)
        return EXIT_USAGE
    if invocation is None:
        return EXIT_OK

    workdir = base_dir or resolve_workdir()
    if not initialize_workdir(workdir):
        click.echo(f"Error: cannot create working directory {workdir}", err=True)
        return EXIT_FAILURE

    try:
        settings = initialize_settings(workdir / "config.json")
        setup_logging_from_settings(workdir, settings, debug=invocation.options.debug)
        connection = resolve_connection(settings, host_override=invocation.options.host)
    except SettingsError as exc:
        click.echo(f"Error: {exc}", err=True)
        return EXIT_FAILURE

    LOGGER.info("containerctl %s: %s via %s", __version__, invocation.command.name, connection.socket)
    try:
        with client_factory(connection) as client:
            dispatch(invocation.command, client)
    except DockerAPIError as exc:
        click.echo(f"Error: {exc}", err=True)
        return EXIT_FAILURE
    except KeyboardInterrupt:
        LOGGER.info("Interrupted during %s", invocation.command.name)
        return EXIT_INTERRUPTED
    return EXIT_OK


def main(argv: Optional[Sequence[str]] = None) -> int:
    return run(sys.argv[1:] if argv is None else argv)


if __name__ == "__main__":
    sys.exit(main())
