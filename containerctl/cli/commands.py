"""Типизированные команды, которые производит разбор аргументов."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar, List, Optional, Union


@dataclass(slots=True, frozen=True)
class ListCommand:
    name: ClassVar[str] = "ls"


@dataclass(slots=True, frozen=True)
class PullCommand:
    image: str

    name: ClassVar[str] = "pull"


@dataclass(slots=True, frozen=True)
class RunCommand:
    """``run``: образ, переменные окружения ``KEY=VALUE`` и тома ``HOST:CONTAINER``."""

    image: str
    envs: List[str] = field(default_factory=list)
    volumes: List[str] = field(default_factory=list)
    container_name: Optional[str] = None

    name: ClassVar[str] = "run"


@dataclass(slots=True, frozen=True)
class StopCommand:
    container_id: str

    name: ClassVar[str] = "stop"


@dataclass(slots=True, frozen=True)
class LogsCommand:
    container_id: str
    follow: bool = False

    name: ClassVar[str] = "logs"


@dataclass(slots=True, frozen=True)
class ExecCommand:
    """``exec``: команда внутри запущенного контейнера."""

    container_id: str
    cmd: List[str] = field(default_factory=list)
    detach: bool = False

    name: ClassVar[str] = "exec"


Command = Union[ListCommand, PullCommand, RunCommand, StopCommand, LogsCommand, ExecCommand]


@dataclass(slots=True, frozen=True)
class GlobalOptions:
    """Опции, общие для всех команд."""

    host: Optional[str] = None
    debug: bool = False


@dataclass(slots=True, frozen=True)
class Invocation:
    """Результат разбора: глобальные опции и одна команда."""

    options: GlobalOptions
    command: Command
