"""Простые структуры данных, которыми обмениваются адаптер и обработчики."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterator, List, Mapping, Optional, Union


@dataclass(slots=True, frozen=True)
class ContainerSummary:
    """Строка ``docker ps -a``: идентификатор, образ, статус."""

    identifier: str
    image: str
    status: str

    @classmethod
    def from_api(cls, data: Mapping[str, Any]) -> "ContainerSummary":
        return cls(
            identifier=str(data.get("Id", "")),
            image=str(data.get("Image", "")),
            status=str(data.get("Status", "")),
        )


@dataclass(slots=True)
class RunSpec:
    """Параметры создания контейнера, собранные из флагов ``run``."""

    image: str
    environment: List[str] = field(default_factory=list)
    binds: List[str] = field(default_factory=list)
    name: Optional[str] = None


@dataclass(slots=True, frozen=True)
class PullProgress:
    """Одно событие прогресса ``docker pull``."""

    status: str
    identifier: Optional[str] = None
    progress: Optional[str] = None

    @classmethod
    def from_event(cls, event: Mapping[str, Any]) -> "PullProgress":
        return cls(
            status=str(event.get("status", "")),
            identifier=event.get("id") or None,
            progress=event.get("progress") or None,
        )

    def __str__(self) -> str:
        line = self.status
        if self.identifier:
            line = f"{self.identifier}: {line}"
        if self.progress:
            line = f"{line} {self.progress}"
        return line


@dataclass(slots=True)
class ExecAttached:
    """Exec-сессия с подключённым выводом; ``output`` читается лениво."""

    exec_id: str
    output: Iterator[bytes]


@dataclass(slots=True, frozen=True)
class ExecDetached:
    """Exec-сессия запущена в фоне, вывода нет."""

    exec_id: str


ExecResult = Union[ExecAttached, ExecDetached]
