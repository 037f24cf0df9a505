"""Настройка журналирования: файл с ротацией и, по запросу, консоль (stderr)."""

from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Final, Optional, cast

LOG_FORMAT: Final[str] = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
CONSOLE_FORMAT: Final[str] = "%(levelname)s %(name)s: %(message)s"
LOG_FILE_NAME: Final[str] = "containerctl.log"


def resolve_log_level(level_name: str) -> int:
    """Преобразует имя уровня (``"info"``, ``"DEBUG"``) в число."""

    level = getattr(logging, level_name.upper(), None)
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level: {level_name}")
    return cast(int, level)


def configure_logging(
    log_dir: Optional[Path],
    *,
    level_name: str = "INFO",
    console_level_name: Optional[str] = None,
    max_bytes: int = 5 * 1024 * 1024,
    backup_count: int = 3,
) -> None:
    """Настраивает корневой логгер.

    Файл ``containerctl.log`` создаётся в ``log_dir`` (если он задан).
    Консольный обработчик добавляется только при ``console_level_name``: stdout
    занят ответами Docker, а ошибки выводит сама утилита.
    """

    handlers: list[logging.Handler] = []
    levels: list[int] = []

    if log_dir is not None:
        file_level = resolve_log_level(level_name)
        log_dir.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            log_dir / LOG_FILE_NAME,
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding="utf-8",
        )
        file_handler.setLevel(file_level)
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handlers.append(file_handler)
        levels.append(file_level)

    if console_level_name is not None:
        console_level = resolve_log_level(console_level_name)
        stream_handler = logging.StreamHandler(sys.stderr)
        stream_handler.setLevel(console_level)
        stream_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))
        handlers.append(stream_handler)
        levels.append(console_level)

    if not handlers:
        handlers.append(logging.NullHandler())

    logging.basicConfig(
        level=min(levels) if levels else logging.WARNING,
        handlers=handlers,
        force=True,
    )
