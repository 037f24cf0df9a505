"""Исключения подсистемы настроек containerctl."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, Optional

LOGGER = logging.getLogger(__name__)


class SettingsError(Exception):
    """Базовая ошибка настроек; хранит контекст и сразу пишет его в журнал."""

    def __init__(self, message: str, *, context: Optional[Dict[str, Any]] = None) -> None:
        self.message = message
        self.context = context or {}
        super().__init__(message)
        LOGGER.error("%s | context=%s", message, self.context)


class SettingsNotFoundError(SettingsError):
    """Запрошенная группа или ключ не зарегистрированы."""

    def __init__(self, group: str, key: Optional[str] = None) -> None:
        self.group = group
        self.key = key
        dotted = f"{group}.{key}" if key else group
        super().__init__(
            f"Unknown setting '{dotted}'",
            context={"group": group, "key": key},
        )


class SettingsValidationError(SettingsError):
    """Значение не прошло валидацию группы."""

    def __init__(self, key: str, value: Any, reason: str) -> None:
        self.key = key
        self.value = value
        self.reason = reason
        super().__init__(
            f"Invalid value for '{key}': {reason} (value={value!r})",
            context={"key": key, "value": value, "reason": reason},
        )


class SettingsIOError(SettingsError):
    """Файл конфигурации не удалось прочитать или записать."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        super().__init__(
            f"Cannot access config file '{path}': {reason}",
            context={"path": str(path), "reason": reason},
        )
