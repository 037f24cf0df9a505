"""Ошибки разбора командной строки."""

from __future__ import annotations

import logging
from typing import Optional

LOGGER = logging.getLogger(__name__)


class UsageError(Exception):
    """Неверные или недостающие аргументы; Docker при этом не вызывается."""

    def __init__(self, message: str, *, usage: Optional[str] = None) -> None:
        self.message = message
        self.usage = usage
        super().__init__(message)
        LOGGER.debug("Usage error: %s", message)
