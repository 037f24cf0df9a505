"""Схема конфигурации по умолчанию (содержимое нового config.json)."""

from __future__ import annotations

from typing import Any, Dict

CONFIG_VERSION = "1.0.0"

# DEFAULT_CONFIG записывается на диск, если config.json ещё не существует
DEFAULT_CONFIG: Dict[str, Any] = {
    "version": CONFIG_VERSION,
    "runtime": {
        "base_url": "",
        "timeout_sec": 60,
        "api_version": "auto",
    },
    "logging": {
        "enabled": True,
        "level": "INFO",
        "max_file_size_mb": 5,
        "max_archived_files": 3,
    },
}
