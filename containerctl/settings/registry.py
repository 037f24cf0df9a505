"""Реестр настроек containerctl (Singleton), хранящийся в config.json."""

from __future__ import annotations

import copy
import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional

from containerctl.settings.exceptions import (
    SettingsIOError,
    SettingsNotFoundError,
    SettingsValidationError,
)
from containerctl.settings.groups import LoggingSettings, RuntimeSettings, SettingsGroup
from containerctl.settings.schemas import CONFIG_VERSION, DEFAULT_CONFIG
from containerctl.utils.paths import default_config_path


class SettingsRegistry:
    """Единая точка доступа ко всем группам настроек."""

    _instance: Optional["SettingsRegistry"] = None

    def __new__(cls, config_path: Optional[Path] = None) -> "SettingsRegistry":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._initialized = False
        return cls._instance

    def __init__(self, config_path: Optional[Path] = None) -> None:
        if getattr(self, "_initialized", False):
            if config_path is not None:
                self._file_path = config_path
            return

        self._logger = logging.getLogger(__name__)
        self._file_path = config_path or default_config_path()
        self._settings: Dict[str, SettingsGroup] = {
            "runtime": RuntimeSettings(),
            "logging": LoggingSettings(),
        }
        self._metadata: Dict[str, Any] = {"version": CONFIG_VERSION}
        self._initialized = True

    @property
    def config_path(self) -> Path:
        return self._file_path

    # --------------------------------------------------------------------- API
    def get_value(self, group: str, key: str, default: Any = None) -> Any:
        """Возвращает значение; ``default`` подставляется для неизвестных ключей."""

        settings_group = self._settings.get(group)
        if settings_group is None:
            if default is not None:
                return default
            raise SettingsNotFoundError(group, key)
        try:
            return settings_group.get(key)
        except SettingsNotFoundError:
            if default is not None:
                return default
            raise

    def set_value(self, group: str, key: str, value: Any) -> None:
        self.get_group(group).set(key, value)

    def get_group(self, group: str) -> SettingsGroup:
        try:
            return self._settings[group]
        except KeyError:
            raise SettingsNotFoundError(group) from None

    def save_to_disk(self, path: Optional[Path] = None) -> None:
        target = path or self._file_path
        payload: Dict[str, Any] = dict(self._metadata)
        for name, group in self._settings.items():
            payload[name] = group.to_dict()
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(json.dumps(payload, indent=2, ensure_ascii=False), encoding="utf-8")
        except OSError as exc:
            raise SettingsIOError(target, str(exc)) from exc

    def load_from_disk(self, path: Optional[Path] = None) -> None:
        """Читает config.json; при отсутствии файла записывает значения по умолчанию."""

        target = path or self._file_path
        if not target.exists():
            self._logger.info("Config file %s not found, writing defaults", target)
            self.save_to_disk(target)
            return
        try:
            content = json.loads(target.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            raise SettingsIOError(target, str(exc)) from exc
        if not isinstance(content, dict):
            raise SettingsIOError(target, "top-level JSON value must be an object")

        merged = self._merge_with_defaults(content)
        self._metadata = {key: value for key, value in merged.items() if key not in self._settings}
        for name, group in self._settings.items():
            group_data = merged.get(name)
            if isinstance(group_data, dict):
                group.from_dict(group_data)
        self.validate()

    def validate(self) -> bool:
        for name, group in self._settings.items():
            for key in group.keys():
                value = group.get(key)
                is_valid, error = group.validate(key, value)
                if not is_valid:
                    raise SettingsValidationError(key=f"{name}.{key}", value=value, reason=error)
        return True

    def reset_to_defaults(self) -> None:
        for group in self._settings.values():
            group.reset_to_defaults()

    # ----------------------------------------------------------------- helpers
    @staticmethod
    def _merge_with_defaults(incoming: Dict[str, Any]) -> Dict[str, Any]:
        base = copy.deepcopy(DEFAULT_CONFIG)
        for key, value in incoming.items():
            if isinstance(value, dict) and isinstance(base.get(key), dict):
                base[key].update(value)
            else:
                base[key] = value
        return base
