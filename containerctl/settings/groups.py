"""Группы настроек с валидацией значений."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, Tuple

from containerctl.settings.exceptions import SettingsNotFoundError, SettingsValidationError
from containerctl.settings.validators import (
    ChoiceValidator,
    FlagValidator,
    IntegerRangeValidator,
    PatternValidator,
    Validator,
)

BASE_URL_PATTERN = r"^$|^(unix|tcp|npipe|http|https|ssh)://.+$|^/.+$"
API_VERSION_PATTERN = r"^(auto|\d+\.\d+)$"


class SettingsGroup(ABC):
    """База для групп настроек: значения по умолчанию, валидаторы, текущие значения."""

    group_name: str = ""

    def __init__(self) -> None:
        self._defaults: Dict[str, Any] = {}
        self._validators: Dict[str, Validator] = {}
        self._values: Dict[str, Any] = {}
        self._initialize_defaults()
        self._setup_validators()
        self.reset_to_defaults()

    @abstractmethod
    def _initialize_defaults(self) -> None:
        """Заполняет ``self._defaults``."""

    @abstractmethod
    def _setup_validators(self) -> None:
        """Заполняет ``self._validators``."""

    def keys(self) -> Tuple[str, ...]:
        return tuple(self._defaults.keys())

    def get(self, key: str) -> Any:
        """Возвращает текущее значение ключа."""

        if key not in self._defaults:
            raise SettingsNotFoundError(self.group_name, key)
        return self._values[key]

    def validate(self, key: str, value: Any) -> Tuple[bool, str]:
        validator = self._validators.get(key)
        if validator is None:
            return True, ""
        return validator.validate(value)

    def set(self, key: str, value: Any) -> None:
        """Сохраняет значение; невалидное значение приводит к SettingsValidationError."""

        if key not in self._defaults:
            raise SettingsNotFoundError(self.group_name, key)
        is_valid, error = self.validate(key, value)
        if not is_valid:
            raise SettingsValidationError(
                key=f"{self.group_name}.{key}",
                value=value,
                reason=error,
            )
        self._values[key] = value

    def from_dict(self, data: Dict[str, Any]) -> None:
        """Загружает известные ключи из словаря, неизвестные игнорирует."""

        for key, value in data.items():
            if key in self._defaults:
                self.set(key, value)

    def to_dict(self) -> Dict[str, Any]:
        return dict(self._values)

    def reset_to_defaults(self) -> None:
        self._values = dict(self._defaults)


class RuntimeSettings(SettingsGroup):
    """Параметры подключения к Docker Engine."""

    group_name = "runtime"

    def _initialize_defaults(self) -> None:
        self._defaults = {
            "base_url": "",  # пусто: DOCKER_HOST или локальный сокет
            "timeout_sec": 60,
            "api_version": "auto",
        }

    def _setup_validators(self) -> None:
        self._validators = {
            "base_url": PatternValidator(
                BASE_URL_PATTERN,
                "an empty string, an absolute socket path or a URL such as tcp://host:2375",
            ),
            "timeout_sec": IntegerRangeValidator(1, 600),
            "api_version": PatternValidator(API_VERSION_PATTERN, "'auto' or a version like 1.43"),
        }


class LoggingSettings(SettingsGroup):
    """Журналирование в файл."""

    group_name = "logging"

    def _initialize_defaults(self) -> None:
        self._defaults = {
            "enabled": True,
            "level": "INFO",
            "max_file_size_mb": 5,
            "max_archived_files": 3,
        }

    def _setup_validators(self) -> None:
        self._validators = {
            "enabled": FlagValidator(),
            "level": ChoiceValidator(["DEBUG", "INFO", "WARNING", "ERROR"]),
            "max_file_size_mb": IntegerRangeValidator(1, 1000),
            "max_archived_files": IntegerRangeValidator(1, 50),
        }
