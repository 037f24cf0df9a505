"""Проверки значений из ``config.json``.

Результат проверки: ``(True, "")`` либо ``(False, текст ошибки)``. Текст
попадает в SettingsValidationError и показывается пользователю как есть.
"""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from typing import Any, Iterable, Tuple


class Validator(ABC):
    @abstractmethod
    def validate(self, value: Any) -> Tuple[bool, str]:
        """Проверяет одно значение настройки."""


class FlagValidator(Validator):
    """Переключатель: только ``true`` или ``false`` в JSON."""

    def validate(self, value: Any) -> Tuple[bool, str]:
        if isinstance(value, bool):
            return True, ""
        return False, f"Expected true or false, got {value!r}"


class IntegerRangeValidator(Validator):
    """Целое число в закрытом диапазоне ``[minimum, maximum]``.

    ``true``/``false`` и дробные числа отклоняются: размеры и таймауты в
    конфигурации задаются целыми.
    """

    def __init__(self, minimum: int, maximum: int) -> None:
        self.minimum = minimum
        self.maximum = maximum

    def validate(self, value: Any) -> Tuple[bool, str]:
        expected = f"an integer from {self.minimum} to {self.maximum}"
        if isinstance(value, bool) or not isinstance(value, int):
            return False, f"Expected {expected}, got {value!r}"
        if not self.minimum <= value <= self.maximum:
            return False, f"Expected {expected}, got {value}"
        return True, ""


class ChoiceValidator(Validator):
    def __init__(self, choices: Iterable[str]) -> None:
        self.choices = tuple(choices)

    def validate(self, value: Any) -> Tuple[bool, str]:
        if value in self.choices:
            return True, ""
        return False, f"Expected one of {', '.join(self.choices)}, got {value!r}"


class PatternValidator(Validator):
    """Строка целиком совпадает с шаблоном; в ошибке описан ожидаемый вид значения."""

    def __init__(self, pattern: str, description: str) -> None:
        self.pattern = re.compile(pattern)
        self.description = description

    def validate(self, value: Any) -> Tuple[bool, str]:
        if isinstance(value, str) and self.pattern.fullmatch(value):
            return True, ""
        return False, f"Expected {self.description}, got {value!r}"
