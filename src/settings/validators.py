"""Переиспользуемые валидаторы значений настроек."""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from numbers import Real
from typing import Any, Iterable, List, Optional, Pattern, Tuple

ValidationResult = Tuple[bool, str]

_OK: ValidationResult = (True, "")


class Validator(ABC):
    """Абстрактный валидатор значения."""

    @abstractmethod
    def validate(self, value: Any) -> ValidationResult:
        """Возвращает (True, "") при успехе либо (False, описание ошибки)."""


class TypeValidator(Validator):
    """Проверяет тип значения (один тип или кортеж типов)."""

    def __init__(self, expected_type: type | Tuple[type, ...]) -> None:
        self.expected_type = expected_type

    def _expected_name(self) -> str:
        types = self.expected_type if isinstance(self.expected_type, tuple) else (self.expected_type,)
        return ", ".join(item.__name__ for item in types)

    def validate(self, value: Any) -> ValidationResult:
        if isinstance(value, self.expected_type):
            return _OK
        return False, f"Expected value of type {self._expected_name()}, got {type(value).__name__}"


class RangeValidator(Validator):
    """Числовое значение в границах [min_value, max_value]; bool не считается числом."""

    def __init__(self, min_value: Optional[Real] = None, max_value: Optional[Real] = None) -> None:
        self.min_value = min_value
        self.max_value = max_value

    def validate(self, value: Any) -> ValidationResult:
        if isinstance(value, bool) or not isinstance(value, Real):
            return False, f"Expected a number, got {type(value).__name__}"
        too_low = self.min_value is not None and value < self.min_value
        too_high = self.max_value is not None and value > self.max_value
        if too_low or too_high:
            return False, f"Value {value} is out of range [{self.min_value}, {self.max_value}]"
        return _OK


class EnumValidator(Validator):
    """Значение из конечного набора."""

    def __init__(self, allowed_values: Iterable[Any]) -> None:
        self.allowed_values: List[Any] = list(allowed_values)

    def validate(self, value: Any) -> ValidationResult:
        if value in self.allowed_values:
            return _OK
        return False, f"Value {value!r} not in allowed values: {self.allowed_values}"


class RegexValidator(Validator):
    """Строка, целиком совпадающая с шаблоном."""

    def __init__(self, pattern: str | Pattern[str]) -> None:
        self.pattern: Pattern[str] = re.compile(pattern) if isinstance(pattern, str) else pattern

    def validate(self, value: Any) -> ValidationResult:
        if not isinstance(value, str):
            return False, "RegexValidator expects string values"
        if not self.pattern.fullmatch(value):
            return False, f"Value '{value}' does not match pattern {self.pattern.pattern!r}"
        return _OK


class CompositeValidator(Validator):
    """Применяет валидаторы по очереди, возвращая первую ошибку."""

    def __init__(self, validators: Iterable[Validator]) -> None:
        self.validators: List[Validator] = list(validators)

    def validate(self, value: Any) -> ValidationResult:
        for validator in self.validators:
            result = validator.validate(value)
            if not result[0]:
                return result
        return _OK
