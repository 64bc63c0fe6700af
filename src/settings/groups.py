"""Группы настроек движка с валидацией значений."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, Tuple

from src.settings.exceptions import SettingsNotFoundError, SettingsValidationError
from src.settings.validators import (
    CompositeValidator,
    EnumValidator,
    RangeValidator,
    RegexValidator,
    TypeValidator,
    Validator,
)

# Имя бинарника подставляется в shell-команды без кавычек
BINARY_PATTERN = r"^[A-Za-z0-9_./-]+$"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


class SettingsGroup(ABC):
    """Абстрактная база для конкретных групп настроек."""

    group_name: str = ""

    def __init__(self) -> None:
        self._defaults: Dict[str, Any] = self._build_defaults()
        self._validators: Dict[str, Validator] = self._build_validators()
        self._values: Dict[str, Any] = {}
        self.reset_to_defaults()

    @abstractmethod
    def _build_defaults(self) -> Dict[str, Any]:
        """Значения по умолчанию для группы."""

    @abstractmethod
    def _build_validators(self) -> Dict[str, Validator]:
        """Валидаторы по ключам группы."""

    def keys(self) -> Tuple[str, ...]:
        return tuple(self._defaults)

    def _require_key(self, key: str) -> None:
        if key not in self._defaults:
            raise SettingsNotFoundError(self.group_name, key)

    def get(self, key: str, default: Any = None) -> Any:
        """Возвращает значение настройки."""

        self._require_key(key)
        return self._values.get(key, default)

    def get_default(self, key: str) -> Any:
        self._require_key(key)
        return self._defaults[key]

    def validate(self, key: str, value: Any) -> Tuple[bool, str]:
        validator = self._validators.get(key)
        if validator is None:
            return True, ""
        return validator.validate(value)

    def set(self, key: str, value: Any) -> None:
        """Сохраняет значение, выбрасывая ошибку при невалидных данных."""

        self._require_key(key)
        is_valid, error = self.validate(key, value)
        if not is_valid:
            raise SettingsValidationError(
                key=f"{self.group_name}.{key}",
                value=value,
                reason=error,
            )
        self._values[key] = value

    def to_dict(self) -> Dict[str, Any]:
        return dict(self._values)

    def from_dict(self, data: Dict[str, Any]) -> None:
        """Заполняет группу из словаря; неизвестные ключи игнорируются."""

        for key, value in data.items():
            if key in self._defaults:
                self.set(key, value)

    def reset_to_defaults(self) -> None:
        self._values = dict(self._defaults)


class LoggingSettings(SettingsGroup):
    """Настройки журналирования."""

    group_name = "logging"

    def _build_defaults(self) -> Dict[str, Any]:
        return {
            "enabled": True,
            "level": "INFO",
            "max_file_size_mb": 10,
            "max_archived_files": 5,
        }

    def _build_validators(self) -> Dict[str, Validator]:
        return {
            "enabled": TypeValidator(bool),
            "level": EnumValidator(LOG_LEVELS),
            "max_file_size_mb": RangeValidator(1, 1000),
            "max_archived_files": RangeValidator(1, 50),
        }


class ConnectionsSettings(SettingsGroup):
    """Параметры SSH подключения к управляемому хосту."""

    group_name = "connections"

    def _build_defaults(self) -> Dict[str, Any]:
        return {
            "default_port": 22,
            "connection_timeout_sec": 30,
            "verify_host_key": False,
        }

    def _build_validators(self) -> Dict[str, Validator]:
        return {
            "default_port": RangeValidator(1, 65535),
            "connection_timeout_sec": RangeValidator(1, 120),
            "verify_host_key": TypeValidator(bool),
        }


class RuntimeSettings(SettingsGroup):
    """Параметры контейнерного рантайма на удалённом хосте."""

    group_name = "runtime"

    def _build_defaults(self) -> Dict[str, Any]:
        return {
            "binary": "docker",
            "log_tail_lines": 20,
        }

    def _build_validators(self) -> Dict[str, Validator]:
        return {
            "binary": CompositeValidator([TypeValidator(str), RegexValidator(BINARY_PATTERN)]),
            "log_tail_lines": RangeValidator(1, 10000),
        }
