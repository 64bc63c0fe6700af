"""Исключения сервиса инвентаризации."""

from __future__ import annotations

from typing import Iterable

from src.remote.exceptions import RemoteExecutionError


class InventoryError(RemoteExecutionError):
    """Базовая ошибка уровня сервиса."""


class RuntimeUnavailableError(InventoryError):
    """Бинарник контейнерного рантайма не найден на хосте."""

    def __init__(self, binary: str, cause: str) -> None:
        self.binary = binary
        super().__init__(
            f"{binary} is not installed or not in PATH: {cause}",
            context={"binary": binary, "cause": cause},
        )


class DaemonUnavailableError(InventoryError):
    """Демон рантайма не запущен или нет прав доступа."""

    def __init__(self, binary: str, cause: str) -> None:
        self.binary = binary
        super().__init__(
            f"{binary} daemon is not running or permission denied: {cause}",
            context={"binary": binary, "cause": cause},
        )


class EmptyInventoryError(InventoryError):
    """Пробный листинг вернул пустой вывод."""

    def __init__(self, command: str) -> None:
        self.command = command
        super().__init__(
            f"command '{command}' returned empty output",
            context={"command": command},
        )


class UnknownActionError(InventoryError):
    """Запрошено действие вне поддерживаемого набора."""

    def __init__(self, action: str, allowed: Iterable[str] = ()) -> None:
        self.action = action
        self.allowed = list(allowed)
        super().__init__(
            f"Unknown action: {action}",
            context={"action": action, "allowed": self.allowed},
        )
