"""Исключения удалённого выполнения команд."""

from __future__ import annotations

from typing import Any, Dict, Optional


class RemoteExecutionError(Exception):
    """Базовое исключение движка с контекстом для журналирования."""

    def __init__(self, message: str, *, context: Optional[Dict[str, Any]] = None) -> None:
        self.message = message
        self.context = context or {}
        super().__init__(message)


class ConnectionFailedError(RemoteExecutionError):
    """Не удалось установить SSH соединение или пройти аутентификацию."""

    def __init__(self, host: str, port: int, reason: str) -> None:
        self.host = host
        self.port = port
        self.reason = reason
        super().__init__(
            f"SSH connection to {host}:{port} failed: {reason}",
            context={"host": host, "port": port, "reason": reason},
        )


class SessionFailedError(RemoteExecutionError):
    """Соединение установлено, но канал команды открыть не удалось."""

    def __init__(self, host: str, reason: str) -> None:
        self.host = host
        self.reason = reason
        super().__init__(
            f"SSH session creation failed: {reason}",
            context={"host": host, "reason": reason},
        )


class CommandFailedError(RemoteExecutionError):
    """Команда завершилась с ненулевым кодом."""

    def __init__(self, command: str, exit_status: int, stderr: str = "") -> None:
        self.command = command
        self.exit_status = exit_status
        self.stderr = stderr
        message = f"command '{command}' failed: exit status {exit_status}"
        if stderr.strip():
            message = f"{message}, stderr: {stderr.strip()}"
        super().__init__(
            message,
            context={"command": command, "exit_status": exit_status, "stderr": stderr},
        )
