"""Тесты иерархии исключений движка."""

from __future__ import annotations

from src.inventory.exceptions import (
    DaemonUnavailableError,
    EmptyInventoryError,
    InventoryError,
    RuntimeUnavailableError,
    UnknownActionError,
)
from src.remote.exceptions import (
    CommandFailedError,
    ConnectionFailedError,
    RemoteExecutionError,
    SessionFailedError,
)


def test_gateway_errors_carry_context() -> None:
    error = ConnectionFailedError("example.com", 22, "Authentication failed.")
    assert isinstance(error, RemoteExecutionError)
    assert str(error) == "SSH connection to example.com:22 failed: Authentication failed."
    assert error.context == {"host": "example.com", "port": 22, "reason": "Authentication failed."}

    session = SessionFailedError("example.com", "channel refused")
    assert "channel refused" in str(session)


def test_command_failed_message_includes_stderr_only_when_present() -> None:
    with_stderr = CommandFailedError("docker stop abc", 1, "No such container: abc\n")
    assert str(with_stderr) == (
        "command 'docker stop abc' failed: exit status 1, stderr: No such container: abc"
    )
    assert "stderr" not in str(CommandFailedError("which docker", 1))


def test_service_errors_are_engine_errors() -> None:
    errors = [
        RuntimeUnavailableError("docker", "exit status 1"),
        DaemonUnavailableError("docker", "permission denied"),
        EmptyInventoryError("docker ps -a"),
        UnknownActionError("pause", ["start", "stop"]),
    ]
    for error in errors:
        assert isinstance(error, InventoryError)
        assert isinstance(error, RemoteExecutionError)
        assert error.context


def test_unknown_action_message() -> None:
    error = UnknownActionError("pause", ["start", "stop", "restart", "remove"])
    assert str(error) == "Unknown action: pause"
    assert error.allowed == ["start", "stop", "restart", "remove"]
