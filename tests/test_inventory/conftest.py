"""Общие заглушки для тестов инвентаризации."""

from __future__ import annotations

from typing import Callable, Dict, List, Optional, Tuple

import pytest

from src.connections.models import ConnectionDescriptor
from src.remote.gateway import CommandResult

RAW_HEADER = "CONTAINER ID   IMAGE   COMMAND   CREATED   STATUS   PORTS   NAMES\n"


class FakeGateway:
    """Отвечает заранее заданным выводом и запоминает выполненные команды."""

    def __init__(
        self,
        responses: Optional[Dict[str, str]] = None,
        failures: Optional[Dict[str, Exception]] = None,
    ) -> None:
        self.responses = responses or {}
        self.failures = failures or {}
        self.calls: List[Tuple[ConnectionDescriptor, str]] = []

    @property
    def commands(self) -> List[str]:
        return [command for _, command in self.calls]

    def execute(self, descriptor: ConnectionDescriptor, command: str) -> CommandResult:
        self.calls.append((descriptor, command))
        if command in self.failures:
            raise self.failures[command]
        return CommandResult(command=command, stdout=self.responses.get(command, ""))


@pytest.fixture
def descriptor() -> ConnectionDescriptor:
    return ConnectionDescriptor(host="example.com", username="root", password="pw")


@pytest.fixture
def make_gateway() -> Callable[..., FakeGateway]:
    return FakeGateway


@pytest.fixture
def healthy_responses() -> Dict[str, str]:
    """Вывод хоста, где docker установлен и демон работает."""

    return {
        "which docker": "/usr/bin/docker\n",
        "docker info": "Server Version: 24.0.7\n",
        "docker ps -a": RAW_HEADER,
    }
