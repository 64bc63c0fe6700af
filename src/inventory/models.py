"""Упрощённые структуры данных для описания контейнеров и логов."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict


class ContainerState(str, Enum):
    """Производное состояние контейнера."""

    RUNNING = "running"
    STOPPED = "stopped"


@dataclass(frozen=True, slots=True)
class Container:
    """Одна запись из структурированного вывода `ps -a`."""

    identifier: str  # идентификатор контейнера из docker ps
    name: str
    image: str
    status: str
    state: ContainerState
    created: str
    ports: str = ""

    def to_dict(self) -> Dict[str, Any]:
        """Сериализует запись для ответа вызывающей стороне."""

        return {
            "id": self.identifier,
            "name": self.name,
            "image": self.image,
            "status": self.status,
            "state": self.state.value,
            "created": self.created,
            "ports": self.ports,
        }


@dataclass(frozen=True, slots=True)
class LogRecord:
    """Одна строка лога контейнера."""

    text: str

    def to_dict(self) -> Dict[str, Any]:
        return {"log": self.text}
