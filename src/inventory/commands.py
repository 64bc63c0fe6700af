"""Фиксированный словарь команд, которые движок выполняет на хосте."""

from __future__ import annotations

import shlex
from dataclasses import dataclass
from enum import Enum

from src.inventory.exceptions import UnknownActionError

DEFAULT_RUNTIME_BINARY = "docker"
FIELD_DELIMITER = "|"

# Порядок полей соответствует разбору в src.inventory.parser
LISTING_FIELDS = (
    "{{.ID}}",
    "{{.Names}}",
    "{{.Image}}",
    "{{.Status}}",
    "{{.CreatedAt}}",
    "{{.Ports}}",
)


class Action(str, Enum):
    """Поддерживаемые действия жизненного цикла."""

    START = "start"
    STOP = "stop"
    RESTART = "restart"
    REMOVE = "remove"

    @classmethod
    def parse(cls, verb: str) -> "Action":
        """Возвращает действие по имени или бросает UnknownActionError."""

        try:
            return cls(verb)
        except ValueError:
            raise UnknownActionError(verb, [action.value for action in cls]) from None


@dataclass(frozen=True, slots=True)
class CommandVocabulary:
    """Строит готовые для shell строки команд для заданного рантайма."""

    binary: str = DEFAULT_RUNTIME_BINARY
    delimiter: str = FIELD_DELIMITER

    def presence_check(self) -> str:
        return f"which {self.binary}"

    def health_check(self) -> str:
        return f"{self.binary} info"

    def raw_listing(self) -> str:
        return f"{self.binary} ps -a"

    def structured_listing(self) -> str:
        template = self.delimiter.join(LISTING_FIELDS)
        return f"{self.binary} ps -a --format '{template}'"

    def log_tail(self, container_id: str, tail: int) -> str:
        """Хвост логов; stderr контейнера сливается в stdout."""

        if isinstance(tail, bool) or not isinstance(tail, int) or tail <= 0:
            raise ValueError(f"tail must be a positive integer, got {tail!r}")
        return f"{self.binary} logs --tail {tail} {shlex.quote(container_id)} 2>&1"

    def lifecycle(self, action: Action, container_id: str) -> str:
        quoted = shlex.quote(container_id)
        if action is Action.REMOVE:
            return f"{self.binary} rm -f {quoted}"
        return f"{self.binary} {action.value} {quoted}"
