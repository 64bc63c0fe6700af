"""Сервис инвентаризации: проверки рантайма, листинг, логи и действия.

Каждый вызов независим и каждый раз заново опрашивает хост. Порядок
проверок строгий: наличие бинарника -> демон -> пробный листинг ->
структурированный листинг.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Protocol

from src.connections.models import ConnectionDescriptor
from src.inventory import parser
from src.inventory.commands import Action, CommandVocabulary
from src.inventory.exceptions import (
    DaemonUnavailableError,
    EmptyInventoryError,
    RuntimeUnavailableError,
)
from src.inventory.models import Container, LogRecord
from src.remote.exceptions import CommandFailedError
from src.remote.gateway import CommandResult

LOGGER = logging.getLogger(__name__)

DEFAULT_LOG_TAIL = 20


class CommandGateway(Protocol):
    """Контракт шлюза, через который сервис выполняет команды."""

    def execute(self, descriptor: ConnectionDescriptor, command: str) -> CommandResult:
        """Выполняет команду и возвращает вывод либо бросает исключение."""


class InventoryService:
    """Оркестрирует шлюз, словарь команд и парсер."""

    def __init__(
        self,
        gateway: CommandGateway,
        vocabulary: Optional[CommandVocabulary] = None,
        *,
        log_tail: int = DEFAULT_LOG_TAIL,
    ) -> None:
        self._gateway = gateway
        self._vocabulary = vocabulary or CommandVocabulary()
        self._log_tail = log_tail

    @property
    def vocabulary(self) -> CommandVocabulary:
        return self._vocabulary

    # ------------------------------------------------------------------ checks
    def check_runtime(self, descriptor: ConnectionDescriptor) -> None:
        """Проверяет наличие рантайма и доступность его демона."""

        self._probe_presence(descriptor)
        self._probe_daemon(descriptor)

    def _probe_presence(self, descriptor: ConnectionDescriptor) -> None:
        try:
            self._gateway.execute(descriptor, self._vocabulary.presence_check())
        except CommandFailedError as exc:
            raise RuntimeUnavailableError(self._vocabulary.binary, str(exc)) from exc

    def _probe_daemon(self, descriptor: ConnectionDescriptor) -> None:
        try:
            self._gateway.execute(descriptor, self._vocabulary.health_check())
        except CommandFailedError as exc:
            raise DaemonUnavailableError(self._vocabulary.binary, str(exc)) from exc

    # ---------------------------------------------------------------- queries
    def list_containers(self, descriptor: ConnectionDescriptor) -> List[Container]:
        """Возвращает свежий снимок всех контейнеров хоста."""

        self.check_runtime(descriptor)

        raw_command = self._vocabulary.raw_listing()
        raw = self._gateway.execute(descriptor, raw_command)
        if not raw.stdout.strip():
            raise EmptyInventoryError(raw_command)

        listing = self._gateway.execute(descriptor, self._vocabulary.structured_listing())
        containers = parser.parse_container_listing(listing.stdout, self._vocabulary.delimiter)
        LOGGER.info("Fetched %d containers from %s", len(containers), descriptor.address)
        return containers

    def tail_logs(
        self,
        descriptor: ConnectionDescriptor,
        container_id: str,
        tail: Optional[int] = None,
    ) -> List[LogRecord]:
        """Возвращает последние строки лога контейнера."""

        command = self._vocabulary.log_tail(
            container_id, self._log_tail if tail is None else tail
        )
        self._probe_presence(descriptor)
        result = self._gateway.execute(descriptor, command)
        records = parser.parse_log_lines(result.stdout)
        LOGGER.info("Fetched %d log lines for container %s", len(records), container_id)
        return records

    # ------------------------------------------------------------- operations
    def perform_action(
        self, descriptor: ConnectionDescriptor, container_id: str, verb: str
    ) -> Action:
        """Выполняет действие жизненного цикла; неизвестное действие не уходит на хост."""

        action = Action.parse(verb)
        self._probe_presence(descriptor)
        self._gateway.execute(descriptor, self._vocabulary.lifecycle(action, container_id))
        LOGGER.info(
            "Action %s completed for container %s on %s",
            action.value,
            container_id,
            descriptor.address,
        )
        return action
