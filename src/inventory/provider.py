"""Менеджер доступа к инвентарю для слоя представления.

Файл описывает класс, который объединяет `ConnectionManager` и
`InventoryService` и возвращает единообразные ответы вида
``{"success": bool, "error": str, ...}`` для списка контейнеров, логов,
действий и применения конфигурации.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Mapping, Optional, Protocol

from src.connections.manager import ConnectionManager
from src.connections.models import DEFAULT_SSH_PORT, ConnectionDescriptor
from src.inventory.commands import CommandVocabulary
from src.inventory.service import DEFAULT_LOG_TAIL, InventoryService
from src.remote.exceptions import RemoteExecutionError
from src.remote.gateway import DEFAULT_CONNECT_TIMEOUT_SEC, SSHGateway

LOGGER = logging.getLogger(__name__)

NOT_CONFIGURED_MESSAGE = "No server configuration found. Please configure server first."


class SettingsReader(Protocol):
    """Минимальный интерфейс реестра настроек."""

    def get_value(self, group: str, key: str, default: Any = None) -> Any:
        """Возвращает значение настройки."""


class InventoryDataProvider:
    """Предоставляет высокоуровневый API инвентаря с ответами-конвертами."""

    def __init__(
        self,
        connection_manager: ConnectionManager,
        service: InventoryService,
        *,
        default_port: int = DEFAULT_SSH_PORT,
    ) -> None:
        self._connection_manager = connection_manager
        self._service = service
        self._default_port = default_port

    @classmethod
    def from_settings(
        cls, connection_manager: ConnectionManager, settings: SettingsReader
    ) -> "InventoryDataProvider":
        """Собирает шлюз, словарь команд и сервис по текущим настройкам."""

        gateway = SSHGateway(
            timeout=int(
                settings.get_value(
                    "connections", "connection_timeout_sec", default=DEFAULT_CONNECT_TIMEOUT_SEC
                )
            ),
            verify_host_key=bool(
                settings.get_value("connections", "verify_host_key", default=False)
            ),
        )
        vocabulary = CommandVocabulary(
            binary=str(settings.get_value("runtime", "binary", default="docker"))
        )
        service = InventoryService(
            gateway,
            vocabulary,
            log_tail=int(settings.get_value("runtime", "log_tail_lines", default=DEFAULT_LOG_TAIL)),
        )
        default_port = int(
            settings.get_value("connections", "default_port", default=DEFAULT_SSH_PORT)
        )
        return cls(connection_manager, service, default_port=default_port)

    # ------------------------------------------------------------------ helpers
    def _require_descriptor(self) -> Optional[ConnectionDescriptor]:
        descriptor = self._connection_manager.get_active()
        if descriptor is None:
            LOGGER.error("No server configuration found")
        return descriptor

    # ------------------------------------------------------------------- fetches
    def list_inventory(self) -> Dict[str, Any]:
        """Возвращает список контейнеров активного хоста."""

        descriptor = self._require_descriptor()
        if descriptor is None:
            return {"success": False, "error": NOT_CONFIGURED_MESSAGE, "containers": []}

        LOGGER.info("Fetching containers from %s@%s", descriptor.username, descriptor.address)
        try:
            containers = self._service.list_containers(descriptor)
        except RemoteExecutionError as exc:
            LOGGER.error("Failed to get containers: %s | context=%s", exc, exc.context)
            return {"success": False, "error": str(exc), "containers": []}

        return {
            "success": True,
            "containers": [container.to_dict() for container in containers],
            "count": len(containers),
        }

    def tail_logs(self, container_id: str, tail: Optional[int] = None) -> Dict[str, Any]:
        """Возвращает хвост логов контейнера."""

        descriptor = self._require_descriptor()
        if descriptor is None:
            return {"success": False, "error": NOT_CONFIGURED_MESSAGE, "logs": []}

        try:
            records = self._service.tail_logs(descriptor, container_id, tail)
        except (RemoteExecutionError, ValueError) as exc:
            LOGGER.error("Failed to get logs for container %s: %s", container_id, exc)
            return {"success": False, "error": str(exc), "logs": []}

        return {
            "success": True,
            "logs": [record.to_dict() for record in records],
            "count": len(records),
        }

    # ---------------------------------------------------------------- operations
    def perform_action(self, container_id: str, action: str) -> Dict[str, Any]:
        """Выполняет действие над контейнером."""

        descriptor = self._require_descriptor()
        if descriptor is None:
            return {"success": False, "error": NOT_CONFIGURED_MESSAGE}

        try:
            self._service.perform_action(descriptor, container_id, action)
        except RemoteExecutionError as exc:
            LOGGER.error(
                "Cannot %s container %s on %s: %s",
                action,
                container_id,
                descriptor.address,
                exc,
            )
            return {"success": False, "error": str(exc)}
        return {"success": True, "message": "Action completed successfully"}

    def apply_configuration(self, payload: Mapping[str, Any]) -> Dict[str, Any]:
        """Проверяет новую цель и только после успеха делает её активной."""

        try:
            descriptor = ConnectionDescriptor.from_payload(
                payload, default_port=self._default_port
            )
        except ValueError as exc:
            return {"success": False, "error": str(exc)}

        LOGGER.info(
            "Attempting to connect to %s@%s", descriptor.username, descriptor.address
        )
        try:
            self._service.check_runtime(descriptor)
        except RemoteExecutionError as exc:
            LOGGER.error("Configuration check failed for %s: %s", descriptor.address, exc)
            return {"success": False, "error": str(exc)}

        self._connection_manager.apply(descriptor)
        return {"success": True, "message": "Configuration saved successfully"}
