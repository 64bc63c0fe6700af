"""Хранитель активного подключения: одна цель, заменяемая целиком."""

from __future__ import annotations

import logging
import threading
from typing import Optional

from src.connections.models import ConnectionDescriptor


class ConnectionManager:
    """Держит текущий дескриптор подключения только в памяти процесса.

    Замена выполняется под коротким замком; читатели получают неизменяемый
    дескриптор, поэтому уже запущенные операции не видят переконфигурации.
    """

    def __init__(self, descriptor: Optional[ConnectionDescriptor] = None) -> None:
        self._logger = logging.getLogger(__name__)
        self._lock = threading.Lock()
        self._active = descriptor

    def get_active(self) -> Optional[ConnectionDescriptor]:
        """Возвращает активный дескриптор или None."""

        with self._lock:
            return self._active

    def apply(self, descriptor: ConnectionDescriptor) -> Optional[ConnectionDescriptor]:
        """Делает дескриптор активным и возвращает предыдущий."""

        with self._lock:
            previous, self._active = self._active, descriptor
        self._logger.info(
            "Active connection set to %s@%s", descriptor.username, descriptor.address
        )
        return previous

    def clear(self) -> None:
        """Сбрасывает активное подключение."""

        with self._lock:
            self._active = None
