"""Наблюдатели за изменениями настроек."""

from __future__ import annotations

import logging
from typing import Protocol, runtime_checkable


@runtime_checkable
class SettingsObserver(Protocol):
    """Контракт наблюдателя."""

    def on_setting_changed(
        self,
        group: str,
        key: str,
        old_value: object,
        new_value: object,
    ) -> None:
        """Вызывается после успешной записи нового значения."""


class LoggingSettingsObserver:
    """Пишет каждое изменение настройки в журнал."""

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self._logger = logger or logging.getLogger(__name__)

    def on_setting_changed(
        self,
        group: str,
        key: str,
        old_value: object,
        new_value: object,
    ) -> None:
        self._logger.info("Setting changed: %s.%s (%r -> %r)", group, key, old_value, new_value)
