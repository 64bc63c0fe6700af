"""Чистые функции разбора текстового вывода рантайма.

Разбор листинга снисходителен: строки, в которых меньше
``MIN_LISTING_FIELDS`` полей, пропускаются, а не прерывают весь листинг.
Пустой вывод даёт пустой список; решение о том, ошибка ли это, принимает
сервис.
"""

from __future__ import annotations

import logging
from typing import List

from src.inventory.commands import FIELD_DELIMITER
from src.inventory.models import Container, ContainerState, LogRecord
from src.utils.helpers import iter_nonblank_lines

LOGGER = logging.getLogger(__name__)

# id, name, image, status, created; ports необязательны
MIN_LISTING_FIELDS = 5


def derive_state(status: str) -> ContainerState:
    """Определяет состояние по тексту статуса (подстрока "up" без учёта регистра)."""

    if "up" in status.lower():
        return ContainerState.RUNNING
    return ContainerState.STOPPED


def parse_container_listing(text: str, delimiter: str = FIELD_DELIMITER) -> List[Container]:
    """Превращает вывод `ps -a --format ...` в список контейнеров."""

    containers: List[Container] = []
    for line in iter_nonblank_lines(text):
        parts = [part.strip() for part in line.split(delimiter)]
        if len(parts) < MIN_LISTING_FIELDS:
            LOGGER.debug("Skipping malformed listing line: %r", line)
            continue
        status = parts[3]
        containers.append(
            Container(
                identifier=parts[0],
                name=parts[1],
                image=parts[2],
                status=status,
                state=derive_state(status),
                created=parts[4],
                ports=parts[5] if len(parts) > 5 else "",
            )
        )
    return containers


def parse_log_lines(text: str) -> List[LogRecord]:
    """Каждая непустая строка вывода становится записью лога."""

    return [LogRecord(text=line) for line in iter_nonblank_lines(text)]
