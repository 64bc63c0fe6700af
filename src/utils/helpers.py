"""Различные вспомогательные функции."""

from __future__ import annotations

from typing import Iterator


def iter_nonblank_lines(text: str) -> Iterator[str]:
    """Отдаёт строки без пробелов по краям, пропуская пустые."""

    for raw_line in text.split("\n"):
        line = raw_line.strip()
        if line:
            yield line
