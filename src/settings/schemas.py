"""Дефолтная схема config.json."""

from __future__ import annotations

from typing import Any, Dict

# Учётные данные в config.json не хранятся: дескриптор подключения живёт только в памяти
DEFAULT_CONFIG: Dict[str, Any] = {
    "version": "1.0.0",
    "logging": {
        "enabled": True,
        "level": "INFO",
        "max_file_size_mb": 10,
        "max_archived_files": 5,
    },
    "connections": {
        "default_port": 22,
        "connection_timeout_sec": 30,
        "verify_host_key": False,
    },
    "runtime": {
        "binary": "docker",
        "log_tail_lines": 20,
    },
}
