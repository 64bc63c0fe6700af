"""Модели данных для описания удалённого подключения."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping

DEFAULT_SSH_PORT = 22


@dataclass(frozen=True, slots=True)
class ConnectionDescriptor:
    """Неизменяемые параметры SSH подключения к управляемому хосту.

    Экземпляр создаётся при каждой новой конфигурации и заменяется целиком,
    пароль никогда не попадает в repr и сериализацию.
    """

    host: str
    port: int = DEFAULT_SSH_PORT
    username: str = "root"
    password: str = field(default="", repr=False)

    @property
    def address(self) -> str:
        """Адрес в виде host:port."""

        return f"{self.host}:{self.port}"

    def to_dict(self) -> Dict[str, Any]:
        """Сериализует дескриптор без пароля."""

        return {
            "host": self.host,
            "port": self.port,
            "username": self.username,
        }

    @classmethod
    def from_payload(
        cls, data: Mapping[str, Any], *, default_port: int = DEFAULT_SSH_PORT
    ) -> "ConnectionDescriptor":
        """Создаёт дескриптор из словаря с данными формы/CLI."""

        host = str(data.get("host") or "").strip()
        username = str(data.get("username") or "").strip()
        password = str(data.get("password") or "")
        if not host or not username or not password:
            raise ValueError("Host, username and password are required")

        raw_port = str(data.get("port") or "").strip()
        if not raw_port:
            return cls(host=host, port=default_port, username=username, password=password)
        try:
            port = int(raw_port)
        except ValueError:
            raise ValueError(f"Invalid port: {raw_port!r}") from None
        if not 0 < port < 65536:
            raise ValueError(f"Port {port} is out of range [1, 65535]")
        return cls(host=host, port=port, username=username, password=password)
