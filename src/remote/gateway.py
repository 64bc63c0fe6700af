"""Шлюз удалённых сессий: одна команда на одно новое SSH соединение."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Any, Callable

import paramiko

from src.connections.models import ConnectionDescriptor
from src.remote.exceptions import CommandFailedError, ConnectionFailedError, SessionFailedError

LOGGER = logging.getLogger(__name__)

DEFAULT_CONNECT_TIMEOUT_SEC = 30


@dataclass(frozen=True, slots=True)
class CommandResult:
    """Результат одного запуска команды."""

    command: str
    stdout: str
    stderr: str = ""
    exit_status: int = 0


class SSHGateway:
    """Открывает SSH соединение и канал на каждый вызов и закрывает их после.

    Соединения не переиспользуются между вызовами; таймаут ограничивает только
    установку соединения, выполнение команды не прерывается.
    """

    def __init__(
        self,
        timeout: int = DEFAULT_CONNECT_TIMEOUT_SEC,
        *,
        verify_host_key: bool = False,
        client_factory: Callable[[], Any] = paramiko.SSHClient,
    ) -> None:
        self._timeout = timeout
        self._verify_host_key = verify_host_key
        self._client_factory = client_factory

    @property
    def timeout(self) -> int:
        """Таймаут установки соединения в секундах."""

        return self._timeout

    def execute(self, descriptor: ConnectionDescriptor, command: str) -> CommandResult:
        """Выполняет команду на хосте и возвращает захваченный вывод."""

        self._check_descriptor(descriptor)
        LOGGER.debug("Executing on %s: %s", descriptor.address, command)
        with self._client_factory() as client:
            self._connect(client, descriptor)
            transport = client.get_transport()
            if transport is None or not transport.is_active():
                raise SessionFailedError(descriptor.host, "transport is not active")
            try:
                channel = transport.open_session(timeout=self._timeout)
            except (paramiko.SSHException, OSError) as exc:
                raise SessionFailedError(descriptor.host, str(exc)) from exc

            with channel:
                try:
                    channel.exec_command(command)
                except paramiko.SSHException as exc:
                    raise SessionFailedError(descriptor.host, str(exc)) from exc
                stdout, stderr = _drain(channel)
                exit_status = channel.recv_exit_status()

        if exit_status != 0:
            raise CommandFailedError(command, exit_status, stderr)
        LOGGER.debug("Command on %s returned %d bytes", descriptor.address, len(stdout))
        return CommandResult(command=command, stdout=stdout, stderr=stderr, exit_status=0)

    def _connect(self, client: Any, descriptor: ConnectionDescriptor) -> None:
        if self._verify_host_key:
            client.load_system_host_keys()
            client.set_missing_host_key_policy(paramiko.RejectPolicy())
        else:
            client.set_missing_host_key_policy(paramiko.AutoAddPolicy())
        try:
            client.connect(
                hostname=descriptor.host,
                port=descriptor.port,
                username=descriptor.username,
                password=descriptor.password,
                timeout=self._timeout,
                banner_timeout=self._timeout,
                auth_timeout=self._timeout,
                allow_agent=False,
                look_for_keys=False,
            )
        except (paramiko.SSHException, OSError) as exc:
            raise ConnectionFailedError(descriptor.host, descriptor.port, str(exc)) from exc

    @staticmethod
    def _check_descriptor(descriptor: ConnectionDescriptor) -> None:
        if not descriptor.host or not descriptor.username or not descriptor.password:
            raise ConnectionFailedError(
                descriptor.host,
                descriptor.port,
                "host, username and password must not be empty",
            )
        if descriptor.port <= 0:
            raise ConnectionFailedError(descriptor.host, descriptor.port, "invalid port")


def _decode(data: Any) -> str:
    if isinstance(data, bytes):
        return data.decode("utf-8", errors="replace")
    return str(data)


def _drain(channel: Any) -> tuple[str, str]:
    # Общее окно канала: stderr читается параллельно со stdout.
    with ThreadPoolExecutor(max_workers=1) as pool:
        pending_stderr = pool.submit(channel.makefile_stderr("rb").read)
        stdout = channel.makefile("rb").read()
        stderr = pending_stderr.result()
    return _decode(stdout), _decode(stderr)
