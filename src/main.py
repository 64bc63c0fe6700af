"""Точка входа в Remote Docker Manager (командная строка)."""

from __future__ import annotations

import argparse
import getpass
import json
import logging
import os
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from src import __version__
from src.connections.manager import ConnectionManager
from src.inventory.provider import InventoryDataProvider
from src.settings.exceptions import SettingsError
from src.settings.observers import LoggingSettingsObserver
from src.settings.registry import SettingsRegistry
from src.utils.logger import configure_logging, get_logger

LOGGER = get_logger(__name__)

PASSWORD_ENV = "RDM_PASSWORD"
HOME_ENV = "RDM_HOME"


def initialize_settings(config_path: Path) -> SettingsRegistry:
    """Получает singleton реестр настроек и загружает config.json."""

    registry = SettingsRegistry(config_path=config_path)
    registry.load_from_disk()
    registry.register_observer(LoggingSettingsObserver())
    return registry


def setup_logging_from_settings(base_dir: Path, settings: SettingsRegistry) -> None:
    """Настраивает логирование в соответствии с группой logging."""

    logging_settings = settings.get_group("logging")
    if not logging_settings.get("enabled"):
        logging.disable(logging.CRITICAL)
        return

    logging.disable(logging.NOTSET)
    configure_logging(
        log_dir=base_dir / "logs",
        level_name=logging_settings.get("level", "INFO"),
        max_bytes=logging_settings.get("max_file_size_mb", 10) * 1024 * 1024,
        backup_count=logging_settings.get("max_archived_files", 5),
    )


def initialize_workdir(base_dir: Path) -> bool:
    """Создаёт рабочую структуру (~/.rdmanager/logs)."""

    try:
        (base_dir / "logs").mkdir(parents=True, exist_ok=True)
        return True
    except OSError as exc:
        LOGGER.error("Failed to initialize working directory %s: %s", base_dir, exc)
        return False


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="rdmanager",
        description="Inspect and manage containers on a remote host over SSH",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--host", required=True, help="Managed host name or address")
    parser.add_argument("--port", default="", help="SSH port (default from settings)")
    parser.add_argument("--user", default="root", help="SSH user name")
    parser.add_argument("--timeout", type=int, help="Connection timeout in seconds")
    parser.add_argument("--runtime", help="Container runtime binary on the host")

    subparsers = parser.add_subparsers(dest="command", required=True)
    subparsers.add_parser("check", help="Verify SSH access, runtime and daemon")
    subparsers.add_parser("containers", help="List all containers")

    logs_parser = subparsers.add_parser("logs", help="Tail container logs")
    logs_parser.add_argument("container_id")
    logs_parser.add_argument("--tail", type=int, help="Number of lines (default from settings)")

    action_parser = subparsers.add_parser("action", help="Run a lifecycle action")
    action_parser.add_argument("container_id")
    action_parser.add_argument("verb", help="start, stop, restart or remove")
    return parser


def read_password() -> str:
    """Пароль берётся из окружения, иначе запрашивается интерактивно."""

    password = os.environ.get(PASSWORD_ENV)
    if password:
        return password
    return getpass.getpass("SSH password: ")


def apply_overrides(settings: SettingsRegistry, args: argparse.Namespace) -> None:
    """Переносит параметры командной строки в реестр (без сохранения на диск)."""

    if args.timeout is not None:
        settings.set_value("connections", "connection_timeout_sec", args.timeout)
    if args.runtime:
        settings.set_value("runtime", "binary", args.runtime)


def run_command(provider: InventoryDataProvider, args: argparse.Namespace) -> Dict[str, Any]:
    """Выполняет подкоманду для уже сконфигурированного провайдера."""

    if args.command == "containers":
        return provider.list_inventory()
    if args.command == "logs":
        return provider.tail_logs(args.container_id, args.tail)
    if args.command == "action":
        return provider.perform_action(args.container_id, args.verb)
    return {"success": False, "error": f"Unknown command: {args.command}"}


def emit(envelope: Dict[str, Any]) -> int:
    print(json.dumps(envelope, indent=2, ensure_ascii=False))
    return 0 if envelope.get("success") else 1


def main(argv: Optional[List[str]] = None) -> int:
    """Основная точка входа: готовит окружение и выполняет подкоманду."""

    args = build_parser().parse_args(argv)

    home_dir = Path(os.environ.get(HOME_ENV, Path.home()))
    base_dir = home_dir / ".rdmanager"
    if not initialize_workdir(base_dir):
        return 1
    configure_logging(base_dir / "logs")

    try:
        settings = initialize_settings(base_dir / "config.json")
        setup_logging_from_settings(base_dir, settings)
        apply_overrides(settings, args)
    except SettingsError as exc:
        print(f"Settings error: {exc}", file=sys.stderr)
        return 2

    LOGGER.info("Remote Docker Manager %s, command %s", __version__, args.command)
    provider = InventoryDataProvider.from_settings(ConnectionManager(), settings)
    configured = provider.apply_configuration(
        {
            "host": args.host,
            "port": args.port,
            "username": args.user,
            "password": read_password(),
        }
    )
    if not configured.get("success") or args.command == "check":
        return emit(configured)
    return emit(run_command(provider, args))


if __name__ == "__main__":
    sys.exit(main())
