"""Тесты сервиса инвентаризации на поддельном шлюзе."""

from __future__ import annotations

from typing import Any, Callable, Dict

import pytest

from src.connections.models import ConnectionDescriptor
from src.inventory.commands import Action, CommandVocabulary
from src.inventory.exceptions import (
    DaemonUnavailableError,
    EmptyInventoryError,
    RuntimeUnavailableError,
    UnknownActionError,
)
from src.inventory.models import ContainerState
from src.inventory.service import InventoryService
from src.remote.exceptions import CommandFailedError, ConnectionFailedError

LISTING_COMMAND = CommandVocabulary().structured_listing()

GatewayFactory = Callable[..., Any]


def test_list_containers_probes_in_order(
    descriptor: ConnectionDescriptor,
    make_gateway: GatewayFactory,
    healthy_responses: Dict[str, str],
) -> None:
    healthy_responses[LISTING_COMMAND] = (
        "abc123|web|nginx:latest|Up 2 hours|2024-01-01|80/tcp\n"
        "def456|db|postgres:16|Exited (0) 2 hours ago|2024-01-01\n"
    )
    gateway = make_gateway(healthy_responses)
    service = InventoryService(gateway)

    containers = service.list_containers(descriptor)

    assert gateway.commands == ["which docker", "docker info", "docker ps -a", LISTING_COMMAND]
    assert [container.identifier for container in containers] == ["abc123", "def456"]
    assert [container.state for container in containers] == [
        ContainerState.RUNNING,
        ContainerState.STOPPED,
    ]
    assert all(call[0] is descriptor for call in gateway.calls)


def test_zero_containers_is_empty_success(
    descriptor: ConnectionDescriptor,
    make_gateway: GatewayFactory,
    healthy_responses: Dict[str, str],
) -> None:
    service = InventoryService(make_gateway(healthy_responses))
    assert service.list_containers(descriptor) == []


def test_missing_runtime_stops_before_listing(
    descriptor: ConnectionDescriptor, make_gateway: GatewayFactory
) -> None:
    gateway = make_gateway(failures={"which docker": CommandFailedError("which docker", 1)})
    service = InventoryService(gateway)

    with pytest.raises(RuntimeUnavailableError) as exc_info:
        service.list_containers(descriptor)

    assert gateway.commands == ["which docker"]
    assert isinstance(exc_info.value.__cause__, CommandFailedError)


def test_daemon_down_raises_daemon_unavailable(
    descriptor: ConnectionDescriptor,
    make_gateway: GatewayFactory,
    healthy_responses: Dict[str, str],
) -> None:
    failure = CommandFailedError("docker info", 1, "Cannot connect to the Docker daemon")
    gateway = make_gateway(healthy_responses, failures={"docker info": failure})

    with pytest.raises(DaemonUnavailableError, match="Cannot connect to the Docker daemon"):
        InventoryService(gateway).list_containers(descriptor)
    assert gateway.commands == ["which docker", "docker info"]


def test_empty_raw_listing_raises_empty_inventory(
    descriptor: ConnectionDescriptor,
    make_gateway: GatewayFactory,
    healthy_responses: Dict[str, str],
) -> None:
    healthy_responses["docker ps -a"] = "  \n"
    gateway = make_gateway(healthy_responses)

    with pytest.raises(EmptyInventoryError):
        InventoryService(gateway).list_containers(descriptor)
    assert LISTING_COMMAND not in gateway.commands


def test_connection_errors_are_not_relabelled(
    descriptor: ConnectionDescriptor, make_gateway: GatewayFactory
) -> None:
    failure = ConnectionFailedError("example.com", 22, "Authentication failed.")
    gateway = make_gateway(failures={"which docker": failure})

    with pytest.raises(ConnectionFailedError):
        InventoryService(gateway).list_containers(descriptor)


def test_listing_command_failure_propagates(
    descriptor: ConnectionDescriptor,
    make_gateway: GatewayFactory,
    healthy_responses: Dict[str, str],
) -> None:
    failure = CommandFailedError(LISTING_COMMAND, 125, "unknown flag")
    gateway = make_gateway(healthy_responses, failures={LISTING_COMMAND: failure})

    with pytest.raises(CommandFailedError):
        InventoryService(gateway).list_containers(descriptor)


def test_tail_logs_uses_default_tail(
    descriptor: ConnectionDescriptor, make_gateway: GatewayFactory
) -> None:
    gateway = make_gateway(
        {
            "which docker": "/usr/bin/docker",
            "docker logs --tail 20 abc123 2>&1": "line1\n\nline2\n",
        }
    )
    records = InventoryService(gateway).tail_logs(descriptor, "abc123")

    assert [record.text for record in records] == ["line1", "line2"]
    assert gateway.commands == ["which docker", "docker logs --tail 20 abc123 2>&1"]


def test_tail_logs_with_explicit_tail_and_runtime(
    descriptor: ConnectionDescriptor, make_gateway: GatewayFactory
) -> None:
    gateway = make_gateway()
    service = InventoryService(gateway, CommandVocabulary(binary="podman"), log_tail=50)

    service.tail_logs(descriptor, "abc123", tail=5)

    assert gateway.commands == ["which podman", "podman logs --tail 5 abc123 2>&1"]


@pytest.mark.parametrize("tail", [0, -1])
def test_tail_logs_rejects_non_positive_tail(
    descriptor: ConnectionDescriptor, make_gateway: GatewayFactory, tail: int
) -> None:
    gateway = make_gateway()
    with pytest.raises(ValueError):
        InventoryService(gateway).tail_logs(descriptor, "abc123", tail=tail)
    assert gateway.commands == []


def test_tail_logs_missing_runtime(
    descriptor: ConnectionDescriptor, make_gateway: GatewayFactory
) -> None:
    gateway = make_gateway(failures={"which docker": CommandFailedError("which docker", 1)})
    with pytest.raises(RuntimeUnavailableError):
        InventoryService(gateway).tail_logs(descriptor, "abc123")
    assert gateway.commands == ["which docker"]


@pytest.mark.parametrize(
    ("verb", "command"),
    [
        ("start", "docker start abc123"),
        ("stop", "docker stop abc123"),
        ("restart", "docker restart abc123"),
        ("remove", "docker rm -f abc123"),
    ],
)
def test_perform_action(
    descriptor: ConnectionDescriptor, make_gateway: GatewayFactory, verb: str, command: str
) -> None:
    gateway = make_gateway()
    action = InventoryService(gateway).perform_action(descriptor, "abc123", verb)

    assert action is Action(verb)
    assert gateway.commands == ["which docker", command]


def test_unknown_action_issues_no_command(
    descriptor: ConnectionDescriptor, make_gateway: GatewayFactory
) -> None:
    gateway = make_gateway()
    with pytest.raises(UnknownActionError):
        InventoryService(gateway).perform_action(descriptor, "abc123", "pause")
    assert gateway.commands == []


def test_failed_action_propagates_command_error(
    descriptor: ConnectionDescriptor, make_gateway: GatewayFactory
) -> None:
    failure = CommandFailedError("docker stop abc123", 1, "No such container: abc123")
    gateway = make_gateway(failures={"docker stop abc123": failure})

    with pytest.raises(CommandFailedError, match="No such container"):
        InventoryService(gateway).perform_action(descriptor, "abc123", "stop")


def test_check_runtime_runs_presence_and_health(
    descriptor: ConnectionDescriptor, make_gateway: GatewayFactory
) -> None:
    gateway = make_gateway()
    InventoryService(gateway).check_runtime(descriptor)
    assert gateway.commands == ["which docker", "docker info"]
