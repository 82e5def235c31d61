"""Lifecycle handler checks against an in-memory panel."""

from __future__ import annotations

import pytest

from terradactyl.domain.model import Allocation
from terradactyl.provider import LocationResource, NodeResource, ProviderError, UserResource
from terradactyl.provider.state import (
    AllocationState,
    LocationResourceState,
    NodeResourceState,
    UserResourceState,
)
from tests.helpers.panel import FakePanelGateway, make_location, make_node, make_user


def _node_plan(**overrides: object) -> NodeResourceState:
    values: dict[str, object] = {
        "name": "prod-1",
        "location_id": 1,
        "fqdn": "prod-1.example.com",
        "scheme": "https",
        "memory": 8192,
        "memory_overallocate": 0,
        "disk": 100000,
        "disk_overallocate": 0,
        "upload_size": 100,
        "daemon_sftp": 2022,
        "daemon_listen": 8080,
    }
    values.update(overrides)
    return NodeResourceState(**values)  # type: ignore[arg-type]


def test_user_create_returns_computed_fields() -> None:
    panel = FakePanelGateway()
    plan = UserResourceState(
        username="ada", email="ada@example.com", first_name="Ada", last_name="Lovelace"
    )

    state = UserResource(panel).create(plan)

    assert state.id == 101
    assert state.username == "ada"
    assert state.created_at == "2024-03-01T12:30:15Z"


def test_user_read_reports_backend_error() -> None:
    panel = FakePanelGateway()

    with pytest.raises(ProviderError) as excinfo:
        UserResource(panel).read(
            UserResourceState(id=42, username="x", email="x@y.z", first_name="x", last_name="y")
        )

    assert excinfo.value.summary == "Error Reading Pterodactyl User"
    assert excinfo.value.detail == (
        "Could not read Pterodactyl user ID 42: "
        "The requested resource could not be found on the server."
    )


def test_update_without_id_is_rejected() -> None:
    panel = FakePanelGateway()

    with pytest.raises(ProviderError, match="Missing Resource ID"):
        LocationResource(panel).update(LocationResourceState(short="fra"))

    assert panel.calls == []


def test_location_update_and_delete() -> None:
    panel = FakePanelGateway(locations=[make_location(3, short="fra", long="Frankfurt")])
    resource = LocationResource(panel)

    state = resource.update(LocationResourceState(id=3, short="fra1", long="Frankfurt 1"))
    resource.delete(state)

    assert state.short == "fra1"
    assert 3 not in panel.locations


def test_import_state_reads_full_record() -> None:
    panel = FakePanelGateway(users=[make_user(8, username="grace")])

    state = UserResource(panel).import_state(" 8 ")

    assert state.id == 8
    assert state.username == "grace"


def test_import_state_rejects_non_numeric_id() -> None:
    with pytest.raises(ProviderError) as excinfo:
        NodeResource(FakePanelGateway()).import_state("prod-1")

    assert excinfo.value.summary == "Error importing state"
    assert excinfo.value.detail == "Couldn't convert id to int"


def test_node_create_reconciles_allocations() -> None:
    panel = FakePanelGateway()
    plan = _node_plan(
        description="primary",
        allocations=[
            AllocationState(ip="10.0.0.1", port=25565, alias="mc"),
            AllocationState(ip="10.0.0.1", port=25566),
        ],
    )

    state = NodeResource(panel).create(plan)

    assert state.id == 101
    assert state.allocations is not None
    assert [(entry.port, entry.alias) for entry in state.allocations] == [
        (25565, "mc"),
        (25566, None),
    ]
    assert all(entry.id is not None for entry in state.allocations)
    assert [call[0] for call in panel.mutations()] == [
        "create_node",
        "create_allocation",
        "create_allocation",
    ]


def test_node_create_patches_dropped_description() -> None:
    panel = FakePanelGateway(drop_description_on_create=True)

    state = NodeResource(panel).create(_node_plan(description="primary"))

    assert state.description == "primary"
    assert [call[0] for call in panel.mutations()] == ["create_node", "update_node"]


def test_node_create_keeps_state_when_allocations_fail() -> None:
    panel = FakePanelGateway()
    panel.fail_on["create_allocation"] = 0
    plan = _node_plan(allocations=[AllocationState(ip="10.0.0.1", port=25565)])

    with pytest.raises(ProviderError) as excinfo:
        NodeResource(panel).create(plan)

    state = excinfo.value.state
    assert excinfo.value.summary == "Error Updating Pterodactyl Node Allocations"
    assert isinstance(state, NodeResourceState)
    assert state.id == 101
    assert state.name == "prod-1"
    assert state.allocations is None
    assert 101 in panel.nodes


def test_node_create_failure_before_creation_has_no_state() -> None:
    panel = FakePanelGateway()
    panel.fail_on["create_node"] = 0

    with pytest.raises(ProviderError) as excinfo:
        NodeResource(panel).create(_node_plan())

    assert excinfo.value.summary == "Error creating node"
    assert excinfo.value.state is None


def test_node_update_deletes_and_creates_allocations() -> None:
    panel = FakePanelGateway(
        nodes=[make_node(5, name="prod-1")],
        allocations={
            5: [
                Allocation(id=1, ip="10.0.0.1", port=25560),
                Allocation(id=2, ip="10.0.0.1", port=25561),
            ]
        },
    )
    plan = _node_plan(
        id=5,
        allocations=[
            AllocationState(id=1, ip="10.0.0.1", port=25560),
            AllocationState(ip="10.0.0.1", port=25570),
        ],
    )

    state = NodeResource(panel).update(plan)

    assert state.allocations is not None
    assert [entry.port for entry in state.allocations] == [25560, 25570]
    assert ("delete_allocation", 5, 2) in panel.calls


def test_node_update_leaves_unmanaged_allocations_alone() -> None:
    existing = [Allocation(id=1, ip="10.0.0.1", port=25560)]
    panel = FakePanelGateway(nodes=[make_node(5)], allocations={5: existing})

    state = NodeResource(panel).update(_node_plan(id=5, allocations=None))

    assert [call[0] for call in panel.mutations()] == ["update_node"]
    assert state.allocations is not None
    assert [entry.id for entry in state.allocations] == [1]


def test_node_update_reports_partial_reconciliation() -> None:
    panel = FakePanelGateway(nodes=[make_node(5)], allocations={5: []})
    panel.fail_on["create_allocation"] = 1
    plan = _node_plan(
        id=5,
        allocations=[
            AllocationState(ip="10.0.0.1", port=25565),
            AllocationState(ip="10.0.0.1", port=25566),
        ],
    )

    with pytest.raises(ProviderError) as excinfo:
        NodeResource(panel).update(plan)

    assert excinfo.value.summary == "Error Updating Pterodactyl Node Allocations"
    assert excinfo.value.detail.endswith("create_allocation rejected by panel")
    assert len(panel.allocations[5]) == 1


def test_node_read_includes_allocations() -> None:
    panel = FakePanelGateway(
        nodes=[make_node(5)],
        allocations={5: [Allocation(id=1, ip="10.0.0.1", port=25560, assigned=True)]},
    )

    state = NodeResource(panel).read(_node_plan(id=5))

    assert state.allocations == [
        AllocationState(id=1, ip="10.0.0.1", port=25560, alias=None, notes=None, assigned=True)
    ]


def test_node_delete() -> None:
    panel = FakePanelGateway(nodes=[make_node(5)])

    NodeResource(panel).delete(_node_plan(id=5))

    assert panel.nodes == {}
