from __future__ import annotations

import pytest

from terradactyl.app import (
    apply_plan,
    build_provider,
    destroy_resource,
    import_resource,
    read_data_source,
)
from terradactyl.provider import ProviderError
from tests.helpers.panel import FakePanelGateway, make_user


def test_build_provider_with_injected_client_skips_configuration(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.delenv("PTERODACTYL_HOST", raising=False)
    panel = FakePanelGateway()

    provider = build_provider(client=panel)

    assert provider.client is panel


def test_build_provider_configures_panel_client() -> None:
    provider = build_provider(host="https://panel.example.com", api_key="key")

    assert provider.client.host == "https://panel.example.com"  # type: ignore[attr-defined]


def test_apply_plan_switches_between_create_and_update() -> None:
    panel = FakePanelGateway(users=[make_user(1, username="ada")])
    provider = build_provider(client=panel)
    base = {"email": "x@example.com", "first_name": "X", "last_name": "Y"}

    created = apply_plan(provider, "user", {"username": "new", **base})
    updated = apply_plan(provider, "user", {"id": 1, "username": "ada2", **base})

    assert created["id"] == 101
    assert updated["username"] == "ada2"
    assert [call[0] for call in panel.mutations()] == ["create_user", "update_user"]


def test_apply_plan_rejects_invalid_attributes() -> None:
    provider = build_provider(client=FakePanelGateway())

    with pytest.raises(ProviderError) as excinfo:
        apply_plan(provider, "location", {"long": "no short name"})

    assert excinfo.value.summary == "Invalid Configuration"


def test_import_and_destroy_round_trip() -> None:
    panel = FakePanelGateway(users=[make_user(4)])
    provider = build_provider(client=panel)

    imported = import_resource(provider, "user", "4")
    destroy_resource(provider, "user", "4")

    assert imported["username"] == "user4"
    assert panel.users == {}


def test_read_data_source_returns_plain_dict() -> None:
    provider = build_provider(client=FakePanelGateway(users=[make_user(4)]))

    state = read_data_source(provider, "users", {})

    assert state["users"][0]["email"] == "user4@example.com"
