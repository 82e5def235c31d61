"""Application orchestration entry points."""

from __future__ import annotations

from dataclasses import asdict
from logging import getLogger
from typing import TYPE_CHECKING, Any

from pydantic import TypeAdapter, ValidationError

from terradactyl import __version__
from terradactyl.provider import Provider, ProviderError

if TYPE_CHECKING:
    from collections.abc import Mapping

    from terradactyl.domain.ports import PanelGateway

log = getLogger(__name__)


def build_provider(
    *,
    host: str | None = None,
    api_key: str | None = None,
    client: PanelGateway | None = None,
) -> Provider:
    """Return a configured provider; an injected ``client`` skips configuration."""

    provider = Provider(version=__version__, client=client)
    if client is None:
        provider.configure(host=host, api_key=api_key)
    return provider


def _load[T](state_type: type[T], values: Mapping[str, object]) -> T:
    try:
        return TypeAdapter(state_type).validate_python(dict(values))
    except ValidationError as exc:
        raise ProviderError("Invalid Configuration", str(exc)) from exc


def read_data_source(
    provider: Provider,
    type_name: str,
    attributes: Mapping[str, object],
) -> dict[str, Any]:
    source = provider.data_source(type_name)
    config = _load(source.model_type, attributes)
    log.info("Reading data source %s", type_name)
    return asdict(source.read(config))


def import_resource(provider: Provider, type_name: str, import_id: str) -> dict[str, Any]:
    resource = provider.resource(type_name)
    log.info("Importing %s %s", type_name, import_id)
    return asdict(resource.import_state(import_id))


def apply_plan(
    provider: Provider,
    type_name: str,
    plan: Mapping[str, object],
) -> dict[str, Any]:
    """Create the resource when ``plan`` has no id, update it otherwise."""

    resource = provider.resource(type_name)
    state = _load(resource.state_type, plan)
    if getattr(state, "id", None) is None:
        return asdict(resource.create(state))
    return asdict(resource.update(state))


def destroy_resource(provider: Provider, type_name: str, resource_id: str) -> None:
    resource = provider.resource(type_name)
    state = resource.import_state(resource_id)
    resource.delete(state)
    log.info("Destroyed %s %s", type_name, resource_id)
