"""The ``pterodactyl`` provider: configuration plus the handler registries."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from terradactyl.adapters.pterodactyl import PanelClient
from terradactyl.config import ConfigurationError, get_panel_config

from .data_sources import (
    LocationDataSource,
    LocationsDataSource,
    NodeAllocationsDataSource,
    NodeDataSource,
    NodesDataSource,
    NodesLocationDataSource,
    PanelDataSource,
    UserDataSource,
    UsersDataSource,
)
from .diagnostics import ProviderError
from .resources import LocationResource, NodeResource, PanelResource, UserResource

if TYPE_CHECKING:
    from terradactyl.domain.ports import PanelGateway

log = getLogger(__name__)

TYPE_NAME = "pterodactyl"

RESOURCES: tuple[type[PanelResource], ...] = (UserResource, LocationResource, NodeResource)
DATA_SOURCES: tuple[type[PanelDataSource], ...] = (
    UserDataSource,
    UsersDataSource,
    LocationDataSource,
    LocationsDataSource,
    NodeDataSource,
    NodesDataSource,
    NodesLocationDataSource,
    NodeAllocationsDataSource,
)


def qualified_name(name: str) -> str:
    """Return ``name`` with the ``pterodactyl_`` prefix, adding it if absent."""

    prefix = f"{TYPE_NAME}_"
    return name if name.startswith(prefix) else prefix + name


class Provider:
    def __init__(self, version: str = "dev", client: PanelGateway | None = None) -> None:
        self.version = version
        self._client = client
        self.resources = {qualified_name(cls.type_name): cls for cls in RESOURCES}
        self.data_sources = {qualified_name(cls.type_name): cls for cls in DATA_SOURCES}

    def configure(self, *, host: str | None = None, api_key: str | None = None) -> None:
        """Build the panel client from explicit values or the environment."""

        try:
            config = get_panel_config(host=host, api_key=api_key)
        except ConfigurationError as exc:
            raise ProviderError("Unable to Create Pterodactyl API Client", str(exc)) from exc
        log.info("Configuring %s provider %s for %s", TYPE_NAME, self.version, config.host)
        self._client = PanelClient(config=config)

    @property
    def client(self) -> PanelGateway:
        if self._client is None:
            raise ProviderError(
                "Unconfigured Pterodactyl Provider",
                "Call configure() before using resources or data sources.",
            )
        return self._client

    def resource(self, name: str) -> PanelResource:
        try:
            resource_type = self.resources[qualified_name(name)]
        except KeyError as exc:
            raise ProviderError("Unknown Resource Type", f"No resource named {name!r}") from exc
        return resource_type(self.client)

    def data_source(self, name: str) -> PanelDataSource:
        try:
            source_type = self.data_sources[qualified_name(name)]
        except KeyError as exc:
            raise ProviderError(
                "Unknown Data Source Type", f"No data source named {name!r}"
            ) from exc
        return source_type(self.client)
