"""Resolve one panel record from a set of mutually exclusive identifiers.

The panel API can only fetch a record directly by its numeric id. Every other
identifier (uuid, name, username, ...) is resolved by listing the whole
collection and scanning it in the order the panel returned it.

Policy:
- keys are examined in the priority order of the ``LookupSpec``
- the first populated key decides the strategy; later keys are ignored
- no populated key -> ``MissingAttributeError`` before any request is made
- a listing without a match -> ``None`` (``resolve_one`` turns it into an error)
- duplicate matches are not an error; the first one in listing order wins
"""

from __future__ import annotations

import operator
from collections.abc import Callable
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from .errors import MissingAttributeError, RecordNotFoundError
from .model import Location, Node, User

if TYPE_CHECKING:
    from collections.abc import Mapping

    from .ports import FetchAll, FetchById

log = getLogger(__name__)


@dataclass(slots=True, frozen=True)
class LookupKey[R]:
    """One identifying attribute of a record type."""

    name: str
    value_of: Callable[[R], object]
    matches: Callable[[object, object], bool] = field(default=operator.eq)


@dataclass(slots=True, frozen=True)
class LookupSpec[R]:
    """Ordered lookup keys for one record type; the first key is the primary id."""

    entity: str
    keys: tuple[LookupKey[R], ...]

    def __post_init__(self) -> None:
        if not self.keys:
            raise ValueError("LookupSpec needs at least the primary id key")

    @property
    def primary(self) -> LookupKey[R]:
        return self.keys[0]

    @property
    def key_names(self) -> tuple[str, ...]:
        return tuple(key.name for key in self.keys)


def is_populated(value: object) -> bool:
    """Return whether ``value`` counts as a supplied identifier.

    ``None``, the empty string and the integer ``0`` are treated as absent.
    """

    if value is None or isinstance(value, bool):
        return False
    if isinstance(value, str):
        return value != ""
    if isinstance(value, int):
        return value != 0
    return True


def populated_keys[R](spec: LookupSpec[R], request: Mapping[str, object]) -> tuple[str, ...]:
    return tuple(key.name for key in spec.keys if is_populated(request.get(key.name)))


def resolve[R](
    spec: LookupSpec[R],
    request: Mapping[str, object],
    *,
    fetch_by_id: FetchById[R],
    fetch_all: FetchAll[R],
) -> R | None:
    """Resolve ``request`` to a single record, or ``None`` when nothing matches.

    Errors raised by ``fetch_by_id`` or ``fetch_all`` propagate unchanged.
    """

    for key in spec.keys:
        wanted = request.get(key.name)
        if not is_populated(wanted):
            continue

        if key is spec.primary:
            log.debug("Resolving %s by %s=%s", spec.entity, key.name, wanted)
            return fetch_by_id(int(wanted))  # type: ignore[arg-type]

        log.debug("Resolving %s by scanning listing for %s=%r", spec.entity, key.name, wanted)
        for record in fetch_all():
            if key.matches(key.value_of(record), wanted):
                return record
        return None

    raise MissingAttributeError(spec.entity, spec.key_names)


def resolve_one[R](
    spec: LookupSpec[R],
    request: Mapping[str, object],
    *,
    fetch_by_id: FetchById[R],
    fetch_all: FetchAll[R],
) -> R:
    """Like ``resolve`` but raise ``RecordNotFoundError`` when nothing matches."""

    record = resolve(spec, request, fetch_by_id=fetch_by_id, fetch_all=fetch_all)
    if record is None:
        key_name = populated_keys(spec, request)[0]
        raise RecordNotFoundError(spec.entity, key_name, request[key_name])
    return record


USER_LOOKUP: LookupSpec[User] = LookupSpec(
    entity="user",
    keys=(
        LookupKey("id", lambda user: user.id),
        LookupKey("username", lambda user: user.username),
        LookupKey("email", lambda user: user.email),
        LookupKey("external_id", lambda user: user.external_id),
    ),
)

NODE_LOOKUP: LookupSpec[Node] = LookupSpec(
    entity="node",
    keys=(
        LookupKey("id", lambda node: node.id),
        LookupKey("uuid", lambda node: node.uuid),
        LookupKey("name", lambda node: node.name),
    ),
)

LOCATION_LOOKUP: LookupSpec[Location] = LookupSpec(
    entity="location",
    keys=(
        LookupKey("id", lambda location: location.id),
        LookupKey("short", lambda location: location.short),
        LookupKey("long", lambda location: location.long),
    ),
)
