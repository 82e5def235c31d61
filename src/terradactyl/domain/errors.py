"""Error taxonomy shared by the lookup and reconciliation helpers."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence


class BackendError(RuntimeError):
    """Raised by adapters when the remote API or the transport fails.

    The message is the backend's own text and is meant to reach the user unchanged.
    """


class MissingAttributeError(ValueError):
    """Raised when a lookup request has no populated identifying attribute."""

    def __init__(self, entity: str, keys: Sequence[str]) -> None:
        self.entity = entity
        self.keys = tuple(keys)
        super().__init__(f"One of {_quoted_choice(self.keys)} must be specified.")


class RecordNotFoundError(LookupError):
    """Raised when a lookup completes without a matching record."""

    def __init__(self, entity: str, key: str, value: object) -> None:
        self.entity = entity
        self.key = key
        self.value = value
        super().__init__(f"No {entity} found with {key} {value!r}")


class PartialReconcileError(RuntimeError):
    """Raised when a create or delete call fails part-way through reconciliation.

    ``deleted`` and ``created`` record what was applied before the failure; the
    caller is expected to re-run reconciliation against a fresh listing.
    """

    def __init__(
        self,
        message: str,
        *,
        deleted: tuple[int, ...] = (),
        created: tuple[object, ...] = (),
    ) -> None:
        super().__init__(message)
        self.deleted = deleted
        self.created = created


def _quoted_choice(keys: Sequence[str]) -> str:
    quoted = [f"'{key}'" for key in keys]
    if len(quoted) <= 1:
        return "".join(quoted)
    return ", ".join(quoted[:-1]) + " or " + quoted[-1]
