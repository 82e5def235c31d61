"""User-facing error reporting for lifecycle handlers."""

from __future__ import annotations

from contextlib import contextmanager
from typing import TYPE_CHECKING

from terradactyl.domain.errors import BackendError, PartialReconcileError, RecordNotFoundError

if TYPE_CHECKING:
    from collections.abc import Iterator


class ProviderError(RuntimeError):
    """A diagnostic: a short summary plus the detail shown to the user.

    ``state`` carries whatever the panel already holds when a handler fails
    after its primary mutation, so the caller can still record it.
    """

    def __init__(self, summary: str, detail: str, *, state: object | None = None) -> None:
        super().__init__(f"{summary}: {detail}")
        self.summary = summary
        self.detail = detail
        self.state = state


@contextmanager
def diagnostics(summary: str, prefix: str = "") -> Iterator[None]:
    """Re-raise backend, lookup and reconciliation failures as ``ProviderError``.

    The wrapped error text is kept verbatim after ``prefix``.
    """

    try:
        yield
    except (BackendError, PartialReconcileError, RecordNotFoundError) as exc:
        raise ProviderError(summary, f"{prefix}{exc}") from exc


def parse_import_id(import_id: str) -> int:
    try:
        return int(import_id.strip())
    except ValueError as exc:
        raise ProviderError("Error importing state", "Couldn't convert id to int") from exc
