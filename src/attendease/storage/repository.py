from __future__ import annotations

from typing import Protocol

from ..snapshot.model import Snapshot


class SnapshotStore(Protocol):
    """Persistence collaborator: the whole dataset as one opaque value.

    Note (DIP): services depend on this interface, not on a concrete backend.
    There is no versioning; the last ``save`` wins.
    """

    def load(self) -> Snapshot:
        """Return the stored snapshot, persisting the seed data on first use."""

        raise NotImplementedError

    def save(self, snapshot: Snapshot) -> Snapshot:
        """Replace the stored snapshot and return what was stored."""

        raise NotImplementedError
