from __future__ import annotations

import json
from typing import Callable, Optional

from ..snapshot.codec import snapshot_from_dict, snapshot_to_dict
from ..snapshot.model import Snapshot
from ..snapshot.seed import initial_snapshot


class InMemorySnapshotStore:
    """Process-local store used by tests and the demo configuration.

    The snapshot is kept serialized, like a browser storage slot, so callers
    never share objects with the stored value.
    """

    def __init__(self, initial: Optional[Snapshot] = None, *, seed: Callable[[], Snapshot] = initial_snapshot):
        self._seed = seed
        self._payload: Optional[str] = None
        self.save_count = 0
        if initial is not None:
            self._payload = json.dumps(snapshot_to_dict(initial))

    def load(self) -> Snapshot:
        if self._payload is None:
            return self.save(self._seed())
        return snapshot_from_dict(json.loads(self._payload))

    def save(self, snapshot: Snapshot) -> Snapshot:
        self._payload = json.dumps(snapshot_to_dict(snapshot))
        self.save_count += 1
        return snapshot
