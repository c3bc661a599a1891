from __future__ import annotations

import itertools
import time

_sequence = itertools.count(1)


def new_id(prefix: str) -> str:
    """Opaque id such as ``att1716191234567-3``.

    The millisecond stamp mirrors the stored data; the process-wide sequence
    keeps ids unique when several entities are created in the same millisecond.
    """
    return f"{prefix}{time.time_ns() // 1_000_000}-{next(_sequence)}"
