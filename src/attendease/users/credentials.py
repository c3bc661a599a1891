from __future__ import annotations

import random
import string
from typing import Optional

from ..core.constants import GENERATED_PASSWORD_LENGTH, PASSWORD_SYMBOLS

_ALPHABETS = (string.ascii_lowercase, string.ascii_uppercase, string.digits, PASSWORD_SYMBOLS)
_ALL = "".join(_ALPHABETS)


def generate_random_password(rng: Optional[random.Random] = None) -> str:
    """Pre-filled password for accounts created by an admin.

    One character from each class, the rest from the combined alphabet, then
    shuffled. Convenience only, not a secret generator.
    """
    rng = rng or random.Random()
    chars = [rng.choice(alphabet) for alphabet in _ALPHABETS]
    chars += [rng.choice(_ALL) for _ in range(GENERATED_PASSWORD_LENGTH - len(chars))]
    rng.shuffle(chars)
    return "".join(chars)
