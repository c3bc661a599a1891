from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class CreditPackage:
    id: str
    name: str
    credits: int
    price: float
