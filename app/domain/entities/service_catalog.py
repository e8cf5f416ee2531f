from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class Service:
    id: str
    name: str
    description: str
    price: Decimal
    features: tuple[str, ...] = ()
    best_value: bool = False
