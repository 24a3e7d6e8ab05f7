"""The fixed, ordered catalog of symbols the engine cycles through."""
from __future__ import annotations

from typing import Tuple

from core.animation.types import Symbol

# (icon name, description) in display order
SYMBOL_DEFINITIONS: Tuple[Tuple[str, str], ...] = (
    ("person.fill", "Person"),
    ("airplane", "Airplane"),
    ("house.fill", "House"),
    ("car.fill", "Car"),
    ("flame.fill", "Flame"),
    ("pencil", "Pencil"),
)


def build_catalog() -> Tuple[Symbol, ...]:
    """Create the catalog. Each call mints fresh symbol ids."""
    return tuple(Symbol(name=name, description=description) for name, description in SYMBOL_DEFINITIONS)
