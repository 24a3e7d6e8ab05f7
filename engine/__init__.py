"""Symbol animation engine and its catalog."""

from .catalog import SYMBOL_DEFINITIONS, build_catalog
from .symbol_engine import AnimationEngine

__all__ = ['AnimationEngine', 'SYMBOL_DEFINITIONS', 'build_catalog']
