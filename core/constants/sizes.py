"""Visual range constants for the animated symbol.

Opacity and scale endpoints used by the fade tweens. Renderers may rely on
these bounds when sizing their output.
"""

# =============================================================================
# Opacity
# =============================================================================

OPACITY_HIDDEN = 0.0
"""Opacity at FadeIn start and FadeOut end."""

OPACITY_VISIBLE = 1.0
"""Opacity held through the Stable phase."""

# =============================================================================
# Scale
# =============================================================================

SCALE_MIN = 0.2
"""Scale at FadeIn start and FadeOut end."""

SCALE_MAX = 1.0
"""Scale held through the Stable phase."""

# =============================================================================
# Catalog
# =============================================================================

SYMBOL_CATALOG_SIZE = 6
"""Number of symbols in the fixed display catalog."""

__all__ = [
    "OPACITY_HIDDEN",
    "OPACITY_VISIBLE",
    "SCALE_MIN",
    "SCALE_MAX",
    "SYMBOL_CATALOG_SIZE",
]
