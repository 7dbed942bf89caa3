"""Utility modules for playmaker."""

from playmaker.utils.position_normalizer import (
    POSITION_ALIASES,
    POSITION_ORDER,
    normalize_position,
    position_distance,
)

__all__ = [
    "POSITION_ALIASES",
    "POSITION_ORDER",
    "normalize_position",
    "position_distance",
]
