"""Centralized position-category normalization utility.

All position handling in the codebase should use this module to ensure
consistency. The canonical format is uppercase: PG, SG, SF, PF, C.
"""

from typing import Optional

# Court order, from the ball handler to the post. Neighbours in this list are
# treated as "adjacent" positions by the role cost model.
POSITION_ORDER = ["PG", "SG", "SF", "PF", "C"]

# Comprehensive mapping from any known position format to canonical form
POSITION_ALIASES: dict[str, str] = {
    # Point guard variations
    "pg": "PG",
    "1": "PG",
    "point": "PG",
    "point guard": "PG",
    "ball handler": "PG",

    # Shooting guard variations
    "sg": "SG",
    "2": "SG",
    "shooting guard": "SG",
    "off guard": "SG",

    # Small forward variations
    "sf": "SF",
    "3": "SF",
    "small forward": "SF",
    "wing": "SF",

    # Power forward variations
    "pf": "PF",
    "4": "PF",
    "power forward": "PF",
    "stretch four": "PF",

    # Center variations
    "c": "C",
    "5": "C",
    "center": "C",
    "centre": "C",
    "big": "C",
    "post": "C",
}


def normalize_position(position: Optional[str]) -> Optional[str]:
    """Normalize a position string to canonical uppercase format.

    Args:
        position: Position string in any known format (e.g., "pg", "Point Guard", "5")

    Returns:
        Normalized position (PG/SG/SF/PF/C) or None if invalid/None

    Examples:
        >>> normalize_position("point guard")
        'PG'
        >>> normalize_position("5")
        'C'
        >>> normalize_position(None)
        None
    """
    if position is None:
        return None

    key = str(position).strip().lower()
    if key in POSITION_ALIASES:
        return POSITION_ALIASES[key]

    # Unknown position - return None to indicate invalid
    return None


def position_distance(a: str, b: str) -> int:
    """Number of steps between two canonical positions in court order."""
    return abs(POSITION_ORDER.index(a) - POSITION_ORDER.index(b))
