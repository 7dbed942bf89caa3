"""Roster models used by role adaptation."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class Skill(str, Enum):
    """Rated player attributes (1-100)."""

    SPEED = "speed"
    SIZE = "size"
    SHOOTING = "shooting"
    BALL_HANDLING = "ballHandling"
    DEFENSE = "defense"
    REBOUNDING = "rebounding"


MIN_RATING = 1
MAX_RATING = 100
DEFAULT_RATING = 50  # Used when a roster member has no rating for a skill


@dataclass(frozen=True)
class RosterMember:
    """A concrete player who can fill a designed role."""

    id: str
    position: str  # Canonical: PG/SG/SF/PF/C
    skills: dict[str, int] = field(default_factory=dict, hash=False)
    name: Optional[str] = None

    def rating(self, skill: str) -> int:
        return self.skills.get(skill, DEFAULT_RATING)

    @property
    def display_name(self) -> str:
        return self.name or self.id


@dataclass(frozen=True)
class RoleOverride:
    """Coach-chosen pairing that bypasses the solver."""

    role_id: str
    player_id: str
