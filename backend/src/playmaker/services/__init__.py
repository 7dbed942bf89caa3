"""Business logic services."""

from playmaker.services.animation_service import AnimationService
from playmaker.services.role_adapter import RoleAdapter
from playmaker.services.diagram_validator import (
    parse_diagram,
    parse_overrides,
    parse_roster,
    parse_settings,
)

__all__ = [
    "AnimationService",
    "RoleAdapter",
    "parse_diagram",
    "parse_overrides",
    "parse_roster",
    "parse_settings",
]
