"""Data models for the play simulation and adaptation engine."""

from playmaker.models.diagram import (
    EventType,
    MovementPath,
    PlayDiagram,
    PlayerToken,
    Point,
    RoleSpec,
    Waypoint,
    WaypointEvent,
)
from playmaker.models.animation import (
    Animation,
    AnimationSettings,
    Frame,
    Keyframe,
    PlaybackInfo,
    PlayerState,
)
from playmaker.models.roster import RoleOverride, RosterMember, Skill
from playmaker.models.assignment import (
    AdaptationResult,
    FixedAssignment,
    Infeasible,
    RoleAssignment,
    SolvedAssignment,
)

__all__ = [
    "EventType",
    "MovementPath",
    "PlayDiagram",
    "PlayerToken",
    "Point",
    "RoleSpec",
    "Waypoint",
    "WaypointEvent",
    "Animation",
    "AnimationSettings",
    "Frame",
    "Keyframe",
    "PlaybackInfo",
    "PlayerState",
    "RoleOverride",
    "RosterMember",
    "Skill",
    "AdaptationResult",
    "FixedAssignment",
    "Infeasible",
    "RoleAssignment",
    "SolvedAssignment",
]
