"""Play diagram models: players, paths and tagged waypoints."""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Optional


class EventType(str, Enum):
    """Discrete events a waypoint can mark."""

    POSSESSION = "possession"
    DRIBBLE = "dribble"
    PASS = "pass"
    HANDOFF = "handoff"
    SCREEN = "screen"
    CUT = "cut"
    SHOT = "shot"


# Events after which the ball belongs to the actor
SELF_POSSESSION_EVENTS = frozenset({EventType.POSSESSION, EventType.DRIBBLE})
# Events after which the ball belongs to the event's target
TRANSFER_EVENTS = frozenset({EventType.PASS, EventType.HANDOFF})


@dataclass(frozen=True)
class Point:
    x: float
    y: float

    def to_dict(self) -> dict:
        return {"x": self.x, "y": self.y}


@dataclass(frozen=True)
class WaypointEvent:
    """An event tag attached to a waypoint."""

    type: EventType
    target: Optional[str] = None  # receiver for pass/handoff, screened player for screen
    label: Optional[str] = None

    def holder_after(self, actor_id: str) -> Optional[str]:
        """Player who has the ball once this event fires, or None if it doesn't move the ball."""
        if self.type in SELF_POSSESSION_EVENTS:
            return actor_id
        if self.type in TRANSFER_EVENTS:
            return self.target
        return None

    def to_dict(self) -> dict:
        data: dict = {"type": self.type.value}
        if self.type in TRANSFER_EVENTS and self.target is not None:
            data["to"] = self.target
        elif self.type == EventType.SCREEN and self.target is not None:
            data["for"] = self.target
        if self.label is not None:
            data["label"] = self.label
        return data


@dataclass(frozen=True)
class Waypoint:
    """A timestamped point on a movement path (time in milliseconds)."""

    t: float
    x: float
    y: float
    event: Optional[WaypointEvent] = None

    @property
    def point(self) -> Point:
        return Point(self.x, self.y)

    def to_dict(self) -> dict:
        data: dict = {"t": self.t, "x": self.x, "y": self.y}
        if self.event is not None:
            data["event"] = self.event.to_dict()
        return data


@dataclass(frozen=True)
class MovementPath:
    """Non-empty, time-ordered waypoint sequence."""

    waypoints: tuple[Waypoint, ...]

    def __post_init__(self):
        if not self.waypoints:
            raise ValueError("MovementPath requires at least one waypoint")

    def __iter__(self):
        return iter(self.waypoints)

    def __len__(self) -> int:
        return len(self.waypoints)


@dataclass(frozen=True)
class RoleSpec:
    """What a designed role asks of whoever fills it."""

    position: str  # Canonical: PG/SG/SF/PF/C
    flexible: bool = True  # Adjacent positions may fill the role at a penalty
    skills: tuple[tuple[str, float], ...] = ()  # (skill, weight) in declaration order

    @property
    def skill_weights(self) -> dict[str, float]:
        return dict(self.skills)

    def to_dict(self) -> dict:
        return {
            "position": self.position,
            "flexible": self.flexible,
            "skills": dict(self.skills),
        }


@dataclass(frozen=True)
class PlayerToken:
    """A player on the diagram, either a designed role or a concrete roster member."""

    id: str
    label: str
    start: Point
    path: Optional[MovementPath] = None
    role: Optional[RoleSpec] = None

    def to_dict(self) -> dict:
        data: dict = {"id": self.id, "label": self.label, "start": self.start.to_dict()}
        if self.path is not None:
            data["path"] = [wp.to_dict() for wp in self.path]
        if self.role is not None:
            data["role"] = self.role.to_dict()
        return data


@dataclass(frozen=True)
class PlayDiagram:
    """Validated static play: court size plus ordered player tokens."""

    court_width: float
    court_height: float
    players: tuple[PlayerToken, ...] = field(default_factory=tuple)

    @property
    def player_ids(self) -> list[str]:
        return [p.id for p in self.players]

    def get_player(self, player_id: str) -> Optional[PlayerToken]:
        for player in self.players:
            if player.id == player_id:
                return player
        return None

    def with_players(self, players: list[PlayerToken]) -> "PlayDiagram":
        return replace(self, players=tuple(players))

    def to_dict(self) -> dict:
        return {
            "players": [p.to_dict() for p in self.players],
            "courtWidth": self.court_width,
            "courtHeight": self.court_height,
        }
