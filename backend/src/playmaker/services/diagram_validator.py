"""Raw request validation.

Every engine entry point goes through this module first: the pydantic schemas
check structure, then the semantic checks here (unique ids, time ordering,
court bounds, event targets) run before any sampling or assignment work.
Failures raise InvalidInputError naming the offending field.
"""

import logging
from typing import Any, Optional, TypeVar

from pydantic import BaseModel, ValidationError

from playmaker.config import get_settings
from playmaker.errors import InvalidInputError
from playmaker.models.animation import AnimationSettings
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
from playmaker.models.roster import RoleOverride, RosterMember
from playmaker.models.schemas import (
    DiagramSchema,
    OverrideSchema,
    PlayerSchema,
    RosterMemberSchema,
    ScreenEventSchema,
    SettingsSchema,
    TransferEventSchema,
)

logger = logging.getLogger(__name__)

SchemaT = TypeVar("SchemaT", bound=BaseModel)


def format_loc(loc: tuple, prefix: str = "") -> str:
    """Render a pydantic error location as a field path like players[1].path[0].t."""
    path = prefix
    for part in loc:
        if isinstance(part, int):
            path += f"[{part}]"
        else:
            path = f"{path}.{part}" if path else str(part)
    return path


def validate_schema(schema: type[SchemaT], raw: Any, prefix: str = "") -> SchemaT:
    """Validate raw input against a schema, converting the first error to InvalidInputError."""
    try:
        return schema.model_validate(raw)
    except ValidationError as e:
        error = e.errors()[0]
        field = format_loc(tuple(error["loc"]), prefix)
        logger.warning(f"Rejected input at {field or '<root>'}: {error['msg']}")
        raise InvalidInputError(field, error["msg"]) from e


def _check_in_court(x: float, y: float, width: float, height: float, field: str) -> None:
    if not 0 <= x <= width:
        raise InvalidInputError(f"{field}.x", f"x={x} outside court width 0..{width}")
    if not 0 <= y <= height:
        raise InvalidInputError(f"{field}.y", f"y={y} outside court height 0..{height}")


def _convert_event(schema, actor_id: str, known_ids: set[str], field: str) -> WaypointEvent:
    target: Optional[str] = None
    if isinstance(schema, TransferEventSchema):
        target = schema.to
        if target == actor_id:
            raise InvalidInputError(f"{field}.to", f"{schema.type} cannot target its own player")
        if target not in known_ids:
            raise InvalidInputError(f"{field}.to", f"Unknown player id: {target}")
    elif isinstance(schema, ScreenEventSchema) and schema.for_ is not None:
        target = schema.for_
        if target == actor_id:
            raise InvalidInputError(f"{field}.for", "screen cannot be set for its own player")
        if target not in known_ids:
            raise InvalidInputError(f"{field}.for", f"Unknown player id: {target}")
    return WaypointEvent(type=EventType(schema.type), target=target, label=schema.label)


def _convert_player(
    schema: PlayerSchema,
    index: int,
    known_ids: set[str],
    width: float,
    height: float,
) -> PlayerToken:
    field = f"players[{index}]"
    _check_in_court(schema.start.x, schema.start.y, width, height, f"{field}.start")

    path = None
    if schema.path is not None:
        waypoints: list[Waypoint] = []
        previous_t = 0.0
        for j, wp in enumerate(schema.path):
            wp_field = f"{field}.path[{j}]"
            if wp.t < previous_t:
                raise InvalidInputError(
                    f"{wp_field}.t",
                    f"Waypoint time {wp.t} is earlier than previous waypoint ({previous_t})",
                )
            previous_t = wp.t
            _check_in_court(wp.x, wp.y, width, height, wp_field)
            event = None
            if wp.event is not None:
                event = _convert_event(wp.event, schema.id, known_ids, f"{wp_field}.event")
            waypoints.append(Waypoint(t=wp.t, x=wp.x, y=wp.y, event=event))
        path = MovementPath(tuple(waypoints))

    role = None
    if schema.role is not None:
        role = RoleSpec(
            position=schema.role.position,
            flexible=schema.role.flexible,
            skills=tuple((skill.value, weight) for skill, weight in schema.role.skills.items()),
        )

    return PlayerToken(
        id=schema.id,
        label=schema.label if schema.label is not None else schema.id,
        start=Point(schema.start.x, schema.start.y),
        path=path,
        role=role,
    )


def diagram_from_schema(schema: DiagramSchema, prefix: str = "") -> PlayDiagram:
    """Run the semantic diagram checks on an already structurally valid schema."""
    settings = get_settings()
    width = schema.court_width or settings.default_court_width
    height = schema.court_height or settings.default_court_height

    seen: set[str] = set()
    for i, player in enumerate(schema.players):
        if player.id in seen:
            raise InvalidInputError(
                format_loc(("players", i, "id"), prefix), f"Duplicate player id: {player.id}"
            )
        seen.add(player.id)

    players = []
    for i, player in enumerate(schema.players):
        try:
            players.append(_convert_player(player, i, seen, width, height))
        except InvalidInputError as e:
            if prefix:
                raise InvalidInputError(f"{prefix}.{e.field}", e.message) from e
            raise
    return PlayDiagram(court_width=width, court_height=height, players=tuple(players))


def parse_diagram(raw: Any, prefix: str = "") -> PlayDiagram:
    """Validate a raw diagram into a PlayDiagram."""
    return diagram_from_schema(validate_schema(DiagramSchema, raw, prefix), prefix)


def settings_from_schema(schema: SettingsSchema) -> AnimationSettings:
    return AnimationSettings(
        duration=schema.duration,
        fps=schema.fps,
        auto_play=schema.auto_play,
        loop=schema.loop,
        show_trails=schema.show_trails,
        trail_length=schema.trail_length,
        highlight_active_player=schema.highlight_active_player,
        transition_duration=schema.transition_duration,
    )


def parse_settings(raw: Any, prefix: str = "") -> AnimationSettings:
    """Validate raw animation settings."""
    return settings_from_schema(validate_schema(SettingsSchema, raw, prefix))


def roster_from_schema(members: list[RosterMemberSchema], prefix: str = "roster") -> list[RosterMember]:
    roster = []
    seen: set[str] = set()
    for i, member in enumerate(members):
        if member.id in seen:
            raise InvalidInputError(f"{prefix}[{i}].id", f"Duplicate roster member id: {member.id}")
        seen.add(member.id)
        roster.append(
            RosterMember(
                id=member.id,
                position=member.position_category,
                skills={skill.value: rating for skill, rating in member.skills.items()},
                name=member.name,
            )
        )
    return roster


def parse_roster(raw: Any) -> list[RosterMember]:
    """Validate a raw roster list."""
    if not isinstance(raw, list):
        raise InvalidInputError("roster", "Roster must be a list")
    members = [validate_schema(RosterMemberSchema, item, f"roster[{i}]") for i, item in enumerate(raw)]
    return roster_from_schema(members)


def overrides_from_schema(
    overrides: list[OverrideSchema], prefix: str = "overrides"
) -> list[RoleOverride]:
    """Convert overrides, rejecting duplicate roles or players."""
    result = []
    roles: set[str] = set()
    players: set[str] = set()
    for i, override in enumerate(overrides):
        if override.role_id in roles:
            raise InvalidInputError(f"{prefix}[{i}].roleId", f"Role overridden twice: {override.role_id}")
        if override.player_id in players:
            raise InvalidInputError(
                f"{prefix}[{i}].playerId", f"Player assigned twice: {override.player_id}"
            )
        roles.add(override.role_id)
        players.add(override.player_id)
        result.append(RoleOverride(role_id=override.role_id, player_id=override.player_id))
    return result


def parse_overrides(raw: Any) -> list[RoleOverride]:
    """Validate a raw override list (None means no overrides)."""
    if raw is None:
        return []
    if not isinstance(raw, list):
        raise InvalidInputError("overrides", "Overrides must be a list")
    items = [validate_schema(OverrideSchema, item, f"overrides[{i}]") for i, item in enumerate(raw)]
    return overrides_from_schema(items)
