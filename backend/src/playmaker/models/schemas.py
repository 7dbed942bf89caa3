"""Boundary schemas for raw engine requests.

Raw JSON is validated once against these models and then converted into the
frozen dataclasses in playmaker.models; nothing past the validator sees
untyped data. Keys are accepted in camelCase or snake_case.
"""

from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from playmaker.models.roster import MAX_RATING, MIN_RATING, Skill
from playmaker.utils.position_normalizer import normalize_position


class _Schema(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        allow_inf_nan=False,
        extra="ignore",
    )


class PointSchema(_Schema):
    x: float
    y: float


class ActorEventSchema(_Schema):
    """Events that involve only the waypoint's own player."""

    type: Literal["possession", "dribble", "cut", "shot"]
    label: Optional[str] = None


class TransferEventSchema(_Schema):
    """Ball movement to another player."""

    type: Literal["pass", "handoff"]
    to: str = Field(min_length=1)
    label: Optional[str] = None


class ScreenEventSchema(_Schema):
    type: Literal["screen"]
    for_: Optional[Annotated[str, Field(min_length=1)]] = Field(default=None, alias="for")
    label: Optional[str] = None


EventSchema = Annotated[
    Union[ActorEventSchema, TransferEventSchema, ScreenEventSchema],
    Field(discriminator="type"),
]


class WaypointSchema(_Schema):
    t: float = Field(ge=0)
    x: float
    y: float
    event: Optional[EventSchema] = None


class RoleSchema(_Schema):
    position: str
    flexible: bool = True
    skills: dict[Skill, Annotated[float, Field(ge=0)]] = Field(default_factory=dict)

    @field_validator("position")
    @classmethod
    def _known_position(cls, value: str) -> str:
        normalized = normalize_position(value)
        if normalized is None:
            raise ValueError(f"Unknown position category: {value}")
        return normalized


class PlayerSchema(_Schema):
    id: str = Field(min_length=1)
    label: Optional[str] = None
    start: PointSchema
    path: Optional[Annotated[list[WaypointSchema], Field(min_length=1)]] = None
    role: Optional[RoleSchema] = None


class DiagramSchema(_Schema):
    players: list[PlayerSchema] = Field(min_length=1)
    court_width: Optional[Annotated[float, Field(gt=0)]] = None
    court_height: Optional[Annotated[float, Field(gt=0)]] = None


class SettingsSchema(_Schema):
    duration: float = Field(gt=0)
    fps: float = Field(default=30, gt=0)
    auto_play: bool = False
    loop: bool = False
    show_trails: bool = True
    trail_length: int = Field(default=5, ge=0)
    highlight_active_player: bool = True
    transition_duration: float = Field(default=100, ge=0)


class RosterMemberSchema(_Schema):
    id: str = Field(min_length=1)
    position_category: str
    skills: dict[Skill, Annotated[int, Field(ge=MIN_RATING, le=MAX_RATING)]] = Field(
        default_factory=dict
    )
    name: Optional[str] = None

    @field_validator("position_category")
    @classmethod
    def _known_position(cls, value: str) -> str:
        normalized = normalize_position(value)
        if normalized is None:
            raise ValueError(f"Unknown position category: {value}")
        return normalized


class OverrideSchema(_Schema):
    role_id: str = Field(min_length=1)
    player_id: str = Field(min_length=1)


class AnimationRequestSchema(_Schema):
    diagram: DiagramSchema
    settings: SettingsSchema


class SnapshotRequestSchema(_Schema):
    diagram: DiagramSchema
    t: float


class AdaptationRequestSchema(_Schema):
    diagram: DiagramSchema
    roster: list[RosterMemberSchema]
    overrides: list[OverrideSchema] = Field(default_factory=list)
