"""Animation settings and sampled output models."""

from dataclasses import dataclass
from typing import Optional

from playmaker.models.diagram import Point


@dataclass(frozen=True)
class AnimationSettings:
    """Playback settings for one animation request (durations in milliseconds)."""

    duration: float
    fps: float = 30
    auto_play: bool = False
    loop: bool = False
    show_trails: bool = True
    trail_length: int = 5
    highlight_active_player: bool = True
    transition_duration: float = 100

    @property
    def frame_interval(self) -> float:
        return 1000 / self.fps

    def to_dict(self) -> dict:
        return {
            "fps": self.fps,
            "duration": self.duration,
            "autoPlay": self.auto_play,
            "loop": self.loop,
            "showTrails": self.show_trails,
            "trailLength": self.trail_length,
            "highlightActivePlayer": self.highlight_active_player,
            "transitionDuration": self.transition_duration,
        }


@dataclass(frozen=True)
class PlayerState:
    """One player's state in one frame."""

    id: str
    label: str
    position: Point
    trail: Optional[tuple[Point, ...]] = None  # oldest -> newest
    active: Optional[bool] = None

    def to_dict(self) -> dict:
        data: dict = {"id": self.id, "label": self.label, "position": self.position.to_dict()}
        if self.trail is not None:
            data["trail"] = [p.to_dict() for p in self.trail]
        if self.active is not None:
            data["active"] = self.active
        return data


@dataclass(frozen=True)
class Frame:
    timestamp: float
    players: tuple[PlayerState, ...]

    def to_dict(self) -> dict:
        return {"timestamp": self.timestamp, "players": [p.to_dict() for p in self.players]}


@dataclass(frozen=True)
class Keyframe:
    """A designed event, timed by its waypoint rather than by the sampling grid."""

    timestamp: float
    label: str
    involved_player_ids: tuple[str, ...]

    def to_dict(self) -> dict:
        return {
            "timestamp": self.timestamp,
            "label": self.label,
            "involvedPlayerIds": list(self.involved_player_ids),
        }


@dataclass(frozen=True)
class PlaybackInfo:
    """Playback metadata returned alongside frames; looping never adds frames."""

    frame_interval: float
    frame_count: int
    duration: float
    auto_play: bool
    loop: bool
    transition_duration: float

    def to_dict(self) -> dict:
        return {
            "frameInterval": self.frame_interval,
            "frameCount": self.frame_count,
            "duration": self.duration,
            "autoPlay": self.auto_play,
            "loop": self.loop,
            "transitionDuration": self.transition_duration,
        }


@dataclass(frozen=True)
class Animation:
    frames: tuple[Frame, ...]
    keyframes: tuple[Keyframe, ...]
    playback: PlaybackInfo

    def to_dict(self) -> dict:
        return {
            "frames": [f.to_dict() for f in self.frames],
            "keyframes": [k.to_dict() for k in self.keyframes],
            "playback": self.playback.to_dict(),
        }
