"""Fixed-rate sampling of a diagram's trajectories into animation frames."""

import logging
import math
from bisect import bisect_right
from collections import deque
from typing import Optional

from playmaker.config import get_settings
from playmaker.errors import InvalidInputError
from playmaker.models.animation import (
    Animation,
    AnimationSettings,
    Frame,
    Keyframe,
    PlaybackInfo,
    PlayerState,
)
from playmaker.models.diagram import PlayDiagram
from playmaker.services.engine.trajectory import build_trajectories

logger = logging.getLogger(__name__)

# Absorbs float noise in duration * fps / 1000 (e.g. 29.999999999999996 -> 30)
_FRAME_COUNT_EPSILON = 1e-9


def frame_count_for(settings: AnimationSettings) -> int:
    """floor(duration / (1000 / fps)) + 1."""
    return math.floor(settings.duration * settings.fps / 1000 + _FRAME_COUNT_EPSILON) + 1


def extract_keyframes(diagram: PlayDiagram) -> list[Keyframe]:
    """One keyframe per tagged waypoint, sorted by time.

    Timestamps are the waypoints' own times, not sample times. Entries with
    the same (timestamp, involved players) collapse to the first declared.
    """
    keyframes: list[Keyframe] = []
    seen: set[tuple[float, tuple[str, ...]]] = set()
    for player in diagram.players:
        if player.path is None:
            continue
        for wp in player.path:
            if wp.event is None:
                continue
            involved = (player.id,) if wp.event.target is None else (player.id, wp.event.target)
            key = (wp.t, involved)
            if key in seen:
                continue
            seen.add(key)
            label = wp.event.label or wp.event.type.value.title()
            keyframes.append(Keyframe(timestamp=wp.t, label=label, involved_player_ids=involved))

    # sorted() is stable, so equal timestamps keep declaration order
    return sorted(keyframes, key=lambda k: k.timestamp)


def possession_timeline(diagram: PlayDiagram) -> list[tuple[float, str]]:
    """(time, holder) for every possession-changing waypoint, in time order."""
    changes: list[tuple[float, str]] = []
    for player in diagram.players:
        if player.path is None:
            continue
        for wp in player.path:
            if wp.event is None:
                continue
            holder = wp.event.holder_after(player.id)
            if holder is not None:
                changes.append((wp.t, holder))
    return sorted(changes, key=lambda change: change[0])


def holder_at(timeline: list[tuple[float, str]], t: float) -> Optional[str]:
    """Player named by the nearest possession event at or before t."""
    idx = bisect_right([time for time, _ in timeline], t)
    if idx == 0:
        return None
    return timeline[idx - 1][1]


class FrameSampler:
    """Turns a validated diagram plus settings into frames and keyframes.

    Holds only its frame ceiling; instances are interchangeable and can be
    shared across threads.
    """

    def __init__(self, max_frame_count: Optional[int] = None):
        if max_frame_count is None:
            max_frame_count = get_settings().max_frame_count
        self.max_frame_count = max_frame_count

    def sample(self, diagram: PlayDiagram, settings: AnimationSettings) -> Animation:
        if settings.fps <= 0:
            raise InvalidInputError("settings.fps", "fps must be positive")
        if settings.duration <= 0:
            raise InvalidInputError("settings.duration", "duration must be positive")
        if settings.trail_length < 0:
            raise InvalidInputError("settings.trailLength", "trailLength must be >= 0")

        count = frame_count_for(settings)
        if count > self.max_frame_count:
            logger.warning(
                f"Refusing animation with {count} frames (ceiling {self.max_frame_count})"
            )
            raise InvalidInputError(
                "settings",
                f"Animation would need {count} frames; the limit is {self.max_frame_count}",
            )

        trajectories = build_trajectories(diagram)
        last_move = max((traj.end_time for traj in trajectories.values()), default=0.0)
        if last_move > settings.duration:
            logger.debug(f"Movement continues until {last_move}ms; cut at {settings.duration}ms")
        timeline = possession_timeline(diagram) if settings.highlight_active_player else []
        trails = {
            player_id: deque(maxlen=settings.trail_length) for player_id in trajectories
        }

        frames: list[Frame] = []
        for i in range(count):
            timestamp = min(i * 1000 / settings.fps, settings.duration)
            holder = holder_at(timeline, timestamp) if settings.highlight_active_player else None

            states = []
            for player in diagram.players:
                position = trajectories[player.id].position_at(timestamp)
                trail = None
                if settings.show_trails:
                    history = trails[player.id]
                    trail = tuple(history)
                    history.append(position)
                states.append(
                    PlayerState(
                        id=player.id,
                        label=player.label,
                        position=position,
                        trail=trail,
                        active=(player.id == holder) if settings.highlight_active_player else None,
                    )
                )
            frames.append(Frame(timestamp=timestamp, players=tuple(states)))

        keyframes = extract_keyframes(diagram)
        playback = PlaybackInfo(
            frame_interval=settings.frame_interval,
            frame_count=count,
            duration=settings.duration,
            auto_play=settings.auto_play,
            loop=settings.loop,
            transition_duration=settings.transition_duration,
        )
        logger.info(
            f"Sampled {count} frames for {len(diagram.players)} players "
            f"({len(keyframes)} keyframes)"
        )
        return Animation(frames=tuple(frames), keyframes=tuple(keyframes), playback=playback)
