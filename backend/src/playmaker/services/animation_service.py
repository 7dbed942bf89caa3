"""Animation requests: validate once, then sample."""

import hashlib
import json
import logging
from typing import Any, Optional

from playmaker.models.animation import Animation, AnimationSettings
from playmaker.models.diagram import PlayDiagram, Point
from playmaker.models.schemas import AnimationRequestSchema, SnapshotRequestSchema
from playmaker.services.diagram_validator import (
    diagram_from_schema,
    settings_from_schema,
    validate_schema,
)
from playmaker.services.engine.frame_sampler import FrameSampler
from playmaker.services.engine.trajectory import build_trajectories

logger = logging.getLogger(__name__)


class AnimationService:
    """Builds animations and random-access snapshots from raw requests."""

    def __init__(self, sampler: Optional[FrameSampler] = None):
        self.sampler = sampler or FrameSampler()

    def parse_request(self, payload: Any) -> tuple[PlayDiagram, AnimationSettings]:
        request = validate_schema(AnimationRequestSchema, payload)
        diagram = diagram_from_schema(request.diagram, "diagram")
        return diagram, settings_from_schema(request.settings)

    def animate(self, payload: Any) -> Animation:
        """Validate a raw {diagram, settings} request and sample it."""
        diagram, settings = self.parse_request(payload)
        return self.sampler.sample(diagram, settings)

    def snapshot(self, payload: Any) -> tuple[float, dict[str, Point]]:
        """Every player's position at one instant, for single-moment renders.

        Payload is {diagram, t}; t may fall between sample times. Returns the
        validated t with the positions.
        """
        request = validate_schema(SnapshotRequestSchema, payload)
        diagram = diagram_from_schema(request.diagram, "diagram")
        trajectories = build_trajectories(diagram)
        positions = {player_id: traj.position_at(request.t) for player_id, traj in trajectories.items()}
        return request.t, positions

    def cache_key(self, payload: Any) -> str:
        """Stable digest of the validated request.

        Output depends only on the validated diagram and settings, so equal
        keys always mean identical animations.
        """
        diagram, settings = self.parse_request(payload)
        canonical = json.dumps(
            {"diagram": diagram.to_dict(), "settings": settings.to_dict()},
            sort_keys=True,
            separators=(",", ":"),
        )
        digest = hashlib.sha256(canonical.encode("utf-8")).hexdigest()
        logger.debug(f"Animation cache key {digest[:12]} for {len(diagram.players)} players")
        return digest
