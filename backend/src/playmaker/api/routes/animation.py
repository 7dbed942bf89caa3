"""REST endpoints for play animation."""

from typing import Any

from fastapi import APIRouter, Body, HTTPException, Request

from playmaker.errors import InvalidInputError
from playmaker.services.animation_service import AnimationService

router = APIRouter(prefix="/api/animation", tags=["animation"])


def _get_service(request: Request) -> AnimationService:
    """Get or create the animation service from app state."""
    if not hasattr(request.app.state, "animation_service"):
        request.app.state.animation_service = AnimationService()
    return request.app.state.animation_service


@router.post("")
def create_animation(request: Request, payload: Any = Body(...)):
    """Sample a diagram into frames and keyframes.

    Body: {diagram, settings}. Returns {frames, keyframes, playback}.
    """
    service = _get_service(request)
    try:
        animation = service.animate(payload)
    except InvalidInputError as e:
        raise HTTPException(status_code=400, detail=e.to_dict())
    return animation.to_dict()


@router.post("/snapshot")
def snapshot(request: Request, payload: Any = Body(...)):
    """Player positions at an arbitrary time. Body: {diagram, t}."""
    service = _get_service(request)
    try:
        t, positions = service.snapshot(payload)
    except InvalidInputError as e:
        raise HTTPException(status_code=400, detail=e.to_dict())
    return {
        "t": t,
        "players": [
            {"id": player_id, "position": point.to_dict()}
            for player_id, point in positions.items()
        ],
    }


@router.post("/cache-key")
def cache_key(request: Request, payload: Any = Body(...)):
    """Digest callers can key stored animations on. Body: {diagram, settings}."""
    service = _get_service(request)
    try:
        key = service.cache_key(payload)
    except InvalidInputError as e:
        raise HTTPException(status_code=400, detail=e.to_dict())
    return {"key": key}
