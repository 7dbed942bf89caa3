"""REST endpoint for adapting a play to a roster."""

from typing import Any

from fastapi import APIRouter, Body, HTTPException, Request

from playmaker.errors import AdaptationError, InvalidInputError
from playmaker.services.role_adapter import RoleAdapter

router = APIRouter(prefix="/api/adaptation", tags=["adaptation"])


def _get_adapter(request: Request) -> RoleAdapter:
    if not hasattr(request.app.state, "role_adapter"):
        request.app.state.role_adapter = RoleAdapter()
    return request.app.state.role_adapter


@router.post("")
def adapt_play(request: Request, payload: Any = Body(...)):
    """Bind designed roles to roster members.

    Body: {diagram, roster, overrides?}. Returns the adapted diagram with the
    chosen assignments and coaching notes.
    """
    adapter = _get_adapter(request)
    try:
        result = adapter.adapt_payload(payload)
    except InvalidInputError as e:
        raise HTTPException(status_code=400, detail=e.to_dict())
    except AdaptationError as e:
        raise HTTPException(status_code=422, detail=e.to_dict())
    return result.to_dict()
