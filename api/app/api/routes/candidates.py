from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from app.core.errors import StateTransitionError
from app.schemas.progress import TransitionCheckRequest
from app.services.candidates import ensure_transition

router = APIRouter()


@router.post("/transitions/check")
async def check_transition(payload: TransitionCheckRequest) -> JSONResponse:
    try:
        ensure_transition(payload.current, payload.target)
    except StateTransitionError as exc:
        return JSONResponse(status_code=status.HTTP_409_CONFLICT, content={"error": str(exc)})
    return JSONResponse(content={"allowed": True})
