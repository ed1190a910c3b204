import logging

from fastapi import APIRouter, Depends, Request, Response, status
from fastapi.responses import JSONResponse
from starlette.requests import ClientDisconnect

from app.api.deps import get_sourcing_notifier
from app.api.responses import cors_json, error_json, preflight_response
from app.core.results import Err
from app.services.events import normalize_event, parse_event_body
from app.services.notifier import SourcingNotifier

router = APIRouter()
logger = logging.getLogger(__name__)


@router.options("")
async def notify_sourcing_request_preflight() -> Response:
    return preflight_response()


@router.post("")
async def notify_sourcing_request(
    request: Request,
    notifier: SourcingNotifier = Depends(get_sourcing_notifier),
) -> JSONResponse:
    try:
        raw_body = await request.body()
    except ClientDisconnect:
        logger.error("sourcing request body could not be read")
        return error_json("Request body could not be read")

    sourcing_request = normalize_event(parse_event_body(raw_body))
    logger.info(
        "Received sourcing request notification trigger for project_id=%s role=%s",
        sourcing_request.project_id,
        sourcing_request.role_title,
    )

    try:
        result = await notifier.dispatch(sourcing_request)
    except Exception:
        logger.exception("sourcing notification dispatch raised for project_id=%s", sourcing_request.project_id)
        return error_json("Internal Server Error")

    if isinstance(result, Err):
        logger.error(
            "sourcing notification failed code=%s project_id=%s",
            result.error.code,
            sourcing_request.project_id,
        )
        return error_json(str(result.error))
    return cors_json({"success": True, "message": result.value}, status_code=status.HTTP_200_OK)
