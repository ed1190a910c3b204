import json
import logging

from fastapi import APIRouter, Depends, Request, Response, status
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from app.api.deps import get_question_factory
from app.api.responses import cors_json, error_json, preflight_response
from app.core.errors import MalformedInputError
from app.core.results import Err
from app.schemas.questions import QuestionFactoryOut, QuestionFactoryRequest
from app.services.question_factory import QuestionFactory

router = APIRouter()
logger = logging.getLogger(__name__)


@router.options("")
async def question_factory_preflight() -> Response:
    return preflight_response()


@router.post("", response_model=QuestionFactoryOut)
async def generate_questions(
    request: Request,
    factory: QuestionFactory = Depends(get_question_factory),
) -> JSONResponse:
    try:
        payload = _parse_question_request(await request.body())
    except MalformedInputError as exc:
        logger.warning("rejected question factory request code=%s: %s", exc.code, exc)
        return error_json(str(exc), status.HTTP_400_BAD_REQUEST)

    try:
        result = await factory.materialize(payload)
    except Exception:
        logger.exception("question factory raised for project_id=%s", payload.project_id)
        return error_json("Internal Server Error")

    if isinstance(result, Err):
        logger.error("question factory failed code=%s project_id=%s", result.error.code, payload.project_id)
        return error_json(str(result.error))

    question_set = result.value
    body = QuestionFactoryOut(
        project_id=question_set.project_id,
        question_count=len(question_set.questions),
        questions=question_set.questions,
    )
    return cors_json(body.model_dump(mode="json", exclude_none=True))


def _parse_question_request(raw: bytes) -> QuestionFactoryRequest:
    try:
        decoded = json.loads(raw) if raw else None
    except (UnicodeDecodeError, ValueError) as exc:
        raise MalformedInputError("Request body must be a JSON object") from exc
    if not isinstance(decoded, dict):
        raise MalformedInputError("Request body must be a JSON object")
    try:
        return QuestionFactoryRequest.model_validate(decoded)
    except ValidationError as exc:
        fields = ", ".join(
            f"{'.'.join(str(part) for part in error['loc']) or 'body'}: {error['msg']}" for error in exc.errors()
        )
        raise MalformedInputError(f"Invalid question request: {fields}") from exc
