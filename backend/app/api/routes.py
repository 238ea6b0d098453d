"""HTTP routes for the Flask API."""

import logging
from http import HTTPStatus
from typing import Any, Dict

from flask import Blueprint, current_app, jsonify, request
from pydantic import ValidationError

from backend.core.schedule import generate_schedule, summarize_schedule
from backend.domain.review import review_inputs
from backend.schemas.ping import PingResponse
from backend.schemas.schedule import ScheduleRequest, ScheduleResponse

logger = logging.getLogger(__name__)

api_bp = Blueprint("api", __name__)


@api_bp.errorhandler(ValidationError)
def _handle_validation_error(exc: ValidationError):
    """Convert Pydantic validation errors into JSON responses."""
    logger.warning("Rejected payload with %d validation error(s)", exc.error_count())
    return (
        jsonify({"detail": exc.errors(include_url=False, include_context=False)}),
        HTTPStatus.UNPROCESSABLE_ENTITY,
    )


@api_bp.get("/ping")
def ping() -> Any:
    """Health-check endpoint."""
    response = PingResponse(message="pong", service=current_app.config["APP_NAME"])
    return jsonify(response.model_dump())


@api_bp.post("/schedule")
def schedule() -> Any:
    """Recompute the full payment schedule from the submitted form state."""
    raw_payload: Dict[str, Any] = request.get_json(force=True, silent=False)
    payload = ScheduleRequest.model_validate(raw_payload)

    rows = generate_schedule(
        terms=payload.contract,
        pattern=payload.pattern,
        partial_policy=payload.partialPolicy,
        manual_amount=payload.manualAmount,
    )
    summary = summarize_schedule(rows)
    review = review_inputs(
        payload.contract,
        payload.pattern,
        payload.partialPolicy,
        payload.manualAmount,
    )
    logger.info(
        "Schedule for %r: %d periods, pattern=%s",
        payload.contract.siteName,
        len(rows),
        payload.pattern.type,
    )

    response = ScheduleResponse(
        schedule=rows,
        total=summary.total,
        summary=summary,
        warnings=review.warnings,
    )
    return jsonify(response.model_dump(mode="json"))
