"""Quiniela routes — /api/v1/quinielas.

Draft checking, submission preview and creation. Nothing is stored here;
creation is delegated to the configured creator.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Request

from quiniela.api.deps import get_quiniela_service
from quiniela.api.middleware import rfc7807_error_response
from quiniela.api.schemas.common import ErrorResponse
from quiniela.api.schemas.quinielas import (
    CreatedQuinielaOut,
    DistributionDefaultsOut,
    QuinielaDraftIn,
    ValidationOut,
)
from quiniela.services.drafts import distribution_defaults, new_draft
from quiniela.services.quinielas import DraftValidationError, QuinielaError, QuinielaService

router = APIRouter(prefix="/api/v1/quinielas", tags=["quinielas"])

_PROBLEM_RESPONSES: dict[int | str, dict[str, Any]] = {422: {"model": ErrorResponse}}


def _validation_problem(request: Request, exc: DraftValidationError) -> Any:
    return rfc7807_error_response(
        status=422,
        title="Invalid Quiniela Draft",
        detail=exc.detail,
        instance=request.url.path,
        extra={"errors": [e.to_dict() for e in exc.errors]},
    )


@router.get("/draft-defaults")
def get_draft_defaults() -> dict[str, Any]:
    """Form-open values for a new draft."""
    draft = new_draft().to_dict()
    draft["event_ids"] = sorted(draft["event_ids"])
    return draft


@router.get("/distribution-defaults/{distribution_type}")
def get_distribution_defaults(distribution_type: str) -> DistributionDefaultsOut:
    """Percentages applied when switching to *distribution_type*."""
    try:
        first, second, third = distribution_defaults(distribution_type)
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e
    return DistributionDefaultsOut(
        distribution_type=distribution_type,
        first_place_pct=first,
        second_place_pct=second,
        third_place_pct=third,
    )


@router.post("/validate")
def validate_draft(
    body: QuinielaDraftIn,
    service: QuinielaService = Depends(get_quiniela_service),
) -> ValidationOut:
    """Run every draft check and report all problems at once."""
    result = service.validate(body.to_draft())
    return ValidationOut(
        valid=result.ok,
        errors=[e.to_dict() for e in result.errors],
    )


@router.post("/preview", responses=_PROBLEM_RESPONSES)
def preview_submission(
    body: QuinielaDraftIn,
    request: Request,
    service: QuinielaService = Depends(get_quiniela_service),
) -> Any:
    """Return the payload that creation would send."""
    try:
        submission = service.preview(body.to_draft())
    except DraftValidationError as e:
        return _validation_problem(request, e)
    return submission.to_payload()


@router.post("", status_code=201, responses=_PROBLEM_RESPONSES)
def create_quiniela(
    body: QuinielaDraftIn,
    request: Request,
    service: QuinielaService = Depends(get_quiniela_service),
) -> Any:
    """Validate the draft and create the quiniela."""
    try:
        created = service.create(body.to_draft())
    except DraftValidationError as e:
        return _validation_problem(request, e)
    except QuinielaError as e:
        raise HTTPException(status_code=e.status_code, detail=e.detail) from e
    return CreatedQuinielaOut(
        name=created.name,
        invitation_code=created.invitation_code,
        quiniela_id=created.quiniela_id,
    )
