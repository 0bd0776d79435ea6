"""Loan applicant endpoints: submit, read, update and explain risk assessments."""

import logging
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.repositories.applicants import ApplicantRepository, SqlApplicantRepository
from app.schemas import (
    ApplicationCreate,
    ApplicationEnvelope,
    ApplicationResponse,
    ApplicationSubmitEnvelope,
    ApplicationSubmitResult,
    ErrorEnvelope,
    ExplanationEnvelope,
)
from app.services.risk_engine import assess_application, explain_record

logger = logging.getLogger(__name__)

router = APIRouter()

_NOT_FOUND = {404: {"model": ErrorEnvelope, "description": "Application not found"}}


async def get_repository(db: AsyncSession = Depends(get_db)) -> ApplicantRepository:
    return SqlApplicantRepository(db)


def _scored_record(data: ApplicationCreate) -> dict[str, Any]:
    """Run the risk engine on a submitted payload and merge its output in."""
    payload = data.model_dump(by_alias=True)
    result = assess_application(payload)
    return {
        **payload,
        "riskScore": result.risk_score,
        "riskFactors": list(result.risk_factors),
    }


@router.post("", response_model=ApplicationSubmitEnvelope, status_code=status.HTTP_201_CREATED)
async def submit_application(
    data: ApplicationCreate,
    repo: ApplicantRepository = Depends(get_repository),
):
    """Score a new application and store it with its risk assessment."""
    record = await repo.create(_scored_record(data))
    logger.info(
        "Application %s scored %.2f with factors %s",
        record["id"], record["riskScore"], record["riskFactors"],
    )
    return ApplicationSubmitEnvelope(
        data=ApplicationSubmitResult(
            application_id=record["id"],
            risk_score=record["riskScore"],
            risk_factors=record["riskFactors"],
        )
    )


@router.get("/{application_id}", response_model=ApplicationEnvelope, responses=_NOT_FOUND)
async def get_application(
    application_id: int,
    repo: ApplicantRepository = Depends(get_repository),
):
    record = await repo.get(application_id)
    if not record:
        raise HTTPException(status_code=404, detail="Application not found")
    return ApplicationEnvelope(data=ApplicationResponse.model_validate(record))


@router.put("/{application_id}", response_model=ApplicationEnvelope, responses=_NOT_FOUND)
async def update_application(
    application_id: int,
    data: ApplicationCreate,
    repo: ApplicantRepository = Depends(get_repository),
):
    """Replace the application data and re-run the risk assessment."""
    record = await repo.replace(application_id, _scored_record(data))
    if not record:
        raise HTTPException(status_code=404, detail="Application not found")
    logger.info("Application %s rescored %.2f", application_id, record["riskScore"])
    return ApplicationEnvelope(data=ApplicationResponse.model_validate(record))


@router.get(
    "/{application_id}/explanation",
    response_model=ExplanationEnvelope,
    responses=_NOT_FOUND,
)
async def explain_application(
    application_id: int,
    repo: ApplicantRepository = Depends(get_repository),
):
    """Breakdown of the stored score by data category."""
    record = await repo.get(application_id)
    if not record:
        raise HTTPException(status_code=404, detail="Application not found")
    return ExplanationEnvelope(data=explain_record(record))
