# reports router: form options, recent check-ins and anonymous submission
# no auth, everything is anonymous and kept in the configured storage slot

import logging
import uuid
from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException, status, Query

from healthwatch.models.report import (
    Report,
    ReportCreate,
    ReportOptions,
    ReportResponse,
    ReportSubmitResponse,
    REQUIRED_FIELDS_MESSAGE,
)
from healthwatch.services.formatting import format_relative
from healthwatch.services.store import ReportStore, get_store
from healthwatch.dependencies import get_now
from healthwatch.config import settings

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/reports", tags=["reports"])


def to_response(report: Report, now: datetime) -> ReportResponse:
    """attach the relative 'when' label shown in the recent table"""
    return ReportResponse(**report.model_dump(), when=format_relative(report.created_at, now))


@router.get("/options", response_model=ReportOptions)
async def get_report_options():
    """enumerated choices for age group, symptom and environment selects"""
    return ReportOptions()


@router.get("", response_model=list[ReportResponse])
async def list_reports(
    limit: int = Query(settings.RECENT_REPORTS_LIMIT, ge=1, le=200),
    store: ReportStore = Depends(get_store),
    now: datetime = Depends(get_now),
):
    """newest check-ins first"""
    return [to_response(r, now) for r in store.recent(limit)]


@router.post("", response_model=ReportSubmitResponse, status_code=status.HTTP_201_CREATED)
async def submit_report(
    payload: ReportCreate,
    store: ReportStore = Depends(get_store),
    now: datetime = Depends(get_now),
):
    """record a new anonymous check-in. rejected without any state change if a required field is blank."""

    missing = payload.missing_fields()
    if missing:
        logger.info(f"Rejected check-in, missing fields: {', '.join(missing)}")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=REQUIRED_FIELDS_MESSAGE,
        )

    report = Report(
        id=str(uuid.uuid4()),
        region=payload.region,
        age_group=payload.age_group,
        symptom_category=payload.symptom_category,
        environment_issue=payload.environment_issue,
        mental_health_flag=payload.mental_health_flag,
        notes=payload.notes,
        created_at=now,
    )
    await store.append(report)
    logger.info(f"Check-in {report.id} recorded ({len(store)} total)")

    return ReportSubmitResponse(report=to_response(report, now))
