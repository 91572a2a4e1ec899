# dashboard router: summary stats, 14-day trend and recent check-ins
# stats are recomputed from the full report sequence on every request

import logging
from datetime import datetime

from fastapi import APIRouter, Depends

from healthwatch.models.dashboard import DashboardOverview, StatsSummary
from healthwatch.routers.reports import to_response
from healthwatch.services.stats import compute_stats, mental_health_message
from healthwatch.services.store import ReportStore, get_store
from healthwatch.dependencies import get_now
from healthwatch.config import settings

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get("/stats", response_model=StatsSummary)
async def get_dashboard_stats(
    store: ReportStore = Depends(get_store),
    now: datetime = Depends(get_now),
):
    """aggregate stats for the dashboard cards, trend chart and category chips"""
    return compute_stats(store.snapshot(), now)


@router.get("", response_model=DashboardOverview)
async def get_dashboard(
    store: ReportStore = Depends(get_store),
    now: datetime = Depends(get_now),
):
    """stats plus the sample of recent check-ins"""
    stats = compute_stats(store.snapshot(), now)
    recent = [to_response(r, now) for r in store.recent(settings.RECENT_REPORTS_LIMIT)]

    return DashboardOverview(
        stats=stats,
        recent=recent,
        mentalHealthMessage=mental_health_message(stats.mental_health_share),
    )
