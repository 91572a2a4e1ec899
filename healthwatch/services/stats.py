# dashboard statistics over the stored check-ins
# pure functions: no storage access, no mutation of the input sequence
# calendar bucketing uses utc days, matching the utc createdAt timestamps

import math
from collections import Counter
from datetime import datetime, timedelta, timezone
from typing import Iterable, Optional, Sequence

from healthwatch.models.dashboard import CategoryCount, StatsSummary, TrendDataPoint
from healthwatch.models.report import Report

TREND_WINDOW_DAYS = 14
RECENT_WINDOW_DAYS = 7
TOP_CATEGORY_LIMIT = 4

SECONDS_PER_DAY = 24 * 60 * 60


def round_half_up(value: float) -> int:
    """round to the nearest integer, halves away from zero for positive values.
    python's round() would send 12.5 to 12."""
    return int(math.floor(value + 0.5))


def as_utc(value: datetime) -> datetime:
    """naive timestamps are taken to be utc"""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _top_categories(labels: Iterable[str], limit: int = TOP_CATEGORY_LIMIT) -> list[CategoryCount]:
    """most frequent labels first; equal counts are ordered alphabetically"""
    counts = Counter(labels)
    ranked = sorted(counts.items(), key=lambda item: (-item[1], item[0]))
    return [CategoryCount(label=label, count=count) for label, count in ranked[:limit]]


def _trend(reports: Sequence[Report], today) -> list[TrendDataPoint]:
    per_day = Counter(as_utc(r.created_at).date() for r in reports)
    trend = []
    for offset in range(TREND_WINDOW_DAYS - 1, -1, -1):
        day = today - timedelta(days=offset)
        trend.append(TrendDataPoint(date=day.strftime("%m-%d"), count=per_day.get(day, 0)))
    return trend


def compute_stats(reports: Sequence[Report], now: Optional[datetime] = None) -> StatsSummary:
    """aggregate check-ins into the dashboard summary.

    `now` defaults to the current utc instant; pass it explicitly for
    reproducible output. reports dated in the future count as recent.
    """
    now = as_utc(now or datetime.now(timezone.utc))
    total = len(reports)

    last_7_days = sum(
        1 for r in reports
        if (now - as_utc(r.created_at)).total_seconds() / SECONDS_PER_DAY <= RECENT_WINDOW_DAYS
    )

    regions = {(r.region or "").strip() for r in reports}
    regions.discard("")

    flagged = sum(1 for r in reports if r.mental_health_flag)
    mental_health_share = round_half_up(flagged / total * 100) if total > 0 else 0

    return StatsSummary(
        total=total,
        last_7_days=last_7_days,
        unique_regions=len(regions),
        trend_data=_trend(reports, now.date()),
        top_symptoms=_top_categories(r.symptom_category for r in reports),
        top_environment=_top_categories(r.environment_issue for r in reports),
        mental_health_share=mental_health_share,
    )


def mental_health_message(share: int) -> str:
    """sentence shown under the mental health heading"""
    if share > 0:
        return f"{share}% of check-ins flagged mental health strain."
    return "No mental health signals reported yet."
