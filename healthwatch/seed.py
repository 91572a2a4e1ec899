# seed script: appends demo check-ins to the configured report store
# spreads reports over the trend window so the dashboard has something to draw
# run: python -m healthwatch.seed [count]

import asyncio
import logging
import random
import sys
import uuid
from datetime import datetime, timedelta, timezone

from healthwatch.models.report import AGE_GROUPS, ENVIRONMENT_ISSUES, SYMPTOM_CATEGORIES, Report
from healthwatch.services.stats import TREND_WINDOW_DAYS
from healthwatch.services.store import ReportStore, store

logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s")
logger = logging.getLogger(__name__)

DEMO_REGIONS = ["M5V", "K1A", "V6B", "H2X", "T2P", "Riverside", "Old Town"]
DEMO_NOTES = [
    "",
    "",
    "Started two days ago.",
    "Worse in the afternoon.",
    "Neighbours mention the same thing.",
]


def make_demo_reports(count: int, now: datetime, rng: random.Random) -> list[Report]:
    """random check-ins dated within the trend window, oldest first"""
    window = timedelta(days=TREND_WINDOW_DAYS)
    created = sorted(now - window * rng.random() for _ in range(count))
    return [
        Report(
            id=str(uuid.UUID(int=rng.getrandbits(128), version=4)),
            region=rng.choice(DEMO_REGIONS),
            age_group=rng.choice(AGE_GROUPS),
            symptom_category=rng.choice(SYMPTOM_CATEGORIES),
            environment_issue=rng.choice(ENVIRONMENT_ISSUES),
            mental_health_flag=rng.random() < 0.3,
            notes=rng.choice(DEMO_NOTES),
            created_at=created_at,
        )
        for created_at in created
    ]


async def seed(report_store: ReportStore, count: int = 40, seed_value: int = 7) -> int:
    """append `count` demo check-ins, newest ending up first. returns the new total."""
    await report_store.open()
    try:
        now = datetime.now(timezone.utc)
        for report in make_demo_reports(count, now, random.Random(seed_value)):
            await report_store.append(report)
        logger.info(f"Seeded {count} demo check-ins ({len(report_store)} total)")
        return len(report_store)
    finally:
        await report_store.close()


if __name__ == "__main__":
    n = int(sys.argv[1]) if len(sys.argv) > 1 else 40
    asyncio.run(seed(store, n))
