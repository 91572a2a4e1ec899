# in-memory report sequence mirrored to a durable key-value slot
# newest first by insertion; reports are only ever prepended

import asyncio
import json
import logging
from typing import Optional

from pydantic import TypeAdapter, ValidationError

from healthwatch.config import settings
from healthwatch.models.report import Report
from healthwatch.services.storage import KeyValueSlot, build_slot

logger = logging.getLogger(__name__)

_report = TypeAdapter(Report)


def serialize_reports(reports) -> str:
    return json.dumps([r.model_dump(by_alias=True, mode="json") for r in reports])


def parse_reports(raw: Optional[str]) -> list[Report]:
    """decode a stored blob. a blob that isn't a json list is empty;
    records that fail validation are skipped, the rest are kept."""
    if not raw:
        return []
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        logger.warning(f"Stored reports are not valid json, starting empty: {e}")
        return []
    if not isinstance(data, list):
        logger.warning(f"Stored reports are a {type(data).__name__}, not a list, starting empty")
        return []

    reports = []
    for index, item in enumerate(data):
        try:
            reports.append(_report.validate_python(item))
        except ValidationError as e:
            logger.warning(f"Skipping stored report #{index}: {e.error_count()} validation errors")
    return reports


class ReportStore:
    """owns the report sequence and its storage-backed mirror"""

    def __init__(self, slot: KeyValueSlot, key: str = settings.STORAGE_KEY):
        self.slot = slot
        self.key = key
        self._reports: list[Report] = []
        # serializes prepend + write so an older snapshot never lands after a newer one
        self._write_lock = asyncio.Lock()

    async def open(self):
        """connect the slot and load whatever it holds"""
        await self.slot.connect()
        await self.load()

    async def close(self):
        await self.slot.close()

    async def load(self) -> tuple[Report, ...]:
        """replace the in-memory sequence with the stored one (empty on any read problem)"""
        try:
            raw = await self.slot.read(self.key)
        except Exception as e:
            logger.warning(f"Could not read reports from storage, starting empty: {e}")
            raw = None
        self._reports = parse_reports(raw)
        logger.info(f"Loaded {len(self._reports)} reports from '{self.key}'")
        return self.snapshot()

    async def append(self, report: Report) -> Report:
        """prepend a new report and persist the full sequence"""
        async with self._write_lock:
            self._reports.insert(0, report)
            await self._save()
        return report

    async def _save(self):
        try:
            await self.slot.write(self.key, serialize_reports(self._reports))
        except Exception as e:
            # non-critical, the in-memory copy stays authoritative until the next write
            logger.warning(f"Could not persist {len(self._reports)} reports: {e}")

    def snapshot(self) -> tuple[Report, ...]:
        return tuple(self._reports)

    def recent(self, limit: int) -> tuple[Report, ...]:
        return tuple(self._reports[:limit])

    def __len__(self):
        return len(self._reports)


# singleton instance
store = ReportStore(build_slot(settings), settings.STORAGE_KEY)


async def get_store() -> ReportStore:
    """dependency injection for report store access"""
    return store
