# shared fixtures for backend api tests
# provides an in-memory storage slot, a pinned clock, sample reports and httpx test clients

import pytest
import pytest_asyncio
from unittest.mock import MagicMock
from datetime import datetime, timezone, timedelta

from httpx import AsyncClient, ASGITransport

from healthwatch.main import app
from healthwatch.models.report import Report
from healthwatch.services.storage import KeyValueSlot
from healthwatch.services.store import ReportStore, get_store
from healthwatch.dependencies import get_now


# pinned "now" for every test that goes through the api
FIXED_NOW = datetime(2025, 6, 14, 12, 0, tzinfo=timezone.utc)

TEST_KEY = "healthwatch_reports_test"


def make_report(**overrides) -> Report:
    """build a valid report, created one hour before FIXED_NOW unless overridden"""
    fields = {
        "id": "report-0001",
        "region": "M5V",
        "age_group": "25-34",
        "symptom_category": "Headache / fatigue",
        "environment_issue": "Heat / humidity",
        "mental_health_flag": False,
        "notes": "",
        "created_at": FIXED_NOW - timedelta(hours=1),
    }
    fields.update(overrides)
    return Report(**fields)


VALID_PAYLOAD = {
    "region": "K1A",
    "ageGroup": "35-44",
    "symptomCategory": "Fever / flu-like symptoms",
    "environmentIssue": "Air quality / smoke",
    "mentalHealthFlag": True,
    "notes": "Smoke from the fires since Tuesday.",
}


# in-memory slot

class MemorySlot(KeyValueSlot):
    """dict-backed slot. fail_reads / fail_writes simulate broken storage."""

    def __init__(self, data=None):
        self.data = dict(data or {})
        self.fail_reads = False
        self.fail_writes = False
        self.writes = 0

    async def read(self, key):
        if self.fail_reads:
            raise OSError("storage unavailable")
        return self.data.get(key)

    async def write(self, key, value):
        if self.fail_writes:
            raise OSError("quota exceeded")
        self.writes += 1
        self.data[key] = value


# mongodb collection mock

class MockCollection:
    """mock for a motor collection with the async methods the mongo slot uses"""

    def __init__(self, data=None):
        self._data = data or []

    async def find_one(self, query=None, projection=None):
        if not query:
            return self._data[0] if self._data else None
        for doc in self._data:
            if self._matches(doc, query):
                return doc
        return None

    async def update_one(self, query, update, upsert=False):
        result = MagicMock()
        result.modified_count = 0
        result.upserted_id = None
        for doc in self._data:
            if self._matches(doc, query):
                doc.update(update.get("$set", {}))
                result.modified_count = 1
                return result
        if upsert:
            doc = dict(query)
            doc.update(update.get("$set", {}))
            self._data.append(doc)
            result.upserted_id = doc.get("_id")
        return result

    def _matches(self, doc, query):
        return all(doc.get(key) == value for key, value in query.items())


@pytest.fixture
def slot():
    """fresh in-memory slot for each test"""
    return MemorySlot()


@pytest.fixture
def report_store(slot):
    """empty report store over the in-memory slot"""
    return ReportStore(slot, TEST_KEY)


@pytest_asyncio.fixture
async def seeded_store(report_store):
    """store holding three reports, newest first"""
    await report_store.append(make_report(
        id="report-old", region="Riverside", created_at=FIXED_NOW - timedelta(days=10),
        symptom_category="Digestive issues", environment_issue="Water taste / smell",
    ))
    await report_store.append(make_report(
        id="report-mid", region=" M5V ", created_at=FIXED_NOW - timedelta(days=2),
        mental_health_flag=True,
    ))
    await report_store.append(make_report(id="report-new", region="M5V"))
    return report_store


async def _client_for(report_store):
    async def override_get_store():
        return report_store

    async def override_get_now():
        return FIXED_NOW

    app.dependency_overrides[get_store] = override_get_store
    app.dependency_overrides[get_now] = override_get_now

    transport = ASGITransport(app=app)
    return AsyncClient(transport=transport, base_url="http://test")


@pytest_asyncio.fixture
async def client(report_store):
    """httpx async test client over an empty store"""
    async with await _client_for(report_store) as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def seeded_client(seeded_store):
    """httpx async test client over the seeded store"""
    async with await _client_for(seeded_store) as ac:
        yield ac

    app.dependency_overrides.clear()
