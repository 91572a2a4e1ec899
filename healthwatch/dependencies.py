# fastapi dependency injection
# provides the reference instant used for created timestamps and stats windows

from datetime import datetime, timezone


async def get_now() -> datetime:
    """current utc instant. overridden in tests to pin the clock."""
    return datetime.now(timezone.utc)
