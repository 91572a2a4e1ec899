# relative time labels for the recent check-ins table

from datetime import datetime

from healthwatch.services.stats import as_utc, round_half_up


def format_relative(created_at: datetime, now: datetime) -> str:
    """'Just now', 'n min ago', 'n h ago', 'Yesterday', else the calendar date"""
    created_at = as_utc(created_at)
    elapsed = (as_utc(now) - created_at).total_seconds()

    minutes = round_half_up(elapsed / 60)
    hours = round_half_up(elapsed / 3600)
    days = round_half_up(elapsed / 86400)

    if minutes < 1:
        return "Just now"
    if minutes < 60:
        return f"{minutes} min ago"
    if hours < 24:
        return f"{hours} h ago"
    if days == 1:
        return "Yesterday"
    return created_at.date().isoformat()
