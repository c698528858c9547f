from collections import OrderedDict
from datetime import datetime
from typing import Dict, List

SCHEDULE_TYPES = {
    "prep": "Pre-production",
    "shoot": "Shooting",
    "review": "Review/Editing",
}
DEFAULT_SCHEDULE_TYPE = "shoot"
UNKNOWN_DURATION = "?h"


def schedule_type_label(schedule_type: str) -> str:
    return SCHEDULE_TYPES.get(schedule_type, SCHEDULE_TYPES[DEFAULT_SCHEDULE_TYPE])


def group_by_date(schedule: List[dict]) -> Dict[str, List[dict]]:
    """Group schedule items by date (dates ascending), each day sorted by start time."""
    grouped: Dict[str, List[dict]] = {}
    for item in schedule or []:
        grouped.setdefault(item.get("date") or "", []).append(item)

    ordered = OrderedDict()
    for date in sorted(grouped):
        ordered[date] = sorted(grouped[date], key=lambda i: i.get("start_time") or "")
    return ordered


def format_duration(start_time: str, end_time: str) -> str:
    # rows saved before times were validated
    try:
        start = datetime.strptime(start_time, "%H:%M")
        end = datetime.strptime(end_time, "%H:%M")
    except (TypeError, ValueError):
        return UNKNOWN_DURATION
    hours = (end - start).total_seconds() / 3600

    if hours < 1:
        return f"{round(hours * 60)}min"
    if hours == int(hours):
        return f"{int(hours)}h"
    return f"{hours:g}h"
