"""Grouping of completion photos for the gallery view."""
from collections import OrderedDict
from datetime import datetime
from typing import Any, Iterable, Mapping

UNKNOWN_DATE_LABEL = "Unknown date"
# "{day}" is replaced with the unpadded day of the month
DEFAULT_LABEL_FORMAT = "%B {day}, %Y"


def _completion_time(photo: Any) -> datetime | None:
    if isinstance(photo, Mapping):
        value = photo.get("completed_at")
    else:
        value = getattr(photo, "completed_at", None)
    if value is None or isinstance(value, datetime):
        return value
    try:
        return datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    except ValueError:
        return None


def format_date_label(moment: datetime | None, label_format: str = DEFAULT_LABEL_FORMAT) -> str:
    """Calendar-date header for a completion time, e.g. 'October 18, 2026'."""
    if moment is None:
        return UNKNOWN_DATE_LABEL
    return moment.strftime(label_format).replace("{day}", str(moment.day))


def group_photos_by_date(
    photos: Iterable[Any], label_format: str = DEFAULT_LABEL_FORMAT
) -> "OrderedDict[str, list[Any]]":
    """Group photos by the calendar date they were completed on.

    Groups keep the order in which their date is first seen, so an input
    already sorted by completion time yields date headers in the same order.
    Each photo lands in exactly one group.
    """
    groups: "OrderedDict[str, list[Any]]" = OrderedDict()
    for photo in photos:
        label = format_date_label(_completion_time(photo), label_format)
        groups.setdefault(label, []).append(photo)
    return groups
