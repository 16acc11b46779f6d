from __future__ import annotations

import math
from datetime import datetime
from typing import Iterable, Optional

from pydantic import BaseModel

from ..api.schemas.checkin import CheckinRecord, LocationSample
from ..api.schemas.child import ChildProfile


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def format_coords(lat: float, lng: float) -> str:
    return f"{lat:.5f}, {lng:.5f}"


def format_accuracy(accuracy: Optional[float]) -> str:
    return f"±{round_half_up(accuracy or 0)}m"


def format_location_ready(sample: LocationSample) -> str:
    return f"Location ready: {format_coords(sample.lat, sample.lng)}"


def format_capture_line(sample: LocationSample) -> str:
    return f"Ready: lat {sample.lat:.5f}, lng {sample.lng:.5f} {format_accuracy(sample.accuracy)}"


def format_timestamp(value: Optional[datetime]) -> str:
    """Render a server timestamp in local time; blank when missing."""
    if value is None:
        return ""
    return value.astimezone().strftime("%Y-%m-%d %H:%M:%S")


def child_label(child_id, children: Iterable[ChildProfile]) -> str:
    for child in children:
        if str(child.id) == str(child_id):
            return child.name
    return str(child_id)


class CheckinCard(BaseModel):
    child: str
    created_at: str
    coords_line: str
    note_line: Optional[str] = None
    link: Optional[str] = None


def build_card(record: CheckinRecord, children: Iterable[ChildProfile] = ()) -> CheckinCard:
    # note and link lines are omitted when empty
    return CheckinCard(
        child=child_label(record.child_id, children),
        created_at=format_timestamp(record.created_at),
        coords_line=f"{format_coords(record.lat, record.lng)} {format_accuracy(record.accuracy)}",
        note_line=f"Note: {record.note}" if record.note else None,
        link=record.link or None,
    )


def markdown_link(label: str, url: str) -> str:
    """Markdown anchor whose target survives spaces, parentheses and angle brackets."""
    target = url.strip().replace(" ", "%20").replace("<", "%3C").replace(">", "%3E")
    return f"[{label}](<{target}>)"
