from .checkin import CheckinCreate, CheckinRecord, LocationSample
from .child import ChildCreate, ChildProfile


__all__ = [
    "CheckinCreate",
    "CheckinRecord",
    "ChildCreate",
    "ChildProfile",
    "LocationSample",
]
