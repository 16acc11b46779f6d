from __future__ import annotations

import json
from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel

from ..api.schemas.checkin import LocationSample


GEOLOCATION_TIMEOUT_SECONDS = 10.0
UNSUPPORTED_MESSAGE = "Geolocation not supported"


class LocationErrorKind(str, Enum):
    UNSUPPORTED = "unsupported"
    PERMISSION_DENIED = "permission_denied"
    POSITION_UNAVAILABLE = "position_unavailable"
    TIMEOUT = "timeout"


# Browser GeolocationPositionError codes; 0 is used for a missing capability
_BROWSER_ERROR_CODES = {
    0: LocationErrorKind.UNSUPPORTED,
    1: LocationErrorKind.PERMISSION_DENIED,
    2: LocationErrorKind.POSITION_UNAVAILABLE,
    3: LocationErrorKind.TIMEOUT,
}


class LocationRequest(BaseModel):
    """A one-shot position request."""

    high_accuracy: bool = True
    timeout_seconds: float = GEOLOCATION_TIMEOUT_SECONDS
    maximum_age_ms: int = 0

    def browser_options(self) -> Dict[str, Any]:
        return {
            "enableHighAccuracy": self.high_accuracy,
            "timeout": int(self.timeout_seconds * 1000),
            "maximumAge": self.maximum_age_ms,
        }


class LocationResult(BaseModel):
    """Outcome of a location request: either a sample or an error kind with the platform message."""

    sample: Optional[LocationSample] = None
    error: Optional[LocationErrorKind] = None
    message: str = ""

    @property
    def ok(self) -> bool:
        return self.sample is not None

    @classmethod
    def success(cls, lat: float, lng: float, accuracy: float) -> "LocationResult":
        return cls(sample=LocationSample(lat=lat, lng=lng, accuracy=accuracy))

    @classmethod
    def failure(cls, error: LocationErrorKind, message: str) -> "LocationResult":
        return cls(error=error, message=message)


def browser_expression(request: LocationRequest) -> str:
    """Build a JS expression resolving to a position payload or an error payload.

    The promise never rejects; errors are reported as ``{"error": {"code", "message"}}``
    with code 0 standing for a missing geolocation capability.
    """
    options = json.dumps(request.browser_options())
    return (
        "new Promise((resolve) => {"
        "if (!('geolocation' in navigator)) {"
        f"resolve({{error: {{code: 0, message: {json.dumps(UNSUPPORTED_MESSAGE)}}}}}); return;"
        "}"
        "navigator.geolocation.getCurrentPosition("
        "(pos) => resolve({coords: {latitude: pos.coords.latitude, "
        "longitude: pos.coords.longitude, accuracy: pos.coords.accuracy}, timestamp: pos.timestamp}),"
        "(err) => resolve({error: {code: err.code, message: err.message}}),"
        f"{options});"
        "})"
    )


def result_from_browser(payload: Dict[str, Any]) -> LocationResult:
    """Translate a browser position/error payload into a LocationResult."""
    error = payload.get("error")
    if error:
        kind = _BROWSER_ERROR_CODES.get(error.get("code"), LocationErrorKind.POSITION_UNAVAILABLE)
        return LocationResult.failure(kind, str(error.get("message") or ""))
    coords = payload.get("coords") or {}
    try:
        return LocationResult.success(
            lat=float(coords["latitude"]),
            lng=float(coords["longitude"]),
            accuracy=float(coords["accuracy"]),
        )
    except (KeyError, TypeError, ValueError):
        return LocationResult.failure(LocationErrorKind.POSITION_UNAVAILABLE, "Position unavailable")
