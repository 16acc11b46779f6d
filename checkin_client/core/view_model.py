from __future__ import annotations

import logging
from typing import Callable, List, Optional

from pydantic import ValidationError

from ..api.client import CheckinServiceClient, ServiceError
from ..api.schemas.checkin import CheckinCreate, CheckinRecord, LocationSample
from ..api.schemas.child import ChildProfile
from .formatting import format_location_ready
from .geolocation import (
    UNSUPPORTED_MESSAGE,
    LocationErrorKind,
    LocationRequest,
    LocationResult,
)


logger = logging.getLogger(__name__)

STATUS_CREATING = "Creating..."
STATUS_CREATED = "Created"
STATUS_CREATE_FAILED = "Failed"
STATUS_SELECT_PROFILE = "Select a profile first"
STATUS_GETTING_LOCATION = "Getting location..."
STATUS_GET_LOCATION_FIRST = "Get location first"
STATUS_SENDING = "Sending..."
STATUS_SHARED = "Shared successfully"
STATUS_SHARE_FAILED = "Failed to share"

Locator = Callable[[LocationRequest], LocationResult]


class CheckinViewModel:
    """UI state of the check-in page and the operations that update it.

    Reads (profiles, latest check-ins) only log on failure. Writes report a short
    status string and keep the form fields for a retry, except that a successful
    share drops the note, link and captured location.
    """

    def __init__(self, client: CheckinServiceClient) -> None:
        self.client = client
        self.children: List[ChildProfile] = []
        self.name: str = ""
        self.selected_child: str | int = ""
        self.status: str = ""
        self.coords: Optional[LocationSample] = None
        self.note: str = ""
        self.link: str = ""
        self.latest: List[CheckinRecord] = []

    def load(self) -> None:
        self.fetch_children()
        self.fetch_latest()

    def fetch_children(self) -> None:
        try:
            children = self.client.list_children()
        except (ServiceError, ValidationError) as e:
            logger.error("Failed to fetch child profiles: %s", e)
            return
        self.children = children
        if children:
            self.selected_child = children[0].id

    def fetch_latest(self) -> None:
        try:
            self.latest = self.client.latest_checkins()
        except (ServiceError, ValidationError) as e:
            logger.error("Failed to fetch latest check-ins: %s", e)

    def create_child(self) -> bool:
        if not self.name.strip():
            return False
        self.status = STATUS_CREATING
        try:
            self.client.create_child(self.name)
        except (ServiceError, ValidationError) as e:
            logger.warning("Creating child profile failed: %s", e)
            self.status = STATUS_CREATE_FAILED
            return False
        self.status = STATUS_CREATED
        self.name = ""
        self.fetch_children()
        return True

    def request_location(self, supported: bool = True) -> Optional[LocationRequest]:
        """Start a location capture. Returns the request to issue, or None when a guard fails."""
        if self.selected_child in ("", None):
            self.status = STATUS_SELECT_PROFILE
            return None
        if not supported:
            self.status = UNSUPPORTED_MESSAGE
            return None
        self.status = STATUS_GETTING_LOCATION
        return LocationRequest()

    def apply_location(self, result: LocationResult) -> None:
        if result.sample is not None:
            self.coords = result.sample
            self.status = format_location_ready(result.sample)
        elif result.error == LocationErrorKind.UNSUPPORTED:
            self.status = UNSUPPORTED_MESSAGE
        else:
            self.status = f"Location error: {result.message}"

    def get_location(self, locate: Optional[Locator]) -> None:
        """Capture a location synchronously with ``locate``; None means no geolocation capability."""
        request = self.request_location(supported=locate is not None)
        if request is None:
            return
        self.apply_location(locate(request))

    def send_checkin(self) -> bool:
        if self.coords is None:
            self.status = STATUS_GET_LOCATION_FIRST
            return False
        self.status = STATUS_SENDING
        try:
            payload = CheckinCreate.from_sample(self.selected_child, self.coords, note=self.note, link=self.link)
            self.client.create_checkin(payload)
        except (ServiceError, ValidationError) as e:
            logger.warning("Sharing check-in failed: %s", e)
            self.status = STATUS_SHARE_FAILED
            return False
        self.status = STATUS_SHARED
        self.note = ""
        self.link = ""
        self.coords = None
        self.fetch_latest()
        return True
