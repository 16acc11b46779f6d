from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import requests

from .schemas.checkin import CheckinCreate, CheckinRecord
from .schemas.child import ChildCreate, ChildProfile


logger = logging.getLogger(__name__)

JSON_HEADERS = {"Content-Type": "application/json"}


class ServiceError(Exception):
    """Raised when the check-in service cannot be reached or answers with a non-success status."""

    def __init__(self, method: str, path: str, message: str, status_code: Optional[int] = None):
        super().__init__(f"{method} {path}: {message}")
        self.method = method
        self.path = path
        self.status_code = status_code


class CheckinServiceClient:
    """Thin JSON client for the check-in service."""

    def __init__(
        self,
        base_url: str,
        session: Optional[requests.Session] = None,
        timeout: Optional[float] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout

    def _request(self, method: str, path: str, json: Optional[Dict[str, Any]] = None) -> requests.Response:
        url = f"{self.base_url}{path}"
        logger.debug("%s %s", method, url)
        try:
            resp = self.session.request(method, url, json=json, headers=JSON_HEADERS, timeout=self.timeout)
        except requests.RequestException as e:
            raise ServiceError(method, path, str(e)) from e
        if not resp.ok:
            raise ServiceError(method, path, f"HTTP {resp.status_code}", status_code=resp.status_code)
        return resp

    def _request_json(self, method: str, path: str, json: Optional[Dict[str, Any]] = None) -> Any:
        resp = self._request(method, path, json=json)
        try:
            return resp.json()
        except ValueError as e:
            raise ServiceError(method, path, "invalid JSON body", status_code=resp.status_code) from e

    def _request_list(self, method: str, path: str) -> List[Any]:
        data = self._request_json(method, path)
        if not isinstance(data, list):
            raise ServiceError(method, path, "expected a JSON array")
        return data

    def list_children(self) -> List[ChildProfile]:
        data = self._request_list("GET", "/child")
        return [ChildProfile.model_validate(item) for item in data]

    def create_child(self, name: str) -> Dict[str, Any]:
        payload = ChildCreate(name=name)
        return self._request_json("POST", "/child", json=payload.model_dump())

    def latest_checkins(self) -> List[CheckinRecord]:
        data = self._request_list("GET", "/checkin/latest")
        return [CheckinRecord.model_validate(item) for item in data]

    def create_checkin(self, payload: CheckinCreate) -> None:
        # Response body is not used
        self._request("POST", "/checkin", json=payload.model_dump())
