from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import requests

import config

logger = logging.getLogger(__name__)


def _normalize_record(rec: dict) -> dict:
    """Backend ids come back as ``_id``; views key everything on ``id``."""
    out = dict(rec)
    if "_id" in out:
        out["id"] = str(out.pop("_id"))
    elif out.get("id") is not None:
        out["id"] = str(out["id"])
    return out


class RecordsClient:
    """Thin wrapper around the records REST endpoints.

    Every call returns a falsy value on failure (non-2xx status or transport
    error) after logging it; nothing is raised to the caller.
    """

    def __init__(self, base_url: str, timeout: float = 30.0):
        self.base_url = (base_url or "").rstrip("/")
        self.timeout = timeout

    def url(self, path: str = "") -> str:
        return f"{self.base_url}/record/{path}"

    def info(self) -> dict:
        return {"base_url": self.base_url, "timeout": self.timeout}

    # ---------- reads ----------
    def list_records(self) -> Optional[List[Dict[str, Any]]]:
        try:
            response = requests.get(self.url(), timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            logger.error("An error occurred: %s", e)
            return None
        if not response.ok:
            logger.error("An error occurred: %s", response.reason)
            return None
        return [_normalize_record(r) for r in (response.json() or [])]

    def get_record(self, record_id: str) -> Optional[Dict[str, Any]]:
        try:
            response = requests.get(self.url(record_id), timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            logger.error("An error occurred: %s", e)
            return None
        if not response.ok:
            logger.error("An error occurred: %s", response.reason)
            return None
        body = response.json()
        return _normalize_record(body) if body else None

    # ---------- writes ----------
    def create_record(self, record: dict) -> bool:
        return self._send("post", self.url().rstrip("/"), record)

    def update_record(self, record_id: str, record: dict) -> bool:
        return self._send("patch", self.url(record_id), record)

    def delete_record(self, record_id: str) -> bool:
        try:
            response = requests.delete(self.url(record_id), timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            logger.error("Delete of record %s failed: %s", record_id, e)
            return False
        if not response.ok:
            logger.error("Delete of record %s failed: %s %s", record_id, response.status_code, response.reason)
            return False
        return True

    def insert_many(self, rows: List[dict]) -> bool:
        return self._send("post", self.url("multi-insert"), list(rows))

    def _send(self, method: str, url: str, payload) -> bool:
        send = getattr(requests, method)
        try:
            response = send(url, json=payload, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            logger.error("%s %s failed: %s", method.upper(), url, e)
            return False
        if not response.ok:
            logger.error("%s %s failed: %s %s", method.upper(), url, response.status_code, response.reason)
            return False
        return True


_CLIENT: Optional[RecordsClient] = None
_CLIENT_INFO: Dict[str, Any] = {}


def configure_client(url: str | None = None, *, timeout: float | None = None) -> RecordsClient:
    """Create the shared client from explicit args or RECORDS_API_URL / RECORDS_API_TIMEOUT."""
    global _CLIENT, _CLIENT_INFO
    base = (url or config.API_URL or "").strip()
    if not base:
        raise ValueError("No RECORDS_API_URL configured.")
    client = RecordsClient(base, timeout=config.REQUEST_TIMEOUT if timeout is None else timeout)
    _CLIENT = client
    _CLIENT_INFO = client.info()
    return client


def get_client() -> RecordsClient:
    if _CLIENT is None:
        raise RuntimeError("Records client not configured. Call configure_client() first.")
    return _CLIENT


def describe_current_client() -> dict:
    return dict(_CLIENT_INFO)
