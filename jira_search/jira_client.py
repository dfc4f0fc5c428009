from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict, Optional
import logging
import time

import httpx

from .errors import TransportError

logger = logging.getLogger(__name__)

ERROR_PREFIX = "Jira REST API call error: "


def error_message(r: httpx.Response) -> str:
    """
    Flatten Jira's {"errorMessages": [...], "errors": {...}} body into one line.
    Falls back to the raw body text.
    """
    try:
        data = r.json()
    except ValueError:
        data = None

    parts = []
    if isinstance(data, dict):
        parts.extend(str(m) for m in data.get("errorMessages") or [])
        for field, msg in (data.get("errors") or {}).items():
            parts.append(f"{field}: {msg}")
    text = " ".join(parts) if parts else r.text.strip()
    return ERROR_PREFIX + (text or r.reason_phrase)


@dataclass(frozen=True)
class JiraClient:
    base_url: str
    email: str
    token: str
    timeout: float = 60
    transport: Optional[httpx.BaseTransport] = None

    def _client(self) -> httpx.Client:
        return httpx.Client(
            base_url=self.base_url,
            timeout=self.timeout,
            headers={"Accept": "application/json"},
            auth=(self.email, self.token),
            transport=self.transport,
        )

    def post(self, path: str, payload: Dict[str, Any]) -> Any:
        return self._send("POST", path, json=payload)

    def get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        return self._send("GET", path, params=params)

    def _send(self, method: str, path: str, **kwargs: Any) -> Any:
        """
        Single Jira call, decoded JSON on success.
        Handles basic retry/backoff on 429/503, raises TransportError otherwise.
        """
        backoff = 1.0
        with self._client() as c:
            while True:
                try:
                    r = c.request(method, path, **kwargs)
                except httpx.TransportError as e:
                    raise TransportError(f"{ERROR_PREFIX}{e}") from e

                if r.status_code in (429, 503):
                    retry_after = r.headers.get("Retry-After")
                    if retry_after:
                        sleep_s = float(retry_after)
                    else:
                        sleep_s = backoff
                        backoff = min(backoff * 2, 30)
                    logger.warning("%s %s throttled (%s), retrying in %.1fs", method, path, r.status_code, sleep_s)
                    time.sleep(sleep_s)
                    continue

                if r.status_code >= 400:
                    raise TransportError(error_message(r), code=r.status_code)

                try:
                    return r.json()
                except ValueError as e:
                    raise TransportError(f"{ERROR_PREFIX}response is not JSON", code=r.status_code) from e
