"""Tempo REST client wrapper (worklogs, user schedule)."""

from __future__ import annotations

import hashlib
import json
import logging
import time
from typing import Any

import requests

from .config import DEFAULT_CACHE_TTL, DEFAULT_PAGE_SIZE, TEMPO_DEFAULT_SERVER
from .errors import TempoAPIError

logger = logging.getLogger(__name__)


class TempoAPI:
    def __init__(
        self,
        token: str | None,
        account_id: str | None = None,
        server: str = TEMPO_DEFAULT_SERVER,
        *,
        page_size: int = DEFAULT_PAGE_SIZE,
        cache_ttl: float = DEFAULT_CACHE_TTL,
        session: requests.Session | None = None,
    ):
        self.server = server.rstrip("/")
        self.token = token
        self.account_id = account_id
        self.page_size = page_size
        self.session = session or requests.Session()
        if token:
            self.session.headers.update({"Authorization": f"Bearer {token}"})
        # Simple in-memory cache: {(hash): (timestamp, data)}
        self._cache: dict[str, tuple[float, list]] = {}
        self._cache_ttl = cache_ttl

    def has_token(self) -> bool:
        return bool(self.token)

    def clear_cache(self) -> None:
        """Reset the in-memory GET cache."""
        self._cache.clear()

    def _prune_cache(self, now: float) -> None:
        stale = [k for k, (ts, _) in self._cache.items() if now - ts >= self._cache_ttl]
        for k in stale:
            del self._cache[k]

    def _cache_key(self, path: str, params: dict[str, Any]) -> str:
        payload = {"path": path, "params": params}
        return hashlib.sha256(json.dumps(payload, sort_keys=True).encode()).hexdigest()

    def _request(self, method: str, url: str, **kwargs) -> requests.Response:
        try:
            resp = self.session.request(method, url, **kwargs)
        except requests.RequestException as exc:
            raise TempoAPIError(f"Tempo request {method} {url} failed: {exc}") from exc
        if resp.status_code >= 400:
            raise TempoAPIError(f"Tempo request failed {resp.status_code}: {resp.text[:200]}")
        return resp

    def _get_paginated(self, path: str, params: dict[str, Any]) -> list[dict[str, Any]]:
        key = self._cache_key(path, params)
        now = time.time()
        cached = self._cache.get(key)
        if cached and (now - cached[0]) < self._cache_ttl:
            logger.debug("Cache hit for %s", path)
            return cached[1]
        out: list[dict[str, Any]] = []
        url: str | None = f"{self.server}{path}"
        qp: dict[str, Any] | None = {**params, "limit": self.page_size}
        while url:
            data = self._request("GET", url, params=qp).json()
            out.extend(data.get("results", []))
            # "next" already carries the query string
            url = (data.get("metadata") or {}).get("next")
            qp = None
        logger.debug("Fetched %s results from %s", len(out), path)
        self._prune_cache(now)
        self._cache[key] = (now, out)
        return out

    def _user_path(self) -> str:
        if self.account_id:
            return f"/worklogs/user/{self.account_id}"
        return "/worklogs"

    def get_worklogs(self, from_date: str, to_date: str) -> list[dict[str, Any]]:
        return self._get_paginated(self._user_path(), {"from": from_date, "to": to_date})

    def get_user_schedule(self, from_date: str, to_date: str) -> list[dict[str, Any]]:
        return self._get_paginated("/user-schedule", {"from": from_date, "to": to_date})

    def get_worklog(self, worklog_id: int) -> dict[str, Any]:
        return self._request("GET", f"{self.server}/worklogs/{worklog_id}").json()

    def add_worklog(self, payload: dict[str, Any]) -> dict[str, Any]:
        body = {k: v for k, v in payload.items() if v is not None}
        if self.account_id and "authorAccountId" not in body:
            body["authorAccountId"] = self.account_id
        resp = self._request("POST", f"{self.server}/worklogs", json=body)
        self.clear_cache()
        logger.info("Created worklog for %s (%ss)", body.get("issueKey"), body.get("timeSpentSeconds"))
        return resp.json()

    def delete_worklog(self, worklog_id: int) -> None:
        self._request("DELETE", f"{self.server}/worklogs/{worklog_id}")
        self.clear_cache()
        logger.info("Deleted worklog %s", worklog_id)
