from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Protocol

from .models import EnhancedSearchResponse, LegacySearchResponse, RawIssue, SearchRequest

LEGACY_SEARCH_PATH = "/rest/api/2/search"
ENHANCED_SEARCH_PATH = "/rest/api/3/search/jql"


class Transport(Protocol):
    def post(self, path: str, payload: Dict[str, Any]) -> Any: ...


class CloudDetector(Protocol):
    def is_cloud_deployment(self) -> bool: ...


@dataclass(frozen=True)
class ExecutorResult:
    issues: tuple[RawIssue, ...]
    names: dict[str, str]


class SearchExecutor(Protocol):
    def run(self, request: SearchRequest) -> ExecutorResult: ...


@dataclass(frozen=True)
class LegacySearchExecutor:
    """
    Offset-paginated search. Returns one page; `total` is not passed on,
    callers page by re-running with a larger start_at.
    """
    transport: Transport

    def payload(self, request: SearchRequest) -> Dict[str, Any]:
        body: Dict[str, Any] = {
            "jql": request.jql,
            "startAt": request.start_at,
            "maxResults": request.max_results,
        }
        if request.fields:
            body["fields"] = list(request.fields)
        if request.expand:
            body["expand"] = list(request.expand)
        return body

    def run(self, request: SearchRequest) -> ExecutorResult:
        data = self.transport.post(LEGACY_SEARCH_PATH, self.payload(request))
        response = LegacySearchResponse.from_json(data)
        return ExecutorResult(response.issues, response.names)


@dataclass(frozen=True)
class EnhancedSearchExecutor:
    """
    Token-paginated search/jql endpoint. One call per run; start_at is not
    sent since the endpoint has no offset.
    """
    transport: Transport

    def payload(self, request: SearchRequest) -> Dict[str, Any]:
        body: Dict[str, Any] = {
            "jql": request.jql,
            "maxResults": request.max_results,
        }
        if request.fields:
            body["fields"] = list(request.fields)
        else:
            # search/jql returns only ids unless fields are named
            body["fields"] = ["*navigable"]
        if request.expand:
            # v3 takes expand as a comma separated string
            body["expand"] = ",".join(request.expand)
        return body

    def run(self, request: SearchRequest) -> ExecutorResult:
        data = self.transport.post(ENHANCED_SEARCH_PATH, self.payload(request))
        response = EnhancedSearchResponse.from_json(data)
        return ExecutorResult(response.issues, response.names)
