from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping

from .errors import InvalidSearchMode


class SearchMode(str, Enum):
    AUTO = "auto"
    ENHANCED = "enhanced"
    LEGACY = "legacy"

    @classmethod
    def parse(cls, token: str) -> "SearchMode":
        # exact, case-sensitive match on the token only
        for mode in cls:
            if mode.value == token:
                return mode
        raise InvalidSearchMode(token)


@dataclass(frozen=True)
class SearchRequest:
    jql: str
    fields: tuple[str, ...] = ()
    expand: tuple[str, ...] = ()
    max_results: int = 1000
    start_at: int = 0

    def __post_init__(self) -> None:
        if self.max_results <= 0:
            raise ValueError(f"max_results must be positive, got {self.max_results}")
        if self.start_at < 0:
            raise ValueError(f"start_at must be non-negative, got {self.start_at}")
        # accept any sequence from callers but keep the request immutable
        object.__setattr__(self, "fields", tuple(self.fields))
        object.__setattr__(self, "expand", tuple(self.expand))


# Wire records

@dataclass(frozen=True)
class RawIssue:
    id: str
    key: str
    self_url: str
    fields: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_json(cls, data: Mapping[str, Any]) -> "RawIssue":
        return cls(
            id=str(data.get("id", "")),
            key=data.get("key", ""),
            self_url=data.get("self", ""),
            fields=dict(data.get("fields") or {}),
        )


def _raw_issues(data: Mapping[str, Any]) -> tuple[RawIssue, ...]:
    return tuple(RawIssue.from_json(i) for i in (data.get("issues") or []))


@dataclass(frozen=True)
class LegacySearchResponse:
    """
    Envelope of POST /rest/api/2/search (offset pagination).
    """
    issues: tuple[RawIssue, ...]
    names: dict[str, str]
    start_at: int = 0
    max_results: int = 0
    total: int = 0
    expand: str | None = None

    @classmethod
    def from_json(cls, data: Mapping[str, Any]) -> "LegacySearchResponse":
        return cls(
            issues=_raw_issues(data),
            names=dict(data.get("names") or {}),
            start_at=int(data.get("startAt", 0) or 0),
            max_results=int(data.get("maxResults", 0) or 0),
            total=int(data.get("total", 0) or 0),
            expand=data.get("expand"),
        )


@dataclass(frozen=True)
class EnhancedSearchResponse:
    """
    Envelope of POST /rest/api/3/search/jql (completion flag, no total).
    """
    issues: tuple[RawIssue, ...]
    names: dict[str, str]
    is_last: bool = True
    next_page_token: str | None = None

    @classmethod
    def from_json(cls, data: Mapping[str, Any]) -> "EnhancedSearchResponse":
        return cls(
            issues=_raw_issues(data),
            names=dict(data.get("names") or {}),
            is_last=bool(data.get("isLast", True)),
            next_page_token=data.get("nextPageToken"),
        )


# Common model

@dataclass(frozen=True)
class Issue:
    id: str
    key: str
    self_url: str
    fields: Mapping[str, Any]
    names: Mapping[str, str]

    def value(self, field_id: str) -> Any:
        return self.fields.get(field_id)

    def display_name(self, field_id: str) -> str:
        return self.names.get(field_id, field_id)


SearchResult = list[Issue]


def names_view(names: dict[str, str]) -> Mapping[str, str]:
    return MappingProxyType(names)
