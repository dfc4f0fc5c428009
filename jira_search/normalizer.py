from __future__ import annotations

from types import MappingProxyType
from typing import Iterable

from .models import Issue, RawIssue, SearchResult, names_view


def normalize(raw_issues: Iterable[RawIssue], names: dict[str, str]) -> SearchResult:
    """
    Turn one response page into Issues sharing a single read-only names view.
    Upstream order is kept.
    """
    shared = names_view(names)
    return [
        Issue(
            id=raw.id,
            key=raw.key,
            self_url=raw.self_url,
            fields=MappingProxyType(raw.fields),
            names=shared,
        )
        for raw in raw_issues
    ]
