from __future__ import annotations

import logging
from typing import Sequence

from .classifier import classify_error, FALLBACK_ELIGIBLE
from .executors import (
    CloudDetector,
    EnhancedSearchExecutor,
    LegacySearchExecutor,
    SearchExecutor,
    Transport,
)
from .models import RawIssue, SearchMode, SearchRequest, SearchResult
from .normalizer import normalize

logger = logging.getLogger(__name__)


class IssueSearch:
    """
    Picks the legacy (/rest/api/2/search) or enhanced (/rest/api/3/search/jql)
    endpoint per call.

    auto      cloud sites use enhanced and drop back to legacy when the
              enhanced endpoint reports itself missing or removed;
              self-managed sites use legacy
    enhanced  always enhanced, errors propagate
    legacy    always legacy, the deployment is never probed

    Not thread-safe: the mode is plain instance state.
    """

    def __init__(
        self,
        legacy: SearchExecutor,
        enhanced: SearchExecutor,
        cloud_detector: CloudDetector,
        mode: str = SearchMode.AUTO.value,
    ):
        self.legacy = legacy
        self.enhanced = enhanced
        self.cloud_detector = cloud_detector
        self._mode = SearchMode.AUTO
        self.set_mode(mode)

    @classmethod
    def for_client(cls, client: Transport, cloud_detector: CloudDetector, mode: str = SearchMode.AUTO.value) -> "IssueSearch":
        return cls(
            legacy=LegacySearchExecutor(client),
            enhanced=EnhancedSearchExecutor(client),
            cloud_detector=cloud_detector,
            mode=mode,
        )

    def set_mode(self, mode: str) -> None:
        self._mode = SearchMode.parse(mode)

    def get_mode(self) -> str:
        return self._mode.value

    def search(
        self,
        jql: str,
        fields: Sequence[str] = (),
        expand: Sequence[str] = (),
        max_results: int = 1000,
        start_at: int = 0,
    ) -> SearchResult:
        request = SearchRequest(jql, tuple(fields), tuple(expand), max_results, start_at)
        return normalize(*self._dispatch(request))

    def _dispatch(self, request: SearchRequest) -> tuple[tuple[RawIssue, ...], dict[str, str]]:
        mode = self._mode
        if mode is SearchMode.LEGACY:
            logger.debug("legacy mode: %s", request.jql)
            return self._run(self.legacy, request)
        if mode is SearchMode.ENHANCED:
            logger.debug("enhanced mode: %s", request.jql)
            return self._run(self.enhanced, request)

        if not self.cloud_detector.is_cloud_deployment():
            logger.debug("auto mode, self-managed site: using legacy search")
            return self._run(self.legacy, request)

        try:
            return self._run(self.enhanced, request)
        except Exception as e:
            tag = classify_error(e)
            if tag not in FALLBACK_ELIGIBLE:
                raise

        # outside the handler so a legacy failure does not carry the enhanced error
        logger.debug("enhanced search unavailable (%s), retrying with legacy search", tag.value)
        return self._run(self.legacy, request)

    @staticmethod
    def _run(executor: SearchExecutor, request: SearchRequest) -> tuple[tuple[RawIssue, ...], dict[str, str]]:
        result = executor.run(request)
        return result.issues, result.names
