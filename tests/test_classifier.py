from __future__ import annotations

import pytest

from jira_search.classifier import ErrorClass, classify_error, is_fallback_eligible
from jira_search.errors import TransportError


@pytest.mark.parametrize(
    "error, expected",
    [
        (TransportError("removed, see https://developer.atlassian.com/changelog/#CHANGE-2046"), ErrorClass.MIGRATION_REQUIRED),
        # the migration notice wins over the status code
        (TransportError("see CHANGE-2046", 400), ErrorClass.MIGRATION_REQUIRED),
        (TransportError("see CHANGE-2046", 410), ErrorClass.MIGRATION_REQUIRED),
        (TransportError("gone", 410), ErrorClass.GONE),
        (TransportError("not found", 404), ErrorClass.NOT_FOUND),
        (TransportError("some jql error"), ErrorClass.OTHER),
        (TransportError("unauthorized", 401), ErrorClass.OTHER),
        (TransportError("server error", 500), ErrorClass.OTHER),
        (RuntimeError("see CHANGE-2046"), ErrorClass.OTHER),
        (KeyError("issues"), ErrorClass.OTHER),
    ],
)
def test_classify_error(error, expected):
    assert classify_error(error) is expected


def test_marker_is_matched_as_substring(change_2046_message):
    assert classify_error(TransportError(change_2046_message)) is ErrorClass.MIGRATION_REQUIRED


@pytest.mark.parametrize(
    "error, eligible",
    [
        (TransportError("CHANGE-2046"), True),
        (TransportError("gone", 410), True),
        (TransportError("not found", 404), True),
        (TransportError("forbidden", 403), False),
        (ValueError("nope"), False),
    ],
)
def test_is_fallback_eligible(error, eligible):
    assert is_fallback_eligible(error) is eligible
