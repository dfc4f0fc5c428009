from __future__ import annotations

import pytest

from jira_search.errors import InvalidSearchMode
from jira_search.models import SearchMode
from jira_search.search import IssueSearch
from conftest import FakeCloudDetector, FakeExecutor


@pytest.fixture
def searcher():
    return IssueSearch(FakeExecutor(), FakeExecutor(), FakeCloudDetector(False))


def test_default_mode_is_auto(searcher):
    assert searcher.get_mode() == "auto"


@pytest.mark.parametrize("mode", ["auto", "enhanced", "legacy"])
def test_set_valid_mode(searcher, mode):
    searcher.set_mode(mode)
    assert searcher.get_mode() == mode


@pytest.mark.parametrize("mode", ["some invalid mode", "", "AUTO", "Legacy", " auto", "enhanced "])
def test_set_invalid_mode(searcher, mode):
    searcher.set_mode("legacy")

    with pytest.raises(InvalidSearchMode) as exc_info:
        searcher.set_mode(mode)

    assert str(exc_info.value) == f"Invalid search mode '{mode}'"
    assert exc_info.value.mode == mode
    assert searcher.get_mode() == "legacy"


def test_invalid_mode_is_a_value_error(searcher):
    with pytest.raises(ValueError):
        searcher.set_mode("nope")


def test_parse_returns_enum_member():
    assert SearchMode.parse("enhanced") is SearchMode.ENHANCED
