from __future__ import annotations

import copy

import pytest

from jira_search.executors import ExecutorResult


LEGACY_RESPONSE = {
    "expand": "schema,names",
    "startAt": 0,
    "maxResults": 1000,
    "total": 3,
    "issues": [
        {
            "expand": "operations,versionedRepresentations,editmeta,changelog,renderedFields",
            "id": "3815086",
            "self": "https://jira.com/rest/api/latest/issue/3815086",
            "key": "SOME-44370",
            "fields": {"summary": "Update Android Gradle Plugin to 8.1", "customfield_18762": "a"},
        },
        {
            "expand": "operations,versionedRepresentations,editmeta,changelog,renderedFields",
            "id": "3759463",
            "self": "https://jira.com/rest/api/latest/issue/3759463",
            "key": "SOME-44407",
            "fields": {"summary": "Automate Xcode performance report", "customfield_18762": "b"},
        },
        {
            "expand": "operations,versionedRepresentations,editmeta,changelog,renderedFields",
            "id": "3881457",
            "self": "https://jira.com/rest/api/latest/issue/3881457",
            "key": "SOME-52193",
            "fields": {
                "summary": "Investigate potential benefit of establishing connection with CDN as early as possible",
                "customfield_18762": "c",
            },
        },
    ],
    "names": {"summary": "Summary", "customfield_18762": "Parent Link"},
}

CLOUD_RESPONSE = {
    "isLast": True,
    "names": {"summary": "Summary", "customfield_18762": "Parent Link"},
    "issues": [
        {
            "id": "10002",
            "key": "ED-1",
            "self": "https://your-domain.atlassian.net/rest/api/3/issue/10002",
            "fields": {
                "summary": "Main order flow broken",
                "customfield_18762": "ED-2",
                "description": "Main order flow broken",
            },
        }
    ],
}

CHANGE_2046_MESSAGE = (
    "Jira REST API call error: The requested API has been removed. Please migrate "
    "to the /rest/api/3/search/jql API. A full migration guideline is available "
    "at https://developer.atlassian.com/changelog/#CHANGE-2046"
)


class FakeTransport:
    """Returns a canned payload for every POST and records the calls."""

    def __init__(self, response):
        self.response = response
        self.calls = []

    def post(self, path, payload):
        self.calls.append((path, payload))
        return copy.deepcopy(self.response)


class FakeExecutor:
    def __init__(self, error=None, result=None):
        self.error = error
        self.result = result or ExecutorResult((), {})
        self.requests = []

    def run(self, request):
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return self.result


class FakeCloudDetector:
    def __init__(self, is_cloud):
        self.is_cloud = is_cloud
        self.calls = 0

    def is_cloud_deployment(self):
        self.calls += 1
        return self.is_cloud


@pytest.fixture
def legacy_response():
    return copy.deepcopy(LEGACY_RESPONSE)


@pytest.fixture
def cloud_response():
    return copy.deepcopy(CLOUD_RESPONSE)


@pytest.fixture
def change_2046_message():
    return CHANGE_2046_MESSAGE

