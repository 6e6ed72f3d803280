"""Shared fixtures for GraphQL-backed tests."""

import pytest
from unittest.mock import MagicMock

from pr_reminder.fetcher import PULL_REQUEST_QUERY, SEARCH_QUERY, VIEWER_QUERY


def _search_node(owner="org", name="x", number=12, title="Add feature"):
    """Build a search node shaped like the GraphQL response."""
    return {
        "number": number,
        "title": title,
        "url": f"https://github.com/{owner}/{name}/pull/{number}",
        "repository": {
            "nameWithOwner": f"{owner}/{name}",
            "owner": {"login": owner},
            "name": name,
        },
        "createdAt": "2025-06-15T10:00:00Z",
        "updatedAt": "2025-06-16T12:30:00Z",
    }


def _detail(merged=False, approvers=("bob",), total_count=None):
    """Build a pull request detail response."""
    nodes = [{"state": "APPROVED", "author": {"login": login}} for login in approvers]
    return {
        "repository": {
            "pullRequest": {
                "merged": merged,
                "reviews": {
                    "totalCount": len(nodes) if total_count is None else total_count,
                    "nodes": nodes,
                },
            }
        }
    }


class FakeGraphQL:
    """Answers graphql_query calls by document, recording what was sent."""

    def __init__(self, login="alice", nodes=None, details=None):
        self.login = login
        self.nodes = nodes or []
        # (owner, repo, number) -> detail dict or exception
        self.details = details or {}
        self.calls = []

    def __call__(self, query, variables):
        self.calls.append((query, variables))
        if query == VIEWER_QUERY:
            if isinstance(self.login, Exception):
                raise self.login
            return {}, {"data": {"viewer": {"login": self.login}}}
        if query == SEARCH_QUERY:
            if isinstance(self.nodes, Exception):
                raise self.nodes
            return {}, {"data": {"search": {"nodes": self.nodes}}}
        if query == PULL_REQUEST_QUERY:
            key = (variables["owner"], variables["repo"], variables["number"])
            detail = self.details.get(key, {"repository": None})
            if isinstance(detail, Exception):
                raise detail
            return {}, {"data": detail}
        raise AssertionError(f"Unexpected query: {query}")

    def variables_for(self, query):
        return [variables for sent, variables in self.calls if sent == query]


@pytest.fixture
def make_search_node():
    return _search_node


@pytest.fixture
def make_detail():
    return _detail


@pytest.fixture
def fake_graphql():
    return FakeGraphQL()


@pytest.fixture
def mock_client(fake_graphql):
    client = MagicMock()
    client.requester.graphql_query.side_effect = fake_graphql
    return client
