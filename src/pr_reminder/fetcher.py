"""Fetch pull request data from the GitHub GraphQL API."""

import logging
from typing import Any

from github import Github

from .auth import error_message
from .models import (
    ApprovalResult,
    PullRequestSummary,
    ReportEntry,
    Settings,
    to_report_entry,
)

logger = logging.getLogger(__name__)

# Search results are not paginated; anything past this is dropped.
PAGE_SIZE = 100

VIEWER_QUERY = """
query {
  viewer {
    login
  }
}
"""

SEARCH_QUERY = """
query($searchQuery: String!, $first: Int!) {
  search(query: $searchQuery, type: ISSUE, first: $first) {
    nodes {
      ... on PullRequest {
        number
        title
        url
        repository {
          nameWithOwner
          owner {
            login
          }
          name
        }
        createdAt
        updatedAt
      }
    }
  }
}
"""

PULL_REQUEST_QUERY = """
query($owner: String!, $repo: String!, $number: Int!, $first: Int!) {
  repository(owner: $owner, name: $repo) {
    pullRequest(number: $number) {
      merged
      reviews(states: [APPROVED], first: $first) {
        totalCount
        nodes {
          state
          author {
            login
          }
        }
      }
    }
  }
}
"""


class FetchError(Exception):
    """Raised when a GraphQL response cannot be used."""


def run_query(client: Github, query: str, variables: dict[str, Any] | None = None) -> dict[str, Any]:
    """
    Run a GraphQL query through the client's authenticated requester.

    Args:
        client: Github client
        query: GraphQL document
        variables: Query variables

    Returns:
        The ``data`` object of the response

    Raises:
        GithubException: If the request fails or GraphQL reports errors
        FetchError: If the response carries no data
    """
    _, response = client.requester.graphql_query(query, variables or {})

    data = response.get("data") if isinstance(response, dict) else None
    if data is None:
        raise FetchError("GraphQL response contained no data")
    return data


def get_authenticated_user(client: Github) -> str:
    """Return the login of the user the token belongs to."""
    data = run_query(client, VIEWER_QUERY)
    return data["viewer"]["login"]


def build_search_query(username: str, organization: str | None = None) -> str:
    """Build the search expression for open PRs by a user."""
    query = f"is:pr is:open author:{username}"
    if organization:
        query += f" org:{organization}"
    return query


def fetch_open_prs(
    client: Github,
    username: str,
    organization: str | None = None,
) -> list[PullRequestSummary]:
    """Fetch open PRs authored by a user, optionally within one organization."""
    search_query = build_search_query(username, organization)
    logger.info(f"Using search query: {search_query}")

    data = run_query(client, SEARCH_QUERY, {"searchQuery": search_query, "first": PAGE_SIZE})
    nodes = data["search"]["nodes"]
    logger.info(f"Found {len(nodes)} PRs")

    # The API occasionally returns nodes without a repository
    return [PullRequestSummary.from_node(node) for node in nodes if node and node.get("repository")]


def _approvers(reviews: dict[str, Any]) -> list[str]:
    logins: list[str] = []
    for review in reviews.get("nodes") or []:
        author = review.get("author") if review else None
        if author and author.get("login") and author["login"] not in logins:
            logins.append(author["login"])
    return logins


def check_approval(client: Github, owner: str, repo: str, number: int) -> ApprovalResult:
    """
    Check whether a PR has at least one approval and is not merged.

    Errors are logged and returned as a failed result instead of raised.

    Args:
        client: Github client
        owner: Repository owner login
        repo: Repository name
        number: Pull request number

    Returns:
        ApprovalResult for the pull request
    """
    reference = f"{owner}/{repo}#{number}"
    logger.info(f"Checking PR: {reference}")

    try:
        data = run_query(
            client,
            PULL_REQUEST_QUERY,
            {"owner": owner, "repo": repo, "number": number, "first": PAGE_SIZE},
        )
    except Exception as e:
        message = error_message(e)
        logger.error(f"Error checking PR {reference}: {message}")
        return ApprovalResult.failure(message)

    # Missing objects normally raise NOT_FOUND above; nulls are treated as absent
    repository = data.get("repository")
    pull_request = repository.get("pullRequest") if repository else None
    if not pull_request:
        logger.warning(f"Unable to fetch PR details for {reference}")
        return ApprovalResult()

    reviews = pull_request.get("reviews") or {}
    merged = bool(pull_request.get("merged"))
    approval_count = reviews.get("totalCount") or 0

    return ApprovalResult(
        approved=not merged and approval_count > 0,
        merged=merged,
        approval_count=approval_count,
        approvers=_approvers(reviews),
    )


def find_approved_prs(client: Github, settings: Settings) -> list[ReportEntry]:
    """Find the authenticated user's open PRs that are approved but not merged.

    PRs are checked one at a time. A failed check counts as not approved.
    """
    username = get_authenticated_user(client)
    logger.info(f"Finding PRs for user: {username}")

    if settings.organization:
        logger.info(f"Limited to organization: {settings.organization}")

    open_prs = fetch_open_prs(client, username, settings.organization)

    results: list[ReportEntry] = []
    failures = 0
    for pr in open_prs:
        result = check_approval(client, pr.repository_owner, pr.repository_name, pr.number)
        if not result.ok:
            failures += 1
            continue
        if result.approved:
            logger.debug(f"{pr.reference}: {result.approval_count} approvals")
            results.append(to_report_entry(pr, result))

    if failures:
        logger.warning(f"{failures} of {len(open_prs)} PRs could not be checked")

    return results
