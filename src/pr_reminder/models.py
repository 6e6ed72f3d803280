"""Data models for approved-PR lookups."""

from dataclasses import dataclass, field
from typing import Any, TypedDict


@dataclass
class Settings:
    """Runtime configuration, built once at startup."""

    token: str | None = None
    organization: str | None = None


class ReportEntry(TypedDict):
    """A pull request that is approved but not merged."""

    title: str
    url: str
    repository: str
    number: int
    created_at: str
    updated_at: str
    approvers: list[str]


@dataclass(frozen=True)
class PullRequestSummary:
    """A pull request as returned by the search query."""

    number: int
    title: str
    url: str
    repository_full_name: str
    repository_owner: str
    repository_name: str
    created_at: str
    updated_at: str

    @classmethod
    def from_node(cls, node: dict[str, Any]) -> "PullRequestSummary":
        """Build a summary from a GraphQL search node."""
        repository = node["repository"]
        return cls(
            number=node["number"],
            title=node["title"],
            url=node["url"],
            repository_full_name=repository["nameWithOwner"],
            repository_owner=repository["owner"]["login"],
            repository_name=repository["name"],
            created_at=node["createdAt"],
            updated_at=node["updatedAt"],
        )

    @property
    def reference(self) -> str:
        return f"{self.repository_full_name}#{self.number}"


@dataclass
class ApprovalResult:
    """Outcome of checking a single pull request.

    A failed check is returned as a value with ``error`` set rather than
    raised, so one bad pull request never aborts the batch.
    """

    approved: bool = False
    merged: bool = False
    approval_count: int = 0
    approvers: list[str] = field(default_factory=list)
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def failure(cls, error: str) -> "ApprovalResult":
        return cls(error=error)


def to_report_entry(pr: PullRequestSummary, result: ApprovalResult) -> ReportEntry:
    """Keep the fields the report needs."""
    return {
        "title": pr.title,
        "url": pr.url,
        "repository": pr.repository_full_name,
        "number": pr.number,
        "created_at": pr.created_at,
        "updated_at": pr.updated_at,
        "approvers": list(result.approvers),
    }
