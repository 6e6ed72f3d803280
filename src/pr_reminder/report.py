"""Human-readable report of approved PRs."""

from datetime import datetime

import click

from .models import ReportEntry

NONE_FOUND = "No open PRs found that are approved but not merged."


def format_timestamp(value: str) -> str:
    """Render an ISO-8601 timestamp in local time using the locale format."""
    try:
        dt = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except (AttributeError, ValueError):
        return value
    return dt.astimezone().strftime("%c")


def format_report(entries: list[ReportEntry]) -> str:
    """Format the report text. No network access."""
    lines = ["", "Results:", "========"]

    if not entries:
        lines.append(NONE_FOUND)
        return "\n".join(lines)

    lines.append(f"Found {len(entries)} approved PRs ready to merge:")
    for index, pr in enumerate(entries, start=1):
        lines.append("")
        lines.append(f"{index}. {pr['title']}")
        lines.append(f"   Repo: {pr['repository']}")
        lines.append(f"   URL: {pr['url']}")
        lines.append(f"   Created: {format_timestamp(pr['created_at'])}")
        lines.append(f"   Last updated: {format_timestamp(pr['updated_at'])}")
        if pr.get("approvers"):
            lines.append(f"   Approved by: {', '.join(pr['approvers'])}")

    return "\n".join(lines)


def print_report(entries: list[ReportEntry]) -> None:
    """Write the report to stdout."""
    click.echo(format_report(entries))
