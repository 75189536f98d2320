"""Reduce full API records to compact, model-friendly summaries."""

from __future__ import annotations

from typing import Optional

from ..domain.models import Issue, IssueGroup, IssueGroupSummary, IssueSummary


HOW_TO_FIX_MAX_CHARS = 200
MAX_LISTED_LOCATIONS = 5
MAX_LISTED_CVES = 5


def truncate(text: Optional[str], limit: int, suffix: str = "...") -> Optional[str]:
    """Cut text to ``limit`` characters, appending ``suffix`` only if something was cut."""
    if text is None:
        return None
    if len(text) <= limit:
        return text
    return text[:limit] + suffix


def summarize_issue(issue: Issue) -> IssueSummary:
    return IssueSummary(
        id=issue.id,
        group_id=issue.group_id,
        type=issue.type,
        severity=issue.severity,
        title=issue.rule or issue.cve_id or "Unknown",
        package=issue.affected_package,
        file=issue.affected_file,
        line=issue.start_line,
        repo=issue.code_repo_name,
        language=issue.programming_language,
    )


def summarize_issue_group(group: IssueGroup) -> IssueGroupSummary:
    locations = group.locations
    cves = group.related_cve_ids
    return IssueGroupSummary(
        id=group.id,
        type=group.type,
        severity=group.severity,
        title=group.title,
        description=group.description,
        location_count=len(locations) if locations else 0,
        locations=[loc.name for loc in locations[:MAX_LISTED_LOCATIONS]] if locations is not None else None,
        fix_time_minutes=group.time_to_fix_minutes,
        how_to_fix=truncate(group.how_to_fix, HOW_TO_FIX_MAX_CHARS),
        cves=cves[:MAX_LISTED_CVES] if cves is not None else None,
    )
