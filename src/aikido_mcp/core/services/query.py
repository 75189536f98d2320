from __future__ import annotations

from typing import Iterable, Optional


def build_query(
    *,
    page: int,
    per_page: int,
    repo_id: Optional[int] = None,
    severities: Optional[Iterable[str]] = None,
    issue_types: Optional[Iterable[str]] = None,
) -> list[tuple[str, str]]:
    """Build list-endpoint query parameters.

    Multi-value filters repeat their key once per value and are only attached
    when non-empty. A falsy repo_id is treated as absent.

    Args:
        page: Page number (0-indexed)
        per_page: Page size
        repo_id: Restrict to one code repository
        severities: Values for repeated ``filter_severities``
        issue_types: Values for repeated ``filter_issue_type``

    Returns:
        Ordered (key, value) pairs suitable for httpx ``params``
    """
    params: list[tuple[str, str]] = [
        ("page", str(page)),
        ("per_page", str(per_page)),
    ]

    if repo_id:
        params.append(("filter_code_repo_id", str(repo_id)))

    for severity in severities or ():
        params.append(("filter_severities", severity))

    for issue_type in issue_types or ():
        params.append(("filter_issue_type", issue_type))

    return params
