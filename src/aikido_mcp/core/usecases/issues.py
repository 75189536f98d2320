from __future__ import annotations

from typing import Any

from ..domain.arguments import GetIssueDetailsArgs, GetIssuesArgs
from ..domain.models import Issue
from ..ports import AikidoApiPort, LoggerPort
from ..services.condense import summarize_issue
from ..services.query import build_query
from .base import capture_outcome, parse_record, parse_records


ISSUES_EXPORT_ENDPOINT = "/issues/export"

ISSUES_HINT = (
    "Use get_issue_details with an issue id for full information including remediation steps"
)


class GetIssuesUseCase:
    """Export issues with optional filters and condense them for list views."""

    def __init__(self, *, api: AikidoApiPort, logger: LoggerPort) -> None:
        self._api = api
        self._logger = logger

    @capture_outcome
    def execute(self, args: GetIssuesArgs) -> Any:
        params = build_query(
            page=args.page,
            per_page=args.per_page,
            repo_id=args.repo_id,
            severities=args.severity,
            issue_types=args.issue_type,
        )
        response = self._api.request(ISSUES_EXPORT_ENDPOINT, params=params)

        # Non-array bodies are returned as-is; kept visible in logs for review
        if not isinstance(response, list):
            self._logger.warning(
                "unexpected_response_shape",
                endpoint=ISSUES_EXPORT_ENDPOINT,
                received=type(response).__name__,
            )
            return response

        issues = parse_records(Issue, response, ISSUES_EXPORT_ENDPOINT)
        return {
            "total": len(issues),
            "issues": [summarize_issue(issue) for issue in issues],
            "hint": ISSUES_HINT,
        }


class GetIssueDetailsUseCase:
    def __init__(self, *, api: AikidoApiPort) -> None:
        self._api = api

    @capture_outcome
    def execute(self, args: GetIssueDetailsArgs) -> Issue:
        endpoint = f"/issues/{args.issue_id}"
        return parse_record(Issue, self._api.request(endpoint), endpoint)
