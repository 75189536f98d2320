from __future__ import annotations

from typing import Any

from ..domain.arguments import GetIssueGroupDetailsArgs, GetOpenIssueGroupsArgs
from ..domain.models import IssueGroup
from ..ports import AikidoApiPort, LoggerPort
from ..services.condense import summarize_issue_group
from ..services.query import build_query
from .base import capture_outcome, parse_record, parse_records


OPEN_ISSUE_GROUPS_ENDPOINT = "/open-issue-groups"

ISSUE_GROUPS_HINT = "Use get_issue_group_details with a group id for full information"


class GetOpenIssueGroupsUseCase:
    """List open issue groups and condense them for list views."""

    def __init__(self, *, api: AikidoApiPort, logger: LoggerPort) -> None:
        self._api = api
        self._logger = logger

    @capture_outcome
    def execute(self, args: GetOpenIssueGroupsArgs) -> Any:
        params = build_query(
            page=args.page,
            per_page=args.per_page,
            repo_id=args.repo_id,
            severities=args.severity,
        )
        response = self._api.request(OPEN_ISSUE_GROUPS_ENDPOINT, params=params)

        if not isinstance(response, list):
            self._logger.warning(
                "unexpected_response_shape",
                endpoint=OPEN_ISSUE_GROUPS_ENDPOINT,
                received=type(response).__name__,
            )
            return response

        groups = parse_records(IssueGroup, response, OPEN_ISSUE_GROUPS_ENDPOINT)
        return {
            "total": len(groups),
            "groups": [summarize_issue_group(group) for group in groups],
            "hint": ISSUE_GROUPS_HINT,
        }


class GetIssueGroupDetailsUseCase:
    def __init__(self, *, api: AikidoApiPort) -> None:
        self._api = api

    @capture_outcome
    def execute(self, args: GetIssueGroupDetailsArgs) -> IssueGroup:
        endpoint = f"/issues/groups/{args.group_id}"
        return parse_record(IssueGroup, self._api.request(endpoint), endpoint)
