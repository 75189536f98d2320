from __future__ import annotations

import copy
import json
import time
from typing import Any, Dict, List, Mapping, Optional, Protocol

from pydantic import BaseModel, ValidationError

from ...shared.to_jsonable import to_jsonable
from ..domain.arguments import (
    GetIssueDetailsArgs,
    GetIssueGroupDetailsArgs,
    GetIssuesArgs,
    GetOpenIssueGroupsArgs,
    ListRepositoriesArgs,
    SearchRepositoryByNameArgs,
)
from ..domain.exceptions import ToolArgumentError, UnknownToolError
from ..domain.models import ToolEnvelope, ToolFailure, ToolOutcome, ToolSuccess
from ..ports import LoggerPort
from ..toolset import TOOL_CATALOG


class ToolHandler(Protocol):
    def execute(self, args: Any) -> ToolOutcome:
        ...


class ToolDispatcher:
    """Routes tool invocations to handlers and wraps outcomes in envelopes.

    Errors never escape ``call``: unknown tools, invalid arguments, handler
    failures and unexpected crashes all come back as error-flagged envelopes.
    """

    def __init__(
        self,
        *,
        list_repositories: ToolHandler,
        get_issues: ToolHandler,
        get_issue_details: ToolHandler,
        get_open_issue_groups: ToolHandler,
        get_issue_group_details: ToolHandler,
        search_repository_by_name: ToolHandler,
        logger: LoggerPort,
    ) -> None:
        self._routes: Dict[str, tuple[type[BaseModel], ToolHandler]] = {
            "list_repositories": (ListRepositoriesArgs, list_repositories),
            "get_issues": (GetIssuesArgs, get_issues),
            "get_issue_details": (GetIssueDetailsArgs, get_issue_details),
            "get_open_issue_groups": (GetOpenIssueGroupsArgs, get_open_issue_groups),
            "get_issue_group_details": (GetIssueGroupDetailsArgs, get_issue_group_details),
            "search_repository_by_name": (SearchRepositoryByNameArgs, search_repository_by_name),
        }
        self._logger = logger

    def list_tools(self) -> List[Dict[str, Any]]:
        """Return the tool catalog (name, description, inputSchema per tool)."""
        return copy.deepcopy(TOOL_CATALOG)

    def call(self, name: str, arguments: Optional[Mapping[str, Any]] = None) -> ToolEnvelope:
        """Invoke a tool by name.

        Args:
            name: Tool name from the catalog
            arguments: Raw JSON arguments; None is treated as empty

        Returns:
            Success envelope with the JSON-serialized result, or an
            error-flagged envelope carrying the error message
        """
        raw_args = dict(arguments or {})
        self._logger.info("tool_call", type="tool_call", tool=name, arguments=raw_args)
        started = time.perf_counter()

        outcome = self._dispatch(name, raw_args)
        envelope = self._to_envelope(outcome)

        self._logger.info(
            "tool_result",
            type="tool_result",
            tool=name,
            is_error=envelope.is_error,
            error_type=outcome.error_type if isinstance(outcome, ToolFailure) else None,
            duration_ms=round((time.perf_counter() - started) * 1000, 1),
        )
        return envelope

    def _dispatch(self, name: str, raw_args: Dict[str, Any]) -> ToolOutcome:
        route = self._routes.get(name)
        if route is None:
            return ToolFailure.from_error(UnknownToolError(name))

        args_model, handler = route
        try:
            args = args_model.model_validate(raw_args)
        except ValidationError as e:
            return ToolFailure.from_error(ToolArgumentError(name, _describe_validation(e)))

        try:
            return handler.execute(args)
        except Exception as e:
            self._logger.exception("tool_crashed", type="tool_crashed", tool=name)
            return ToolFailure.from_error(e)

    @staticmethod
    def _to_envelope(outcome: ToolOutcome) -> ToolEnvelope:
        if isinstance(outcome, ToolSuccess):
            text = json.dumps(to_jsonable(outcome.value), ensure_ascii=False, indent=2)
            return ToolEnvelope.success(text)
        return ToolEnvelope.failure(outcome.message)


def _describe_validation(error: ValidationError) -> str:
    parts = []
    for err in error.errors():
        loc = ".".join(str(p) for p in err["loc"]) or "arguments"
        parts.append(f"{loc}: {err['msg']}")
    return "; ".join(parts)
