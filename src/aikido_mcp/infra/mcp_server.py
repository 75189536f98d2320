from __future__ import annotations

import logging
from typing import Annotated, Any, Optional

from fastmcp import FastMCP
from fastmcp.exceptions import ToolError
from fastmcp.server.middleware.logging import LoggingMiddleware
from pydantic import Field

from ..core.domain.models import IssueType, Severity
from ..core.ports import LoggerPort
from ..core.services.dispatcher import ToolDispatcher
from ..core.toolset import describe_tool
from ..shared.list_tools import list_tools
from .mcp.wiretap_logging import WiretapLoggingMiddleware

# Keep standard logger for low-level debug logs (tool listing, etc.)
debug_logger = logging.getLogger(__name__)

SERVER_NAME = "aikido-mcp"
TRANSPORTS = ("stdio", "streamable-http")


class MCPServer:
    """FastMCP front end for the tool dispatcher.

    Tool signatures mirror the catalog so FastMCP advertises the same
    arguments; every call is forwarded to ``ToolDispatcher.call`` and an
    error envelope is raised as ``ToolError`` so the client receives an
    ``isError`` result instead of a protocol fault.
    """

    def __init__(self, *, dispatcher: ToolDispatcher, logger: LoggerPort) -> None:
        self._dispatcher = dispatcher
        self._logger = logger

    def build(self) -> FastMCP:
        app = FastMCP(
            name=SERVER_NAME,
            instructions=(
                "Query Aikido Security: code repositories, open security issues and issue groups. "
                "Start with search_repository_by_name or list_repositories to find a repo_id."
            ),
        )
        app.add_middleware(LoggingMiddleware(include_payloads=True))
        app.add_middleware(WiretapLoggingMiddleware())
        self._register_tools(app)
        return app

    def run(self, *, transport: str = "stdio", port: Optional[int] = None) -> None:
        """Build the app and serve until the transport closes.

        Raises:
            ValueError: On an unknown transport, or streamable-http without a port
        """
        if transport not in TRANSPORTS:
            raise ValueError(f"Invalid transport mode: {transport}. Must be 'stdio' or 'streamable-http'.")
        if transport == "streamable-http" and port is None:
            raise ValueError("Port is required for streamable-http transport mode.")

        app = self.build()
        debug_logger.debug(f"Registered tools: {[t.name for t in list_tools(app)]}")

        self._logger.info("mcp_server_starting", type="mcp_server_starting", transport=transport, port=port)
        if transport == "stdio":
            app.run(transport="stdio")
        else:
            app.run(transport="streamable-http", port=port)

    def _invoke(self, tool: str, arguments: dict[str, Any]) -> str:
        envelope = self._dispatcher.call(tool, _drop_none(arguments))
        if envelope.is_error:
            raise ToolError(envelope.text)
        return envelope.text

    def _register_tools(self, app: FastMCP) -> None:
        invoke = self._invoke

        @app.tool(name="list_repositories", description=_summary("list_repositories"))
        def list_repositories(
            page: Annotated[int, Field(description=_describe("list_repositories", "page"))]
                = _default("list_repositories", "page"),
            per_page: Annotated[int, Field(description=_describe("list_repositories", "per_page"))]
                = _default("list_repositories", "per_page"),
        ) -> str:
            return invoke("list_repositories", {"page": page, "per_page": per_page})

        @app.tool(name="get_issues", description=_summary("get_issues"))
        def get_issues(
            repo_id: Annotated[Optional[int], Field(description=_describe("get_issues", "repo_id"))] = None,
            severity: Annotated[
                Optional[list[Severity]],
                Field(description=_describe("get_issues", "severity")),
            ] = None,
            issue_type: Annotated[
                Optional[list[IssueType]],
                Field(description=_describe("get_issues", "issue_type")),
            ] = None,
            page: Annotated[int, Field(description=_describe("get_issues", "page"))]
                = _default("get_issues", "page"),
            per_page: Annotated[int, Field(description=_describe("get_issues", "per_page"))]
                = _default("get_issues", "per_page"),
        ) -> str:
            return invoke("get_issues", {
                "repo_id": repo_id,
                "severity": severity,
                "issue_type": issue_type,
                "page": page,
                "per_page": per_page,
            })

        @app.tool(name="get_issue_details", description=_summary("get_issue_details"))
        def get_issue_details(
            issue_id: Annotated[int, Field(description=_describe("get_issue_details", "issue_id"))],
        ) -> str:
            return invoke("get_issue_details", {"issue_id": issue_id})

        @app.tool(name="get_open_issue_groups", description=_summary("get_open_issue_groups"))
        def get_open_issue_groups(
            repo_id: Annotated[
                Optional[int],
                Field(description=_describe("get_open_issue_groups", "repo_id")),
            ] = None,
            severity: Annotated[
                Optional[list[Severity]],
                Field(description=_describe("get_open_issue_groups", "severity")),
            ] = None,
            page: Annotated[int, Field(description=_describe("get_open_issue_groups", "page"))]
                = _default("get_open_issue_groups", "page"),
            per_page: Annotated[int, Field(description=_describe("get_open_issue_groups", "per_page"))]
                = _default("get_open_issue_groups", "per_page"),
        ) -> str:
            return invoke("get_open_issue_groups", {
                "repo_id": repo_id,
                "severity": severity,
                "page": page,
                "per_page": per_page,
            })

        @app.tool(name="get_issue_group_details", description=_summary("get_issue_group_details"))
        def get_issue_group_details(
            group_id: Annotated[int, Field(description=_describe("get_issue_group_details", "group_id"))],
        ) -> str:
            return invoke("get_issue_group_details", {"group_id": group_id})

        @app.tool(name="search_repository_by_name", description=_summary("search_repository_by_name"))
        def search_repository_by_name(
            name: Annotated[str, Field(description=_describe("search_repository_by_name", "name"))],
        ) -> str:
            return invoke("search_repository_by_name", {"name": name})


# Argument descriptions and defaults are read from TOOL_CATALOG
def _summary(tool: str) -> str:
    return describe_tool(tool)["description"]


def _describe(tool: str, prop: str) -> str:
    return describe_tool(tool)["inputSchema"]["properties"][prop]["description"]


def _default(tool: str, prop: str) -> Any:
    return describe_tool(tool)["inputSchema"]["properties"][prop]["default"]


def _drop_none(arguments: dict[str, Any]) -> dict[str, Any]:
    return {k: v for k, v in arguments.items() if v is not None}
