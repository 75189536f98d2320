from __future__ import annotations

from typing import Any, Dict, List

from .domain.models import ISSUE_TYPES, SEVERITIES


_PAGE = {
    "type": "number",
    "description": "Page number (0-indexed)",
    "default": 0,
}

_SEVERITY_FILTER = {
    "type": "array",
    "items": {"type": "string", "enum": list(SEVERITIES)},
    "description": "Filter by severity levels",
}


TOOL_CATALOG: List[Dict[str, Any]] = [
    {
        "name": "list_repositories",
        "description": (
            "List all code repositories monitored by Aikido. "
            "Use this to find the repository ID for a project."
        ),
        "inputSchema": {
            "type": "object",
            "properties": {
                "page": _PAGE,
                "per_page": {
                    "type": "number",
                    "description": "Results per page (max 100)",
                    "default": 100,
                },
            },
        },
    },
    {
        "name": "get_issues",
        "description": (
            "Get all security issues/vulnerabilities for a specific repository or all repositories. "
            "Returns condensed issue information including severity, affected package and location."
        ),
        "inputSchema": {
            "type": "object",
            "properties": {
                "repo_id": {
                    "type": "number",
                    "description": "Repository ID to filter issues (use list_repositories to find this)",
                },
                "severity": _SEVERITY_FILTER,
                "issue_type": {
                    "type": "array",
                    "items": {"type": "string", "enum": list(ISSUE_TYPES)},
                    "description": "Filter by issue type",
                },
                "page": _PAGE,
                "per_page": {
                    "type": "number",
                    "description": "Results per page (max 100)",
                    "default": 50,
                },
            },
        },
    },
    {
        "name": "get_issue_details",
        "description": (
            "Get detailed information about a specific issue including full description, "
            "affected files, remediation steps, and related CVEs."
        ),
        "inputSchema": {
            "type": "object",
            "properties": {
                "issue_id": {
                    "type": "number",
                    "description": "The issue ID to get details for",
                },
            },
            "required": ["issue_id"],
        },
    },
    {
        "name": "get_open_issue_groups",
        "description": (
            "Get grouped view of open issues. Issues are grouped by type/vulnerability. "
            "Useful for seeing unique vulnerabilities across the codebase."
        ),
        "inputSchema": {
            "type": "object",
            "properties": {
                "repo_id": {
                    "type": "number",
                    "description": "Repository ID to filter issue groups",
                },
                "severity": _SEVERITY_FILTER,
                "page": _PAGE,
                "per_page": {
                    "type": "number",
                    "description": "Results per page (max 50)",
                    "default": 20,
                },
            },
        },
    },
    {
        "name": "get_issue_group_details",
        "description": (
            "Get detailed information about an issue group, "
            "including all affected locations and remediation guidance."
        ),
        "inputSchema": {
            "type": "object",
            "properties": {
                "group_id": {
                    "type": "number",
                    "description": "The issue group ID to get details for",
                },
            },
            "required": ["group_id"],
        },
    },
    {
        "name": "search_repository_by_name",
        "description": "Search for a repository by name. Returns matching repositories with their IDs.",
        "inputSchema": {
            "type": "object",
            "properties": {
                "name": {
                    "type": "string",
                    "description": "Repository name or partial name to search for",
                },
            },
            "required": ["name"],
        },
    },
]


def tool_names() -> List[str]:
    return [t["name"] for t in TOOL_CATALOG]


def describe_tool(name: str) -> Dict[str, Any]:
    """Return the catalog entry for ``name``.

    Raises:
        KeyError: If no tool has that name
    """
    for tool in TOOL_CATALOG:
        if tool["name"] == name:
            return tool
    raise KeyError(name)
