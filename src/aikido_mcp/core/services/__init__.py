from __future__ import annotations

from .condense import summarize_issue, summarize_issue_group, truncate
from .dispatcher import ToolDispatcher
from .query import build_query

__all__ = [
    "ToolDispatcher",
    "build_query",
    "summarize_issue",
    "summarize_issue_group",
    "truncate",
]
