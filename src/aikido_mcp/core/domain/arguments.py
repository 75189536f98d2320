"""Validated argument records, one per tool."""

from __future__ import annotations

from pydantic import BaseModel, Field

from .models import IssueType, Severity


class ListRepositoriesArgs(BaseModel):
    page: int = Field(default=0, ge=0)
    per_page: int = Field(default=100, ge=1)


class GetIssuesArgs(BaseModel):
    repo_id: int | None = None
    severity: list[Severity] | None = None
    issue_type: list[IssueType] | None = None
    page: int = Field(default=0, ge=0)
    per_page: int = Field(default=50, ge=1)


class GetIssueDetailsArgs(BaseModel):
    issue_id: int


class GetOpenIssueGroupsArgs(BaseModel):
    repo_id: int | None = None
    severity: list[Severity] | None = None
    page: int = Field(default=0, ge=0)
    per_page: int = Field(default=20, ge=1)


class GetIssueGroupDetailsArgs(BaseModel):
    group_id: int


class SearchRepositoryByNameArgs(BaseModel):
    name: str
