from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal, Union

from pydantic import BaseModel, ConfigDict


Severity = Literal["critical", "high", "medium", "low"]
IssueType = Literal[
    "open_source",
    "leaked_secret",
    "sast",
    "iac",
    "container",
    "cloud",
    "dast",
]

SEVERITIES: tuple[str, ...] = ("critical", "high", "medium", "low")
ISSUE_TYPES: tuple[str, ...] = (
    "open_source",
    "leaked_secret",
    "sast",
    "iac",
    "container",
    "cloud",
    "dast",
)


@dataclass
class Token:
    """OAuth bearer token with an absolute expiry (seconds since epoch)."""
    access_token: str
    expires_at: float

    def is_usable(self, now: float, skew: float = 60.0) -> bool:
        return now < self.expires_at - skew


class _RemoteRecord(BaseModel):
    """Read-only view of a record owned by the remote service.

    Unknown provider fields are preserved so detail views lose nothing.
    """

    model_config = ConfigDict(extra="allow", frozen=True)


class Repository(_RemoteRecord):
    id: int | None = None
    name: str | None = None
    external_repo_id: str | None = None
    provider: str | None = None


class Issue(_RemoteRecord):
    id: int | None = None
    group_id: int | None = None
    type: str | None = None
    severity: str | None = None
    rule: str | None = None
    cve_id: str | None = None
    affected_package: str | None = None
    affected_file: str | None = None
    start_line: int | None = None
    code_repo_name: str | None = None
    programming_language: str | None = None
    how_to_fix: str | None = None
    related_cve_ids: list[str] | None = None


class IssueGroupLocation(_RemoteRecord):
    id: int | None = None
    name: str | None = None


class IssueGroup(_RemoteRecord):
    id: int | None = None
    type: str | None = None
    severity: str | None = None
    title: str | None = None
    description: str | None = None
    locations: list[IssueGroupLocation] | None = None
    time_to_fix_minutes: int | None = None
    how_to_fix: str | None = None
    related_cve_ids: list[str] | None = None


class IssueSummary(BaseModel):
    """Condensed issue for list views."""
    id: int | None
    group_id: int | None
    type: str | None
    severity: str | None
    title: str
    package: str | None
    file: str | None
    line: int | None
    repo: str | None
    language: str | None


class IssueGroupSummary(BaseModel):
    """Condensed issue group for list views."""
    id: int | None
    type: str | None
    severity: str | None
    title: str | None
    description: str | None
    location_count: int
    locations: list[str | None] | None
    fix_time_minutes: int | None
    how_to_fix: str | None
    cves: list[str] | None


@dataclass(frozen=True)
class ToolSuccess:
    value: Any


@dataclass(frozen=True)
class ToolFailure:
    message: str
    error_type: str = "AikidoError"

    @classmethod
    def from_error(cls, exc: Exception) -> "ToolFailure":
        return cls(message=str(exc), error_type=type(exc).__name__)


ToolOutcome = Union[ToolSuccess, ToolFailure]


class TextContent(BaseModel):
    type: Literal["text"] = "text"
    text: str


class ToolEnvelope(BaseModel):
    """Protocol-level result of a tool invocation."""

    content: list[TextContent]
    is_error: bool = False

    @classmethod
    def success(cls, text: str) -> "ToolEnvelope":
        return cls(content=[TextContent(text=text)])

    @classmethod
    def failure(cls, message: str) -> "ToolEnvelope":
        return cls(content=[TextContent(text=f"Error: {message}")], is_error=True)

    @property
    def text(self) -> str:
        return "\n".join(c.text for c in self.content)

    def to_protocol(self) -> dict[str, Any]:
        """Render as ``{content: [...], isError?: true}``."""
        out: dict[str, Any] = {"content": [c.model_dump() for c in self.content]}
        if self.is_error:
            out["isError"] = True
        return out
