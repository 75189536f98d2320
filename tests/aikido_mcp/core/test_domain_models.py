import pytest
from pydantic import ValidationError

from aikido_mcp.core.domain.exceptions import ApiRequestError, AuthExchangeError, UnknownToolError
from aikido_mcp.core.domain.models import (
    ISSUE_TYPES,
    SEVERITIES,
    Repository,
    Token,
    ToolEnvelope,
    ToolFailure,
)
from aikido_mcp.core.toolset import TOOL_CATALOG, describe_tool, tool_names


def test_token_usable_until_skew_window():
    token = Token(access_token="t", expires_at=1_000.0)

    assert token.is_usable(939.0)
    assert not token.is_usable(940.0)
    assert not token.is_usable(2_000.0)


def test_success_envelope_has_no_error_flag():
    envelope = ToolEnvelope.success("{}")

    assert envelope.to_protocol() == {"content": [{"type": "text", "text": "{}"}]}


def test_failure_envelope_prefixes_message():
    envelope = ToolEnvelope.failure("Unknown tool: x")

    assert envelope.is_error
    assert envelope.text == "Error: Unknown tool: x"
    assert envelope.to_protocol()["isError"] is True


def test_tool_failure_from_error_keeps_type_name():
    failure = ToolFailure.from_error(UnknownToolError("x"))

    assert failure.message == "Unknown tool: x"
    assert failure.error_type == "UnknownToolError"


def test_error_messages_carry_status_and_body():
    assert str(AuthExchangeError(401, "bad creds")) == "Failed to get access token: 401 - bad creds"
    err = ApiRequestError(404, "Not Found")
    assert str(err) == "Aikido API error: 404 - Not Found"
    assert err.status_code == 404
    assert err.body == "Not Found"


def test_remote_records_are_frozen_and_keep_extras():
    repo = Repository.model_validate({"id": 1, "name": "web", "branch": "main"})

    assert repo.model_extra == {"branch": "main"}
    with pytest.raises(ValidationError):
        repo.name = "other"


def test_catalog_names_unique():
    names = tool_names()
    assert len(names) == 6
    assert len(set(names)) == 6


def test_catalog_enums_match_domain():
    issues = describe_tool("get_issues")["inputSchema"]["properties"]

    assert issues["severity"]["items"]["enum"] == list(SEVERITIES)
    assert issues["issue_type"]["items"]["enum"] == list(ISSUE_TYPES)
    assert issues["per_page"]["default"] == 50


def test_catalog_required_arguments():
    required = {t["name"]: t["inputSchema"].get("required", []) for t in TOOL_CATALOG}

    assert required == {
        "list_repositories": [],
        "get_issues": [],
        "get_issue_details": ["issue_id"],
        "get_open_issue_groups": [],
        "get_issue_group_details": ["group_id"],
        "search_repository_by_name": ["name"],
    }


def test_describe_unknown_tool():
    with pytest.raises(KeyError):
        describe_tool("nope")
