import asyncio
import json
import logging

import pytest
from fastmcp.client import Client
from fastmcp.exceptions import ToolError

from aikido_mcp.core.domain.exceptions import ApiRequestError
from aikido_mcp.core.toolset import TOOL_CATALOG, tool_names
from aikido_mcp.core.usecases.issues import ISSUES_EXPORT_ENDPOINT
from aikido_mcp.core.usecases.repositories import REPOSITORIES_ENDPOINT
from aikido_mcp.infra.mcp_server import SERVER_NAME, MCPServer
from aikido_mcp.shared.list_tools import list_tools

from fakes import FakeApi, FakeLogger, make_dispatcher


def _server(api: FakeApi, logger=None) -> MCPServer:
    logger = logger or FakeLogger()
    return MCPServer(dispatcher=make_dispatcher(api, logger), logger=logger)


def _call(app, name, arguments):
    async def _run():
        async with Client(app) as client:
            return await client.call_tool(name, arguments)
    return asyncio.run(_run())


def test_build_registers_catalog_tools():
    app = _server(FakeApi()).build()

    assert app.name == SERVER_NAME
    tools = list_tools(app)
    assert sorted(t.name for t in tools) == sorted(tool_names())


def test_advertised_arguments_match_catalog():
    tools = {t.name: t for t in list_tools(_server(FakeApi()).build())}

    issues_schema = tools["get_issues"].inputSchema
    assert set(issues_schema["properties"]) == {"repo_id", "severity", "issue_type", "page", "per_page"}
    assert tools["get_issue_details"].inputSchema["required"] == ["issue_id"]
    assert tools["search_repository_by_name"].inputSchema["required"] == ["name"]


def test_tool_call_returns_dispatcher_text():
    api = FakeApi({REPOSITORIES_ENDPOINT: [{"id": 1, "name": "API-Service"}]})
    app = _server(api).build()

    result = _call(app, "search_repository_by_name", {"name": "api"})

    assert json.loads(result.content[0].text) == {
        "total": 1,
        "repositories": [{"id": 1, "name": "API-Service"}],
    }


def test_tool_call_omitted_optionals_are_not_sent():
    api = FakeApi({ISSUES_EXPORT_ENDPOINT: []})
    app = _server(api).build()

    _call(app, "get_issues", {"severity": ["critical"]})

    assert api.calls[0][1] == [
        ("page", "0"),
        ("per_page", "50"),
        ("filter_severities", "critical"),
    ]


def test_tool_failure_surfaces_as_tool_error():
    api = FakeApi({"/issues/42": ApiRequestError(404, "Not Found")})
    app = _server(api).build()

    with pytest.raises(ToolError, match="Aikido API error: 404 - Not Found"):
        _call(app, "get_issue_details", {"issue_id": 42})


@pytest.mark.parametrize("transport", ["sse", "http", ""])
def test_run_rejects_unknown_transport(transport):
    with pytest.raises(ValueError, match="Invalid transport mode"):
        _server(FakeApi()).run(transport=transport)


def test_run_http_requires_port():
    with pytest.raises(ValueError, match="Port is required"):
        _server(FakeApi()).run(transport="streamable-http")


WIRETAP_LOGGER = "aikido_mcp.infra.mcp.wiretap_logging"


class _Collect(logging.Handler):
    def __init__(self):
        super().__init__(level=logging.DEBUG)
        self.records: list[logging.LogRecord] = []

    def emit(self, record):
        self.records.append(record)


@pytest.fixture
def wiretap():
    log = logging.getLogger(WIRETAP_LOGGER)
    handler = _Collect()
    previous = log.level
    log.addHandler(handler)
    yield log, handler
    log.removeHandler(handler)
    log.setLevel(previous)


def test_list_and_call_with_wiretap_at_info(wiretap):
    log, handler = wiretap
    log.setLevel(logging.INFO)
    api = FakeApi({REPOSITORIES_ENDPOINT: [{"id": 1, "name": "API-Service"}]})
    app = _server(api).build()

    assert len(list_tools(app)) == 6
    result = _call(app, "search_repository_by_name", {"name": "api"})

    assert json.loads(result.content[0].text)["total"] == 1
    assert handler.records == []


def test_list_and_call_with_wiretap_at_debug(wiretap):
    """Debug wiretap converts tool objects and results without failing the request."""
    log, handler = wiretap
    log.setLevel(logging.DEBUG)
    api = FakeApi({REPOSITORIES_ENDPOINT: [{"id": 1, "name": "API-Service"}]})
    app = _server(api).build()

    assert len(list_tools(app)) == 6
    result = _call(app, "search_repository_by_name", {"name": "api"})

    assert json.loads(result.content[0].text)["total"] == 1
    messages = [r.getMessage() for r in handler.records]
    assert "mcp_request" in messages
    assert "mcp_response" in messages


def _enum_in(schema):
    if isinstance(schema, dict):
        if "enum" in schema:
            return schema["enum"]
        for value in schema.values():
            found = _enum_in(value)
            if found is not None:
                return found
    elif isinstance(schema, list):
        for value in schema:
            found = _enum_in(value)
            if found is not None:
                return found
    return None


def test_advertised_schema_matches_catalog():
    """Names, descriptions, defaults, enums and required lists agree with TOOL_CATALOG."""
    advertised = {t.name: t for t in list_tools(_server(FakeApi()).build())}

    for entry in TOOL_CATALOG:
        tool = advertised[entry["name"]]
        assert tool.description == entry["description"]

        expected = entry["inputSchema"]
        actual = tool.inputSchema
        assert set(actual["properties"]) == set(expected["properties"])
        assert sorted(actual.get("required", [])) == sorted(expected.get("required", []))

        for prop, declared in expected["properties"].items():
            got = actual["properties"][prop]
            assert got.get("description") == declared["description"], (entry["name"], prop)
            if "default" in declared:
                assert got.get("default") == declared["default"], (entry["name"], prop)
            if declared.get("type") == "array":
                assert _enum_in(got) == declared["items"]["enum"], (entry["name"], prop)
