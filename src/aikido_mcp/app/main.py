from __future__ import annotations

from typing import Any, Mapping

from .config import AppConfig
from .container import Container


def _create_container(config: AppConfig | None = None) -> Container:
    """Create and initialize a container.

    Args:
        config: Optional config. If None, loads from environment variables.

    Returns:
        Initialized container instance
    """
    container = Container()

    if config is None:
        # Load from environment variables (BaseSettings default behavior)
        config = AppConfig()

    container.config.from_pydantic(config)
    container.init_resources()

    return container


def list_tools(config: AppConfig | None = None) -> list[dict[str, Any]]:
    """Return the tool catalog: name, description and inputSchema per tool."""
    container = _create_container(config)
    try:
        return container.dispatcher().list_tools()
    finally:
        container.shutdown_resources()


def call_tool(
    name: str,
    arguments: Mapping[str, Any] | None = None,
    *,
    config: AppConfig | None = None,
) -> dict[str, Any]:
    """Invoke one tool outside of an MCP session.

    Args:
        name: Tool name, e.g. "search_repository_by_name"
        arguments: Tool arguments as they would arrive over MCP
        config: Optional config for testing. If None, loads from env vars.

    Returns:
        Protocol envelope ``{"content": [...], "isError"?: True}``
    """
    container = _create_container(config)
    try:
        return container.dispatcher().call(name, arguments).to_protocol()
    finally:
        container.shutdown_resources()


def serve(
    *,
    transport: str = "stdio",
    port: int | None = None,
    config: AppConfig | None = None,
) -> None:
    """Run the MCP server until the transport closes.

    Raises:
        ValueError: On an invalid transport or a missing port for streamable-http
    """
    container = _create_container(config)
    try:
        container.mcp_server().run(transport=transport, port=port)
    finally:
        container.shutdown_resources()
