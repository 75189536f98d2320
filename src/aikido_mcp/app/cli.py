from __future__ import annotations

import json

import typer
from dotenv import load_dotenv

from .config import AppConfig
from .container import Container
from .cli_formatter import format_tool_catalog
from .main import call_tool, list_tools

# .env.local first so it wins over .env; real environment variables win over both
load_dotenv(".env.local")
load_dotenv()

app = typer.Typer(add_completion=False, no_args_is_help=True)

TRANSPORT_MODES = ("stdio", "streamable-http")


def _load_config(*, log_level: str | None = None, console_output: bool | None = None) -> AppConfig:
    """Load config from the environment and apply CLI overrides."""
    config = AppConfig()
    updates: dict[str, object] = {}
    if log_level is not None:
        updates["level"] = log_level.upper()
    if console_output is not None:
        updates["console_output"] = console_output
    if updates:
        config = config.model_copy(update={"logging": config.logging.model_copy(update=updates)})
    return config


@app.command()
def serve(
    mode: str = typer.Option("stdio", "--mode", "-m", help="Transport mode: 'stdio' or 'streamable-http'"),
    port: int | None = typer.Option(None, "--port", "-p", help="Port number (required for streamable-http)"),
    log_level: str | None = typer.Option(None, "--log-level", help="Log level", case_sensitive=False),
):
    """Start the Aikido MCP server.

    TRANSPORT MODES:
      stdio           - Direct communication via stdin/stdout (default)
      streamable-http - HTTP server (requires --port)

    Credentials are read from AIKIDO_CLIENT_ID and AIKIDO_API_KEY (environment,
    .env.local or .env) and checked on the first tool call.

    Examples:
      aikido-mcp serve
      aikido-mcp serve --mode streamable-http --port 18080
    """
    if mode not in TRANSPORT_MODES:
        typer.echo(f"Error: Invalid mode '{mode}'. Must be 'stdio' or 'streamable-http'.", err=True)
        raise typer.Exit(code=1)

    if mode == "streamable-http" and port is None:
        typer.echo("Error: --port is required for streamable-http mode.", err=True)
        raise typer.Exit(code=1)

    if mode == "stdio" and port is not None:
        typer.echo("Warning: --port is ignored in stdio mode.", err=True)
        port = None

    config = _load_config(log_level=log_level)
    container = Container()
    container.config.from_pydantic(config)

    try:
        container.init_resources()
        container.mcp_server().run(transport=mode, port=port)
    except KeyboardInterrupt:
        typer.echo("\n\nShutting down MCP server...", err=True)
    except Exception as e:
        typer.echo(f"Error starting MCP server: {e}", err=True)
        raise typer.Exit(code=1)
    finally:
        container.shutdown_resources()


@app.command()
def tools(
    json_output: bool = typer.Option(False, "--json", help="Output the catalog as JSON"),
):
    """List the tools the server exposes."""
    catalog = list_tools(config=_load_config(console_output=False))

    if json_output:
        typer.echo(json.dumps({"tools": catalog}, ensure_ascii=False, indent=2))
    else:
        typer.echo(format_tool_catalog(catalog))


@app.command()
def call(
    tool: str = typer.Argument(..., help="Tool name, e.g. search_repository_by_name"),
    args: str = typer.Option("{}", "--args", "-a", help="Tool arguments as a JSON object"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log requests to stderr"),
):
    """Call one tool and print its result.

    Examples:
      aikido-mcp call search_repository_by_name --args '{"name": "api"}'
      aikido-mcp call get_issues --args '{"repo_id": 42, "severity": ["critical"]}'
    """
    try:
        arguments = json.loads(args)
    except json.JSONDecodeError as e:
        typer.echo(f"Error: --args is not valid JSON: {e}", err=True)
        raise typer.Exit(code=2)

    if not isinstance(arguments, dict):
        typer.echo("Error: --args must be a JSON object.", err=True)
        raise typer.Exit(code=2)

    result = call_tool(tool, arguments, config=_load_config(console_output=verbose))

    for item in result["content"]:
        typer.echo(item["text"])

    if result.get("isError"):
        raise typer.Exit(code=1)


if __name__ == "__main__":
    app()
