"""CLI output formatting utilities for human-readable display."""

from __future__ import annotations

from typing import Any


def _describe_property(name: str, prop: dict[str, Any], required: bool) -> str:
    kind = prop.get("type", "any")
    if kind == "array":
        items = prop.get("items", {})
        kind = f"{items.get('type', 'any')}[]"
        if "enum" in items:
            kind += f" ({'|'.join(items['enum'])})"

    parts = [f"{name}: {kind}"]
    if required:
        parts.append("required")
    if "default" in prop:
        parts.append(f"default={prop['default']}")
    return ", ".join(parts)


def format_tool_catalog(tools: list[dict[str, Any]]) -> str:
    """Format the tool catalog for human-readable CLI output.

    Args:
        tools: Catalog entries (name, description, inputSchema)

    Returns:
        Formatted string for display
    """
    if not tools:
        return "No tools registered."

    lines = [f"{len(tools)} tools available:", ""]
    for tool in tools:
        lines.append(tool["name"])
        lines.append(f"  {tool['description']}")

        schema = tool.get("inputSchema", {})
        required = set(schema.get("required", []))
        for prop_name, prop in schema.get("properties", {}).items():
            lines.append(f"    - {_describe_property(prop_name, prop, prop_name in required)}")
        lines.append("")

    return "\n".join(lines).rstrip()
