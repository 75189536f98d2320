import asyncio

from fastmcp import FastMCP
from fastmcp.client import Client


def list_tools(mcp: FastMCP):
    """Return the tools a FastMCP app advertises, via an in-memory client.

    Must be called outside a running event loop.
    """
    async def _list_tools():
        async with Client(mcp) as client:
            return await client.list_tools()
    return asyncio.run(_list_tools())
