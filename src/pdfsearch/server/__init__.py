"""MCP server exposing the search tools."""

from pdfsearch.server.mcp_server import create_mcp_server

__all__ = ["create_mcp_server"]
