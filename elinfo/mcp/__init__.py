"""MCP tool surface for elinfo."""
