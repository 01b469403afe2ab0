"""godoc-mcp: Go package documentation from pkg.go.dev over MCP."""

__version__ = "0.1.0"
