"""mcp-devkit: project context documents and their validation."""

__version__ = "0.1.0"
