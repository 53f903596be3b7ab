"""mdnav-mcp: render Markdown documents to sanitized HTML with heading navigation."""

__version__ = "0.1.0"
