"""MCP tool implementations."""

from .render_markdown import render_markdown
from .get_nav import get_nav_tree, get_document_outline
from .get_breadcrumbs import get_breadcrumbs
from .render_file import render_local_file
from .render_remote import render_github_file
from .get_policy import get_sanitize_policy

__all__ = [
    "render_markdown",
    "get_nav_tree",
    "get_document_outline",
    "get_breadcrumbs",
    "render_local_file",
    "render_github_file",
    "get_sanitize_policy",
]
