"""MCP Server for rendering Markdown documents with heading navigation."""

import asyncio
import json
import logging
import os
import sys
from typing import Any

from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import Tool, TextContent

from .tools.render_markdown import render_markdown as do_render_markdown
from .tools.get_nav import (
    get_nav_tree as do_get_nav_tree,
    get_document_outline as do_get_document_outline,
)
from .tools.get_breadcrumbs import get_breadcrumbs as do_get_breadcrumbs
from .tools.render_file import render_local_file as do_render_local_file
from .tools.render_remote import render_github_file as do_render_github_file
from .tools.get_policy import get_sanitize_policy as do_get_sanitize_policy

logger = logging.getLogger(__name__)

_CONTENT_SCHEMA = {
    "type": "string",
    "description": "Markdown source text",
}

_FILENAME_SCHEMA = {
    "type": "string",
    "description": "Optional source file name; a .mdx name enables MDX preprocessing",
}

_SANITIZE_SCHEMA = {
    "type": "boolean",
    "description": "Pass the HTML through the tag/attribute allow-list",
    "default": True,
}

# Create MCP server
server = Server("mdnav-mcp")


@server.list_tools()
async def list_tools() -> list[Tool]:
    """List available tools."""
    return [
        Tool(
            name="render_markdown",
            description="""Render a Markdown document to sanitized HTML.

Returns the HTML, the document title (front-matter title or first heading)
and the heading navigation tree.

Supported syntax: headings, paragraphs, fenced and indented code,
blockquotes, tables with column alignment, single-line list items,
images, links, code spans and bare URLs. Everything else is escaped.""",
            inputSchema={
                "type": "object",
                "properties": {
                    "content": _CONTENT_SCHEMA,
                    "filename": _FILENAME_SCHEMA,
                    "sanitize": _SANITIZE_SCHEMA,
                },
                "required": ["content"],
            },
        ),
        Tool(
            name="get_nav_tree",
            description="""Get the heading navigation tree of a Markdown document.

Each node has an id (slug of the title), title, level (1-6) and children.
A heading nests under the closest preceding heading of a lower level.""",
            inputSchema={
                "type": "object",
                "properties": {
                    "content": _CONTENT_SCHEMA,
                    "filename": _FILENAME_SCHEMA,
                },
                "required": ["content"],
            },
        ),
        Tool(
            name="get_document_outline",
            description="""Get a flat outline of a Markdown document's headings.

Returns one entry per heading in document order with its nesting depth.""",
            inputSchema={
                "type": "object",
                "properties": {
                    "content": _CONTENT_SCHEMA,
                    "filename": _FILENAME_SCHEMA,
                },
                "required": ["content"],
            },
        ),
        Tool(
            name="get_breadcrumbs",
            description="""Get the breadcrumb trail for a heading.

Returns the path of ids from the heading up to its root, and the
breadcrumbs in display order (root first). Without target_id the first
top-level heading is used. Unknown ids yield empty results.""",
            inputSchema={
                "type": "object",
                "properties": {
                    "content": _CONTENT_SCHEMA,
                    "target_id": {
                        "type": "string",
                        "description": "Heading id from get_nav_tree or get_document_outline",
                    },
                    "filename": _FILENAME_SCHEMA,
                },
                "required": ["content"],
            },
        ),
        Tool(
            name="render_file",
            description="""Render a local .md or .mdx document.

Features:
- Refuses other extensions and paths escaping base_dir
- Enforces a size limit (MDNAV_MAX_FILE_BYTES, default 1 MiB)
- Warns when the document contains secret-looking values""",
            inputSchema={
                "type": "object",
                "properties": {
                    "path": {
                        "type": "string",
                        "description": "Path to the document",
                    },
                    "base_dir": {
                        "type": "string",
                        "description": "Directory the document must stay within",
                    },
                    "sanitize": _SANITIZE_SCHEMA,
                },
                "required": ["path"],
            },
        ),
        Tool(
            name="render_github_file",
            description="""Fetch a .md or .mdx document from a GitHub repository and render it.

Supports:
- Public repositories (no token needed)
- Private repositories (set GITHUB_TOKEN environment variable)
- Various URL formats: https://github.com/owner/repo, owner/repo
- Blocked in local-only mode (MDNAV_LOCAL_ONLY=true)""",
            inputSchema={
                "type": "object",
                "properties": {
                    "url": {
                        "type": "string",
                        "description": "GitHub repository URL or owner/repo string",
                    },
                    "path": {
                        "type": "string",
                        "description": "Path of the document in the repository",
                        "default": "README.md",
                    },
                    "ref": {
                        "type": "string",
                        "description": "Branch, tag or commit (default branch when omitted)",
                    },
                    "sanitize": _SANITIZE_SCHEMA,
                },
                "required": ["url"],
            },
        ),
        Tool(
            name="get_sanitize_policy",
            description="""Get the HTML allow-list applied to rendered output.""",
            inputSchema={
                "type": "object",
                "properties": {},
            },
        ),
    ]


REQUIRED_ARGUMENTS = {
    "render_markdown": ("content",),
    "get_nav_tree": ("content",),
    "get_document_outline": ("content",),
    "get_breadcrumbs": ("content",),
    "render_file": ("path",),
    "render_github_file": ("url",),
    "get_sanitize_policy": (),
}


async def dispatch(name: str, arguments: dict[str, Any]) -> dict:
    """Run the tool called name with its arguments."""
    if name not in REQUIRED_ARGUMENTS:
        return {"error": f"Unknown tool: {name}"}
    for key in REQUIRED_ARGUMENTS[name]:
        if key not in arguments:
            return {"error": f"Missing required argument: {key}"}

    if name == "render_markdown":
        return do_render_markdown(
            content=arguments["content"],
            filename=arguments.get("filename"),
            sanitize=arguments.get("sanitize", True),
        )
    if name == "get_nav_tree":
        return do_get_nav_tree(
            content=arguments["content"],
            filename=arguments.get("filename"),
        )
    if name == "get_document_outline":
        return do_get_document_outline(
            content=arguments["content"],
            filename=arguments.get("filename"),
        )
    if name == "get_breadcrumbs":
        return do_get_breadcrumbs(
            content=arguments["content"],
            target_id=arguments.get("target_id"),
            filename=arguments.get("filename"),
        )
    if name == "render_file":
        return do_render_local_file(
            path=arguments["path"],
            base_dir=arguments.get("base_dir"),
            sanitize=arguments.get("sanitize", True),
        )
    if name == "render_github_file":
        return await do_render_github_file(
            url=arguments["url"],
            path=arguments.get("path", "README.md"),
            ref=arguments.get("ref"),
            sanitize=arguments.get("sanitize", True),
        )
    return do_get_sanitize_policy()


@server.call_tool()
async def call_tool(name: str, arguments: dict[str, Any]) -> list[TextContent]:
    """Handle tool calls."""
    try:
        result = await dispatch(name, arguments or {})
    except Exception as e:
        logger.exception("Tool %s failed", name)
        result = {"error": str(e)}

    return [TextContent(type="text", text=json.dumps(result, indent=2))]


async def run_server():
    """Run the MCP server."""
    async with stdio_server() as (read_stream, write_stream):
        await server.run(
            read_stream,
            write_stream,
            server.create_initialization_options(),
        )


def main():
    """Entry point for the MCP server."""
    # stdout carries the protocol
    logging.basicConfig(
        stream=sys.stderr,
        level=os.environ.get("MDNAV_LOG_LEVEL", "WARNING").upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    asyncio.run(run_server())


if __name__ == "__main__":
    main()
