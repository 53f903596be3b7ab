"""Markdown conversion and heading navigation utilities."""

from .inline import process_inline
from .markdown import parse_markdown, preprocess_mdx, strip_jsx
from .hierarchy import NavItem, extract_nav, get_path_to_item

__all__ = [
    "process_inline",
    "parse_markdown",
    "preprocess_mdx",
    "strip_jsx",
    "NavItem",
    "extract_nav",
    "get_path_to_item",
]
