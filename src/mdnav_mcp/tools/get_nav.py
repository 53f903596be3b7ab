"""Tools to get the heading navigation of a Markdown document."""

from typing import Optional

from ..parser.hierarchy import NavItem, extract_nav, flatten_tree
from ..parser.markdown import parse_markdown
from .render_markdown import nav_to_dict, prepare_document


def build_nav(content: str, filename: Optional[str] = None) -> list[NavItem]:
    """Convert a document and extract its navigation tree."""
    source, _ = prepare_document(content, filename)
    return extract_nav(parse_markdown(source))


def get_nav_tree(content: str, filename: Optional[str] = None) -> dict:
    """
    Get the navigation tree of a document as nested dicts.

    Args:
        content: Markdown source text
        filename: Optional source file name ('.mdx' enables MDX preprocessing)

    Returns:
        Dict with the nested tree
    """
    if not isinstance(content, str):
        return {"error": "Document content must be a string"}

    return {"tree": nav_to_dict(build_nav(content, filename))}


def get_document_outline(content: str, filename: Optional[str] = None) -> dict:
    """
    Get a flat outline of a document's headings.

    Args:
        content: Markdown source text
        filename: Optional source file name ('.mdx' enables MDX preprocessing)

    Returns:
        Dict with one entry per heading, in document order, with its indent depth
    """
    if not isinstance(content, str):
        return {"error": "Document content must be a string"}

    outline = [
        {
            "id": item.id,
            "title": item.title,
            "level": item.level,
            "depth": depth,
        }
        for item, depth in flatten_tree(build_nav(content, filename))
    ]
    return {"outline": outline, "heading_count": len(outline)}
