"""Tool to render a Markdown document to sanitized HTML with its navigation tree."""

import logging
from dataclasses import asdict
from typing import Optional

from ..parser.hierarchy import NavItem, extract_nav, flatten_tree
from ..parser.markdown import parse_markdown, strip_front_matter, strip_jsx
from ..security import DEFAULT_POLICY, Sanitizer, sanitize_html

logger = logging.getLogger(__name__)


def nav_to_dict(items: list[NavItem]) -> list[dict]:
    """Convert NavItems to plain nested dicts."""
    return [asdict(item) for item in items]


def prepare_document(content: str, filename: Optional[str] = None) -> tuple[str, dict]:
    """
    Normalize a source document before conversion.

    Front-matter is stripped once from every document and its metadata
    returned; MDX sources then lose their imports, exports and JSX tags.
    """
    stripped, metadata = strip_front_matter(content)
    if filename and filename.lower().endswith('.mdx'):
        stripped = strip_jsx(stripped)
    return stripped, metadata


def render_markdown(
    content: str,
    filename: Optional[str] = None,
    sanitize: bool = True,
    sanitizer: Optional[Sanitizer] = None,
) -> dict:
    """
    Render a Markdown document.

    Args:
        content: Markdown source text
        filename: Optional source file name; '.mdx' names enable MDX preprocessing
        sanitize: Whether to pass the HTML through the sanitization policy
        sanitizer: Replacement sanitizer callable (html, policy) -> html

    Returns:
        Dict with html, title, nav tree and heading count
    """
    if not isinstance(content, str):
        return {"error": "Document content must be a string"}

    source, metadata = prepare_document(content, filename)
    html = parse_markdown(source)
    nav = extract_nav(html)

    if sanitize:
        html = (sanitizer or sanitize_html)(html, DEFAULT_POLICY)

    title = metadata.get('title') or (nav[0].title if nav else "")
    heading_count = len(flatten_tree(nav))
    logger.debug("Rendered %s: %d bytes of HTML, %d headings",
                 filename or "<document>", len(html), heading_count)

    return {
        "title": title,
        "html": html,
        "nav": nav_to_dict(nav),
        "heading_count": heading_count,
    }

