"""Tool to resolve the breadcrumb trail of a heading."""

from typing import Optional

from ..parser.hierarchy import get_path_to_item
from .get_nav import build_nav


def get_breadcrumbs(
    content: str,
    target_id: Optional[str] = None,
    filename: Optional[str] = None,
) -> dict:
    """
    Get the ancestor chain of a heading for breadcrumb display.

    Args:
        content: Markdown source text
        target_id: Heading id to resolve; defaults to the first root heading
        filename: Optional source file name ('.mdx' enables MDX preprocessing)

    Returns:
        Dict with the resolved target id, the path of ids (target first) and
        the breadcrumbs in display order (root first). Both are empty when
        the id is not in the document.
    """
    if not isinstance(content, str):
        return {"error": "Document content must be a string"}

    tree = build_nav(content, filename)
    if target_id is None and tree:
        target_id = tree[0].id

    path = get_path_to_item(tree, target_id) if target_id is not None else []

    return {
        "target_id": target_id,
        "path": [item.id for item in path],
        "breadcrumbs": [
            {"id": item.id, "title": item.title, "level": item.level}
            for item in reversed(path)
        ],
    }
