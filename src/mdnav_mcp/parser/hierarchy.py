"""Build a navigation tree from rendered headings and resolve breadcrumb paths."""

import re
from dataclasses import dataclass, field

HEADING_ELEMENT_PATTERN = re.compile(r'<h([1-6])(?:\s[^>]*)?>(.*?)</h\1>', re.DOTALL)
TAG_PATTERN = re.compile(r'<[^>]*>')


@dataclass
class NavItem:
    """A node in the navigation tree."""
    id: str
    title: str
    level: int
    children: list["NavItem"] = field(default_factory=list)


def slugify(text: str) -> str:
    """Lower-case text and collapse every run of non-alphanumerics to '-'."""
    return re.sub(r'[^a-z0-9]+', '-', text.lower()).strip('-')


def _decode_entities(text: str) -> str:
    return text.replace('&lt;', '<').replace('&gt;', '>').replace('&amp;', '&')


def extract_nav(html: str) -> list[NavItem]:
    """
    Build a navigation tree from the <h1>-<h6> elements of an HTML string.

    A heading nests under the closest preceding heading with a strictly
    lower level; otherwise it becomes a new root. Ids are derived from the
    titles and are not deduplicated.

    Returns a list of root nodes in document order.
    """
    roots: list[NavItem] = []
    stack: list[NavItem] = []

    for match in HEADING_ELEMENT_PATTERN.finditer(html):
        level = int(match.group(1))
        title = _decode_entities(TAG_PATTERN.sub('', match.group(2))).strip()
        if not title:
            continue

        item = NavItem(id=slugify(title), title=title, level=level)

        while stack and stack[-1].level >= level:
            stack.pop()

        if stack:
            stack[-1].children.append(item)
        else:
            roots.append(item)
        stack.append(item)

    return roots


def get_path_to_item(items: list[NavItem], target_id: str) -> list[NavItem]:
    """
    Get the chain from the item with target_id up to its root.

    The target comes first and the root last; callers reverse it for
    breadcrumb display. Returns an empty list when the id is not in the tree.
    """
    for item in items:
        if item.id == target_id:
            return [item]
        path = get_path_to_item(item.children, target_id)
        if path:
            path.append(item)
            return path
    return []


def flatten_tree(nodes: list[NavItem], depth: int = 0) -> list[tuple[NavItem, int]]:
    """
    Flatten tree back to list with indent depth.

    Returns list of (item, indent_depth) tuples in pre-order.
    """
    result: list[tuple[NavItem, int]] = []
    for node in nodes:
        result.append((node, depth))
        result.extend(flatten_tree(node.children, depth + 1))
    return result
