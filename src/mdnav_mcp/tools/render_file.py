"""Tool to render a local Markdown document."""

import logging
import os
from pathlib import Path
from typing import Optional

from ..security import (
    UNSUPPORTED_DOCUMENT_MESSAGE,
    is_supported_document,
    scan_content_for_secrets,
    validate_path_traversal,
)
from .render_markdown import render_markdown

logger = logging.getLogger(__name__)

DEFAULT_MAX_FILE_BYTES = 1024 * 1024


def max_file_bytes() -> int:
    """Read the document size limit from MDNAV_MAX_FILE_BYTES."""
    raw = os.environ.get("MDNAV_MAX_FILE_BYTES", "")
    try:
        value = int(raw)
    except ValueError:
        return DEFAULT_MAX_FILE_BYTES
    return value if value > 0 else DEFAULT_MAX_FILE_BYTES


def resolve_document_path(path: str, base_dir: Optional[str] = None) -> Path:
    """
    Resolve a document path and check it may be rendered.

    Raises:
        ValueError: If the extension is not supported, the path escapes
            base_dir, or the file does not exist
    """
    if not is_supported_document(path):
        raise ValueError(UNSUPPORTED_DOCUMENT_MESSAGE)

    if base_dir:
        base = Path(base_dir).resolve()
        resolved = (base / path).resolve()
        if not validate_path_traversal(resolved, base):
            logger.warning("Path traversal detected, refusing: %s", path)
            raise ValueError(f"Path escapes base directory: {path}")
    else:
        resolved = Path(path).resolve()

    if not resolved.is_file():
        raise ValueError(f"File not found: {path}")
    return resolved


def render_local_file(
    path: str,
    base_dir: Optional[str] = None,
    sanitize: bool = True,
) -> dict:
    """
    Render a local .md or .mdx document.

    Args:
        path: Path of the document (relative to base_dir when given)
        base_dir: Directory the document must stay within
        sanitize: Whether to pass the HTML through the sanitization policy

    Returns:
        Dict with the rendered document, or an error
    """
    try:
        resolved = resolve_document_path(path, base_dir)
    except ValueError as e:
        return {"error": str(e)}

    limit = max_file_bytes()
    size = resolved.stat().st_size
    if size > limit:
        logger.info("Skipping oversized document %s (%d bytes)", resolved, size)
        return {"error": f"File too large: {size} bytes (limit {limit})"}

    try:
        content = resolved.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        return {"error": f"Could not read {path}: {e}"}

    result = render_markdown(content, filename=resolved.name, sanitize=sanitize)
    result["file"] = resolved.name

    detected = scan_content_for_secrets(content, resolved.name)
    if detected:
        result["warnings"] = [f"Possible {kind} in document" for kind in detected]

    return result
