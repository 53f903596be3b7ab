"""Tool to render a Markdown document stored in a GitHub repository."""

import logging
import os
import re
from typing import Optional

import httpx

from ..security import UNSUPPORTED_DOCUMENT_MESSAGE, is_supported_document, scan_content_for_secrets
from .render_file import max_file_bytes
from .render_markdown import render_markdown

logger = logging.getLogger(__name__)


def parse_github_url(url: str) -> tuple[str, str]:
    """Extract owner and repo name from GitHub URL."""
    patterns = [
        r"github\.com/([^/]+)/([^/]+)",  # https://github.com/owner/repo
        r"^([^/]+)/([^/]+)$",  # owner/repo
    ]

    for pattern in patterns:
        match = re.search(pattern, url.strip().rstrip('/'))
        if match:
            owner = match.group(1)
            repo = match.group(2)
            if repo.endswith('.git'):
                repo = repo[:-4]
            return owner, repo

    raise ValueError(f"Could not parse GitHub URL: {url}")


def is_local_only() -> bool:
    """Check whether remote fetching is disabled via MDNAV_LOCAL_ONLY."""
    return os.environ.get('MDNAV_LOCAL_ONLY', '').lower() in ('true', '1', 'yes')


async def fetch_file_content(
    owner: str,
    repo: str,
    path: str,
    token: Optional[str] = None,
    ref: Optional[str] = None,
    client: Optional[httpx.AsyncClient] = None,
) -> str:
    """Fetch raw content of a file from GitHub, on client when one is given."""
    headers = {
        "Accept": "application/vnd.github.v3.raw",
        "User-Agent": "mdnav-mcp",
    }
    if token:
        headers["Authorization"] = f"token {token}"

    url = f"https://api.github.com/repos/{owner}/{repo}/contents/{path.lstrip('/')}"
    params = {"ref": ref} if ref else None

    if client is None:
        async with httpx.AsyncClient() as own_client:
            response = await own_client.get(url, headers=headers, params=params)
    else:
        response = await client.get(url, headers=headers, params=params)
    response.raise_for_status()
    return response.text


async def render_github_file(
    url: str,
    path: str = "README.md",
    ref: Optional[str] = None,
    github_token: Optional[str] = None,
    sanitize: bool = True,
) -> dict:
    """
    Fetch a document from a GitHub repository and render it.

    Args:
        url: GitHub repository URL or owner/repo string
        path: Path of the document inside the repository
        ref: Branch, tag or commit to read from (default branch when omitted)
        github_token: GitHub personal access token (for private repos)
        sanitize: Whether to pass the HTML through the sanitization policy

    Returns:
        Dict with the rendered document, or an error
    """
    if is_local_only():
        return {
            "error": "Remote rendering disabled in local-only mode. Set MDNAV_LOCAL_ONLY=false or unset to enable.",
        }

    try:
        owner, repo = parse_github_url(url)
    except ValueError as e:
        return {"error": str(e)}

    if not is_supported_document(path):
        return {"error": UNSUPPORTED_DOCUMENT_MESSAGE}

    token = github_token or os.environ.get("GITHUB_TOKEN")

    try:
        content = await fetch_file_content(owner, repo, path, token, ref)
    except httpx.HTTPStatusError as e:
        logger.warning("GitHub returned %s for %s/%s:%s", e.response.status_code, owner, repo, path)
        return {"error": f"GitHub returned {e.response.status_code} for {owner}/{repo}/{path}"}
    except httpx.HTTPError as e:
        logger.warning("Fetching %s/%s:%s failed: %s", owner, repo, path, e)
        return {"error": f"Could not fetch {owner}/{repo}/{path}: {e}"}

    limit = max_file_bytes()
    size = len(content.encode('utf-8'))
    if size > limit:
        return {"error": f"File too large: {size} bytes (limit {limit})"}

    result = render_markdown(content, filename=path, sanitize=sanitize)
    result["repo"] = f"{owner}/{repo}"
    result["file"] = path

    detected = scan_content_for_secrets(content, path)
    if detected:
        result["warnings"] = [f"Possible {kind} in document" for kind in detected]

    return result
