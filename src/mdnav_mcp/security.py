"""Security utilities: HTML sanitization policy, document file guards, secret detection."""

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable

import bleach

logger = logging.getLogger(__name__)

# Elements the renderer may emit and the sanitizer lets through
ALLOWED_TAGS = (
    'h1', 'h2', 'h3', 'h4', 'h5', 'h6',
    'p', 'br', 'strong', 'em', 'a',
    'ul', 'ol', 'li',
    'blockquote', 'pre', 'code', 'img',
    'table', 'thead', 'tbody', 'tr', 'th', 'td',
)

ALLOWED_ATTRIBUTES = ('href', 'target', 'rel', 'src', 'alt', 'title', 'align')

ALLOWED_PROTOCOLS = ('http', 'https', 'mailto')

# Upload rules for source documents
DOC_EXTENSIONS = ('.md', '.mdx')
UNSUPPORTED_DOCUMENT_MESSAGE = "Only .md and .mdx files are supported"

# Regex patterns to detect secrets in file content
SECRET_CONTENT_PATTERNS = [
    (re.compile(r'-----BEGIN.*PRIVATE KEY-----'), 'private key'),
    (re.compile(r'AKIA[0-9A-Z]{16}'), 'AWS access key'),
    (re.compile(r'sk-ant-[a-zA-Z0-9_-]+'), 'Anthropic API key'),
    (re.compile(r'ghp_[a-zA-Z0-9]{36}'), 'GitHub personal access token'),
    (re.compile(r'glpat-[a-zA-Z0-9\-_]{20,}'), 'GitLab personal access token'),
    (re.compile(r'sk-[a-zA-Z0-9]{20,}T3BlbkFJ[a-zA-Z0-9]+'), 'OpenAI API key'),
    (re.compile(r'xox[boaprs]-[a-zA-Z0-9\-]+'), 'Slack token'),
]

_TAG_PATTERN = re.compile(r'<\s*/?\s*([a-zA-Z][a-zA-Z0-9]*)([^>]*)>')
_QUOTED_PATTERN = re.compile(r'"[^"]*"|\'[^\']*\'')


@dataclass(frozen=True)
class SanitizePolicy:
    """Allow-list configuration handed to a sanitizer."""
    tags: tuple[str, ...] = ALLOWED_TAGS
    attributes: tuple[str, ...] = ALLOWED_ATTRIBUTES
    protocols: tuple[str, ...] = ALLOWED_PROTOCOLS
    strip: bool = True
    forbidden_tags: frozenset[str] = field(
        default_factory=lambda: frozenset({'script', 'iframe', 'object', 'embed', 'style'})
    )


DEFAULT_POLICY = SanitizePolicy()

Sanitizer = Callable[[str, SanitizePolicy], str]


def sanitize_html(html: str, policy: SanitizePolicy = DEFAULT_POLICY) -> str:
    """
    Clean an HTML string against an allow-list policy using bleach.

    Disallowed elements are stripped (their text kept, escaped), except the
    policy's forbidden tags which are removed together with their content.
    Attributes outside the allow-list, including event handlers and style,
    are dropped, as are URLs with a protocol outside the policy.
    """
    for tag in policy.forbidden_tags:
        html = re.sub(
            rf'<\s*{tag}\b[^>]*>.*?<\s*/\s*{tag}\s*>',
            '',
            html,
            flags=re.IGNORECASE | re.DOTALL,
        )
    return bleach.clean(
        html,
        tags=set(policy.tags),
        attributes=list(policy.attributes),
        protocols=set(policy.protocols),
        strip=policy.strip,
        strip_comments=True,
    )


def find_disallowed_markup(html: str, policy: SanitizePolicy = DEFAULT_POLICY) -> list[str]:
    """
    List the element and attribute names in html that the policy does not allow.

    Works on the markup alone, without running a sanitizer, so renderer
    output can be checked against the allow-list directly. Attributes are
    reported as "tag@attr".
    """
    allowed_tags = set(policy.tags)
    allowed_attrs = set(policy.attributes)
    found: list[str] = []
    for match in _TAG_PATTERN.finditer(html):
        tag = match.group(1).lower()
        if tag not in allowed_tags and tag not in found:
            found.append(tag)
        attrs = _QUOTED_PATTERN.sub('', match.group(2))
        for name in re.findall(r'[^\s=/]+', attrs):
            name = name.lower()
            entry = f"{tag}@{name}"
            if name not in allowed_attrs and entry not in found:
                found.append(entry)
    return found


def is_supported_document(filename: str) -> bool:
    """Check if a filename has an accepted document extension (.md, .mdx)."""
    return Path(filename).suffix.lower() in DOC_EXTENSIONS


def scan_content_for_secrets(content: str, filename: str) -> list[str]:
    """Scan file content for secret patterns. Returns list of detected secret types."""
    detected = []
    for pattern, description in SECRET_CONTENT_PATTERNS:
        if pattern.search(content):
            detected.append(description)
    if detected:
        logger.warning("Secret-like content in %s: %s", filename, ', '.join(detected))
    return detected


def validate_path_traversal(resolved_path: Path, base_path: Path) -> bool:
    """Check that a resolved path is within the base directory (no traversal/symlink escape)."""
    try:
        resolved_path.relative_to(base_path)
        return True
    except ValueError:
        return False
