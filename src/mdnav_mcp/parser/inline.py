"""Inline span processing: images, links, code spans and bare URLs."""

import html
import re

# Alternatives are tried in precedence order at each position; the leftmost
# match wins, so spans never overlap.
INLINE_PATTERN = re.compile(
    r'(?P<image>!\[(?P<img_alt>[^\]]*)\]\(\s*(?P<img_url>[^)\s]+)(?:\s+"(?P<img_title>[^"]*)")?\s*\))'
    r'|(?P<link>\[(?P<link_text>[^\]]+)\]\(\s*(?P<link_url>[^)\s]+)(?:\s+"(?P<link_title>[^"]*)")?\s*\))'
    r'|(?P<code>`(?P<code_body>[^`]+)`)'
    r'|(?P<autolink>https?://[^\s<>"\'`]+)'
)

SAFE_SCHEMES = ('http', 'https', 'mailto')

AUTOLINK_TRAILING = '.,;:!?)'

LINK_ATTRS = 'target="_blank" rel="noopener noreferrer"'


def escape_html(text: str) -> str:
    """Escape &, < and > for element content."""
    return html.escape(text, quote=False)


def escape_attr(text: str) -> str:
    """Escape a value for use inside a double-quoted attribute."""
    return html.escape(text, quote=False).replace('"', '&quot;')


def is_safe_url(url: str) -> bool:
    """
    Check whether a URL may be placed in an href/src attribute.

    Relative URLs and fragment anchors are allowed; absolute URLs must use
    one of SAFE_SCHEMES.
    """
    scheme = re.match(r'^\s*([a-zA-Z][a-zA-Z0-9+.-]*):', url)
    if not scheme:
        return True
    return scheme.group(1).lower() in SAFE_SCHEMES


def _url(url: str) -> str:
    return escape_attr(url if is_safe_url(url) else '#')


def _title_attr(title) -> str:
    if title is None:
        return ''
    return f' title="{escape_attr(title)}"'


def _render_match(match: re.Match) -> str:
    """Render a single matched inline span as HTML."""
    if match.group('image'):
        return (
            f'<img src="{_url(match.group("img_url"))}" '
            f'alt="{escape_attr(match.group("img_alt"))}"'
            f'{_title_attr(match.group("img_title"))}>'
        )
    if match.group('link'):
        return (
            f'<a href="{_url(match.group("link_url"))}" {LINK_ATTRS}'
            f'{_title_attr(match.group("link_title"))}>'
            f'{escape_html(match.group("link_text"))}</a>'
        )
    if match.group('code'):
        return f'<code>{escape_html(match.group("code_body"))}</code>'

    url = match.group('autolink')
    trailing = ''
    while url and url[-1] in AUTOLINK_TRAILING:
        trailing = url[-1] + trailing
        url = url[:-1]
    if not url.split('://', 1)[1]:
        return escape_html(match.group('autolink'))
    return (
        f'<a href="{escape_attr(url)}" {LINK_ATTRS}>{escape_html(url)}</a>'
        f'{escape_html(trailing)}'
    )


def process_inline(text: str) -> str:
    """
    Convert the inline constructs of one line or block of text to HTML.

    Precedence at any position: image, link, code span, bare URL. Text
    outside a recognised span is HTML-escaped, so malformed constructs
    (unbalanced brackets or backticks) come out as plain escaped text.
    """
    parts: list[str] = []
    pos = 0
    for match in INLINE_PATTERN.finditer(text):
        parts.append(escape_html(text[pos:match.start()]))
        parts.append(_render_match(match))
        pos = match.end()
    parts.append(escape_html(text[pos:]))
    return ''.join(parts)
