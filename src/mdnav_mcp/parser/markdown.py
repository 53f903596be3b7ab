"""Line-oriented Markdown to HTML conversion."""

import re

from .inline import escape_html, process_inline

# Opening fences may carry an info string (```python), which is dropped;
# a closing fence is exactly three backticks.
FENCE_PATTERN = re.compile(r'^```[^`]*$')
INDENT = '    '
HEADING_PATTERN = re.compile(r'^(#{1,6})\s+(.*)$')
UNORDERED_ITEM_PATTERN = re.compile(r'^\s*[-*+] +(.*)$')
ORDERED_ITEM_PATTERN = re.compile(r'^\s*\d+\. +(.*)$')
DELIMITER_CELL_PATTERN = re.compile(r'^:?-+:?$')


def strip_front_matter(content: str) -> tuple[str, dict]:
    """
    Strip YAML front-matter from content.

    Returns:
        Tuple of (content without front-matter, extracted metadata dict)
    """
    metadata: dict = {}
    if not content.startswith('---'):
        return content, metadata

    # Find closing ---
    end_match = re.search(r'\n---\s*(\n|$)', content[3:])
    if not end_match:
        return content, metadata

    front_matter = content[3:3 + end_match.start()]
    rest = content[3 + end_match.end():]

    title_match = re.search(r'^title:\s*["\']?(.+?)["\']?\s*$', front_matter, re.MULTILINE)
    if title_match:
        metadata['title'] = title_match.group(1).strip()

    return rest, metadata


def preprocess_mdx(content: str) -> str:
    """
    Preprocess MDX content to standard markdown.

    Strips:
    - YAML front-matter
    - JSX import statements
    - JSX component tags (preserving text children)
    """
    content, _ = strip_front_matter(content)
    return strip_jsx(content)


def strip_jsx(content: str) -> str:
    """Remove MDX import/export lines and JSX component tags, keeping text children."""
    # import Foo from 'bar'
    content = re.sub(r'^import\s+.*$', '', content, flags=re.MULTILINE)

    # export default / export const
    content = re.sub(r'^export\s+(default\s+)?.*$', '', content, flags=re.MULTILINE)

    # <Component prop="value" />
    content = re.sub(r'<[A-Z][a-zA-Z]*\b[^>]*/>', '', content)

    # <Component prop="value"> ... </Component>, children kept
    content = re.sub(r'<[A-Z][a-zA-Z]*\b[^>]*>', '', content)
    content = re.sub(r'</[A-Z][a-zA-Z]*>', '', content)

    return content


def split_table_row(line: str) -> list[str]:
    """Split a table row into trimmed cells, dropping the outer pipes."""
    row = line.strip()
    if row.startswith('|'):
        row = row[1:]
    if row.endswith('|'):
        row = row[:-1]
    return [cell.strip() for cell in row.split('|')]


def is_delimiter_row(line: str) -> bool:
    """Check if a line is a table alignment row such as |:---|---:|."""
    if '-' not in line:
        return False
    cells = split_table_row(line)
    return bool(cells) and all(DELIMITER_CELL_PATTERN.match(cell) for cell in cells)


def column_alignment(cell: str) -> str:
    """Map a delimiter cell to left, center or right."""
    if cell.startswith(':') and cell.endswith(':') and len(cell) > 1:
        return 'center'
    if cell.endswith(':'):
        return 'right'
    return 'left'


def render_table(rows: list[str]) -> str:
    """
    Render collected table lines: header, delimiter, then body rows.

    The second line is never rendered. When it is not a valid delimiter row
    (or missing), every column is left-aligned.
    """
    if len(rows) > 1 and is_delimiter_row(rows[1]):
        alignments = [column_alignment(cell) for cell in split_table_row(rows[1])]
    else:
        alignments = []

    def render_row(line: str, tag: str) -> str:
        cells = []
        for i, cell in enumerate(split_table_row(line)):
            align = alignments[i] if i < len(alignments) else 'left'
            cells.append(f'<{tag} align="{align}">{process_inline(cell)}</{tag}>')
        return f'<tr>{"".join(cells)}</tr>'

    head = render_row(rows[0], 'th')
    body = ''.join(render_row(line, 'td') for line in rows[2:])
    return f'<table><thead>{head}</thead><tbody>{body}</tbody></table>'


def _code_block(lines: list[str]) -> str:
    return '<pre><code>' + escape_html('\n'.join(lines)) + '</code></pre>'


def parse_markdown(document: str) -> str:
    """
    Convert a Markdown document to an HTML string.

    Each line is classified once, in priority order: code fence, fenced
    content, indented code, table, blockquote, unordered item, ordered
    item, heading, blank, paragraph text. A line that matches nothing more
    specific always ends up as paragraph text, so the conversion never
    fails on well-typed input. Each list item line becomes its own list
    element.
    """
    lines = re.split(r'\r?\n', document)
    blocks: list[str] = []
    paragraph: list[str] = []
    fenced: list[str] = []
    in_fence = False

    def flush_paragraph():
        if paragraph:
            blocks.append(f'<p>{" ".join(paragraph)}</p>')
            paragraph.clear()

    i = 0
    while i < len(lines):
        line = lines[i]

        if FENCE_PATTERN.match(line.rstrip()) and (not in_fence or line.rstrip() == '```'):
            if in_fence:
                blocks.append(_code_block(fenced))
                fenced.clear()
            else:
                flush_paragraph()
            in_fence = not in_fence
            i += 1
            continue

        if in_fence:
            fenced.append(line)
            i += 1
            continue

        if line.startswith(INDENT) and line.strip() and not paragraph:
            code = [line[len(INDENT):]]
            i += 1
            while i < len(lines):
                if lines[i].startswith(INDENT) and lines[i].strip():
                    code.append(lines[i][len(INDENT):])
                    i += 1
                    continue
                # Blank lines stay in the block only when more code follows
                j = i
                while j < len(lines) and not lines[j].strip():
                    j += 1
                if j > i and j < len(lines) and lines[j].startswith(INDENT):
                    code.extend(blank[len(INDENT):] for blank in lines[i:j])
                    i = j
                    continue
                break
            blocks.append(_code_block(code))
            continue

        if '|' in line:
            flush_paragraph()
            rows = [line]
            i += 1
            while i < len(lines) and '|' in lines[i]:
                rows.append(lines[i])
                i += 1
            blocks.append(render_table(rows))
            continue

        if line.strip().startswith('>'):
            flush_paragraph()
            quoted = []
            while i < len(lines) and lines[i].strip().startswith('>'):
                text = lines[i].strip()[1:]
                if text.startswith(' '):
                    text = text[1:]
                quoted.append(text)
                i += 1
            blocks.append('<blockquote>' + process_inline('\n'.join(quoted)) + '</blockquote>')
            continue

        item = UNORDERED_ITEM_PATTERN.match(line)
        if item:
            flush_paragraph()
            blocks.append(f'<ul><li>{process_inline(item.group(1))}</li></ul>')
            i += 1
            continue

        item = ORDERED_ITEM_PATTERN.match(line)
        if item:
            flush_paragraph()
            blocks.append(f'<ol><li>{process_inline(item.group(1))}</li></ol>')
            i += 1
            continue

        heading = HEADING_PATTERN.match(line)
        if heading:
            flush_paragraph()
            level = len(heading.group(1))
            blocks.append(f'<h{level}>{process_inline(heading.group(2).strip())}</h{level}>')
        elif not line.strip():
            flush_paragraph()
        else:
            paragraph.append(process_inline(line.rstrip()))
        i += 1

    flush_paragraph()
    if in_fence:
        blocks.append(_code_block(fenced))

    return ''.join(blocks)
