import re
from typing import List, Optional

from .headings import locate_heading
from .logging_utils import get_logger

logger = get_logger(__name__)

HTML_TAG_RE = re.compile(r'<!--.*?-->|</?[A-Za-z][A-Za-z0-9-]*(?:\s[^<>]*)?/?>', re.DOTALL)
HEADING_LINE_RE = re.compile(r'^#{1,6}[ \t]', re.MULTILINE)
BLANK_LINE_RE = re.compile(r'\n[ \t]*\n')
CELL_SPLIT_RE = re.compile(r'(?<!\\)\|')
SEPARATOR_RE = re.compile(r'[\s:\-]*')


def strip_html(raw: str) -> str:
    """Drop inline HTML tags, keeping the text they wrap."""
    return HTML_TAG_RE.sub('', raw)


def is_separator_row(line: str) -> bool:
    return SEPARATOR_RE.fullmatch(line.replace('|', '')) is not None


def split_row(line: str) -> List[str]:
    cells = [cell.strip().replace('\\|', '|') for cell in CELL_SPLIT_RE.split(line.strip())]
    if cells and cells[0] == '':
        cells = cells[1:]
    if cells and cells[-1] == '':
        cells = cells[:-1]
    return cells


def table_lines(block: str) -> List[str]:
    return [line for line in strip_html(block).split('\n') if line.strip() and '|' in line]


def parse_table_block(block: str) -> List[List[str]]:
    """Data rows of the pipe table in ``block``; header and separators dropped."""
    lines = table_lines(block)
    if len(lines) < 3:
        logger.debug('table has %d pipe lines, need at least 3', len(lines))
        return []
    rows: List[List[str]] = []
    for line in lines[1:]:
        if is_separator_row(line):
            continue
        cells = split_row(line)
        if not any(cells):
            continue
        rows.append(cells)
    return rows


def _next_heading(text: str, start: int) -> int:
    m = HEADING_LINE_RE.search(text, start)
    return m.start() if m else len(text)


def block_end(text: str, start: int) -> int:
    """End of the block that starts at ``start``: next blank line or next heading."""
    end = _next_heading(text, start)
    blank = BLANK_LINE_RE.search(text, start, end)
    return blank.start() if blank else end


def slice_table(text: str, offset: int) -> List[List[str]]:
    # the table must start before the next section heading
    pipe = text.find('|', offset, _next_heading(text, offset))
    if pipe == -1:
        return []
    return parse_table_block(text[pipe:block_end(text, pipe)])


def extract_section_rows(text: str, section: str, component_name: Optional[str] = None) -> List[List[str]]:
    offset = locate_heading(text, section, component_name)
    if offset is None:
        return []
    return slice_table(text, offset)
