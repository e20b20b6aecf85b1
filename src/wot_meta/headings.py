"""Locate the heading that introduces a section table.

Three strategies are tried in order and the first hit wins:

* ``exact``   -- ``## TableCol Attributes``
* ``fuzzy``   -- ``## TableColumn Attributes`` (the Pascal name inside a word,
  optionally surrounded by other words)
* ``general`` -- ``## Attributes``

The component-qualified strategies only apply when a component name is given.
"""
import re
from typing import Callable, List, NamedTuple, Optional, Pattern, Tuple

from .logging_utils import get_logger

logger = get_logger(__name__)

_FLAGS = re.IGNORECASE | re.MULTILINE
_HEADING = r'^#{2,3}(?!#)[ \t]*'
_LINE_END = r'[ \t]*$'


class HeadingMatch(NamedTuple):
    strategy: str
    start: int
    end: int


def to_pascal_case(component_name: str) -> str:
    return ''.join(part[:1].upper() + part[1:] for part in component_name.split('-') if part)


def _exact(section: str, component_name: Optional[str]) -> Optional[Pattern[str]]:
    if not component_name:
        return None
    pascal = re.escape(to_pascal_case(component_name))
    return re.compile(rf'{_HEADING}{pascal}[ \t]+{re.escape(section)}{_LINE_END}', _FLAGS)


def _fuzzy(section: str, component_name: Optional[str]) -> Optional[Pattern[str]]:
    if not component_name:
        return None
    pascal = re.escape(to_pascal_case(component_name))
    return re.compile(
        rf'{_HEADING}(?:[^\n]*?[ \t])?\w*{pascal}\w*(?:[ \t]+[^\n]*?)?[ \t]+{re.escape(section)}{_LINE_END}',
        _FLAGS,
    )


def _general(section: str, component_name: Optional[str]) -> Optional[Pattern[str]]:
    return re.compile(rf'{_HEADING}{re.escape(section)}{_LINE_END}', _FLAGS)


HEADING_STRATEGIES: List[Tuple[str, Callable[[str, Optional[str]], Optional[Pattern[str]]]]] = [
    ('exact', _exact),
    ('fuzzy', _fuzzy),
    ('general', _general),
]


def find_heading(text: str, section: str, component_name: Optional[str] = None) -> Optional[HeadingMatch]:
    for strategy, build in HEADING_STRATEGIES:
        pattern = build(section, component_name)
        if pattern is None:
            continue
        m = pattern.search(text)
        if m:
            return HeadingMatch(strategy, m.start(), m.end())
    logger.debug('heading %r not found (component=%s)', section, component_name)
    return None


def locate_heading(text: str, section: str, component_name: Optional[str] = None) -> Optional[int]:
    """Offset just past the matched heading line, or None."""
    match = find_heading(text, section, component_name)
    return match.end if match else None
