import re
from typing import List, Tuple

from .config import DATA_STRUCTURE_SUFFIX
from .logging_utils import get_logger
from .models import DataStructure, DataStructureField
from .normalizer import optional_cell
from .tables import parse_table_block, table_lines

logger = get_logger(__name__)

DATA_STRUCTURE_HEADING_RE = re.compile(rf'^##[ \t]*([^#\s][^\n]*?{DATA_STRUCTURE_SUFFIX})[ \t]*$', re.MULTILINE)
SECTION_BOUNDARY_RE = re.compile(r'^#{2,3}[ \t]', re.MULTILINE)


def parse_data_structure_fields(block: str) -> Tuple[DataStructureField, ...]:
    fields: List[DataStructureField] = []
    for row in parse_table_block(block):
        if len(row) < 3:
            continue
        fields.append(DataStructureField(
            name=row[0],
            description=row[1],
            type=row[2],
            version=optional_cell(row, 3),
        ))
    return tuple(fields)


def extract_data_structures(text: str) -> Tuple[DataStructure, ...]:
    """Every ``## <Name>数据结构`` table in the document, in document order."""
    structures: List[DataStructure] = []
    for m in DATA_STRUCTURE_HEADING_RE.finditer(text):
        boundary = SECTION_BOUNDARY_RE.search(text, m.end())
        block = text[m.end():boundary.start() if boundary else len(text)]
        if len(table_lines(block)) < 3:
            logger.debug('skipping %r: no table below heading', m.group(1))
            continue
        structures.append(DataStructure(name=m.group(1).strip(), fields=parse_data_structure_fields(block)))
    return tuple(structures)
