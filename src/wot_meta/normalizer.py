"""Turn raw table rows into Field records.

Prop rows are ``[name, description, type, values, default, version]``. A name
cell may list aliases (``v-model / modelValue``); every alias becomes its own
Field. When one of the two-way-binding spellings appears, the missing ones
are synthesized so all three can be looked up.
"""
import re
from typing import List, Optional, Sequence, Tuple

from .config import BINDING_NAMES, BINDING_NOTE
from .models import Field, FieldType

RawTableRow = Sequence[str]

BINDING_NAME_SET = frozenset(BINDING_NAMES)

EVENT_VERSION_INDEX = 3
SLOT_VERSION_INDEX = 2
EXTERNAL_CLASS_VERSION_INDEX = 2


def camel_to_kebab(name: str) -> str:
    return re.sub(r'([a-z0-9])([A-Z])', r'\1-\2', name).lower()


def kebab_to_camel(name: str) -> str:
    return re.sub(r'-([a-z])', lambda m: m.group(1).upper(), name)


def _cell(row: RawTableRow, index: int) -> str:
    return row[index].strip() if index < len(row) else ''


def optional_cell(row: RawTableRow, index: int) -> Optional[str]:
    """Cell text, or None when the cell is missing, empty or ``-``."""
    value = _cell(row, index)
    if not value or value == '-':
        return None
    return value


def split_aliases(name_cell: str) -> List[str]:
    names = [name.replace('`', '').strip() for name in name_cell.split('/')]
    return [name for name in names if name]


def infer_type(type_cell: str, values_cell: str) -> Tuple[FieldType, str, Optional[Tuple[str, ...]]]:
    raw_type = type_cell.lower() or 'string'
    if raw_type == 'string' and values_cell and values_cell != '-' and '/' in values_cell:
        values = tuple(v.strip() for v in values_cell.split('/') if v.strip() and v.strip() != '-')
        if values:
            return FieldType.ENUM, raw_type, values
    return FieldType.coerce(raw_type), raw_type, None


def binding_description(description: str) -> str:
    return f'{description}\n\n{BINDING_NOTE}'


def normalize_prop_row(row: RawTableRow) -> List[Field]:
    names = split_aliases(_cell(row, 0))
    if not names:
        return []
    description = _cell(row, 1)
    field_type, raw_type, values = infer_type(_cell(row, 2), _cell(row, 3))
    default = optional_cell(row, 4)
    version = optional_cell(row, 5)

    def make(name: str, desc: str) -> Field:
        return Field(
            name=name,
            description=desc,
            type=field_type,
            raw_type=raw_type,
            values=values,
            default=default,
            version=version,
        )

    fields = [make(name, description if i == 0 else binding_description(description)) for i, name in enumerate(names)]
    if BINDING_NAME_SET.intersection(names):
        missing = [name for name in BINDING_NAMES if name not in names]
        fields.extend(make(name, binding_description(description)) for name in missing)
    return fields


def normalize_prop_rows(rows: Sequence[RawTableRow]) -> Tuple[Field, ...]:
    return tuple(field for row in rows for field in normalize_prop_row(row))


def normalize_entry_row(row: RawTableRow, version_index: int) -> Optional[Field]:
    """Events, slots and external classes: name, description, version."""
    name = _cell(row, 0)
    if not name:
        return None
    return Field(name=name, description=_cell(row, 1), version=optional_cell(row, version_index))


def normalize_entry_rows(rows: Sequence[RawTableRow], version_index: int) -> Tuple[Field, ...]:
    entries = (normalize_entry_row(row, version_index) for row in rows)
    return tuple(entry for entry in entries if entry is not None)
