from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional, Tuple

from .config import TAG_PREFIX, doc_url


class FieldType(str, Enum):
    STRING = 'string'
    NUMBER = 'number'
    BOOLEAN = 'boolean'
    ENUM = 'enum'

    @classmethod
    def coerce(cls, raw: str) -> 'FieldType':
        try:
            return cls(raw)
        except ValueError:
            return cls.STRING


@dataclass(frozen=True)
class Field:
    """One attribute, event, slot or external class of a component.

    ``raw_type`` keeps the type cell as written; ``type`` is always one of
    the closed FieldType members. An ``enum`` field always carries values.
    """

    name: str
    description: str = ''
    type: FieldType = FieldType.STRING
    raw_type: str = 'string'
    values: Optional[Tuple[str, ...]] = None
    default: Optional[str] = None
    version: Optional[str] = None

    def __post_init__(self):
        if self.type is FieldType.ENUM and not self.values:
            raise ValueError(f'enum field {self.name!r} has no values')

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {'name': self.name, 'type': self.type.value, 'description': self.description}
        if self.values:
            data['values'] = list(self.values)
        if self.default is not None:
            data['default'] = self.default
        if self.version is not None:
            data['version'] = self.version
        return data

    def to_entry_dict(self) -> Dict[str, Any]:
        # events, slots and external classes carry no type information
        data: Dict[str, Any] = {'name': self.name, 'description': self.description}
        if self.version is not None:
            data['version'] = self.version
        return data


@dataclass(frozen=True)
class DataStructureField:
    name: str
    type: str
    description: str = ''
    version: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {'name': self.name, 'type': self.type, 'description': self.description}
        if self.version is not None:
            data['version'] = self.version
        return data


@dataclass(frozen=True)
class DataStructure:
    name: str
    fields: Tuple[DataStructureField, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {'name': self.name, 'fields': [f.to_dict() for f in self.fields]}


@dataclass(frozen=True)
class ComponentMeta:
    name: str
    props: Tuple[Field, ...] = ()
    events: Tuple[Field, ...] = ()
    slots: Optional[Tuple[Field, ...]] = None
    external_classes: Optional[Tuple[Field, ...]] = None
    data_structures: Optional[Tuple[DataStructure, ...]] = None
    documentation: str = ''
    doc_source: Optional[str] = None

    @property
    def doc_url(self) -> str:
        page = self.doc_source
        if not page:
            page = self.name[len(TAG_PREFIX):] if self.name.startswith(TAG_PREFIX) else self.name
        return doc_url(page)

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            'name': self.name,
            'props': [p.to_dict() for p in self.props],
            'events': [e.to_entry_dict() for e in self.events],
        }
        if self.slots is not None:
            data['slots'] = [s.to_entry_dict() for s in self.slots]
        if self.external_classes is not None:
            data['externalClasses'] = [c.to_entry_dict() for c in self.external_classes]
        if self.data_structures is not None:
            data['dataStructures'] = [d.to_dict() for d in self.data_structures]
        data['documentation'] = self.documentation
        return data
