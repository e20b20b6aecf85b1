"""Owned cache of ComponentMeta records for completion/hover style lookups.

A registry is built once (``load`` or ``load_async``) and dropped with
``clear``. Nothing is shared between registries.
"""
import asyncio
from pathlib import Path
from typing import Dict, Iterable, List, Optional

import httpx

from .component_map import COMPONENT_MAP, ComponentEntry, normalize_tag
from .logging_utils import get_logger
from .models import ComponentMeta, Field
from .normalizer import camel_to_kebab, kebab_to_camel
from .schema import load_component_schema, load_component_schema_async

logger = get_logger(__name__)


def _name_forms(name: str) -> set:
    return {name, camel_to_kebab(name), kebab_to_camel(name)}


def _match(fields: Iterable[Field], name: str) -> Optional[Field]:
    # exact spelling first, so 'modelValue' finds the modelValue alias itself
    fields = list(fields)
    exact = next((f for f in fields if f.name == name), None)
    if exact is not None:
        return exact
    wanted = _name_forms(name)
    return next((f for f in fields if _name_forms(f.name) & wanted), None)


class ComponentRegistry:
    def __init__(self, entries: Optional[List[ComponentEntry]] = None, *, online: bool = False,
                 docs_dir: Optional[Path] = None, timeout: Optional[float] = None):
        self.entries = list(entries if entries is not None else COMPONENT_MAP)
        self.online = online
        self.docs_dir = docs_dir
        self.timeout = timeout
        self._components: Dict[str, ComponentMeta] = {}

    def __len__(self) -> int:
        return len(self._components)

    def __contains__(self, tag: str) -> bool:
        return normalize_tag(tag) in self._components

    @property
    def loaded(self) -> bool:
        return bool(self._components)

    def load(self) -> 'ComponentRegistry':
        for entry in self.entries:
            self._components[entry.tag] = load_component_schema(
                entry.component_name, entry.doc_source,
                online=self.online, docs_dir=self.docs_dir, timeout=self.timeout)
        logger.debug('loaded %d components', len(self._components))
        return self

    async def load_async(self, client: Optional[httpx.AsyncClient] = None) -> 'ComponentRegistry':
        async def load_all(c: Optional[httpx.AsyncClient]) -> List[ComponentMeta]:
            return await asyncio.gather(*(
                load_component_schema_async(entry.component_name, entry.doc_source, online=self.online,
                                            docs_dir=self.docs_dir, timeout=self.timeout, client=c)
                for entry in self.entries
            ))

        if client is None and self.online:
            async with httpx.AsyncClient() as own_client:
                metas = await load_all(own_client)
        else:
            metas = await load_all(client)
        for entry, meta in zip(self.entries, metas):
            self._components[entry.tag] = meta
        logger.debug('loaded %d components', len(self._components))
        return self

    def clear(self) -> None:
        self._components.clear()

    def tags(self) -> List[str]:
        return list(self._components)

    def get(self, tag: str) -> Optional[ComponentMeta]:
        return self._components.get(normalize_tag(tag))

    def search(self, query: str) -> List[ComponentMeta]:
        query = query.strip().lower()
        return [meta for tag, meta in self._components.items() if query in tag]

    def find_prop(self, tag: str, attr_name: str) -> Optional[Field]:
        meta = self.get(tag)
        return _match(meta.props, attr_name) if meta else None

    def find_event(self, tag: str, event_name: str) -> Optional[Field]:
        meta = self.get(tag)
        return _match(meta.events, event_name) if meta else None

    def find_external_class(self, tag: str, class_name: str) -> Optional[Field]:
        meta = self.get(tag)
        if not meta or not meta.external_classes:
            return None
        return _match(meta.external_classes, class_name)
