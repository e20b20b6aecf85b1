"""Assemble one ComponentMeta per component from its documentation page.

Loading never raises: a component whose page is missing or unparsable still
yields a record with its tag, empty props/events and whatever documentation
text was obtained.
"""
import asyncio
from pathlib import Path
from typing import Iterable, List, Optional, Tuple

import httpx

from .config import (
    SECTION_ATTRIBUTES,
    SECTION_EVENTS,
    SECTION_EXTERNAL_CLASSES,
    SECTION_SLOT,
    SECTION_SLOTS,
    TAG_PREFIX,
)
from .datastructures import extract_data_structures
from .fetcher import acquire_doc, acquire_doc_async, load_component_doc, load_component_doc_async
from .logging_utils import get_logger
from .models import ComponentMeta
from .normalizer import (
    EVENT_VERSION_INDEX,
    EXTERNAL_CLASS_VERSION_INDEX,
    SLOT_VERSION_INDEX,
    normalize_entry_rows,
    normalize_prop_rows,
)
from .tables import extract_section_rows

logger = get_logger(__name__)


def component_tag(component_name: str) -> str:
    return component_name if component_name.startswith(TAG_PREFIX) else TAG_PREFIX + component_name


def strip_tag_prefix(name: str) -> str:
    return name[len(TAG_PREFIX):] if name.startswith(TAG_PREFIX) else name


def _or_none(items: Tuple) -> Optional[Tuple]:
    return items if items else None


def build_component_meta(component_name: str, text: str, doc_source: Optional[str] = None) -> ComponentMeta:
    """Parse an already acquired document. Pure; the same input gives an equal record."""
    component_name = strip_tag_prefix(component_name)
    # sub-components documented in a parent's page are matched by their own name
    qualifier = component_name if doc_source else None
    body = text.replace('\r\n', '\n')

    def rows(section: str):
        return extract_section_rows(body, section, qualifier)

    slots = normalize_entry_rows(rows(SECTION_SLOT) + rows(SECTION_SLOTS), SLOT_VERSION_INDEX)
    external_classes = normalize_entry_rows(rows(SECTION_EXTERNAL_CLASSES), EXTERNAL_CLASS_VERSION_INDEX)
    return ComponentMeta(
        name=component_tag(component_name),
        props=normalize_prop_rows(rows(SECTION_ATTRIBUTES)),
        events=normalize_entry_rows(rows(SECTION_EVENTS), EVENT_VERSION_INDEX),
        slots=_or_none(slots),
        external_classes=_or_none(external_classes),
        data_structures=_or_none(extract_data_structures(body)),
        documentation=text,
        doc_source=doc_source,
    )


def empty_component_meta(component_name: str, documentation: str = '',
                         doc_source: Optional[str] = None) -> ComponentMeta:
    return ComponentMeta(
        name=component_tag(strip_tag_prefix(component_name)),
        props=(),
        events=(),
        documentation=documentation,
        doc_source=doc_source,
    )


def load_component_schema(component_name: str, doc_source: Optional[str] = None, *,
                          online: bool = False, docs_dir: Optional[Path] = None,
                          timeout: Optional[float] = None) -> ComponentMeta:
    component_name = strip_tag_prefix(component_name)
    text = ''
    try:
        if online:
            text = acquire_doc(component_name, doc_source, docs_dir=docs_dir, timeout=timeout)
        else:
            text = load_component_doc(component_name, doc_source, docs_dir=docs_dir)
        return build_component_meta(component_name, text, doc_source)
    except Exception:
        logger.exception('failed to load schema for %s', component_name)
        return empty_component_meta(component_name, text, doc_source)


async def load_component_schema_async(component_name: str, doc_source: Optional[str] = None, *,
                                      online: bool = True, docs_dir: Optional[Path] = None,
                                      timeout: Optional[float] = None,
                                      client: Optional[httpx.AsyncClient] = None) -> ComponentMeta:
    component_name = strip_tag_prefix(component_name)
    text = ''
    try:
        if online:
            text = await acquire_doc_async(component_name, doc_source, docs_dir=docs_dir,
                                           timeout=timeout, client=client)
        else:
            text = await load_component_doc_async(component_name, doc_source, docs_dir=docs_dir)
        return build_component_meta(component_name, text, doc_source)
    except Exception:
        logger.exception('failed to load schema for %s', component_name)
        return empty_component_meta(component_name, text, doc_source)


async def load_component_schemas_async(entries: Iterable[Tuple[str, Optional[str]]], *,
                                       online: bool = True, docs_dir: Optional[Path] = None,
                                       timeout: Optional[float] = None,
                                       client: Optional[httpx.AsyncClient] = None) -> List[ComponentMeta]:
    """Assemble independent components concurrently; results follow input order."""
    entries = list(entries)

    async def gather(c: Optional[httpx.AsyncClient]) -> List[ComponentMeta]:
        return list(await asyncio.gather(*(
            load_component_schema_async(name, doc_source, online=online, docs_dir=docs_dir,
                                        timeout=timeout, client=c)
            for name, doc_source in entries
        )))

    if client is not None or not online:
        return await gather(client)
    async with httpx.AsyncClient() as own_client:
        return await gather(own_client)


__all__ = [
    'build_component_meta',
    'component_tag',
    'empty_component_meta',
    'load_component_schema',
    'load_component_schema_async',
    'load_component_schemas_async',
    'strip_tag_prefix',
]
