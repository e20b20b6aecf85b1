import asyncio
import re
from pathlib import Path
from typing import Optional, Tuple

import html2text
import httpx
import requests
from bs4 import BeautifulSoup

from .config import CONTENT_SELECTORS, DOCS_DIR, HEADERS, doc_url, timeout_seconds
from .errors import ConversionError, FetchError
from .logging_utils import get_logger

logger = get_logger(__name__)

HTML_CONTENT_TYPES = ('text/html', 'application/xhtml+xml')
# page chrome that must not leak into headings or tables
STRIP_SELECTORS = 'script, style, noscript, a.header-anchor'


def resolve_doc_name(component_name: str, doc_source: Optional[str] = None) -> str:
    return doc_source or component_name


def is_html(content_type: str) -> bool:
    return content_type.split(';')[0].strip().lower() in HTML_CONTENT_TYPES


def fetch_url(url: str, *, timeout: Optional[float] = None) -> Tuple[str, str]:
    """Single GET; returns (body, content type). No retry."""
    timeout = timeout_seconds() if timeout is None else timeout
    try:
        resp = requests.get(url, headers=HEADERS, timeout=timeout)
    except requests.RequestException as e:
        raise FetchError(f'Failed {url}: {e}') from e
    if not 200 <= resp.status_code < 300:
        raise FetchError(f'Failed {url} status={resp.status_code}')
    return resp.text, resp.headers.get('content-type', '')


async def fetch_url_async(url: str, *, timeout: Optional[float] = None,
                          client: Optional[httpx.AsyncClient] = None) -> Tuple[str, str]:
    timeout = timeout_seconds() if timeout is None else timeout

    async def get(c: httpx.AsyncClient) -> httpx.Response:
        return await asyncio.wait_for(
            c.get(url, headers=HEADERS, timeout=timeout, follow_redirects=True), timeout)

    try:
        if client is None:
            async with httpx.AsyncClient() as own_client:
                resp = await get(own_client)
        else:
            resp = await get(client)
    except asyncio.TimeoutError as e:
        raise FetchError(f'Timed out {url} after {timeout}s') from e
    except httpx.HTTPError as e:
        raise FetchError(f'Failed {url}: {e}') from e
    if not resp.is_success:
        raise FetchError(f'Failed {url} status={resp.status_code}')
    return resp.text, resp.headers.get('content-type', '')


def extract_content_region(soup: BeautifulSoup):
    for selector in CONTENT_SELECTORS:
        region = soup.select_one(selector)
        if region is not None:
            return region
    return soup


def _converter() -> html2text.HTML2Text:
    h = html2text.HTML2Text()
    h.body_width = 0
    h.unicode_snob = True
    h.ignore_images = True
    h.ignore_tables = False
    h.bypass_tables = False
    return h


def html_to_markdown(html: str) -> str:
    """Convert the primary content region of a page to Markdown, tables kept as pipe rows."""
    try:
        soup = BeautifulSoup(html, 'lxml')
        region = extract_content_region(soup)
        for el in region.select(STRIP_SELECTORS):
            el.decompose()
        markdown = _converter().handle(str(region))
    except Exception as e:
        raise ConversionError(f'HTML conversion failed: {e}') from e
    markdown = re.sub(r'\n{3,}', '\n\n', markdown.replace('\u200b', '')).strip()
    if not markdown:
        raise ConversionError('content region is empty')
    return markdown + '\n'


def looks_like_html(body: str) -> bool:
    head = body.lstrip()[:256].lower()
    return head.startswith(('<!doctype html', '<html'))


def _as_markdown(body: str, content_type: str) -> str:
    # servers that omit content-type still send the rendered page
    if is_html(content_type) or (not content_type.strip() and looks_like_html(body)):
        return html_to_markdown(body)
    return body


def fetch_online_doc(name: str, *, timeout: Optional[float] = None) -> str:
    body, content_type = fetch_url(doc_url(name), timeout=timeout)
    return _as_markdown(body, content_type)


async def fetch_online_doc_async(name: str, *, timeout: Optional[float] = None,
                                 client: Optional[httpx.AsyncClient] = None) -> str:
    body, content_type = await fetch_url_async(doc_url(name), timeout=timeout, client=client)
    return _as_markdown(body, content_type)


def local_doc_path(name: str, docs_dir: Optional[Path] = None) -> Path:
    return Path(docs_dir or DOCS_DIR) / f'{name}.md'


def read_local_doc(name: str, *, docs_dir: Optional[Path] = None) -> str:
    path = local_doc_path(name, docs_dir)
    if not path.is_file():
        logger.warning('local document not found: %s', path)
        return ''
    try:
        return path.read_text(encoding='utf-8')
    except (OSError, UnicodeDecodeError) as e:
        logger.error('failed to read %s: %s', path, e)
        return ''


async def read_local_doc_async(name: str, *, docs_dir: Optional[Path] = None) -> str:
    return await asyncio.to_thread(read_local_doc, name, docs_dir=docs_dir)


def load_component_doc(component_name: str, doc_source: Optional[str] = None, *,
                       docs_dir: Optional[Path] = None) -> str:
    """Local copy only."""
    return read_local_doc(resolve_doc_name(component_name, doc_source), docs_dir=docs_dir)


async def load_component_doc_async(component_name: str, doc_source: Optional[str] = None, *,
                                   docs_dir: Optional[Path] = None) -> str:
    return await read_local_doc_async(resolve_doc_name(component_name, doc_source), docs_dir=docs_dir)


def acquire_doc(component_name: str, doc_source: Optional[str] = None, *,
                docs_dir: Optional[Path] = None, timeout: Optional[float] = None) -> str:
    """Hosted page first; the local copy on any failure of the single network attempt."""
    name = resolve_doc_name(component_name, doc_source)
    try:
        return fetch_online_doc(name, timeout=timeout)
    except Exception as e:
        logger.info('online fetch of %s failed, using local copy: %s', name, e)
    return read_local_doc(name, docs_dir=docs_dir)


async def acquire_doc_async(component_name: str, doc_source: Optional[str] = None, *,
                            docs_dir: Optional[Path] = None, timeout: Optional[float] = None,
                            client: Optional[httpx.AsyncClient] = None) -> str:
    name = resolve_doc_name(component_name, doc_source)
    try:
        return await fetch_online_doc_async(name, timeout=timeout, client=client)
    except Exception as e:
        logger.info('online fetch of %s failed, using local copy: %s', name, e)
    return await read_local_doc_async(name, docs_dir=docs_dir)
