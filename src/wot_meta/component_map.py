from typing import List, NamedTuple, Optional

from .config import TAG_PREFIX
from .normalizer import camel_to_kebab


class ComponentEntry(NamedTuple):
    tag: str
    # page the component is documented in, when it is not its own
    doc_source: Optional[str] = None

    @property
    def component_name(self) -> str:
        return component_name(self.tag)


def component_name(tag: str) -> str:
    return tag[len(TAG_PREFIX):] if tag.startswith(TAG_PREFIX) else tag


def normalize_tag(tag_or_name: str) -> str:
    """``WdButton``, ``wd-button`` and ``button`` all become ``wd-button``."""
    kebab = camel_to_kebab(tag_or_name.strip())
    return kebab if kebab.startswith(TAG_PREFIX) else TAG_PREFIX + kebab


COMPONENT_MAP: List[ComponentEntry] = [
    ComponentEntry('wd-action-sheet'),
    ComponentEntry('wd-backtop'),
    ComponentEntry('wd-badge'),
    ComponentEntry('wd-button'),
    ComponentEntry('wd-calendar'),
    ComponentEntry('wd-calendar-view'),
    ComponentEntry('wd-card'),
    ComponentEntry('wd-cell'),
    ComponentEntry('wd-cell-group', 'cell'),
    ComponentEntry('wd-checkbox'),
    ComponentEntry('wd-checkbox-group', 'checkbox'),
    ComponentEntry('wd-circle'),
    ComponentEntry('wd-col-picker'),
    ComponentEntry('wd-collapse'),
    ComponentEntry('wd-collapse-item', 'collapse'),
    ComponentEntry('wd-count-down'),
    ComponentEntry('wd-count-to'),
    ComponentEntry('wd-curtain'),
    ComponentEntry('wd-datetime-picker'),
    ComponentEntry('wd-datetime-picker-view'),
    ComponentEntry('wd-divider'),
    ComponentEntry('wd-drop-menu'),
    ComponentEntry('wd-drop-menu-item', 'drop-menu'),
    ComponentEntry('wd-fab'),
    ComponentEntry('wd-floating-panel'),
    ComponentEntry('wd-form'),
    ComponentEntry('wd-form-item', 'form'),
    ComponentEntry('wd-gap'),
    ComponentEntry('wd-grid'),
    ComponentEntry('wd-grid-item', 'grid'),
    ComponentEntry('wd-icon'),
    ComponentEntry('wd-img'),
    ComponentEntry('wd-img-cropper'),
    ComponentEntry('wd-index-bar'),
    ComponentEntry('wd-index-anchor', 'index-bar'),
    ComponentEntry('wd-input'),
    ComponentEntry('wd-input-number'),
    ComponentEntry('wd-keyboard'),
    ComponentEntry('wd-row', 'layout'),
    ComponentEntry('wd-col', 'layout'),
    ComponentEntry('wd-loading'),
    ComponentEntry('wd-loadmore'),
    ComponentEntry('wd-message-box'),
    ComponentEntry('wd-navbar'),
    ComponentEntry('wd-navbar-capsule'),
    ComponentEntry('wd-notice-bar'),
    ComponentEntry('wd-notify'),
    ComponentEntry('wd-number-keyboard'),
    ComponentEntry('wd-overlay'),
    ComponentEntry('wd-pagination'),
    ComponentEntry('wd-password-input'),
    ComponentEntry('wd-picker'),
    ComponentEntry('wd-picker-view'),
    ComponentEntry('wd-popover'),
    ComponentEntry('wd-popup'),
    ComponentEntry('wd-progress'),
    ComponentEntry('wd-radio'),
    ComponentEntry('wd-radio-group', 'radio'),
    ComponentEntry('wd-rate'),
    ComponentEntry('wd-resize'),
    ComponentEntry('wd-search'),
    ComponentEntry('wd-segmented'),
    ComponentEntry('wd-select-picker'),
    ComponentEntry('wd-sidebar'),
    ComponentEntry('wd-sidebar-item', 'sidebar'),
    ComponentEntry('wd-signature'),
    ComponentEntry('wd-skeleton'),
    ComponentEntry('wd-slider'),
    ComponentEntry('wd-sort-button'),
    ComponentEntry('wd-status-tip'),
    ComponentEntry('wd-steps'),
    ComponentEntry('wd-step', 'steps'),
    ComponentEntry('wd-sticky'),
    ComponentEntry('wd-sticky-box', 'sticky'),
    ComponentEntry('wd-swipe-action'),
    ComponentEntry('wd-swiper'),
    ComponentEntry('wd-switch'),
    ComponentEntry('wd-tabbar'),
    ComponentEntry('wd-tabbar-item', 'tabbar'),
    ComponentEntry('wd-table'),
    ComponentEntry('wd-table-col', 'table'),
    ComponentEntry('wd-tabs'),
    ComponentEntry('wd-tab', 'tabs'),
    ComponentEntry('wd-tag'),
    ComponentEntry('wd-text'),
    ComponentEntry('wd-textarea'),
    ComponentEntry('wd-toast'),
    ComponentEntry('wd-tooltip'),
    ComponentEntry('wd-tour'),
    ComponentEntry('wd-transition'),
    ComponentEntry('wd-upload'),
    ComponentEntry('wd-watermark'),
]


def find_entry(tag_or_name: str, entries: Optional[List[ComponentEntry]] = None) -> Optional[ComponentEntry]:
    tag = normalize_tag(tag_or_name)
    return next((e for e in (entries if entries is not None else COMPONENT_MAP) if e.tag == tag), None)
