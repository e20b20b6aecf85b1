from pathlib import Path

DOC_HOST = 'https://wot-design-uni.cn'
DOC_PAGE_PATH = '/component/{name}.html'

# Abort threshold for a single documentation fetch.
NETWORK_TIMEOUT_MS = 5000

# Primary content region of a hosted page, strongest first.
CONTENT_SELECTORS = ('main', '.content-container', '.vp-doc', 'body')

# Bundled offline copies, one <name>.md per documentation page.
DOCS_DIR = Path(__file__).resolve().parent / 'component'

HEADERS = {'User-Agent': 'Mozilla/5.0 (Wot Meta Fetcher)'}

TAG_PREFIX = 'wd-'

BINDING_NOTE = '> 该属性支持 `v-model` 双向绑定'

# Bare marker, kebab-case attribute, camelCase attribute.
BINDING_NAMES = ('v-model', 'model-value', 'modelValue')

SECTION_ATTRIBUTES = 'Attributes'
SECTION_EVENTS = 'Events'
SECTION_SLOT = 'Slot'
SECTION_SLOTS = 'Slots'
SECTION_EXTERNAL_CLASSES = '外部样式类'
DATA_STRUCTURE_SUFFIX = '数据结构'


def doc_url(name: str) -> str:
    return DOC_HOST + DOC_PAGE_PATH.format(name=name)


def timeout_seconds(timeout_ms: int = NETWORK_TIMEOUT_MS) -> float:
    return timeout_ms / 1000
