from __future__ import annotations

import shutil
from pathlib import Path

import pytest

from wot_meta.config import DOCS_DIR

BUTTON_PAGE = """
<html>
<head><title>Button</title><script>window.__DATA__ = {}</script></head>
<body>
<nav class="VPNav">导航菜单</nav>
<main>
<div class="vp-doc">
<h1 id="button">Button 按钮<a class="header-anchor" href="#button">#</a></h1>
<p>按钮用于触发一个操作。</p>
<h2 id="attributes">Attributes<a class="header-anchor" href="#attributes">#</a></h2>
<table>
<thead><tr><th>参数</th><th>说明</th><th>类型</th><th>可选值</th><th>默认值</th><th>最低版本</th></tr></thead>
<tbody>
<tr><td>size</td><td>按钮尺寸</td><td>string</td><td>small / medium / large</td><td>medium</td><td>1.0.0</td></tr>
<tr><td>disabled</td><td>禁用按钮</td><td>boolean</td><td></td><td>false</td><td></td></tr>
</tbody>
</table>
<h2 id="events">Events<a class="header-anchor" href="#events">#</a></h2>
<table>
<thead><tr><th>事件名称</th><th>说明</th><th>参数</th><th>最低版本</th></tr></thead>
<tbody>
<tr><td>click</td><td>点击事件</td><td>event</td><td>1.0.0</td></tr>
</tbody>
</table>
</div>
</main>
<footer>版权信息</footer>
</body>
</html>
"""


@pytest.fixture
def bundled_docs() -> Path:
    return DOCS_DIR


@pytest.fixture
def docs_dir(tmp_path: Path) -> Path:
    """A private copy of the bundled documents."""
    target = tmp_path / "component"
    shutil.copytree(DOCS_DIR, target)
    return target


@pytest.fixture
def button_page() -> str:
    return BUTTON_PAGE
