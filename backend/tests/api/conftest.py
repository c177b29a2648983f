"""API test fixtures — a real app over a temporary asset tree.

Invariants:
    - Every test gets its own INI, sources and output directory
    - Requests go through httpx ASGITransport (no network, no lifespan)
"""

import textwrap

import pytest
from httpx import ASGITransport, AsyncClient

from miniasset.config import Settings
from miniasset.main import create_app


@pytest.fixture
def asset_tree(tmp_path):
    (tmp_path / "js").mkdir()
    (tmp_path / "css").mkdir()
    (tmp_path / "js" / "base.js").write_text("var base = 1;", encoding="utf-8")
    (tmp_path / "js" / "app.js").write_text("var app = 2;", encoding="utf-8")
    (tmp_path / "css" / "site.css").write_text("body { margin: 0; }", encoding="utf-8")
    (tmp_path / "assets.ini").write_text(textwrap.dedent("""
        [js]
        paths = js

        [css]
        paths = css

        [app.js]
        files = base.js, app.js

        [site.css]
        files = site.css

        [broken.js]
        files = missing.js
    """), encoding="utf-8")
    return tmp_path


@pytest.fixture
def settings(asset_tree):
    return Settings(
        asset_config_path=str(asset_tree / "assets.ini"),
        asset_output_dir=str(asset_tree / "out"),
    )


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
async def client(app):
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c
