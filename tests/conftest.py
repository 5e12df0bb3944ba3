"""Configure tests."""

import asyncio

import pytest


@pytest.fixture
def asset_tree(tmp_path):
    """Create a small asset directory with nested and hidden entries."""
    root = tmp_path / "site"
    (root / "sub").mkdir(parents=True)
    (root / ".git").mkdir()

    (root / "a.txt").write_text("alpha file\n")
    (root / "sub" / "b.txt").write_text("bravo file\n")
    (root / ".hidden").write_text("secret")
    (root / ".git" / "config").write_text("[core]")

    return root


@pytest.fixture
def text_file(tmp_path):
    """Create a single JSON file with known content."""
    path = tmp_path / "data.json"
    path.write_text('{"hello": "world"}\n')
    return path


@pytest.fixture
def run():
    """Run a coroutine to completion in a fresh event loop."""

    def _run(coro):
        return asyncio.run(coro)

    return _run
