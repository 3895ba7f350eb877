from __future__ import annotations

import socket
import textwrap
from collections.abc import Callable
from pathlib import Path

import pytest
from hypothesis import settings

_ALLOWED_MARKERS = {"unit", "integration", "slow"}

settings.register_profile("docs-ghost", deadline=None, max_examples=200)
settings.load_profile("docs-ghost")

BuildTree = Callable[[dict[str, str]], Path]


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    for item in items:
        names = {mark.name for mark in item.iter_markers()}
        if not names.intersection(_ALLOWED_MARKERS):
            item.add_marker("unit")


@pytest.fixture(autouse=True)
def no_network_for_unit(request: pytest.FixtureRequest, monkeypatch: pytest.MonkeyPatch) -> None:
    if request.node.get_closest_marker("integration") or request.node.get_closest_marker("slow"):
        return

    def _blocked(*_args: object, **_kwargs: object) -> socket.socket:
        raise RuntimeError("network disabled in unit tests")

    def _blocked_connect(*_args: object, **_kwargs: object) -> None:
        raise RuntimeError("network disabled in unit tests")

    monkeypatch.setattr(socket, "create_connection", _blocked)
    monkeypatch.setattr(socket.socket, "connect", _blocked_connect)


@pytest.fixture
def build_tree(tmp_path: Path) -> BuildTree:
    """Write `{relative path: content}` under a fresh monorepo root and return the root."""
    root = tmp_path / "site"
    root.mkdir()

    def _build(files: dict[str, str]) -> Path:
        for rel, content in files.items():
            path = root / rel
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(textwrap.dedent(content), encoding="utf-8")
        return root

    return _build


@pytest.fixture
def guide_site(build_tree: BuildTree) -> Path:
    """Two subsites stitched together by the top-level nav."""
    return build_tree(
        {
            "mkdocs.yml": """\
                site_name: Docs
                nav:
                  - Guide: '!include ./guide/mkdocs.yml'
                  - Reference: '!include ./reference/mkdocs.yml'
            """,
            "guide/mkdocs.yml": """\
                site_name: Guide
                nav:
                  - Home: index.md
                  - Config:
                      - Output: config/output.md
            """,
            "guide/docs/index.md": "# Guide\n\nSee [extra](extra.md) and [the API](../../reference/api.md).\n",
            "guide/docs/extra.md": "# Extra\n",
            "guide/docs/lonely.md": "# Nobody links here\n",
            "guide/docs/index-print.md": "# Print view\n",
            "guide/docs/config/output.md": "# Output\n\nCompare with [the editor](../editor.md).\n",
            "guide/docs/config/editor.md": "# Editor\n",
            "reference/mkdocs.yml": """\
                site_name: Reference
                nav:
                  - Overview: index.md
            """,
            "reference/docs/index.md": "# Reference\n",
            "reference/docs/api.md": "# API\n",
        }
    )
