from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

from ..core.paths import DOCS_DIRNAME, normalize_path
from .model import NavItem, Page, Section, require_included


def collect_pages(items: Iterable[NavItem], prefix: Path) -> set[Path]:
    """Filesystem paths of every content leaf, each under its subsite's `docs/`."""
    pages: set[Path] = set()
    _collect(items, prefix, pages)
    return pages


def _collect(items: Iterable[NavItem], prefix: Path, pages: set[Path]) -> None:
    for item in items:
        if isinstance(item, Section):
            _collect(item.children, prefix, pages)
        elif isinstance(item, Page) and item.include_target is not None:
            included = require_included(item)
            _collect(included.items, included.root, pages)
        else:
            pages.add(normalize_path(prefix / DOCS_DIRNAME / item.target))


def include_roots(items: Iterable[NavItem], prefix: Path) -> list[Path]:
    roots: set[Path] = set()
    _roots(items, prefix, roots)
    return sorted(roots)


def _roots(items: Iterable[NavItem], prefix: Path, roots: set[Path]) -> None:
    for item in items:
        if isinstance(item, Section):
            _roots(item.children, prefix, roots)
        elif isinstance(item, Page) and item.include_target is not None:
            root = normalize_path(prefix / item.include_target).parent
            roots.add(root)
            if item.included is not None:
                _roots(item.included.items, item.included.root, roots)


def missing_files(paths: Iterable[Path]) -> list[Path]:
    return sorted(p for p in paths if not p.is_file())
