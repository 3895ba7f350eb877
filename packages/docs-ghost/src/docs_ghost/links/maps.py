from __future__ import annotations

import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from pathlib import Path, PurePosixPath
from types import MappingProxyType

from ..core.paths import DOCS_DIRNAME, normalize_path, normalize_url, strip_extension
from ..nav.model import NavItem, Page, Section, require_included

_SLUG_RUN = re.compile(r"[^A-Za-z0-9]+")


@dataclass(frozen=True)
class LinkMaps:
    """Rendered site URL to source file and back. First registration wins."""

    url_to_src: Mapping[str, Path]
    src_to_url: Mapping[Path, str]


def slugify(title: str) -> str:
    return _SLUG_RUN.sub("-", title).strip("-").lower()


def build_link_maps(items: Iterable[NavItem], mkdocs_dir: Path) -> LinkMaps:
    site_root = normalize_path(mkdocs_dir)
    url_to_src: dict[str, Path] = {}
    src_to_url: dict[Path, str] = {}
    _build(items, site_root, site_root, "", url_to_src, src_to_url)
    return LinkMaps(url_to_src=MappingProxyType(url_to_src), src_to_url=MappingProxyType(src_to_url))


def _build(
    items: Iterable[NavItem],
    base_dir: Path,
    site_root: Path,
    url_prefix: str,
    url_to_src: dict[str, Path],
    src_to_url: dict[Path, str],
) -> None:
    for item in items:
        if isinstance(item, Section):
            _build(item.children, base_dir, site_root, _join(url_prefix, slugify(item.title)), url_to_src, src_to_url)
        elif isinstance(item, Page) and item.include_target is not None:
            included = require_included(item)
            child_prefix = url_prefix
            if included.root.is_relative_to(site_root):
                child_prefix = _join(url_prefix, included.root.relative_to(site_root).as_posix())
            _build(included.items, included.root, site_root, child_prefix, url_to_src, src_to_url)
        else:
            _insert(item.target, base_dir, url_prefix, url_to_src, src_to_url)


def _join(prefix: str, segment: str) -> str:
    return normalize_url(f"{prefix}/{segment}")


def _insert(
    nav_path: str,
    base_dir: Path,
    url_prefix: str,
    url_to_src: dict[str, Path],
    src_to_url: dict[Path, str],
) -> None:
    fs_path = normalize_path(base_dir / DOCS_DIRNAME / nav_path)
    if not url_prefix:
        rendered = normalize_url(strip_extension(nav_path))
    else:
        rendered = _join(url_prefix, PurePosixPath(nav_path).stem or nav_path)
    url_to_src.setdefault(rendered, fs_path)
    src_to_url.setdefault(fs_path, rendered)
