from __future__ import annotations

from dataclasses import replace
from pathlib import Path
from typing import Any, Callable

import yaml

from ..core.paths import normalize_path
from ..core.yaml_utils import load_yaml
from ..errors import AuditError
from .model import IncludedNav, NavItem, NavTree, Page, PlainPath, Section


def load_nav(config_path: Path) -> NavTree:
    """Load `config_path` and splice every `!include`d nav into the tree."""
    path = normalize_path(Path(config_path).absolute())
    return NavTree(config_path=path, items=_load_items(path, ()))


def read_nav_config(path: Path) -> list[Any]:
    try:
        data = load_yaml(path)
    except (OSError, UnicodeDecodeError) as exc:
        raise AuditError(f"cannot read nav config {path}: {exc}", kind="nav_unreadable") from exc
    except yaml.YAMLError as exc:
        raise AuditError(f"malformed nav config {path}: {exc}", kind="nav_malformed") from exc
    if not isinstance(data, dict):
        raise AuditError(f"{path}: top level must be a mapping", kind="nav_invalid")
    if "nav" not in data:
        raise AuditError(f"{path}: missing `nav` key", kind="nav_invalid")
    nav = data["nav"]
    if not isinstance(nav, list):
        raise AuditError(f"{path}: `nav` must be a list", kind="nav_invalid")
    return nav


def _decode_pages(entry: Any, source: Path) -> list[NavItem] | None:
    if not isinstance(entry, dict) or not all(isinstance(v, str) for v in entry.values()):
        return None
    return [Page(title=str(title), target=target) for title, target in entry.items()]


def _decode_sections(entry: Any, source: Path) -> list[NavItem] | None:
    if not isinstance(entry, dict) or not all(isinstance(v, list) for v in entry.values()):
        return None
    return [Section(title=str(title), children=decode_nav(children, source)) for title, children in entry.items()]


def _decode_plain_path(entry: Any, source: Path) -> list[NavItem] | None:
    if not isinstance(entry, str):
        return None
    return [PlainPath(target=entry)]


# Order matters: a mapping of strings is a page list before it is anything else.
_DECODERS: tuple[Callable[[Any, Path], list[NavItem] | None], ...] = (
    _decode_pages,
    _decode_sections,
    _decode_plain_path,
)


def decode_nav(raw: list[Any], source: Path) -> tuple[NavItem, ...]:
    items: list[NavItem] = []
    for index, entry in enumerate(raw):
        for decoder in _DECODERS:
            decoded = decoder(entry, source)
            if decoded is not None:
                items.extend(decoded)
                break
        else:
            raise AuditError(
                f"{source}: nav entry {index} is not a page, a section or a path: {entry!r}",
                kind="nav_invalid",
            )
    return tuple(items)


def _load_items(path: Path, chain: tuple[Path, ...]) -> tuple[NavItem, ...]:
    if path in chain:
        cycle = " -> ".join(str(p) for p in (*chain, path))
        raise AuditError(f"include cycle detected: {cycle}", kind="include_cycle")
    items = decode_nav(read_nav_config(path), path)
    branch = (*chain, path)
    return tuple(_splice(item, path.parent, branch) for item in items)


def _splice(item: NavItem, base_dir: Path, chain: tuple[Path, ...]) -> NavItem:
    if isinstance(item, Page):
        target = item.include_target
        if target is None:
            return item
        include_path = normalize_path(base_dir / target)
        return replace(item, included=IncludedNav(config_path=include_path, items=_load_items(include_path, chain)))
    if isinstance(item, Section):
        return replace(item, children=tuple(_splice(child, base_dir, chain) for child in item.children))
    return item
