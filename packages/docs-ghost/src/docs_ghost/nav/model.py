from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Union

from ..core.yaml_utils import INCLUDE_TAG
from ..errors import AuditError


@dataclass(frozen=True)
class IncludedNav:
    """The nav tree of another subsite, spliced in under an include page."""

    config_path: Path
    items: tuple[NavItem, ...]

    @property
    def root(self) -> Path:
        return self.config_path.parent


@dataclass(frozen=True)
class Page:
    title: str
    target: str
    included: IncludedNav | None = None

    @property
    def include_target(self) -> str | None:
        return parse_include_target(self.target)


@dataclass(frozen=True)
class Section:
    title: str
    children: tuple[NavItem, ...]


@dataclass(frozen=True)
class PlainPath:
    target: str


NavItem = Union[Page, Section, PlainPath]


@dataclass(frozen=True)
class NavTree:
    config_path: Path
    items: tuple[NavItem, ...]

    @property
    def root(self) -> Path:
        return self.config_path.parent


def parse_include_target(value: str) -> str | None:
    trimmed = value.strip()
    if not trimmed.startswith(INCLUDE_TAG):
        return None
    return trimmed[len(INCLUDE_TAG):].strip().strip("\"'")


def require_included(page: Page) -> IncludedNav:
    if page.included is None:
        raise AuditError(
            f"include directive `{page.target}` under `{page.title}` was not loaded; build the tree with load_nav()",
            kind="nav_invalid",
        )
    return page.included
