from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path


@dataclass(frozen=True, order=True)
class BrokenLink:
    source: Path
    link: str
    from_help_url: bool = False


@dataclass(frozen=True, order=True)
class BrokenImage:
    source: Path
    image: str


@dataclass(frozen=True)
class AuditResult:
    """Findings of one audit run; every list is sorted."""

    nav_missing: list[Path] = field(default_factory=list)
    ghost: list[Path] = field(default_factory=list)
    help_missing: list[Path] = field(default_factory=list)
    broken_links: list[BrokenLink] = field(default_factory=list)
    missing_images: list[BrokenImage] = field(default_factory=list)
    orphan_images: list[Path] = field(default_factory=list)
    pages_with_footnotes: list[Path] = field(default_factory=list)
