from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path

from .core.context import RunContext
from .links.extract import has_footnotes
from .links.resolver import ResolveContext, analyse_links
from .logging import log_event
from .model import BrokenLink

PRINT_PAGE_SUFFIX = "-print.md"


@dataclass
class ScanResult:
    scanned: dict[Path, str] = field(default_factory=dict)
    referenced: set[Path] = field(default_factory=set)
    broken_links: list[BrokenLink] = field(default_factory=list)
    iterations: int = 0


def read_source(path: Path, ctx: RunContext | None = None) -> str | None:
    try:
        return path.read_text(encoding="utf-8", errors="ignore")
    except OSError as exc:
        log_event(ctx, "warn", "scan", "unreadable", path=str(path), error=str(exc))
        return None


def transitive_scan(
    seed: Iterable[Path],
    resolve_ctx: ResolveContext,
    help_files: frozenset[Path] = frozenset(),
    ctx: RunContext | None = None,
) -> ScanResult:
    """Follow links from `seed` until no unscanned page is reachable.

    `scanned` only grows and is bounded by the pages on disk, so the loop ends.
    """
    result = ScanResult(referenced=set(help_files))
    frontier = sorted({p for p in seed if p.is_file()})
    while frontier:
        batch: list[tuple[Path, str]] = []
        for path in frontier:
            if path in result.scanned:
                continue
            text = read_source(path, ctx)
            if text is None:
                continue
            result.scanned[path] = text
            batch.append((path, text))
        if not batch:
            break
        result.iterations += 1
        found, broken = analyse_links(batch, resolve_ctx, help_files)
        result.broken_links.extend(broken)
        frontier = sorted(p for p in found if p not in result.scanned and p.is_file())
        result.referenced |= found
        log_event(
            ctx,
            "debug",
            "scan",
            "iteration",
            iteration=result.iterations,
            read=len(batch),
            new_targets=len(frontier),
        )
    return result


def orphans(nav_pages: set[Path], files: Iterable[Path]) -> list[Path]:
    return sorted(p for p in files if p not in nav_pages and not p.name.endswith(PRINT_PAGE_SUFFIX))


def pages_with_footnotes(sources: dict[Path, str]) -> list[Path]:
    return sorted(path for path, text in sources.items() if has_footnotes(text))
