from __future__ import annotations

from collections.abc import Collection, Sequence
from dataclasses import replace
from pathlib import Path

from ..model import AuditResult, BrokenImage, BrokenLink

TOOL = "docs-ghost"
SCHEMA_VERSION = 1

SECTIONS: tuple[str, ...] = (
    "nav_missing",
    "ghost",
    "help_missing",
    "broken_links",
    "missing_images",
    "orphan_images",
)

TITLES = {
    "nav_missing": "Missing nav entries",
    "ghost": "Ghost files (orphans)",
    "help_missing": "Missing help URLs",
    "broken_links": "Broken links",
    "missing_images": "Missing images",
    "orphan_images": "Orphan images",
}

HELP_MARKER = "[H] "


def is_excluded(path: Path, root: Path, excluded: Collection[str]) -> bool:
    """True when `path` lives in a subsite whose directory name is in `excluded`."""
    if not excluded or not path.is_relative_to(root):
        return False
    parts = path.relative_to(root).parts
    return bool(parts) and parts[0] in excluded


def filter_result(result: AuditResult, root: Path, excluded: Collection[str]) -> AuditResult:
    if not excluded:
        return result

    def keep(path: Path) -> bool:
        return not is_excluded(path, root, excluded)

    return replace(
        result,
        nav_missing=[p for p in result.nav_missing if keep(p)],
        ghost=[p for p in result.ghost if keep(p)],
        help_missing=[p for p in result.help_missing if keep(p)],
        broken_links=[b for b in result.broken_links if keep(b.source)],
        missing_images=[b for b in result.missing_images if keep(b.source)],
        orphan_images=[p for p in result.orphan_images if keep(p)],
    )


def relative_display(path: Path, root: Path) -> str:
    if path.is_relative_to(root):
        return path.relative_to(root).as_posix()
    return str(path)


def format_item(item: Path | BrokenLink | BrokenImage, root: Path) -> str:
    if isinstance(item, BrokenLink):
        marker = HELP_MARKER if item.from_help_url else ""
        return f"{marker}{relative_display(item.source, root)} -> {item.link}"
    if isinstance(item, BrokenImage):
        return f"{relative_display(item.source, root)} -> {item.image}"
    return relative_display(item, root)


def count_issues(result: AuditResult, sections: Sequence[str]) -> int:
    return sum(len(getattr(result, name)) for name in sections)


def render_text(result: AuditResult, root: Path, sections: Sequence[str] = SECTIONS, summary: bool = False) -> str:
    lines: list[str] = []
    for name in sections:
        items = getattr(result, name)
        title = TITLES[name]
        if summary:
            lines.append(f"{title}: {len(items)}")
            continue
        lines.extend(["", f"{title}:"])
        if not items:
            lines.append("  (none)")
        lines.extend(f"  {format_item(item, root)}" for item in items)
    if not summary:
        lines.extend(["", f"Total issues: {count_issues(result, sections)}"])
    return "\n".join(lines)


def _item_payload(item: Path | BrokenLink | BrokenImage, root: Path) -> object:
    if isinstance(item, BrokenLink):
        return {"source": relative_display(item.source, root), "link": item.link, "from_help_url": item.from_help_url}
    if isinstance(item, BrokenImage):
        return {"source": relative_display(item.source, root), "image": item.image}
    return relative_display(item, root)


def build_payload(
    result: AuditResult,
    root: Path,
    sections: Sequence[str] = SECTIONS,
    run_id: str = "",
) -> dict[str, object]:
    total = count_issues(result, sections)
    payload: dict[str, object] = {
        "schema_version": SCHEMA_VERSION,
        "tool": TOOL,
        "run_id": run_id,
        "status": "fail" if total else "ok",
        "root": str(root),
        "sections": list(sections),
        "total_issues": total,
        "counts": {name: len(getattr(result, name)) for name in sections},
        "pages_with_footnotes": [relative_display(p, root) for p in result.pages_with_footnotes],
    }
    for name in sections:
        payload[name] = [_item_payload(item, root) for item in getattr(result, name)]
    return payload
