"""Resolution of a normalised link to the source file it targets.

MkDocs renders `dir/page.md` as `dir/page/`, so a browser resolves `../x` from
the page directory while authors often write it relative to the file. Each
strategy below covers one of these readings; `resolve` tries them in order and
the first hit wins.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field
from pathlib import Path, PurePosixPath
from typing import Optional

from ..core.paths import DOCS_DIRNAME, append_md, docs_dir_for, docs_root_for, normalize_path, normalize_url, strip_extension
from ..model import BrokenLink
from .extract import extract_links
from .maps import LinkMaps
from .normalize import normalise_links

INDEX_PAGE = "index.md"


@dataclass(frozen=True)
class ResolveContext:
    maps: LinkMaps
    files: frozenset[Path]
    monorepo_root: Path
    include_roots: tuple[Path, ...] = field(default=())


def rendered_url_for_link(source: Path, link: str, maps: LinkMaps) -> str | None:
    from_url = maps.src_to_url.get(source)
    if from_url is None:
        return None
    target = link.lstrip("/")
    if link.startswith("/"):
        joined = target
    else:
        joined = f"{PurePosixPath(from_url).parent.as_posix()}/{target}"
    return normalize_url(strip_extension(joined))


def lookup_url(rendered: str, url_to_src: Mapping[str, Path]) -> Path | None:
    if rendered in url_to_src:
        return url_to_src[rendered]
    alt = rendered.rstrip("/")
    if alt in url_to_src:
        return url_to_src[alt]
    return url_to_src.get(f"{alt}/index")


def check_with_index_fallback(candidate: Path, files: frozenset[Path]) -> Path | None:
    """`candidate` if it exists, else `<candidate without suffix>/index.md`."""
    normalized = normalize_path(candidate)
    if normalized in files or normalized.is_file():
        return normalized
    stem = normalized.with_suffix("") if normalized.suffix else normalized
    index = stem / INDEX_PAGE
    if index in files or index.is_file():
        return index
    return None


def url_to_filesystem(url: str, subsite_name: str, docs_dir: Path, monorepo_root: Path) -> Path | None:
    first, _, rest = url.partition("/")
    other_docs = monorepo_root / first / DOCS_DIRNAME
    if first != subsite_name and other_docs.is_dir():
        target = other_docs / rest if rest else other_docs
    else:
        target = docs_dir / url.removeprefix(f"{subsite_name}/")
    md = append_md(target)
    return normalize_path(md) if md is not None else None


def url_space_candidates(source: Path, link: str, monorepo_root: Path) -> list[Path]:
    docs_dir = docs_dir_for(source)
    if docs_dir is None or source == docs_dir:
        return []
    subsite_name = docs_dir.parent.name
    if not subsite_name:
        return []
    within_docs = source.relative_to(docs_dir).as_posix()
    src_url = strip_extension(f"{subsite_name}/{within_docs}")
    link_url = strip_extension(link)

    if link.startswith("/"):
        urls = [normalize_url(link_url.lstrip("/"))]
    else:
        urls = [normalize_url(f"{base}/{link_url}") for base in (src_url, PurePosixPath(src_url).parent.as_posix())]

    candidates: list[Path] = []
    for url in urls:
        if not url:
            continue
        path = url_to_filesystem(url, subsite_name, docs_dir, monorepo_root)
        if path is not None and path not in candidates:
            candidates.append(path)
    return candidates


def _first_hit(candidates: Iterable[Path], files: frozenset[Path]) -> Path | None:
    for candidate in candidates:
        hit = check_with_index_fallback(candidate, files)
        if hit is not None:
            return hit
    return None


def resolve_via_nav(source: Path, link: str, ctx: ResolveContext) -> Path | None:
    # The nav map is authoritative; missing targets are reported as nav_missing.
    rendered = rendered_url_for_link(source, link, ctx.maps)
    if rendered is None:
        return None
    return lookup_url(rendered, ctx.maps.url_to_src)


def resolve_via_url_space(source: Path, link: str, ctx: ResolveContext) -> Path | None:
    return _first_hit(url_space_candidates(source, link, ctx.monorepo_root), ctx.files)


def resolve_via_doc_roots(source: Path, link: str, ctx: ResolveContext) -> Path | None:
    rendered = rendered_url_for_link(source, link, ctx.maps)
    if rendered is None:
        return None
    roots: list[Path] = []
    own_root = docs_root_for(source)
    if own_root is not None:
        roots.append(own_root)
    roots.extend(ctx.include_roots)
    candidates = (append_md(root / DOCS_DIRNAME / rendered) for root in roots)
    return _first_hit((c for c in candidates if c is not None), ctx.files)


def resolve_via_filesystem(source: Path, link: str, ctx: ResolveContext) -> Path | None:
    if link.startswith("/"):
        doc_root = docs_root_for(source)
        if doc_root is None:
            return None
        return check_with_index_fallback(doc_root / DOCS_DIRNAME / link.lstrip("/"), ctx.files)
    return check_with_index_fallback(source.parent / link, ctx.files)


def resolve_via_parent(source: Path, link: str, ctx: ResolveContext) -> Path | None:
    return check_with_index_fallback(source.parent / link.lstrip("/"), ctx.files)


Strategy = Callable[[Path, str, ResolveContext], Optional[Path]]

STRATEGIES: tuple[Strategy, ...] = (
    resolve_via_nav,
    resolve_via_url_space,
    resolve_via_doc_roots,
    resolve_via_filesystem,
    resolve_via_parent,
)


def resolve(source: Path, link: str, ctx: ResolveContext) -> Path | None:
    for strategy in STRATEGIES:
        target = strategy(source, link, ctx)
        if target is not None:
            return target
    return None


def analyse_links(
    files: Iterable[tuple[Path, str]],
    ctx: ResolveContext,
    help_files: frozenset[Path] = frozenset(),
) -> tuple[set[Path], list[BrokenLink]]:
    """Resolve every link in `(path, text)` pairs; return targets hit and links that failed."""
    referenced: set[Path] = set()
    broken: list[BrokenLink] = []
    for source, text in files:
        for link in normalise_links(extract_links(text)):
            target = resolve(source, link, ctx)
            if target is None:
                broken.append(BrokenLink(source=source, link=link, from_help_url=source in help_files))
            else:
                referenced.add(target)
    return referenced, broken
