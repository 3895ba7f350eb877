from __future__ import annotations

from pathlib import Path

from .core.context import RunContext
from .core.paths import normalize_path
from .core.walk import find_images, find_markdown, find_stylesheets
from .help_index import extract_help_urls
from .images import analyse_image_refs, orphan_images
from .links.maps import build_link_maps
from .links.resolver import ResolveContext
from .logging import log_event
from .model import AuditResult
from .nav.loader import load_nav
from .nav.pages import collect_pages, include_roots, missing_files
from .scan import orphans, pages_with_footnotes, read_source, transitive_scan

ASSETS_DIRNAME = "documentation-assets"


def audit(mkdocs_yaml: Path, help_urls: Path | None = None, ctx: RunContext | None = None) -> AuditResult:
    """Audit the documentation tree rooted at `mkdocs_yaml`.

    Raises AuditError when the nav configuration (or an included one) or the
    help index cannot be loaded; every other problem is a finding.
    """
    config_path = normalize_path(Path(mkdocs_yaml).absolute())
    root = config_path.parent

    tree = load_nav(config_path)
    pages = collect_pages(tree.items, root)
    nav_missing = missing_files(pages)
    roots = include_roots(tree.items, root)
    log_event(ctx, "info", "engine", "nav_loaded", config=str(config_path), pages=len(pages), includes=len(roots))
    for missing_root in (r for r in roots if not r.is_dir()):
        log_event(ctx, "warn", "engine", "include_root_missing", path=str(missing_root))

    files = find_markdown(roots)
    ghost_candidates = orphans(pages, files)
    maps = build_link_maps(tree.items, root)

    help_files: list[Path] = []
    if help_urls is not None:
        help_files = extract_help_urls(Path(help_urls), root)
    help_set = frozenset(help_files)
    help_missing = missing_files(help_set)

    resolve_ctx = ResolveContext(
        maps=maps,
        files=frozenset(files),
        monorepo_root=root,
        include_roots=tuple(roots),
    )
    scan = transitive_scan(pages | help_set, resolve_ctx, help_set, ctx)
    ghost = [p for p in ghost_candidates if p not in scan.referenced]

    all_images = frozenset(find_images(roots))
    css_sources: list[tuple[Path, str]] = []
    for css in find_stylesheets([*roots, root / ASSETS_DIRNAME]):
        text = read_source(css, ctx)
        if text is not None:
            css_sources.append((css, text))
    missing_images, referenced_images = analyse_image_refs(scan.scanned.items(), css_sources, all_images, roots)

    result = AuditResult(
        nav_missing=nav_missing,
        ghost=ghost,
        help_missing=help_missing,
        broken_links=sorted(scan.broken_links),
        missing_images=sorted(missing_images),
        orphan_images=orphan_images(all_images, referenced_images),
        pages_with_footnotes=pages_with_footnotes(scan.scanned),
    )
    log_event(
        ctx,
        "info",
        "engine",
        "audit_complete",
        scanned=len(scan.scanned),
        iterations=scan.iterations,
        nav_missing=len(result.nav_missing),
        ghost=len(result.ghost),
        help_missing=len(result.help_missing),
        broken_links=len(result.broken_links),
        missing_images=len(result.missing_images),
        orphan_images=len(result.orphan_images),
    )
    return result
