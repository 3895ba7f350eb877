from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

from .core.paths import DOCS_DIRNAME, normalize_path
from .links.extract import extract_css_image_refs, extract_image_refs
from .model import BrokenImage

_EXTERNAL_PREFIXES = ("http://", "https://", "data:")


def normalise_image_refs(refs: Iterable[str]) -> list[str]:
    return [ref for ref in refs if not ref.startswith(_EXTERNAL_PREFIXES)]


def resolve_image_ref(
    source: Path,
    ref: str,
    all_images: frozenset[Path],
    include_roots: Iterable[Path],
) -> Path | None:
    roots = list(include_roots)
    if ref.startswith("/"):
        # Site-absolute: the docs/ folder of some subsite is the web root.
        for root in roots:
            docs = root / DOCS_DIRNAME
            candidate = normalize_path((docs if docs.exists() else root) / ref[1:])
            if candidate in all_images:
                return candidate
        return None

    candidate = normalize_path(source.parent / ref)
    if candidate in all_images or candidate.is_file():
        return candidate
    for root in roots:
        docs = root / DOCS_DIRNAME
        if not docs.exists():
            continue
        candidate = normalize_path(docs / ref)
        if candidate in all_images:
            return candidate
    return None


def analyse_image_refs(
    markdown_sources: Iterable[tuple[Path, str]],
    css_sources: Iterable[tuple[Path, str]],
    all_images: frozenset[Path],
    include_roots: Iterable[Path],
) -> tuple[list[BrokenImage], set[Path]]:
    """Check image references of pages and stylesheets.

    Only page references are reported when they fail; stylesheets often point
    at build artifacts, so their refs only count towards `referenced`.
    """
    roots = tuple(include_roots)
    missing: list[BrokenImage] = []
    referenced: set[Path] = set()
    for source, text in markdown_sources:
        for ref in normalise_image_refs(extract_image_refs(text)):
            resolved = resolve_image_ref(source, ref, all_images, roots)
            if resolved is None:
                missing.append(BrokenImage(source=source, image=ref))
            else:
                referenced.add(resolved)
    for source, text in css_sources:
        for ref in extract_css_image_refs(text):
            resolved = resolve_image_ref(source, ref, all_images, roots)
            if resolved is not None:
                referenced.add(resolved)
    return missing, referenced


def orphan_images(all_images: Iterable[Path], referenced: set[Path]) -> list[Path]:
    return sorted(image for image in all_images if image not in referenced)
