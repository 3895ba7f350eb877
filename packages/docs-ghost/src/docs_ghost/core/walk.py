from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

from .paths import normalize_path

IMAGE_EXTENSIONS = frozenset({"png", "jpg", "jpeg", "gif", "svg", "webp", "ico", "bmp"})
STYLESHEET_EXTENSIONS = frozenset({"css", "scss"})


def _walk(roots: Iterable[Path], keep) -> list[Path]:
    found: set[Path] = set()
    for root in roots:
        if not root.is_dir():
            continue
        for path in root.rglob("*"):
            if path.is_file() and keep(path):
                found.add(normalize_path(path))
    return sorted(found)


def find_markdown(roots: Iterable[Path]) -> list[Path]:
    return _walk(roots, lambda p: p.suffix == ".md")


def is_image(path: Path) -> bool:
    return path.suffix[1:].lower() in IMAGE_EXTENSIONS


def find_images(roots: Iterable[Path]) -> list[Path]:
    return _walk(roots, is_image)


def find_stylesheets(roots: Iterable[Path]) -> list[Path]:
    return _walk(roots, lambda p: p.suffix[1:].lower() in STYLESHEET_EXTENSIONS)
