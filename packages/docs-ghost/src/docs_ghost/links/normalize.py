from __future__ import annotations

from collections.abc import Iterable
from pathlib import PurePosixPath

EXTERNAL_PREFIXES = ("http:", "https:", "mailto:")
MARKDOWN_SUFFIX = ".md"


def normalise_link(raw: str) -> str | None:
    """Reduce a raw link target to a markdown path, or None when it is not one.

    Anchors are dropped, directory-style links become `<dir>.md`, extensionless
    links get `.md`, and targets with any other extension are ignored.
    """
    link = raw.split("#", 1)[0].strip()
    if not link or link.startswith(EXTERNAL_PREFIXES):
        return None
    if link.endswith("/"):
        link = link.rstrip("/")
        return f"{link}{MARKDOWN_SUFFIX}" if link else None
    suffix = PurePosixPath(link).suffix
    if suffix == MARKDOWN_SUFFIX:
        return link
    if suffix:
        return None
    return f"{link}{MARKDOWN_SUFFIX}"


def normalise_links(links: Iterable[str]) -> list[str]:
    out: list[str] = []
    for raw in links:
        link = normalise_link(raw)
        if link is not None:
            out.append(link)
    return out
