"""Lexical path algebra shared by the nav, link, and image resolvers.

Nothing in this module touches the filesystem: targets that do not exist must
still normalize, because reporting them as missing is the point of the audit.
"""

from __future__ import annotations

from pathlib import Path, PurePath, PurePosixPath

DOCS_DIRNAME = "docs"


def normalize_path(path: str | PurePath) -> Path:
    """Resolve `.` and `..` components of `path` without filesystem access.

    A `..` removes the previous normal component; with nothing left to remove it
    is kept, so `../a` stays `../a` and `/..` stays `/..`.
    """
    p = Path(path)
    anchor = p.anchor
    stack: list[str] = []
    for part in p.parts[1:] if anchor else p.parts:
        if part == "..":
            if stack and stack[-1] != "..":
                stack.pop()
            else:
                stack.append(part)
        else:
            stack.append(part)
    if anchor:
        return Path(anchor, *stack)
    return Path(*stack)


def normalize_url(value: str | PurePath) -> str:
    """Collapse a URL-ish path into its canonical `/`-joined form.

    Unlike `normalize_path`, a `..` that has nothing to pop is dropped: URL space
    has no parent above the site root.
    """
    text = value.as_posix() if isinstance(value, PurePath) else str(value)
    segments: list[str] = []
    for seg in text.split("/"):
        if seg in ("", "."):
            continue
        if seg == "..":
            if segments:
                segments.pop()
            continue
        segments.append(seg)
    return "/".join(segments)


def strip_extension(value: str) -> str:
    path = PurePosixPath(value)
    if not path.suffix:
        return value
    return str(path.with_suffix(""))


def append_md(path: Path) -> Path | None:
    if not path.name:
        return None
    return path.with_name(f"{path.name}.md")


def docs_dir_for(path: Path) -> Path | None:
    for ancestor in (path, *path.parents):
        if ancestor.name == DOCS_DIRNAME:
            return ancestor
    return None


def docs_root_for(path: Path) -> Path | None:
    docs_dir = docs_dir_for(path)
    if docs_dir is None:
        return None
    return docs_dir.parent
