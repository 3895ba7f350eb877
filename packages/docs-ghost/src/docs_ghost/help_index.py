"""Parser for the C header that maps in-application help keys to doc pages.

Entries look like ``HELP_URL("key", GUIDE "/page")`` where the second argument
concatenates `#define`d string macros and literals into a site URL such as
``guide/page``; the page lives at ``<root>/guide/docs/page.md``.
"""

from __future__ import annotations

import re
from pathlib import Path, PurePosixPath

from .core.paths import DOCS_DIRNAME, normalize_path
from .errors import AuditError

_COMMENT = re.compile(r"//[^\n]*|/\*.*?(?:\*/|\Z)", re.DOTALL)
_DEFINE = re.compile(r'#define\s+(\w+)\s+"([^"]+)"')
_HELP_URL = re.compile(r'HELP_URL\s*\(\s*"(?:\\.|[^"\\])*"\s*,\s*([^)]+)\)')


def strip_c_comments(text: str) -> str:
    return _COMMENT.sub("", text)


def parse_macros(text: str) -> dict[str, str]:
    return {match.group(1): match.group(2).strip() for match in _DEFINE.finditer(text)}


def expand_url(raw: str, macros: dict[str, str]) -> str:
    parts = (part.strip() for part in raw.split('"'))
    return "".join(macros.get(part, part) for part in parts if part)


def inject_docs(url: str) -> str:
    parts = PurePosixPath(url).parts
    if not parts:
        return DOCS_DIRNAME
    return PurePosixPath(parts[0], DOCS_DIRNAME, *parts[1:]).as_posix()


def parse_help_urls(text: str, doc_root: Path) -> list[Path]:
    content = strip_c_comments(text)
    macros = parse_macros(content)
    paths: list[Path] = []
    for match in _HELP_URL.finditer(content):
        url = expand_url(match.group(1).strip(), macros)
        paths.append(normalize_path(doc_root / f"{inject_docs(url)}.md"))
    return paths


def extract_help_urls(path: Path, doc_root: Path) -> list[Path]:
    try:
        text = Path(path).read_text(encoding="utf-8", errors="ignore")
    except OSError as exc:
        raise AuditError(f"cannot read help index {path}: {exc}", kind="help_unreadable") from exc
    return parse_help_urls(text, doc_root)
