"""Regex and html.parser based extraction of link targets from page sources.

Code and HTML comments are stripped before matching so that examples inside
fenced, indented or inline code are never reported. Raw HTML anchors and
images are collected with the standard library parser.
"""

from __future__ import annotations

import re
from html.parser import HTMLParser

_FENCED_CODE = re.compile(r"^ {0,3}(`{3,}|~{3,})[^\n]*\n.*?(?:^ {0,3}\1[ \t]*$|\Z)", re.MULTILINE | re.DOTALL)
_INLINE_CODE = re.compile(r"(?<!`)(`+)(?!`)(?:(?!\n[ \t]*\n).)+?(?<!`)\1(?!`)", re.DOTALL)
_HTML_COMMENT = re.compile(r"<!--.*?(?:-->|\Z)", re.DOTALL)
_LIST_ITEM = re.compile(r"^ {0,3}(?:[-+*]|\d{1,9}[.)])(?:[ \t]|$)")
_INDENT = ("    ", "\t")

_TEXT = r"\[((?:[^\[\]]|\[[^\[\]]*\])*)\]"
_DEST = r"\(\s*<?([^()\s<>]+)>?(?:\s+(?:\"[^\"]*\"|'[^']*'|\([^)]*\)))?\s*\)"
_INLINE_LINK = re.compile(r"(?<!!)" + _TEXT + _DEST)
_INLINE_IMAGE = re.compile(r"!" + _TEXT + _DEST)
_FULL_REF_LINK = re.compile(r"(?<!!)" + _TEXT + r"\[([^\[\]]*)\]")
_FULL_REF_IMAGE = re.compile(r"!" + _TEXT + r"\[([^\[\]]*)\]")
_SHORTCUT_REF = re.compile(r"(!?)(?<!\])\[([^\[\]^][^\[\]]*)\](?![\[(:])")
_REF_DEFINITION = re.compile(r"^ {0,3}\[(?!\^)([^\]]+)\]:[ \t]*<?([^\s>]+)>?.*$", re.MULTILINE)

_FOOTNOTE = re.compile(r"\[\^[^\]]+\]")
_CSS_URL = re.compile(r"""url\s*\(\s*['"]?([^'")]+)['"]?\s*\)""")
_CSS_SKIP_PREFIXES = ("data:", "http://", "https://")


class _TagParser(HTMLParser):
    def __init__(self) -> None:
        super().__init__(convert_charrefs=True)
        self.hrefs: list[str] = []
        self.srcs: list[str] = []

    def handle_starttag(self, tag: str, attrs: list[tuple[str, str | None]]) -> None:
        values = dict(attrs)
        if tag == "a" and values.get("href"):
            self.hrefs.append(values["href"])
        elif tag == "img" and values.get("src"):
            self.srcs.append(values["src"])


def _strip_indented_code(text: str) -> str:
    # an indented block opens only after a blank line and outside list items
    out: list[str] = []
    prev_blank = True
    in_code = False
    in_list = False
    for line in text.split("\n"):
        blank = not line.strip()
        indented = line.startswith(_INDENT)
        if in_code and (blank or indented):
            out.append("")
            prev_blank = blank
            continue
        in_code = False
        if indented and not blank and prev_blank and not in_list:
            in_code = True
            out.append("")
            prev_blank = False
            continue
        if not blank and not indented:
            in_list = _LIST_ITEM.match(line) is not None
        out.append(line)
        prev_blank = blank
    return "\n".join(out)


def strip_code(markdown: str) -> str:
    """Remove code blocks, code spans and HTML comments, which never hold live links."""
    text = _strip_indented_code(_FENCED_CODE.sub("", markdown))
    return _HTML_COMMENT.sub("", _INLINE_CODE.sub("", text))


def _label(text: str) -> str:
    return " ".join(text.split()).casefold()


def _definitions(text: str) -> dict[str, str]:
    defs: dict[str, str] = {}
    for match in _REF_DEFINITION.finditer(text):
        defs.setdefault(_label(match.group(1)), match.group(2))
    return defs


def _references(text: str, full: re.Pattern[str], want_image: bool, defs: dict[str, str]) -> list[str]:
    out: list[str] = []
    for match in full.finditer(text):
        label = _label(match.group(2) or match.group(1))
        if label in defs:
            out.append(defs[label])
    for match in _SHORTCUT_REF.finditer(text):
        if bool(match.group(1)) != want_image:
            continue
        label = _label(match.group(2))
        if label in defs:
            out.append(defs[label])
    return out


def _html(text: str) -> _TagParser:
    parser = _TagParser()
    parser.feed(text)
    parser.close()
    return parser


def extract_links(markdown: str) -> list[str]:
    """Raw link targets in document order: inline, reference style, then HTML anchors."""
    text = strip_code(markdown)
    defs = _definitions(text)
    body = _REF_DEFINITION.sub("", text)
    links = [match.group(2) for match in _INLINE_LINK.finditer(body)]
    links.extend(_references(body, _FULL_REF_LINK, False, defs))
    links.extend(_html(body).hrefs)
    return links


def extract_image_refs(markdown: str) -> list[str]:
    text = strip_code(markdown)
    defs = _definitions(text)
    body = _REF_DEFINITION.sub("", text)
    refs = [match.group(2) for match in _INLINE_IMAGE.finditer(body)]
    refs.extend(_references(body, _FULL_REF_IMAGE, True, defs))
    refs.extend(_html(body).srcs)
    return refs


def extract_css_image_refs(css: str) -> list[str]:
    refs: list[str] = []
    for match in _CSS_URL.finditer(css):
        url = match.group(1).strip()
        if url and not url.startswith(_CSS_SKIP_PREFIXES):
            refs.append(url)
    return refs


def has_footnotes(markdown: str) -> bool:
    return _FOOTNOTE.search(markdown) is not None
