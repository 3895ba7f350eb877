from __future__ import annotations

from pathlib import Path

from docs_ghost.images import analyse_image_refs, normalise_image_refs, orphan_images, resolve_image_ref
from docs_ghost.model import BrokenImage


def test_normalise_image_refs_drops_remote_and_inline() -> None:
    refs = ["a.png", "https://x/b.png", "http://x/c.png", "data:image/png;base64,AA"]
    assert normalise_image_refs(refs) == ["a.png"]


def test_absolute_refs_resolve_under_include_docs(build_tree) -> None:
    root = build_tree({"g/docs/img/a.png": "", "assets/b.png": ""})
    images = frozenset({root / "g/docs/img/a.png", root / "assets/b.png"})
    source = root / "g/docs/page.md"
    assert resolve_image_ref(source, "/img/a.png", images, [root / "g"]) == root / "g/docs/img/a.png"
    # a root without docs/ is its own web root
    assert resolve_image_ref(source, "/b.png", images, [root / "g", root / "assets"]) == root / "assets/b.png"
    assert resolve_image_ref(source, "/img/none.png", images, [root / "g"]) is None


def test_relative_refs_try_source_then_include_docs(build_tree) -> None:
    root = build_tree({"g/docs/sub/x.png": "", "h/docs/shared/y.png": "", "elsewhere/z.png": ""})
    images = frozenset({root / "g/docs/sub/x.png", root / "h/docs/shared/y.png"})
    roots = [root / "g", root / "h"]
    source = root / "g/docs/sub/page.md"
    assert resolve_image_ref(source, "x.png", images, roots) == root / "g/docs/sub/x.png"
    assert resolve_image_ref(source, "shared/y.png", images, roots) == root / "h/docs/shared/y.png"
    # present on disk but outside the scanned roots
    assert resolve_image_ref(source, "../../../elsewhere/z.png", images, roots) == root / "elsewhere/z.png"


def test_only_page_failures_are_reported(tmp_path: Path) -> None:
    page = tmp_path / "g/docs/index.md"
    css = tmp_path / "g/docs/css/site.css"
    logo = tmp_path / "g/docs/img/logo.png"
    bg = tmp_path / "g/docs/img/bg.png"
    unused = tmp_path / "g/docs/img/unused.png"
    images = frozenset({logo, bg, unused})
    missing, referenced = analyse_image_refs(
        [(page, "![logo](img/logo.png) ![gone](img/gone.png) ![cdn](https://cdn/x.png)")],
        [(css, "body { background: url('../img/bg.png') } .x { background: url(../img/missing.png) }")],
        images,
        [tmp_path / "g"],
    )
    assert missing == [BrokenImage(source=page, image="img/gone.png")]
    assert referenced == {logo, bg}
    assert orphan_images(images, referenced) == [unused]
