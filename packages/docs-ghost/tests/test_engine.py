from __future__ import annotations

import json
from pathlib import Path

import pytest
from docs_ghost.core.context import RunContext
from docs_ghost.core.walk import find_markdown
from docs_ghost.engine import audit
from docs_ghost.errors import AuditError
from docs_ghost.links import ResolveContext, build_link_maps
from docs_ghost.model import AuditResult, BrokenImage, BrokenLink
from docs_ghost.nav import collect_pages, include_roots, load_nav
from docs_ghost.scan import transitive_scan


def test_clean_site_has_no_findings(guide_site: Path) -> None:
    result = audit(guide_site / "mkdocs.yml")
    assert result.nav_missing == []
    assert result.broken_links == []
    assert result.help_missing == []
    assert result.missing_images == []
    assert result.orphan_images == []


def test_linked_pages_are_not_ghosts(guide_site: Path) -> None:
    result = audit(guide_site / "mkdocs.yml")
    # extra.md, config/editor.md and reference api.md are reached only through links;
    # index-print.md is a print variant
    assert result.ghost == [guide_site / "guide/docs/lonely.md"]


def test_relative_config_path_is_accepted(guide_site: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(guide_site / "guide")
    result = audit(Path("../mkdocs.yml"))
    assert result.ghost == [Path.cwd().parent / "guide/docs/lonely.md"]


def _site(build_tree, pages: dict[str, str], nav: str = "  - Home: index.md\n") -> Path:
    files = {
        "mkdocs.yml": "nav:\n  - G: '!include g/mkdocs.yml'\n",
        "g/mkdocs.yml": f"nav:\n{nav}",
    }
    files.update({f"g/docs/{name}": text for name, text in pages.items()})
    return build_tree(files)


def test_missing_link_is_broken(build_tree) -> None:
    root = _site(build_tree, {"index.md": "[x](nope.md)\n"})
    result = audit(root / "mkdocs.yml")
    assert result.broken_links == [BrokenLink(source=root / "g/docs/index.md", link="nope.md", from_help_url=False)]


def test_index_fallback_counts_as_reference(build_tree) -> None:
    root = _site(build_tree, {"index.md": "[t](topic.md)\n", "topic/index.md": "# Topic\n"})
    result = audit(root / "mkdocs.yml")
    assert result.broken_links == []
    assert result.ghost == []


def test_nav_missing_matches_files_on_disk(build_tree) -> None:
    root = _site(build_tree, {"index.md": ""}, nav="  - index.md\n  - Later: later.md\n")
    result = audit(root / "mkdocs.yml")
    assert result.nav_missing == [root / "g/docs/later.md"]


def test_discovery_is_transitive(build_tree) -> None:
    root = _site(
        build_tree,
        {
            "index.md": "[a](a.md)\n",
            "a.md": "[b](b.md)\n",
            "b.md": "[c](deeper/c.md) [back](index.md)\n",
            "deeper/c.md": "Claim[^1]\n\n[^1]: note\n",
            "unreached.md": "[a](a.md)\n",
        },
    )
    result = audit(root / "mkdocs.yml")
    assert result.ghost == [root / "g/docs/unreached.md"]
    assert result.pages_with_footnotes == [root / "g/docs/deeper/c.md"]


def test_help_index_pages_seed_the_scan(build_tree) -> None:
    root = _site(
        build_tree,
        {
            "index.md": "",
            "help-page.md": "[next](help-next.md) [x](nowhere.md)\n",
            "help-next.md": "",
        },
    )
    header = root / "help_urls.h"
    header.write_text(
        '#define G "g"\nHELP_URL("page", G "/help-page")\nHELP_URL("gone", "g/absent")\n',
        encoding="utf-8",
    )
    result = audit(root / "mkdocs.yml", header)
    assert result.help_missing == [root / "g/docs/absent.md"]
    assert result.ghost == []
    assert result.broken_links == [BrokenLink(source=root / "g/docs/help-page.md", link="nowhere.md", from_help_url=True)]


def test_images_and_stylesheets(build_tree) -> None:
    root = _site(
        build_tree,
        {
            "index.md": "![logo](img/logo.png) ![gone](img/gone.png)\n",
            "img/logo.png": "",
            "img/bg.png": "",
            "img/unused.PNG": "",
            "css/site.css": "body { background: url('../img/bg.png'); }\n",
        },
    )
    (root / "documentation-assets").mkdir()
    (root / "documentation-assets/theme.scss").write_text(".x { background: url(/img/unused.PNG) }\n", encoding="utf-8")
    result = audit(root / "mkdocs.yml")
    assert result.missing_images == [BrokenImage(source=root / "g/docs/index.md", image="img/gone.png")]
    assert result.orphan_images == []


def test_orphan_images_are_listed(build_tree) -> None:
    root = _site(build_tree, {"index.md": "", "img/a.svg": "", "img/b.txt": ""})
    result = audit(root / "mkdocs.yml")
    assert result.orphan_images == [root / "g/docs/img/a.svg"]


def test_config_errors_abort(build_tree) -> None:
    root = build_tree({"mkdocs.yml": "nav: [\n"})
    with pytest.raises(AuditError):
        audit(root / "mkdocs.yml")


def test_audit_logs_to_stderr(guide_site: Path, capsys: pytest.CaptureFixture[str]) -> None:
    ctx = RunContext(run_id="t-1", output_format="text", log_json=True, verbose=True, quiet=False)
    audit(guide_site / "mkdocs.yml", ctx=ctx)
    captured = capsys.readouterr()
    assert captured.out == ""
    events = [json.loads(line) for line in captured.err.splitlines()]
    actions = [event["action"] for event in events]
    assert actions[0] == "nav_loaded"
    assert "iteration" in actions
    assert actions[-1] == "audit_complete"
    assert {event["run_id"] for event in events} == {"t-1"}


def test_result_is_rebuilt_per_call(guide_site: Path) -> None:
    first = audit(guide_site / "mkdocs.yml")
    (guide_site / "guide/docs/lonely.md").unlink()
    second = audit(guide_site / "mkdocs.yml")
    assert isinstance(second, AuditResult)
    assert first.ghost != second.ghost
    assert second.ghost == []


def test_top_level_nav_linked_orphan(build_tree) -> None:
    root = build_tree({"mkdocs.yml": "nav:\n  - A: a.md\n", "docs/a.md": "[x](orphan.md)\n", "docs/orphan.md": ""})
    result = audit(root / "mkdocs.yml")
    assert result.ghost == []
    assert result.broken_links == []


def test_top_level_nav_missing_link(build_tree) -> None:
    root = build_tree({"mkdocs.yml": "nav:\n  - A: a.md\n", "docs/a.md": "[x](missing)\n"})
    result = audit(root / "mkdocs.yml")
    assert result.broken_links == [BrokenLink(source=root / "docs/a.md", link="missing.md")]


def test_nav_missing_and_ghost_match_their_definitions(guide_site: Path) -> None:
    (guide_site / "guide/docs/config/unlisted-print.md").write_text("", encoding="utf-8")
    (guide_site / "guide/docs/index.md").unlink()
    tree = load_nav(guide_site / "mkdocs.yml")
    pages = collect_pages(tree.items, tree.root)
    roots = include_roots(tree.items, tree.root)
    files = find_markdown(roots)
    ctx = ResolveContext(build_link_maps(tree.items, tree.root), frozenset(files), guide_site, tuple(roots))
    referenced = transitive_scan(pages, ctx).referenced

    result = audit(guide_site / "mkdocs.yml")
    for page in pages:
        assert (page in result.nav_missing) == (not page.is_file())
    for f in files:
        expected = f not in pages and f not in referenced and not f.name.endswith("-print.md")
        assert (f in result.ghost) == expected
    # with the guide home gone, its outgoing links no longer rescue extra.md and api.md
    assert guide_site / "guide/docs/extra.md" in result.ghost
    assert guide_site / "reference/docs/api.md" in result.ghost


def test_commented_out_link_does_not_rescue_a_ghost(build_tree) -> None:
    root = _site(build_tree, {"index.md": "<!-- [old](old.md) -->\n", "old.md": "# Old\n"})
    result = audit(root / "mkdocs.yml")
    assert result.ghost == [root / "g/docs/old.md"]
    assert result.broken_links == []
