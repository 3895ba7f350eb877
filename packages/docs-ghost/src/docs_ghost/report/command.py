from __future__ import annotations

import argparse
import json
import os
from pathlib import Path

from ..core.context import RunContext
from ..core.paths import normalize_path
from ..core.schema import validate_payload
from ..engine import audit
from ..errors import AuditError
from ..exit_codes import ERR_FINDINGS, ERR_USAGE, OK
from ..io.fs import write_json
from ..logging import log_event
from .render import SECTIONS, build_payload, count_issues, filter_result, render_text

ENV_MKDOCS_YAML = "DOCS_GHOST_MKDOCS_YAML"
ENV_HELP_URLS = "DOCS_GHOST_HELP_URLS"
ENV_EXCLUDE = "DOCS_GHOST_EXCLUDE"


def configure_audit_parser(sub: argparse._SubParsersAction[argparse.ArgumentParser]) -> None:
    p = sub.add_parser("audit", help="audit mkdocs navigation, links and images against the files on disk")
    p.add_argument("--mkdocs-yaml", help=f"path to the top-level mkdocs.yml (env {ENV_MKDOCS_YAML})")
    p.add_argument("--help-urls", help=f"header file with HELP_URL definitions (env {ENV_HELP_URLS})")
    p.add_argument("--nav-missing", action="store_true", help="show nav entries that do not exist on disk")
    p.add_argument("--ghost", action="store_true", help="show markdown files unreachable from nav and links")
    p.add_argument("--help-missing", action="store_true", help="show help index pages that do not exist")
    p.add_argument("--broken-links", action="store_true", help="show internal links that resolve nowhere")
    p.add_argument("--missing-images", action="store_true", help="show image references to missing files")
    p.add_argument("--orphan-images", action="store_true", help="show images referenced by no page or stylesheet")
    p.add_argument("--summary", action="store_true", help="show counts only")
    p.add_argument("-q", "--quiet", dest="report_quiet", action="store_true", help="print nothing; exit status only")
    p.add_argument("--exclude", help=f"comma-separated subsites to leave out of the report (env {ENV_EXCLUDE})")
    p.add_argument("--out-file", help="also write the JSON report to this path")


def parse_exclude(value: str | None) -> list[str]:
    if not value:
        return []
    return [item.strip() for item in value.split(",") if item.strip()]


def selected_sections(ns: argparse.Namespace) -> list[str]:
    chosen = [name for name in SECTIONS if getattr(ns, name, False)]
    return chosen or list(SECTIONS)


def run_audit_command(ctx: RunContext, ns: argparse.Namespace) -> int:
    mkdocs_yaml = ns.mkdocs_yaml or os.environ.get(ENV_MKDOCS_YAML)
    if not mkdocs_yaml:
        raise AuditError(f"--mkdocs-yaml is required (or set {ENV_MKDOCS_YAML})", ERR_USAGE, kind="usage")
    help_urls = ns.help_urls or os.environ.get(ENV_HELP_URLS) or None
    excluded = parse_exclude(ns.exclude if ns.exclude is not None else os.environ.get(ENV_EXCLUDE))
    sections = selected_sections(ns)

    config_path = normalize_path(Path(mkdocs_yaml).absolute())
    root = config_path.parent
    result = audit(config_path, Path(help_urls) if help_urls else None, ctx)
    shown = filter_result(result, root, excluded)
    total = count_issues(shown, sections)

    if ns.out_file or ctx.output_format == "json":
        payload = build_payload(shown, root, sections, ctx.run_id)
        validate_payload(payload)
        if ns.out_file:
            write_json(Path(ns.out_file), payload)
            log_event(ctx, "info", "report", "written", path=ns.out_file)
        if ctx.output_format == "json" and not ns.report_quiet:
            print(json.dumps(payload, sort_keys=True))
    if ctx.output_format == "text" and not ns.report_quiet:
        print(render_text(shown, root, sections, summary=ns.summary))
    return ERR_FINDINGS if total else OK
