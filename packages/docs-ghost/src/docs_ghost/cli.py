from __future__ import annotations

import argparse
import json
import platform
import sys

from . import __version__
from .core.context import RunContext
from .errors import AuditError
from .exit_codes import ERR_INTERNAL
from .logging import log_event
from .report.command import configure_audit_parser, run_audit_command

TOOL = "docs-ghost"


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog=TOOL, description="Audit a multi-project MkDocs tree for ghost pages and broken links.")
    p.add_argument("--version", action="version", version=_version_string())
    p.add_argument("--run-id", help="run identifier carried by logs and reports")
    p.add_argument("--format", choices=["text", "json"], default=None, help="output format")
    p.add_argument("--log-format", choices=["text", "json"], default=None, help="stderr log format")
    vg = p.add_mutually_exclusive_group()
    vg.add_argument("--verbose", action="store_true", help="enable debug diagnostics")
    vg.add_argument("--quiet", action="store_true", help="only emit errors")
    sub = p.add_subparsers(dest="cmd", required=True)

    version_p = sub.add_parser("version", help="print tool and interpreter versions")
    version_p.add_argument("--json", action="store_true", help="emit JSON output")
    configure_audit_parser(sub)
    return p


def _version_string() -> str:
    return f"{TOOL} {__version__}"


def _error_payload(message: str, code: int) -> str:
    return json.dumps(
        {
            "schema_version": 1,
            "tool": TOOL,
            "status": "fail",
            "error": {"message": message, "code": code},
        },
        sort_keys=True,
    )


def main(argv: list[str] | None = None) -> int:
    p = build_parser()
    ns = p.parse_args(argv)
    ctx = RunContext.from_args(
        ns.run_id,
        ns.format,
        ns.log_format,
        ns.verbose,
        ns.quiet or bool(getattr(ns, "report_quiet", False)),
    )
    try:
        log_event(ctx, "debug", "cli", "start", cmd=ns.cmd, fmt=ctx.output_format)
        if ns.cmd == "version":
            payload = {
                "schema_version": 1,
                "tool": TOOL,
                "run_id": ctx.run_id,
                "version": __version__,
                "python": platform.python_version(),
            }
            if ctx.output_format == "json" or ns.json:
                print(json.dumps(payload, sort_keys=True))
            else:
                print(_version_string())
            return 0
        if ns.cmd == "audit":
            return run_audit_command(ctx, ns)
        return 2
    except AuditError as exc:
        if ctx.output_format == "json":
            print(_error_payload(str(exc), exc.code), file=sys.stderr)
        else:
            print(str(exc), file=sys.stderr)
        return exc.code
    except Exception as exc:  # pragma: no cover
        if ctx.output_format == "json":
            print(_error_payload(f"internal error: {exc}", ERR_INTERNAL), file=sys.stderr)
        else:
            print(f"internal error: {exc}", file=sys.stderr)
        return ERR_INTERNAL


if __name__ == "__main__":
    raise SystemExit(main())
