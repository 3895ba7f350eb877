from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Literal

from ..run_id import make_run_id

OutputFormat = Literal["text", "json"]


@dataclass(frozen=True)
class RunContext:
    run_id: str
    output_format: OutputFormat
    log_json: bool
    verbose: bool
    quiet: bool

    @classmethod
    def from_args(
        cls,
        run_id: str | None = None,
        output_format: OutputFormat | None = None,
        log_format: str | None = None,
        verbose: bool = False,
        quiet: bool = False,
    ) -> "RunContext":
        resolved_run_id = run_id or os.environ.get("RUN_ID") or make_run_id()
        resolved_format: OutputFormat = output_format or ("json" if os.environ.get("CI") else "text")
        resolved_log_format = log_format or os.environ.get("DOCS_GHOST_LOG_FORMAT", "text")
        return cls(
            run_id=resolved_run_id,
            output_format=resolved_format,
            log_json=resolved_log_format == "json",
            verbose=verbose,
            quiet=quiet,
        )
