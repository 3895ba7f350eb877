from __future__ import annotations

from datetime import datetime, timezone


def make_run_id(prefix: str = "ghost") -> str:
    ts = datetime.now(timezone.utc).strftime("%Y%m%d-%H%M%S")
    return f"{prefix}-{ts}"
