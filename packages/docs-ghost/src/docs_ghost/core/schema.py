from __future__ import annotations

import json
from importlib import resources
from typing import Any

import jsonschema

from ..errors import AuditError
from ..exit_codes import ERR_VALIDATION

REPORT_SCHEMA = "audit-report.schema.json"


def load_schema(name: str = REPORT_SCHEMA) -> dict[str, Any]:
    text = resources.files("docs_ghost").joinpath("schemas", name).read_text(encoding="utf-8")
    return json.loads(text)


def validate_payload(payload: dict[str, Any], name: str = REPORT_SCHEMA) -> None:
    try:
        jsonschema.validate(payload, load_schema(name))
    except jsonschema.ValidationError as exc:
        where = "/".join(str(part) for part in exc.absolute_path) or "<root>"
        raise AuditError(f"report failed schema validation at {where}: {exc.message}", ERR_VALIDATION, kind="schema_invalid") from exc
