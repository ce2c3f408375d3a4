"""Schema text normalizer.

Accepts free-form schema text (JSON or YAML, bare mapping or wrapped in a
``schemas:`` root) and turns it into a canonical name -> definition mapping.
Failures are returned as values, never raised.
"""

import json
import logging
from enum import Enum
from typing import NamedTuple

import yaml
from pydantic import BaseModel

logger = logging.getLogger(__name__)


class SchemaErrorKind(str, Enum):
    SYNTAX = "SyntaxError"
    STRUCTURE = "StructureError"


class SchemaError(BaseModel):
    """Why a schema text could not be normalized."""

    kind: SchemaErrorKind
    message: str

    def __str__(self) -> str:
        return f"{self.kind.value}: {self.message}"


class NormalizeResult(NamedTuple):
    mapping: dict
    error: SchemaError | None


def detect_schema_format(text: str) -> str:
    """Return 'json', 'yaml' or 'empty' for a schema text."""
    raw = (text or "").strip()
    if not raw:
        return "empty"
    if raw.startswith(("{", "[")):
        return "json"
    return "yaml"


def normalize(text: str) -> NormalizeResult:
    """Parse schema text into a mapping of schema name -> definition."""
    fmt = detect_schema_format(text)
    if fmt == "empty":
        return NormalizeResult({}, None)

    raw = text.strip()
    try:
        data = json.loads(raw) if fmt == "json" else yaml.safe_load(raw)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        logger.debug("Schema text failed to parse as %s: %s", fmt, e)
        return NormalizeResult({}, SchemaError(kind=SchemaErrorKind.SYNTAX, message=_describe(fmt, e)))

    if not isinstance(data, dict):
        if fmt == "json":
            message = "JSON must be an object of schemas"
        else:
            message = "YAML must be a key/value mapping"
        return NormalizeResult({}, SchemaError(kind=SchemaErrorKind.STRUCTURE, message=message))

    return NormalizeResult(unwrap_schemas_root(data), None)


def unwrap_schemas_root(data: dict) -> dict:
    """Strip a single ``schemas`` wrapper key if that is all the mapping holds."""
    if list(data.keys()) == ["schemas"] and isinstance(data["schemas"], dict):
        return data["schemas"]
    return data


def to_text(mapping: dict, target_format: str = "yaml") -> str:
    """Serialize a schema mapping, keeping key order."""
    if target_format == "json":
        return json.dumps(mapping, indent=2, ensure_ascii=False, default=str)
    return yaml.safe_dump(
        mapping,
        sort_keys=False,
        indent=2,
        allow_unicode=True,
        default_flow_style=False,
    )


def _describe(fmt: str, error: Exception) -> str:
    if isinstance(error, json.JSONDecodeError):
        return f"invalid JSON: {error.msg} (line {error.lineno}, column {error.colno})"
    mark = getattr(error, "problem_mark", None)
    problem = getattr(error, "problem", None) or str(error)
    if mark is not None:
        return f"invalid YAML: {problem} (line {mark.line + 1}, column {mark.column + 1})"
    return f"invalid {fmt.upper()}: {problem}"
