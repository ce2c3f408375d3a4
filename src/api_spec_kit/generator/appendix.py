"""Tabular API appendix for the generated document.

Each request becomes a section of 5-column tables (headers, path, query
string, body, response). JSON examples are flattened recursively; every
object or array contributes a balanced pair of open/close marker rows.
"""

from html import escape
from typing import Literal

from pydantic import BaseModel

from api_spec_kit.generator.headers import parse_json_example, path_params, query_params, request_headers
from api_spec_kit.model.base import Project, RequestSpec

TABLE_COLUMNS = ["Field name", "Description / value", "Mandatory", "Format", "Source/Logic/Default value"]

NO_BODY_METHODS = frozenset({"GET", "HEAD"})

# An absent or unusable example; JSON null is a real example.
MISSING = object()


class AppendixRow(BaseModel):
    """A table row: a field, or an open/close marker around a nested structure."""

    kind: Literal["field", "open", "close"] = "field"
    name: str = ""
    description: str = ""
    mandatory: str = "yes"
    format: str = ""
    source: str = ""


class AppendixTable(BaseModel):
    title: str
    rows: list[AppendixRow]


def json_type_tag(value) -> str:
    if isinstance(value, bool):
        return "Boolean"
    if isinstance(value, (int, float)):
        return "Number"
    if value is None:
        return "Null"
    return "String"


def flatten_json(value, label: str) -> list[AppendixRow]:
    """Flatten a parsed JSON value into field rows wrapped in open/close markers.

    Walks with an explicit stack, so any depth json.loads accepts is fine.
    """
    rows: list[AppendixRow] = []
    pending = [(False, value, label)]  # (is_close_marker, value, name)
    while pending:
        closing, val, name = pending.pop()
        group = name or label
        if closing:
            rows.append(AppendixRow(kind="close", name=group))
        elif isinstance(val, list):
            rows.append(AppendixRow(kind="open", name=group))
            pending.append((True, None, name))
            if val:
                pending.append((False, val[0], f"{name}[]" if name else "item"))
        elif isinstance(val, dict):
            rows.append(AppendixRow(kind="open", name=group))
            pending.append((True, None, name))
            pending.extend((False, child, str(key)) for key, child in reversed(list(val.items())))
        else:
            # optionality is not inferred from a single example
            rows.append(AppendixRow(name=name, mandatory="yes", format=json_type_tag(val)))
    return rows


def header_rows(request: RequestSpec) -> list[AppendixRow]:
    return [
        AppendixRow(name=name, description="Not relevant", mandatory="yes", format="String")
        for name in request_headers(request)
    ]


def path_rows(url: str) -> list[AppendixRow]:
    return [AppendixRow(name=name, mandatory="yes", format="String") for name in path_params(url)]


def query_rows(url: str) -> list[AppendixRow]:
    return [AppendixRow(name=key, mandatory="no", format="String") for key, _ in query_params(url)]


def request_tables(request: RequestSpec) -> list[AppendixTable]:
    """The non-empty tables of one request, in document order."""
    tables = []

    headers = header_rows(request)
    if headers:
        rows = [AppendixRow(kind="open", name="RequestHeader"), *headers, AppendixRow(kind="close", name="RequestHeader")]
        tables.append(AppendixTable(title="Headers", rows=rows))

    path = path_rows(request.url)
    if path:
        tables.append(AppendixTable(title="PATH", rows=path))

    query = query_rows(request.url)
    if query:
        tables.append(AppendixTable(title="Query string", rows=query))

    body = parse_json_example(request.request_example, MISSING)
    if request.method not in NO_BODY_METHODS and body is not MISSING:
        tables.append(AppendixTable(title="Body", rows=flatten_json(body, "Body")))

    response = parse_json_example(request.response_example, MISSING)
    if response is not MISSING:
        rows = flatten_json(response, "Response")
        rows = [AppendixRow(kind="open", name="ResponseHeader"), *rows, AppendixRow(kind="close", name="ResponseHeader")]
        tables.append(AppendixTable(title="Response", rows=rows))

    return tables


def build_appendix(project: Project) -> list[str]:
    """Markup fragments: the document heading, then one section per request."""
    title = f"API Appendix: {project.name}"
    fragments = ['<hr style="margin-top:24px; border:none; border-top:2px solid #ccc;" />\n' + _h2(title)]
    for request in project.requests:
        fragments.append(_request_section(request))
    return fragments


def render_appendix(project: Project) -> str:
    return "\n".join(build_appendix(project))


def build_document(project: Project, html: str | None = None, title: str = "Document", rtl: bool = True) -> str:
    """Full HTML document: intro text (or the given HTML) followed by the appendix."""
    direction = "direction:rtl; text-align:right;" if rtl else "direction:ltr; text-align:left;"
    body = project.intro_text if html is None else html
    return (
        "<!DOCTYPE html>\n"
        f'<html><head><meta charset="utf-8" /><title>{escape(title)}</title></head><body>\n'
        f'<div style="font-family:Arial,Helvetica,sans-serif; {direction}">\n'
        f"{body or ''}\n"
        f"{render_appendix(project)}\n"
        "</div>\n</body></html>\n"
    )


def _request_section(request: RequestSpec) -> str:
    parts = [
        _h3(f"{request.method} {request.url}"),
        _h3("Request address"),
        _p(request.url),
    ]
    meta = "\n".join(
        line for line in (
            f"summary: {request.summary}" if request.summary else "",
            f"description: {request.description}" if request.description else "",
            f"operationId: {request.operation_id}" if request.operation_id else "",
        ) if line
    )
    if meta:
        parts.append(_p(meta))

    for table in request_tables(request):
        parts.append(_h3(table.title))
        parts.append(_table(table.rows))
    return "\n".join(parts)


def _h2(text: str) -> str:
    return f'<h2 style="margin:28px 0 6px; font-size:20px;">{_title(text)}</h2>'


def _h3(text: str) -> str:
    return f'<h3 style="margin:16px 0 6px; font-size:16px;">{_title(text)}</h3>'


def _p(text: str) -> str:
    return f'<p style="margin:6px 0; font-size:12px; white-space:pre-wrap;">{escape(text)}</p>'


def _title(text: str) -> str:
    return " ".join(escape(text).split())


def _table(rows: list[AppendixRow]) -> str:
    head = "".join(
        f'<th style="background:#dfe7f3; border:1px solid #999; padding:6px; font-size:12px;">{escape(c)}</th>'
        for c in TABLE_COLUMNS
    )
    body = "".join(_row(row) for row in rows)
    return (
        '<table style="width:100%; border-collapse:collapse; margin:8px 0;">'
        f"<thead><tr>{head}</tr></thead><tbody>{body}</tbody></table>"
    )


def _row(row: AppendixRow) -> str:
    if row.kind != "field":
        marker = "opening element" if row.kind == "open" else "closing element"
        return (
            '<tr><td colspan="5" style="background:#e6e6e6; border:1px solid #999; padding:6px; font-weight:700;">'
            f"{escape(row.name)} ({marker})</td></tr>"
        )
    cells = (row.name, row.description, row.mandatory, row.format, row.source)
    return "<tr>" + "".join(
        f'<td style="border:1px solid #999; padding:6px; font-size:12px; vertical-align:top; word-break:break-word;">{escape(c)}</td>'
        for c in cells
    ) + "</tr>"
