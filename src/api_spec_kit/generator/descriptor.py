"""OpenAPI descriptor assembler.

Builds the YAML document line by line so the fixed organisational layout
(comments included) survives exactly; only the project schemas go through
the YAML dumper.
"""

import json
import re

import yaml

from api_spec_kit.config import Settings
from api_spec_kit.generator.headers import aggregate_headers, request_headers
from api_spec_kit.model.base import ExtraFlags, Project, RequestSpec
from api_spec_kit.schema.normalizer import to_text

WELL_KNOWN_HEADERS = frozenset({
    "x-transaction-id", "x-message-id", "x-trace-id", "x-channel-id",
    "x-user-id", "x-app-id", "x-uuid-id", "x-ip-id",
})

INSTRUCTIONS = [
    "1. all swagger files must be based on the current version of the API Template",
    "2. all string placed in <- ->  should be replaced with your values",
    "3. all code is CamelCase syntex",
    "4. objects start with uppercase",
    "5. fields start with lowercase",
    "6. service domain names come from UrlExcel",
    "7. qualifier names come from UrlExcel",
    "8. r-reference-id is the primary id",
    "9. q-reference-id is the secondary id",
    "10. tags are from the list in UrlExcel",
    "11. define types by using the dictionaries : BaseTypes, Business etc where possible",
    "12. define header params for request and response",
    "13. never finish object definition with additionalProperties: true",
]


def _pad(n: int) -> str:
    return "  " * n


def build_descriptor(project: Project, settings: Settings | None = None) -> str:
    """Render the OpenAPI 3 descriptor for a project."""
    settings = settings or Settings()
    email = project.manager_email
    contact = contact_name_from_email(email) or project.name

    y = [
        "openapi: 3.0.3",
        "info:",
        f"{_pad(1)}version: 1.0.0",
        f"{_pad(1)}title: {_scalar(project.name)}",
        f"{_pad(1)}description: {_scalar(project.swagger_description or '—')}",
        f"{_pad(1)}contact:",
        f"{_pad(2)}name: {_scalar(contact)}",
        f"{_pad(2)}email: {_scalar(email or settings.default_email)}",
        f"{_pad(2)}# leumi openapi extensions",
        f"{_pad(1)}x-jira-ticket: {_scalar(project.jira_ticket or settings.default_ticket)}",
        f"{_pad(1)}x-api-template: TMPLT_Base_1.2.0 # do not change",
        f"{_pad(1)}x-api-environment: campus  # default: campus",
        f"{_pad(1)}x-api-organization: leumi #default: leumi",
        f"{_pad(1)}x-apigee-server:  leuminp  #leumitest, default leuminp",
        f"{_pad(1)}x-proxy-name: {json.dumps(project.name, ensure_ascii=False)} # final proxy name in apigee",
        "",
        "# instructions",
        *(f"# {line}" for line in INSTRUCTIONS),
        "",
        "tags: # do not change",
        "- name: AAB",
        f"{_pad(1)}description: AAB approved Swagger",
        "",
        "servers:",
        f"{_pad(1)}# added apigee setup - only change when api version changes",
        "",
        "paths:",
    ]

    for request in project.requests:
        y.extend(_path_item(request))
    y.extend(_health_paths(project.extra))

    y.extend([
        "",
        "security:",
        f"{_pad(1)}- ApiKeyAuth: []",
        "",
        "components:",
        f"{_pad(1)}securitySchemes:",
        f"{_pad(2)}ApiKeyAuth:",
        f"{_pad(3)}name: X-APG-APIKey",
        f"{_pad(3)}type: apiKey",
        f"{_pad(3)}in: header",
        f"{_pad(2)}BearerAuth:",
        f"{_pad(3)}type: http",
        f"{_pad(3)}scheme: bearer",
        f"{_pad(3)}bearerFormat: JWT",
        "",
        f"{_pad(1)}schemas:",
        f"{_pad(2)}User-id-ref:",
        f"{_pad(3)}type: string",
        f"{_pad(3)}example: K4F6TRW",
    ])
    y.extend(_schemas_block(project.schemas))
    y.append("")
    y.extend(_components_parameters(aggregate_headers(project.requests), settings.dictionary_url))

    return "\n".join(y) + "\n"


def contact_name_from_email(email: str) -> str:
    """Derive a display name from an email's local part: 'jane.doe@x' -> 'Jane Doe'."""
    local = (email or "").strip().split("@")[0]
    return " ".join(segment[:1].upper() + segment[1:].lower() for segment in local.split(".") if segment)


def operation_id_for(request: RequestSpec) -> str:
    if request.operation_id:
        return request.operation_id
    return request.method.lower() + re.sub(r"[/{}-]+", "_", request.url)


def _path_item(request: RequestSpec) -> list[str]:
    method = request.method.lower()
    url = request.url
    headers = request_headers(request)

    lines = [
        f"{_pad(1)}{_scalar(url)}:",
        f"{_pad(2)}{method}:",
        f"{_pad(3)}tags:",
        f"{_pad(4)}- info",
        f"{_pad(3)}summary: {_scalar(request.summary or f'Auto summary for {request.method} {url}')}",
        f"{_pad(3)}description: {_scalar(request.description or f'Auto description for {request.method} {url}')}",
        f"{_pad(3)}operationId: {_scalar(operation_id_for(request))}",
        f"{_pad(3)}# jwt security per method",
        f"{_pad(3)}#security:",
        f"{_pad(3)}#  - BearerAuth: []",
    ]
    if headers:
        lines.append(f"{_pad(3)}parameters:")
        lines.extend(f"{_pad(4)}- $ref: {_quoted('#/components/parameters/' + h)}" for h in headers)
    lines.extend([
        f"{_pad(3)}responses:",
        f"{_pad(4)}'200':",
        f"{_pad(5)}description: Successful",
    ])
    return lines


def _health_paths(extra: ExtraFlags) -> list[str]:
    lines = []
    if extra.vitality:
        lines.extend([
            f"{_pad(1)}/vitality:",
            f"{_pad(2)}get:",
            f"{_pad(3)}summary: Service status endpoint. Indication that the service actually cant do what it was designed to do.",
            f"{_pad(3)}description: Indication that the service actually cant do what it was designed to do.",
            f"{_pad(3)}tags:",
            f"{_pad(4)}- ping",
            f"{_pad(3)}responses:",
            f"{_pad(4)}'200':",
            f"{_pad(5)}description: Success",
            f"{_pad(3)}operationId: getMyVitality",
        ])
    if extra.ping:
        lines.extend([
            f"{_pad(1)}/Ping:",
            f"{_pad(2)}get:",
            f"{_pad(3)}summary: Your GET endpoint.",
            f"{_pad(3)}description: Validate that the connection to te server is alive (kept alive)",
            f"{_pad(3)}tags:",
            f"{_pad(4)}- ping",
            f"{_pad(3)}responses:",
            f"{_pad(4)}'200':",
            f"{_pad(5)}description: Success",
            f"{_pad(3)}operationId: getMyPing",
        ])
    return lines


def _schemas_block(schemas: dict) -> list[str]:
    if not schemas:
        return []
    dumped = to_text(schemas, "yaml").rstrip().split("\n")
    return [_pad(2) + line for line in dumped]


def _components_parameters(headers: list[str], dictionary_url: str) -> list[str]:
    lines = [
        f"{_pad(1)}# jwt security per method",
        f"{_pad(1)}#security:",
        f"{_pad(1)}#  - BearerAuth: []",
        f"{_pad(1)}parameters:",
        f"{_pad(2)}originalUserId:",
        f"{_pad(3)}name: originalUserId",
        f"{_pad(3)}in: path",
        f"{_pad(3)}schema:",
        f"{_pad(4)}$ref: '#/components/schemas/User-id-ref'",
        f"{_pad(3)}description: Qualifier Reference",
        f"{_pad(3)}required: true",
    ]
    for name in headers:
        key = _scalar(name)
        if name in WELL_KNOWN_HEADERS:
            lines.append(f"{_pad(2)}{key}:")
            lines.append(f"{_pad(3)}$ref: {_quoted(f'{dictionary_url}#/components/parameters/{name}')}")
        else:
            lines.extend([
                f"{_pad(2)}{key}:",
                f"{_pad(3)}name: {key}",
                f"{_pad(3)}in: header",
                f"{_pad(3)}required: false",
                f"{_pad(3)}schema:",
                f"{_pad(4)}type: string",
            ])
    return lines


def _scalar(value: str) -> str:
    """Render a string as a single-line YAML scalar, quoting only when needed."""
    if "\n" in value or "\r" in value:
        return json.dumps(value, ensure_ascii=False)
    text = yaml.safe_dump(value, default_flow_style=True, allow_unicode=True, width=float("inf")).strip()
    if text.endswith("..."):
        text = text[: -len("...")].rstrip()
    return text


def _quoted(value: str) -> str:
    """Render a string as a single-quoted YAML scalar, the style the $ref lines use."""
    if not value.isprintable():
        return json.dumps(value)
    return "'" + value.replace("'", "''") + "'"
