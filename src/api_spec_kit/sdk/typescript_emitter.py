"""TypeScript SDK target: ``fetch``-based runtime plus one async function per operation."""

import json
import re
from functools import lru_cache

from api_spec_kit.model.base import Project
from api_spec_kit.sdk.emitter import TEMPLATES_DIR, Operation, SdkEmitter

RUNTIME_TEMPLATE = TEMPLATES_DIR / "runtime.ts"

_DECLARATION_RE = re.compile(
    r"^(?:export\s+)?(?:async\s+)?(?:function|class|const|let|interface|type)\s+([A-Za-z_$][\w$]*)",
    re.MULTILINE,
)


class TypeScriptEmitter(SdkEmitter):
    target = "typescript"
    casing = "camel"
    file_extension = ".ts"

    def runtime_names(self) -> frozenset:
        return _runtime_names()

    def build_runtime(self, project: Project) -> str:
        s = self.settings
        template = RUNTIME_TEMPLATE.read_text(encoding="utf-8")
        runtime = (
            template.replace("__TIMEOUT_MS__", _ms(s.sdk_timeout))
            .replace("__MAX_RETRIES__", str(s.sdk_max_retries))
            .replace("__BASE_DELAY_MS__", _ms(s.sdk_base_delay))
        )
        header = (
            f"// Generated API client for {_comment(project.name)}.\n"
            "// Regenerate from the project instead of editing by hand.\n\n"
        )
        return header + runtime

    def build_operation(self, operation: Operation) -> str:
        lines = [
            "/**",
            f" * {_comment(operation.summary)}",
            " *",
            f" * {_comment(operation.method)} {_comment(operation.url)}",
        ]
        if operation.headers:
            lines.append(f" * Headers: {_comment(', '.join(operation.headers))}")
        lines.append(" */")

        signature = ["  client: ApiClient,"]
        if operation.params:
            fields = "; ".join(f"{arg}: string | number" for _, arg in operation.params)
            signature.append(f"  params: {{ {fields} }},")
        signature.append("  options: OperationOptions = {},")

        lines.append(f"export async function {operation.name}(")
        lines.extend(signature)
        lines.append("): Promise<ApiResult> {")
        for placeholder, arg in operation.params:
            lines.append(f"  requireParam({json.dumps(placeholder)}, params.{arg});")

        path_params = ", ".join(f"{json.dumps(p)}: params.{arg}" for p, arg in operation.params)
        if operation.default_query:
            defaults = ", ".join(f"{json.dumps(k)}: {json.dumps(v)}" for k, v in operation.default_query)
            query = f"{{ {defaults}, ...(options.query ?? {{}}) }}"
        else:
            query = "options.query"
        declared = ", ".join(json.dumps(h) for h in operation.headers)

        lines.extend([
            "  return client.request({",
            f"    method: {json.dumps(operation.method)},",
            f"    path: {json.dumps(operation.path)},",
            f"    pathParams: {{ {path_params} }},",
            f"    query: {query},",
            f"    headers: {{ ...pickHeaders([{declared}], options.headers), ...(options.headerOverrides ?? {{}}) }},",
            "    body: options.body,",
            "    raiseOnError: options.raiseOnError,",
            "    signal: options.signal,",
            "  });",
            "}",
        ])
        return "\n".join(lines)


@lru_cache(maxsize=None)
def _runtime_names() -> frozenset:
    """Top-level declarations of the runtime template."""
    return frozenset(_DECLARATION_RE.findall(RUNTIME_TEMPLATE.read_text(encoding="utf-8")))


def _ms(seconds: float) -> str:
    return str(int(round(seconds * 1000)))


def _comment(text: str) -> str:
    return " ".join(text.split()).replace("*/", "*\\/")
