"""Python SDK target: ``requests``-based runtime plus one function per operation."""

import ast
from functools import lru_cache
from pathlib import Path

from api_spec_kit.model.base import Project
from api_spec_kit.sdk import runtime
from api_spec_kit.sdk.emitter import Operation, SdkEmitter

# The runtime module is copied verbatim, so it may import only stdlib and requests.
RUNTIME_SOURCE = Path(runtime.__file__)


class PythonEmitter(SdkEmitter):
    target = "python"
    casing = "snake"
    file_extension = ".py"
    separator = "\n\n\n"
    reserved_args = frozenset({
        "client", "query", "body", "headers", "header_overrides", "raise_on_error",
        "require_param", "pick_headers",
    })

    def runtime_names(self) -> frozenset:
        return _runtime_names()

    def build_runtime(self, project: Project) -> str:
        s = self.settings
        header = [
            f"# Generated API client for {_comment(project.name)}.",
            "# Regenerate from the project instead of editing by hand.",
            "",
        ]
        factory = [
            "",
            "",
            "def create_client(base_url: str, headers: dict | None = None, **kwargs) -> ApiClient:",
            '    """Client with the defaults this SDK was generated with."""',
            f"    kwargs.setdefault(\"timeout\", {s.sdk_timeout!r})",
            f"    kwargs.setdefault(\"max_retries\", {s.sdk_max_retries!r})",
            f"    kwargs.setdefault(\"base_delay\", {s.sdk_base_delay!r})",
            "    return ApiClient(base_url, headers=headers, **kwargs)",
        ]
        source = RUNTIME_SOURCE.read_text(encoding="utf-8").rstrip("\n")
        return "\n".join(header) + source + "\n" + "\n".join(factory)

    def build_operation(self, operation: Operation) -> str:
        args = ["client: ApiClient"]
        args.extend(arg for _, arg in operation.params)
        args.extend([
            "*",
            "query: dict | None = None",
            "body=None",
            "headers: dict | None = None",
            "header_overrides: dict | None = None",
            "raise_on_error: bool = False",
        ])

        doc = [f'    """{_doc(operation.summary)}', "", f"    {_doc(operation.method)} {_doc(operation.url)}"]
        if operation.headers:
            doc.append(f"    Headers: {_doc(', '.join(operation.headers))}")
        doc.append('    """')

        lines = [f"def {operation.name}({', '.join(args)}) -> ApiResult:", *doc]
        for placeholder, arg in operation.params:
            lines.append(f"    require_param({placeholder!r}, {arg})")

        path_params = ", ".join(f"{placeholder!r}: {arg}" for placeholder, arg in operation.params)
        if operation.default_query:
            defaults = ", ".join(f"{k!r}: {v!r}" for k, v in operation.default_query)
            query = f"{{{defaults}, **(query or {{}})}}"
        else:
            query = "query"
        declared = "".join(f"{h!r}, " for h in operation.headers)

        lines.extend([
            "    return client.request(",
            f"        {operation.method!r},",
            f"        {operation.path!r},",
            f"        path_params={{{path_params}}},",
            f"        query={query},",
            f"        headers={{**pick_headers(({declared}), headers), **(header_overrides or {{}})}},",
            "        body=body,",
            "        raise_on_error=raise_on_error,",
            "    )",
        ])
        return "\n".join(lines)


@lru_cache(maxsize=None)
def _runtime_names() -> frozenset:
    """Module-level names of the embedded runtime, plus the client factory."""
    names = {"create_client"}
    for node in ast.parse(RUNTIME_SOURCE.read_text(encoding="utf-8")).body:
        if isinstance(node, (ast.FunctionDef, ast.AsyncFunctionDef, ast.ClassDef)):
            names.add(node.name)
        elif isinstance(node, (ast.Import, ast.ImportFrom)):
            names.update((alias.asname or alias.name).split(".")[0] for alias in node.names)
        elif isinstance(node, ast.Assign):
            names.update(t.id for t in node.targets if isinstance(t, ast.Name))
        elif isinstance(node, ast.AnnAssign) and isinstance(node.target, ast.Name):
            names.add(node.target.id)
    return frozenset(names)


def _comment(text: str) -> str:
    return " ".join(text.split())


def _doc(text: str) -> str:
    return " ".join(text.split()).replace("\\", "\\\\").replace('"""', '\\"\\"\\"')
