"""Common SDK emitter interface.

Every target emits one runtime definition followed by one wrapper per
request. Targets differ only in surface syntax; operation names, path
parameters and header sets come from the shared helpers here.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path

from api_spec_kit.config import Settings
from api_spec_kit.generator.headers import path_params, query_params, request_headers, split_url
from api_spec_kit.model.base import Project, RequestSpec
from api_spec_kit.sdk.naming import derive_operation_name, parameter_name

logger = logging.getLogger(__name__)

TEMPLATES_DIR = Path(__file__).parent / "templates"


@dataclass(frozen=True)
class Operation:
    """Target-neutral view of one request, ready for emission."""

    name: str
    method: str
    url: str
    path: str
    params: tuple[tuple[str, str], ...]  # (placeholder, argument name)
    headers: tuple[str, ...]
    default_query: tuple[tuple[str, str], ...]
    summary: str


class SdkEmitter(ABC):
    """Base class for one SDK target."""

    target: str = ""
    casing: str = "camel"
    file_extension: str = ""
    separator: str = "\n\n"
    reserved_args: frozenset = frozenset()

    def __init__(self, settings: Settings | None = None):
        self.settings = settings or Settings()

    def emit(self, project: Project) -> str:
        parts = [self.build_runtime(project), *self.build_operations(project)]
        return self.separator.join(part.rstrip("\n") for part in parts) + "\n"

    def build_operations(self, project: Project) -> list[str]:
        operations = [self.operation_for(request) for request in project.requests]
        _warn_on_collisions(operations, self.target)
        return [self.build_operation(op) for op in operations]

    def operation_for(self, request: RequestSpec) -> Operation:
        path, _ = split_url(request.url)
        placeholders = list(dict.fromkeys(path_params(path)))
        args: list[str] = []
        for placeholder in placeholders:
            args.append(_unique(self._argument_name(placeholder), args))

        name = derive_operation_name(request.method, request.url, request.operation_id, self.casing)
        if name in self.runtime_names():
            name += "_"
        return Operation(
            name=name,
            method=request.method,
            url=request.url,
            path=path,
            params=tuple(zip(placeholders, args)),
            headers=tuple(request_headers(request)),
            default_query=tuple(query_params(request.url)),
            summary=request.summary or f"{request.method} {request.url}",
        )

    def _argument_name(self, placeholder: str) -> str:
        name = parameter_name(placeholder, self.casing)
        return name + "_" if name in self.reserved_args else name

    def runtime_names(self) -> frozenset:
        """Top-level names the runtime part defines; wrappers must not rebind them."""
        return frozenset()

    @abstractmethod
    def build_runtime(self, project: Project) -> str:
        """Source text of the shared runtime."""

    @abstractmethod
    def build_operation(self, operation: Operation) -> str:
        """Source text of one operation wrapper."""


def _warn_on_collisions(operations: list[Operation], target: str) -> None:
    # Colliding names are emitted as-is; later definitions shadow earlier ones.
    seen: dict[str, str] = {}
    for op in operations:
        label = f"{op.method} {op.url}"
        if op.name in seen:
            logger.warning(
                "Operation name %r for %s collides with %s in %s SDK",
                op.name, label, seen[op.name], target,
            )
        else:
            seen[op.name] = label


def _unique(name: str, taken: list[str]) -> str:
    """``name``, or ``name2``, ``name3``... when already taken."""
    candidate, n = name, 2
    while candidate in taken:
        candidate = f"{name}{n}"
        n += 1
    return candidate
