"""Operation and parameter name derivation for generated SDKs."""

import keyword
import re

from api_spec_kit.generator.headers import path_params, split_url

METHOD_VERBS = {
    "get": "get",
    "post": "create",
    "put": "update",
    "patch": "patch",
    "delete": "delete",
}

_WORD_RE = re.compile(r"[A-Z]+(?=[A-Z][a-z])|[A-Z]?[a-z]+|[A-Z]+|\d+")
_PLACEHOLDER_RE = re.compile(r"^\{[^}]+\}$")

TS_RESERVED = frozenset({
    "break", "case", "catch", "class", "const", "continue", "debugger", "default",
    "delete", "do", "else", "enum", "export", "extends", "false", "finally", "for",
    "function", "if", "import", "in", "instanceof", "new", "null", "return", "super",
    "switch", "this", "throw", "true", "try", "typeof", "var", "void", "while", "with",
    "let", "static", "yield", "await", "implements", "interface", "package", "private",
    "protected", "public",
})


def split_words(text: str) -> list[str]:
    """Split free text or mixed-case identifiers into words."""
    return _WORD_RE.findall(text or "")


def to_camel(text: str) -> str:
    words = split_words(text)
    if not words:
        return ""
    return words[0].lower() + "".join(w.capitalize() for w in words[1:])


def to_pascal(text: str) -> str:
    return "".join(w.capitalize() for w in split_words(text))


def to_snake(text: str) -> str:
    return "_".join(w.lower() for w in split_words(text))


CASINGS = {
    "camel": to_camel,
    "snake": to_snake,
    "pascal": to_pascal,
}


def singularize(noun: str) -> str:
    """Naive English singular: users -> user, categories -> category."""
    lower = noun.lower()
    if lower.endswith("ies") and len(noun) > 3:
        return noun[:-3] + ("Y" if noun[-3:].isupper() else "y")
    if lower.endswith("s") and not lower.endswith(("ss", "us", "is")) and len(noun) > 1:
        return noun[:-1]
    return noun


def derive_operation_name(method: str, url: str, operation_id: str | None = None, casing: str = "camel") -> str:
    """Name of the SDK callable for one operation.

    An explicit operation id wins; otherwise the name is composed from the
    method verb, the last literal path segment and the path placeholders,
    e.g. ``GET /users/{id}`` -> ``getUserById``.
    """
    convert = CASINGS[casing]
    if operation_id and operation_id.strip():
        return _safe_identifier(convert(operation_id), casing)

    path, _ = split_url(url or "")
    segments = [s for s in path.split("/") if s]
    literals = [s for s in segments if not _PLACEHOLDER_RE.match(s)]
    resource = literals[-1] if literals else "root"
    if segments and literals and _PLACEHOLDER_RE.match(segments[-1]):
        resource = singularize(resource)

    verb = METHOD_VERBS.get((method or "").lower(), (method or "").lower())
    params = path_params(path)
    suffix = ""
    if params:
        suffix = "By" + "And".join(to_pascal(p) for p in params)

    return _safe_identifier(convert(f"{verb} {resource} {suffix}"), casing)


def parameter_name(placeholder: str, casing: str = "camel") -> str:
    """Argument name for a ``{placeholder}`` in the target's casing."""
    return _safe_identifier(CASINGS[casing](placeholder), casing)


def _safe_identifier(name: str, casing: str) -> str:
    if not name:
        name = "operation" if casing != "pascal" else "Operation"
    if name[0].isdigit():
        name = ("op_" if casing == "snake" else "op") + name
    reserved = keyword.iskeyword(name) if casing == "snake" else name in TS_RESERVED
    if reserved:
        name += "_"
    return name
