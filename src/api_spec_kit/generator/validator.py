"""Checks generated artifacts before they are written to disk."""

import ast

import yaml

REQUIRED_DESCRIPTOR_KEYS = ("openapi", "info", "paths", "components")


def validate_python(files: dict[str, str]) -> dict[str, str]:
    """Check generated Python SDK sources for syntax errors.

    Returns dict of {filename: error_message} for files with errors.
    """
    errors = {}
    for filename, content in files.items():
        if not filename.endswith(".py") or not content.strip():
            continue
        try:
            ast.parse(content, filename=filename)
        except SyntaxError as e:
            errors[filename] = f"SyntaxError: {e.msg} (line {e.lineno})"
    return errors


def validate_descriptor(files: dict[str, str]) -> dict[str, str]:
    """Check that YAML descriptors parse and carry the top-level OpenAPI sections.

    Returns dict of {filename: error_message} for files with errors.
    """
    errors = {}
    for filename, content in files.items():
        if not filename.endswith((".yaml", ".yml")):
            continue
        try:
            doc = yaml.safe_load(content)
        except yaml.YAMLError as e:
            errors[filename] = f"YAMLError: {e}"
            continue
        if not isinstance(doc, dict):
            errors[filename] = "descriptor is not a mapping"
            continue
        missing = [key for key in REQUIRED_DESCRIPTOR_KEYS if key not in doc]
        if missing:
            errors[filename] = f"descriptor is missing: {', '.join(missing)}"
    return errors


def validate_files(files: dict[str, str]) -> dict[str, str]:
    """Run every check on a set of generated files."""
    errors = {}
    errors.update(validate_python(files))
    errors.update(validate_descriptor(files))
    return errors
