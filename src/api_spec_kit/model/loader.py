"""Load a Project snapshot from a JSON or YAML file."""

import json
from pathlib import Path

import yaml

from api_spec_kit.model.base import Project


def detect_format(file_path: Path) -> str:
    """Detect whether a project file is JSON or YAML.

    Returns: 'json' or 'yaml'.
    """
    if file_path.suffix.lower() in (".yaml", ".yml"):
        return "yaml"
    text = file_path.read_text(encoding="utf-8").lstrip()
    if text.startswith(("{", "[")):
        return "json"
    return "yaml"


def load_project(file_path: Path) -> Project:
    """Read a project file, accepting a bare project or a ``{"project": ...}`` envelope."""
    text = file_path.read_text(encoding="utf-8")
    if detect_format(file_path) == "json":
        data = json.loads(text)
    else:
        data = yaml.safe_load(text)

    if not isinstance(data, dict):
        raise ValueError(f"{file_path}: project file must contain an object")
    if isinstance(data.get("project"), dict):
        data = data["project"]
    return Project.model_validate(data)
