"""Conversions between a schema mapping and the editable builder model.

The builder view only exposes a subset of JSON-Schema: keywords it has no
field for are dropped on a round trip through it.
"""

import json

from api_spec_kit.model.base import SchemaEntry, SchemaProperty

DEFAULT_REF = "#/components/schemas/SomeRef"


def mapping_to_builder(mapping: dict) -> list[SchemaEntry]:
    """Convert a normalized schema mapping into builder entries."""
    entries = []
    for name, definition in (mapping or {}).items():
        definition = definition if isinstance(definition, dict) else {}
        kind = "array" if definition.get("type") == "array" else "object"
        entry = SchemaEntry(name=str(name), kind=kind)

        properties = definition.get("properties")
        if kind == "object" and isinstance(properties, dict):
            required = definition.get("required")
            required_set = set(required) if isinstance(required, list) else set()
            entry.properties = [
                _property_from_schema(str(key), value, key in required_set)
                for key, value in properties.items()
            ]
        entries.append(entry)
    return entries


def builder_to_mapping(entries: list[SchemaEntry]) -> dict:
    """Rebuild a schema mapping from builder entries, in entry order."""
    out: dict = {}
    for entry in entries:
        if not entry.name:
            continue
        if entry.kind == "array":
            out[entry.name] = {"type": "array", "items": {"type": "object"}}
            continue

        properties: dict = {}
        required: list[str] = []
        for prop in entry.properties:
            if not prop.key:
                continue
            properties[prop.key] = _schema_from_property(prop)
            if prop.required:
                required.append(prop.key)

        definition: dict = {"type": "object", "properties": properties}
        if required:
            definition["required"] = required
        out[entry.name] = definition
    return out


def _property_from_schema(key: str, value, is_required: bool) -> SchemaProperty:
    value = value if isinstance(value, dict) else {}
    prop = SchemaProperty(key=key, required=is_required)

    if "$ref" in value:
        prop.type = "ref"
        prop.ref = str(value["$ref"] or "")
    else:
        prop.type = str(value.get("type") or "string")

    if value.get("description"):
        prop.description = str(value["description"])
    if "example" in value:
        prop.example = _stringify_example(value["example"])
    if value.get("maxLength") is not None:
        try:
            prop.max_length = int(value["maxLength"])
        except (TypeError, ValueError):
            prop.max_length = None
    if value.get("pattern"):
        prop.pattern = str(value["pattern"])
    prop.nullable = bool(value.get("nullable"))
    return prop


def _schema_from_property(prop: SchemaProperty) -> dict:
    if prop.type == "ref":
        schema: dict = {"$ref": prop.ref or DEFAULT_REF}
    elif prop.type == "array":
        schema = {"type": "array", "items": {"type": "string"}}
    else:
        schema = {"type": prop.type or "string"}

    if prop.description:
        schema["description"] = prop.description
    if prop.example:
        schema["example"] = _parse_example(prop.example)
    if prop.max_length is not None:
        schema["maxLength"] = prop.max_length
    if prop.pattern:
        schema["pattern"] = prop.pattern
    if prop.nullable:
        schema["nullable"] = True
    return schema


def _stringify_example(value) -> str:
    if isinstance(value, str):
        return value
    return json.dumps(value, ensure_ascii=False, default=str)


def _parse_example(text: str):
    stripped = text.strip()
    if not stripped:
        return ""
    try:
        return json.loads(stripped)
    except json.JSONDecodeError:
        return stripped
