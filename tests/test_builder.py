from api_spec_kit.model.base import SchemaEntry, SchemaProperty
from api_spec_kit.schema.builder import builder_to_mapping, mapping_to_builder

MAPPING = {
    "User": {
        "type": "object",
        "properties": {
            "name": {"type": "string", "maxLength": 40, "description": "Full name", "pattern": "^[A-Z]"},
            "age": {"type": "integer", "example": 30, "nullable": True},
            "address": {"$ref": "#/components/schemas/Address"},
            "tags": {"type": "array", "items": {"type": "string"}},
        },
        "required": ["name", "address"],
    },
    "Users": {"type": "array", "items": {"$ref": "#/components/schemas/User"}},
}


class TestMappingToBuilder:
    def test_entries_in_order(self):
        entries = mapping_to_builder(MAPPING)
        assert [e.name for e in entries] == ["User", "Users"]
        assert entries[0].kind == "object"
        assert entries[1].kind == "array"
        assert entries[1].properties == []

    def test_property_fields(self):
        props = {p.key: p for p in mapping_to_builder(MAPPING)[0].properties}
        assert props["name"].required is True
        assert props["name"].max_length == 40
        assert props["name"].pattern == "^[A-Z]"
        assert props["age"].required is False
        assert props["age"].example == "30"
        assert props["age"].nullable is True
        assert props["address"].type == "ref"
        assert props["address"].ref == "#/components/schemas/Address"
        assert props["tags"].type == "array"

    def test_untyped_definition_is_object(self):
        entries = mapping_to_builder({"Loose": {"properties": {"x": {}}}})
        assert entries[0].kind == "object"
        assert [(p.key, p.type) for p in entries[0].properties] == [("x", "string")]


class TestBuilderToMapping:
    def test_required_list_only_when_needed(self):
        entries = [SchemaEntry(name="A", properties=[SchemaProperty(key="x")])]
        assert builder_to_mapping(entries) == {
            "A": {"type": "object", "properties": {"x": {"type": "string"}}},
        }

    def test_defaults_for_ref_and_array(self):
        entries = [
            SchemaEntry(name="A", properties=[
                SchemaProperty(key="r", type="ref"),
                SchemaProperty(key="l", type="array", required=True),
            ]),
            SchemaEntry(name="B", kind="array"),
        ]
        mapping = builder_to_mapping(entries)
        assert mapping["A"]["properties"]["r"] == {"$ref": "#/components/schemas/SomeRef"}
        assert mapping["A"]["properties"]["l"] == {"type": "array", "items": {"type": "string"}}
        assert mapping["A"]["required"] == ["l"]
        assert mapping["B"] == {"type": "array", "items": {"type": "object"}}

    def test_example_parsed_as_json_when_possible(self):
        entries = [SchemaEntry(name="A", properties=[
            SchemaProperty(key="n", type="integer", example="42"),
            SchemaProperty(key="s", example="hello"),
        ])]
        props = builder_to_mapping(entries)["A"]["properties"]
        assert props["n"]["example"] == 42
        assert props["s"]["example"] == "hello"

    def test_blank_names_are_skipped(self):
        entries = [SchemaEntry(name="", properties=[]), SchemaEntry(name="A", properties=[SchemaProperty(key="")])]
        assert builder_to_mapping(entries) == {"A": {"type": "object", "properties": {}}}


class TestRoundTrip:
    def test_preserves_names_types_required_and_refs(self):
        rebuilt = builder_to_mapping(mapping_to_builder(MAPPING))
        assert list(rebuilt) == list(MAPPING)
        user = rebuilt["User"]
        assert user["required"] == ["name", "address"]
        assert user["properties"]["name"]["type"] == "string"
        assert user["properties"]["age"]["type"] == "integer"
        assert user["properties"]["address"] == {"$ref": "#/components/schemas/Address"}
        assert user["properties"]["tags"]["type"] == "array"
        assert rebuilt["Users"]["type"] == "array"

    def test_unknown_keywords_are_dropped(self):
        rebuilt = builder_to_mapping(mapping_to_builder({"A": {"type": "object", "properties": {}, "x-internal": True}}))
        assert "x-internal" not in rebuilt["A"]
