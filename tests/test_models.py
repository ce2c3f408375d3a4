from pathlib import Path

import pytest
from pydantic import ValidationError

from api_spec_kit.model.base import Project, RequestSpec
from api_spec_kit.model.loader import detect_format, load_project

FIXTURES = Path(__file__).parent / "fixtures"


class TestRequestSpec:
    def test_defaults(self):
        r = RequestSpec()
        assert r.url == "/path"
        assert r.method == "GET"
        assert r.std_headers == []
        assert r.operation_id is None

    def test_method_is_upper_cased(self):
        assert RequestSpec(method="patch").method == "PATCH"

    def test_blank_url_and_operation_id(self):
        r = RequestSpec(url="  ", operationId="  ")
        assert r.url == "/path"
        assert r.operation_id is None

    def test_accepts_store_aliases(self):
        r = RequestSpec.model_validate({
            "stdHeaders": ["x-trace-id"],
            "request": "{}",
            "response": "[]",
            "operationId": "listThings",
        })
        assert r.std_headers == ["x-trace-id"]
        assert r.request_example == "{}"
        assert r.response_example == "[]"
        assert r.operation_id == "listThings"

    def test_legacy_selected_headers(self):
        r = RequestSpec.model_validate({"selectedHeaders": ["x-app-id"]})
        assert r.std_headers == ["x-app-id"]

    def test_is_frozen(self):
        r = RequestSpec(url="/a")
        with pytest.raises(ValidationError):
            r.url = "/b"


class TestProject:
    def test_schema_text_is_normalized(self):
        p = Project(schema='{"schemas": {"User": {"type": "object"}}}')
        assert p.schemas == {"User": {"type": "object"}}

    def test_schemas_are_rederived_from_text(self):
        p = Project.model_validate({"schema": "Pet:\n  type: object\n", "schemas": {"Stale": {}}})
        assert list(p.schemas) == ["Pet"]

    def test_text_regenerated_from_mapping_only_record(self):
        p = Project.model_validate({"schemas": {"Pet": {"type": "object"}}})
        assert "Pet:" in p.schema_text
        assert p.schemas == {"Pet": {"type": "object"}}

    def test_invalid_schema_text_blocks_snapshot(self):
        with pytest.raises(ValidationError) as exc:
            Project(schema="[1, 2]")
        assert "StructureError" in str(exc.value)

    def test_with_schema_text_returns_new_snapshot(self):
        p = Project(name="Shop", schema="A:\n  type: object\n")
        q = p.with_schema_text("B:\n  type: array\n")
        assert list(p.schemas) == ["A"]
        assert list(q.schemas) == ["B"]
        assert q.name == "Shop"

    def test_blank_name_defaults(self):
        assert Project(name=" ").name == "API"


class TestLoader:
    def test_detect_json(self):
        assert detect_format(FIXTURES / "project.json") == "json"

    def test_detect_yaml_by_suffix(self, tmp_path):
        f = tmp_path / "project.yml"
        f.write_text("name: Shop\n")
        assert detect_format(f) == "yaml"

    def test_load_envelope(self):
        project = load_project(FIXTURES / "project.json")
        assert project.name == "Customer Accounts"
        assert len(project.requests) == 2
        assert project.requests[0].method == "GET"
        assert project.extra.vitality is True
        assert list(project.schemas) == ["Account", "User"]

    def test_load_bare_yaml(self, tmp_path):
        f = tmp_path / "p.yaml"
        f.write_text("name: Shop\nrequests:\n  - url: /items\n")
        project = load_project(f)
        assert project.requests[0].url == "/items"

    def test_non_object_file_rejected(self, tmp_path):
        f = tmp_path / "p.json"
        f.write_text("[]")
        with pytest.raises(ValueError):
            load_project(f)
