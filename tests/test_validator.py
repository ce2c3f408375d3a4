from api_spec_kit.generator.validator import validate_descriptor, validate_files, validate_python

DESCRIPTOR = "openapi: 3.0.3\ninfo:\n  title: x\npaths: {}\ncomponents: {}\n"


class TestValidatePython:
    def test_valid_code(self):
        errors = validate_python({"client.py": "import os\nx = 1\n"})
        assert errors == {}

    def test_syntax_error(self):
        errors = validate_python({"client.py": "def foo(\n"})
        assert "client.py" in errors
        assert "SyntaxError" in errors["client.py"]

    def test_skips_other_files(self):
        errors = validate_python({"client.ts": "export const x = ;", "appendix.html": "<p>"})
        assert errors == {}


class TestValidateDescriptor:
    def test_valid(self):
        assert validate_descriptor({"openapi.yaml": DESCRIPTOR}) == {}

    def test_invalid_yaml(self):
        errors = validate_descriptor({"openapi.yaml": "key: [invalid\n"})
        assert "YAMLError" in errors["openapi.yaml"]

    def test_not_a_mapping(self):
        errors = validate_descriptor({"openapi.yaml": "- a\n- b\n"})
        assert errors["openapi.yaml"] == "descriptor is not a mapping"

    def test_missing_sections(self):
        errors = validate_descriptor({"openapi.yml": "openapi: 3.0.3\ninfo: {}\n"})
        assert errors["openapi.yml"] == "descriptor is missing: paths, components"


class TestValidateFiles:
    def test_all_valid(self):
        files = {"openapi.yaml": DESCRIPTOR, "client.py": "x = 1\n", "appendix.html": "<p></p>"}
        assert validate_files(files) == {}

    def test_errors_merged(self):
        files = {"openapi.yaml": "key: [invalid\n", "client.py": "def foo(\n"}
        errors = validate_files(files)
        assert set(errors) == {"openapi.yaml", "client.py"}
