"""Tests for the validate, check-schema and list-rules commands."""

import json

import pytest
import yaml

from formulary.cli.commands import check_schema, list_rules, validate
from formulary.cli.exit_codes import ExitCode


class TestValidateCommand:
    def test_valid_document(self, user_schema, write_json, capsys) -> None:
        data = write_json("user.json", {"name": " Ada ", "age": "21"})
        assert validate(data, schema=user_schema) == ExitCode.SUCCESS
        assert capsys.readouterr().out.strip() == "Validation passed"

    def test_issues_found(self, user_schema, write_json, capsys) -> None:
        data = write_json("user.json", {"name": "A", "age": 16})
        assert validate(data, schema=user_schema) == ExitCode.ISSUES_FOUND
        out = capsys.readouterr().out
        assert "Validation failed: 2 issue(s) at 2 path(s)" in out
        assert "  - name: minLength" in out
        assert "  - age: minimum (accepted=18, current=16)" in out

    def test_json_report_carries_transformed_value(self, user_schema, write_json, capsys) -> None:
        data = write_json("user.json", {"name": " Ada ", "age": "21", "extra": 1})
        assert validate(data, schema=user_schema, format="json") == ExitCode.SUCCESS
        report = json.loads(capsys.readouterr().out)
        assert report == {"is_valid": True, "value": {"name": "Ada", "age": 21}, "issues": []}

    def test_quiet(self, user_schema, write_json, capsys) -> None:
        data = write_json("user.json", {"name": "Ada"})
        assert validate(data, schema=user_schema, quiet=True) == ExitCode.SUCCESS
        assert capsys.readouterr().out == ""

    def test_phone_region(self, tmp_path, write_json, capsys) -> None:
        schema = write_json("phone.schema.json", {"toE164": True})
        data = write_json("phone.json", "020 123 4567")
        exit_code = validate(data, schema=schema, phone_region="NL", format="json")
        assert exit_code == ExitCode.SUCCESS
        assert json.loads(capsys.readouterr().out)["value"] == "+31201234567"

    def test_configuration_file(self, tmp_path, user_schema, write_json, capsys) -> None:
        config = tmp_path / "formulary.yaml"
        config.write_text(yaml.safe_dump({"schema": user_schema.name, "format": "json"}))
        data = write_json("user.json", {"name": "Ada"})
        assert validate(data, config=config) == ExitCode.SUCCESS
        assert json.loads(capsys.readouterr().out)["value"] == {"name": "Ada"}

    def test_missing_schema(self, write_json, capsys) -> None:
        data = write_json("user.json", {})
        assert validate(data) == ExitCode.CONFIG_ERROR
        assert "No schema given" in capsys.readouterr().err

    def test_invalid_configuration(self, user_schema, write_json, capsys) -> None:
        data = write_json("user.json", {})
        assert validate(data, schema=user_schema, log_level="loud") == ExitCode.CONFIG_ERROR
        assert "Invalid log_level" in capsys.readouterr().err

    def test_missing_document(self, tmp_path, user_schema, capsys) -> None:
        assert validate(tmp_path / "nope.json", schema=user_schema) == ExitCode.INPUT_ERROR
        assert "File not found" in capsys.readouterr().err

    def test_unknown_rule(self, write_json, capsys) -> None:
        schema = write_json("bad.schema.json", {"minLenght": 3})
        data = write_json("data.json", "abc")
        assert validate(data, schema=schema) == ExitCode.SCHEMA_ERROR
        err = capsys.readouterr().err
        assert "Unknown rule 'minLenght'" in err
        assert "Context:" in err

    def test_strict_catches_unreached_rules(self, write_json) -> None:
        schema = write_json("bad.schema.json", {"properties": {"a": {"minLenght": 3}}})
        data = write_json("data.json", {})
        assert validate(data, schema=schema) == ExitCode.SUCCESS
        assert validate(data, schema=schema, strict=True) == ExitCode.SCHEMA_ERROR

    def test_log_file(self, tmp_path, user_schema, write_json) -> None:
        log_file = tmp_path / "formulary.log"
        data = write_json("user.json", {"name": "Ada"})
        validate(data, schema=user_schema, log_level="info", log_file=log_file)
        assert "validation complete: valid=True" in log_file.read_text()


class TestCheckSchemaCommand:
    def test_valid(self, user_schema, capsys) -> None:
        assert check_schema(user_schema, verbose=True) == ExitCode.SUCCESS
        out = capsys.readouterr().out
        assert f"✓ Schema is valid: {user_schema}" in out
        assert "  - properties" in out

    def test_unknown_nested_rule(self, write_json, capsys) -> None:
        schema = write_json("bad.schema.json", {"items": {"toUpper": True}})
        assert check_schema(schema) == ExitCode.SCHEMA_ERROR
        assert "toUpper" in capsys.readouterr().err

    def test_malformed_schema(self, write_json) -> None:
        assert check_schema(write_json("bad.schema.json", [1, 2])) == ExitCode.SCHEMA_ERROR

    def test_missing_file(self, tmp_path) -> None:
        assert check_schema(tmp_path / "none.yaml") == ExitCode.INPUT_ERROR


class TestListRulesCommand:
    def test_all(self, capsys) -> None:
        assert list_rules() == ExitCode.SUCCESS
        lines = capsys.readouterr().out.splitlines()
        assert lines[0] == "Available rules:"
        assert any(line.split()[:2] == ["minLength", "validator"] for line in lines[1:])
        assert any(line.split()[:2] == ["trim", "filter"] for line in lines[1:])

    @pytest.mark.parametrize("kind", ["filter", "validator"])
    def test_by_kind(self, kind, capsys) -> None:
        assert list_rules(kind) == ExitCode.SUCCESS
        lines = capsys.readouterr().out.splitlines()[1:]
        assert lines
        assert all(line.split()[1] == kind for line in lines)

    def test_unknown_kind(self, capsys) -> None:
        assert list_rules("macro") == ExitCode.CONFIG_ERROR
        assert "Unknown rule kind 'macro'" in capsys.readouterr().err
