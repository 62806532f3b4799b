"""Tests for required, properties, items and oneOf."""

import asyncio
import logging

import pytest

from formulary import Engine, Issue, RecipeError, Rule, RuleKind, UnknownRuleError


class TestRequired:
    def test_absent_property(self, engine) -> None:
        report = engine.validate_sync({}, {"required": ["a"]})
        assert report.issues == [Issue(path=("a",), rule="required", accepted=True, current=False)]

    def test_blank_values_count_as_absent(self, engine) -> None:
        report = engine.validate_sync({"a": "", "b": None, "c": 0, "d": False}, {"required": list("abcd")})
        assert [issue.path for issue in report.issues] == [("a",), ("b",)]

    def test_null_object_passes(self, engine) -> None:
        assert engine.validate_sync(None, {"required": ["a"]}).is_valid()

    def test_empty_list_passes(self, engine) -> None:
        assert engine.validate_sync("x", {"required": []}).is_valid()

    def test_non_object_fails_at_own_path(self, engine) -> None:
        report = engine.validate_sync("x", {"required": ["a"]})
        assert [issue.path for issue in report.issues] == [()]


class TestProperties:
    def test_undeclared_keys_are_dropped(self, engine) -> None:
        report = engine.validate_sync(
            {"name": "Ada", "admin": True},
            {"properties": {"name": {"type": "string"}}},
        )
        assert report.value == {"name": "Ada"}
        assert report.is_valid()

    def test_absent_properties_are_omitted(self, engine) -> None:
        report = engine.validate_sync({}, {"properties": {"name": "string"}})
        assert report.value == {}

    def test_default_and_accept_empty(self, engine) -> None:
        schema = {
            "properties": {
                "role": {"default": "user"},
                "tags": {"default": list},
                "note": {"acceptEmpty": True, "type": "string"},
            }
        }
        report = engine.validate_sync({}, schema)
        assert report.value == {"role": "user", "tags": [], "note": ""}

    def test_present_value_wins_over_default(self, engine) -> None:
        schema = {"properties": {"role": {"default": "user"}}}
        assert engine.validate_sync({"role": None}, schema).value == {"role": None}

    def test_child_issues_are_path_qualified(self, engine) -> None:
        schema = {
            "type": "object",
            "properties": {
                "age": {"type": "number", "minimum": 18},
                "address": {"properties": {"city": {"trim": True, "minLength": 1}}},
            },
        }
        report = engine.validate_sync({"age": 16, "address": {"city": "  "}}, schema)
        assert [(issue.path, issue.rule) for issue in report.issues] == [
            (("age",), "minimum"),
            (("address", "city"), "minLength"),
        ]
        assert report.value == {"age": 16, "address": {"city": ""}}

    def test_issue_order_follows_declaration(self, engine) -> None:
        schema = {"properties": {"b": {"equals": 1}, "a": {"equals": 1}}}
        report = engine.validate_sync({"a": 0, "b": 0}, schema)
        assert [issue.path for issue in report.issues] == [("b",), ("a",)]

    def test_null_passes(self, engine) -> None:
        report = engine.validate_sync(None, {"properties": {"a": "string"}})
        assert report.is_valid()
        assert report.value is None

    def test_non_object_fails(self, engine) -> None:
        report = engine.validate_sync([1], {"properties": {"a": "string"}})
        assert [(issue.path, issue.rule) for issue in report.issues] == [((), "properties")]

    def test_input_is_not_mutated(self, engine) -> None:
        value = {"email": " ADA@example.com "}
        engine.validate_sync(value, {"properties": {"email": {"trim": True, "toLowerCase": True}}})
        assert value == {"email": " ADA@example.com "}

    def test_unknown_nested_rule(self, engine) -> None:
        with pytest.raises(UnknownRuleError) as exc_info:
            engine.validate_sync({"a": 1}, {"properties": {"a": {"isPositive": True}}})
        assert exc_info.value.context["path"] == ("a",)

    def test_unknown_rule_is_skipped_without_a_value(self, engine) -> None:
        assert engine.validate_sync({}, {"properties": {"a": {"isPositive": True}}}).is_valid()

    def test_malformed_parameter(self, engine) -> None:
        with pytest.raises(RecipeError):
            engine.validate_sync({}, {"properties": ["a"]})


class TestItems:
    def test_element_issues_are_indexed(self, engine) -> None:
        report = engine.validate_sync(["a", 1, "c", None], {"items": "string"})
        assert [issue.path for issue in report.issues] == [(1,)]
        assert report.value == ["a", 1, "c", None]

    def test_elements_are_transformed(self, engine) -> None:
        report = engine.validate_sync([" a", "b "], {"items": {"trim": True, "toUpperCase": True}})
        assert report.value == ["A", "B"]

    def test_empty_array(self, engine) -> None:
        report = engine.validate_sync([], {"items": "string"})
        assert report.is_valid()
        assert report.value == []

    @pytest.mark.parametrize("value", ["abc", {"a": 1}, None, 3])
    def test_non_array_gives_one_issue(self, engine, value) -> None:
        report = engine.validate_sync(value, {"items": "string"})
        assert [(issue.path, issue.rule) for issue in report.issues] == [((), "items")]

    def test_nested_items_and_properties(self, engine) -> None:
        schema = {"items": {"properties": {"tags": {"items": {"minLength": 2}}}}}
        report = engine.validate_sync([{"tags": ["ok"]}, {"tags": ["ok", "x"]}], schema)
        assert [issue.path for issue in report.issues] == [(1, "tags", 1)]

    @pytest.mark.asyncio
    async def test_elements_are_validated_concurrently(self, engine) -> None:
        async def slow(accepted, value, field):
            await asyncio.sleep(accepted)
            return True

        registry = engine.registry.extend([Rule(name="slow", kind=RuleKind.VALIDATOR, func=slow)])
        concurrent = Engine(registry=registry)
        loop = asyncio.get_running_loop()
        start = loop.time()
        report = await concurrent.validate(list(range(6)), {"items": {"slow": 0.2}})
        assert loop.time() - start < 1.0
        assert report.is_valid()


class TestOneOf:
    SCHEMA = {"oneOf": [{"type": "number"}, {"type": "string", "minLength": 3}]}

    @pytest.mark.parametrize("value", [5, "abc"])
    def test_first_clean_alternative_passes(self, engine, value) -> None:
        assert engine.validate_sync(value, self.SCHEMA).is_valid()

    def test_failure_is_a_single_issue(self, engine) -> None:
        report = engine.validate_sync("ab", self.SCHEMA)
        assert len(report.issues) == 1
        assert report.issues[0].rule == "oneOf"
        assert report.issues[0].path == ()

    def test_rejections_are_logged(self, engine, caplog) -> None:
        with caplog.at_level(logging.DEBUG, logger="formulary.rules.structural"):
            engine.validate_sync("ab", self.SCHEMA)
        assert "oneOf alternative 1 rejected" in caplog.text

    def test_empty_alternatives_fail(self, engine) -> None:
        assert not engine.validate_sync("x", {"oneOf": []}).is_valid()

    def test_alternatives_do_not_transform(self, engine) -> None:
        report = engine.validate_sync(" a ", {"oneOf": [{"trim": True}]})
        assert report.value == " a "

    def test_stops_at_first_match(self, engine) -> None:
        schema = {"oneOf": [{"type": "string"}, {"noSuchRule": True}]}
        assert engine.validate_sync("a", schema).is_valid()

    def test_malformed_parameter(self, engine) -> None:
        with pytest.raises(RecipeError):
            engine.validate_sync("a", {"oneOf": {"type": "string"}})
