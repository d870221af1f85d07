from datetime import datetime, timedelta, timezone
import re

import pytest

from coachbook.validation.rules import (
    MISSING,
    CrossFieldRule,
    FieldError,
    RuleSet,
    as_text,
    body,
    parse_iso8601,
)


class TestAsText:
    @pytest.mark.parametrize(
        "value,expected",
        [
            ("abc", "abc"),
            (None, ""),
            (MISSING, ""),
            (True, "true"),
            (False, "false"),
            (30, "30"),
            (30.0, "30"),
            (30.5, "30.5"),
        ],
    )
    def test_scalar_text_forms(self, value, expected):
        assert as_text(value) == expected

    def test_containers_have_no_text_form(self):
        assert as_text(["a"]) is None
        assert as_text({"a": 1}) is None


class TestParseIso8601:
    def test_zulu_suffix(self):
        parsed = parse_iso8601("2030-01-01T10:00:00Z")
        assert parsed == datetime(2030, 1, 1, 10, 0, tzinfo=timezone.utc)

    def test_offset_is_preserved(self):
        parsed = parse_iso8601("2030-01-01T10:00:00+02:00")
        assert parsed.utcoffset() == timedelta(hours=2)

    def test_naive_value_is_read_as_utc(self):
        parsed = parse_iso8601("2030-01-01T10:00:00")
        assert parsed.tzinfo == timezone.utc

    @pytest.mark.parametrize("value", ["tomorrow", "", None, "2030-13-01", ["2030-01-01"]])
    def test_unparseable_values(self, value):
        assert parse_iso8601(value) is None


class TestFieldRule:
    def test_every_failing_check_is_reported(self):
        rule = body("password").is_length(6, message="too short").matches(
            re.compile(r"\d"), message="needs a digit"
        )
        rule_set = RuleSet("t", [rule])

        result = rule_set.evaluate({"password": "abc"})

        assert [e.message for e in result.errors] == ["too short", "needs a digit"]

    def test_optional_skips_absent_field_but_not_null(self):
        rule_set = RuleSet("t", [body("page").optional().is_int(1, message="bad page")])

        assert rule_set.evaluate({}).is_valid
        assert not rule_set.evaluate({"page": None}).is_valid

    def test_trim_writes_back_without_mutating_input(self):
        payload = {"name": "  Jane  "}
        rule_set = RuleSet("t", [body("name").trim().is_length(2, 50)])

        result = rule_set.evaluate(payload)

        assert result.data["name"] == "Jane"
        assert payload == {"name": "  Jane  "}

    def test_coercion_only_runs_on_clean_values(self):
        rule_set = RuleSet("t", [body("duration").is_int(15, 480, message="bad").to_int()])

        assert rule_set.evaluate({"duration": "90"}).data["duration"] == 90
        assert rule_set.evaluate({"duration": "ninety"}).data["duration"] == "ninety"

    @pytest.mark.parametrize("value", [30, "30", 30.0, "+30"])
    def test_is_int_accepts_integral_text(self, value):
        assert RuleSet("t", [body("n").is_int()]).evaluate({"n": value}).is_valid

    @pytest.mark.parametrize("value", [True, 30.5, "30.5", "3e1", "", None, [30]])
    def test_is_int_rejects_everything_else(self, value):
        assert not RuleSet("t", [body("n").is_int()]).evaluate({"n": value}).is_valid

    def test_is_float_honours_minimum(self):
        rule_set = RuleSet("t", [body("rate").is_float(min=0)])

        assert rule_set.evaluate({"rate": "12.5"}).is_valid
        assert rule_set.evaluate({"rate": 0}).is_valid
        assert not rule_set.evaluate({"rate": -1}).is_valid
        assert not rule_set.evaluate({"rate": "."}).is_valid

    def test_nested_paths(self):
        rule_set = RuleSet("t", [body("profile.bio").optional().trim().is_length(max=3)])

        assert rule_set.evaluate({"profile": {"bio": " abc "}}).data == {"profile": {"bio": "abc"}}
        assert rule_set.evaluate({"profile": {}}).is_valid
        errors = rule_set.evaluate({"profile": {"bio": "abcd"}}).errors
        assert errors[0].field == "profile.bio"

    def test_is_list_limits_items(self):
        rule_set = RuleSet("t", [body("skills").is_list(2)])

        assert rule_set.evaluate({"skills": ["a", "b"]}).is_valid
        assert not rule_set.evaluate({"skills": ["a", "b", "c"]}).is_valid
        assert not rule_set.evaluate({"skills": "a,b"}).is_valid

    def test_is_email(self):
        rule_set = RuleSet("t", [body("email").is_email()])

        assert rule_set.evaluate({"email": "jane@example.com"}).is_valid
        assert not rule_set.evaluate({"email": "jane@"}).is_valid
        assert not rule_set.evaluate({"email": 42}).is_valid

    def test_custom_check_receives_context(self):
        now = datetime(2030, 1, 1, tzinfo=timezone.utc)
        seen = []

        def check(value, ctx):
            seen.append((value, ctx.now))
            return True

        RuleSet("t", [body("x").custom(check)]).evaluate({"x": 1}, now=now)

        assert seen == [(1, now)]


class TestRuleSet:
    def test_errors_follow_rule_order(self):
        rule_set = RuleSet(
            "t",
            [
                body("b").not_empty(message="b missing"),
                body("a").not_empty(message="a missing"),
                CrossFieldRule("a", lambda payload, _ctx: False, "never"),
            ],
        )

        result = rule_set.evaluate({})

        assert result.errors == (
            FieldError("b", "b missing"),
            FieldError("a", "a missing"),
            FieldError("a", "never"),
        )

    def test_non_mapping_payload_is_treated_as_empty(self):
        result = RuleSet("t", [body("a").optional().not_empty()]).evaluate(None)

        assert result.is_valid
        assert result.data == {}

    def test_field_error_serializes(self):
        assert FieldError("email", "Valid email is required").to_dict() == {
            "field": "email",
            "message": "Valid email is required",
        }
