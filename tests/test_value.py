from __future__ import annotations

import pytest

from jsonspan import Number, Value, ValueKind


def _all_kinds():
    return [
        Value.string("ajson"),
        Value.number(Number(b"3")),
        Value.object('{"name":"ajson"}'),
        Value.array("[1,2,3]"),
        Value.boolean(True),
        Value.boolean(False),
        Value.null(),
    ]


class TestPredicates:
    def test_each_kind_answers_only_its_own_predicate(self):
        checks = {
            ValueKind.STRING: "is_string",
            ValueKind.NUMBER: "is_number",
            ValueKind.OBJECT: "is_object",
            ValueKind.ARRAY: "is_array",
            ValueKind.BOOLEAN: "is_bool",
            ValueKind.NULL: "is_null",
        }
        for value in _all_kinds():
            for kind, predicate in checks.items():
                assert getattr(value, predicate)() is (value.kind is kind)

    def test_numeric_string_is_not_a_number(self):
        assert not Value.string("3").is_number()


class TestFormatting:
    def test_as_str_per_kind(self):
        assert Value.string("ajson").as_str() == "ajson"
        assert Value.number(Number("1.50")).as_str() == "1.50"
        assert Value.boolean(True).as_str() == "true"
        assert Value.boolean(False).as_str() == "false"
        assert Value.object('{"a": 1}').as_str() == '{"a": 1}'
        assert Value.array("[ 1 ]").as_str() == "[ 1 ]"
        assert Value.null().as_str() == "null"

    def test_number_keeps_original_literal(self):
        assert Value.number(Number("1e3")).as_str() == "1e3"
        assert Value.number(Number("-0.000")).as_str() == "-0.000"

    def test_repr_quotes_only_strings(self):
        assert repr(Value.string("ajson")) == '"ajson"'
        assert str(Value.string("ajson")) == "ajson"

    def test_repr_and_str_agree_for_other_kinds(self):
        for value in _all_kinds():
            if value.is_string():
                continue
            assert repr(value) == str(value) == value.as_str()


class TestEquality:
    def test_structural_equality(self):
        assert Value.array("[1,2,3]") == Value.array("[1,2,3]")
        assert Value.number("3") == Value.number(Number(b"3"))
        assert Value.null() == Value.null()

    def test_kind_must_match_between_values(self):
        assert Value.string("3") != Value.number("3")
        assert Value.object("{}") != Value.array("[]")
        assert Value.string("null") != Value.null()

    def test_equal_to_matching_text(self):
        assert Value.number(Number(b"3")) == "3"
        assert Value.boolean(True) == "true"
        assert Value.null() == "null"
        assert Value.string("ajson") == "ajson"
        assert Value.number("3") != "3.0"

    def test_equal_to_float(self):
        assert Value.number(Number(b"3")) == 3.0
        assert Value.number("3") == 3
        assert Value.string("2.5") == 2.5
        assert Value.boolean(True) == 1.0
        assert Value.null() == 0.0
        assert Value.object('{"a":1}') == 0.0

    def test_bool_is_not_a_number_operand(self):
        assert Value.boolean(True) != True  # noqa: E712
        assert Value.number("1") != True  # noqa: E712

    def test_unrelated_types_are_unequal(self):
        assert Value.null() != None  # noqa: E711
        assert Value.array("[]") != []

    def test_hashable(self):
        values = {Value.string("a"), Value.string("a"), Value.number("1")}
        assert len(values) == 2


class TestConstruction:
    def test_immutable(self):
        value = Value.string("a")
        with pytest.raises(AttributeError):
            value.payload = "b"

    def test_wrong_payload_types_raise(self):
        with pytest.raises(TypeError):
            Value.string(3)
        with pytest.raises(TypeError):
            Value.boolean(1)
        with pytest.raises(TypeError):
            Value.object(b"{}")

    def test_composite_span_needs_its_opening_bracket(self):
        with pytest.raises(ValueError, match="must start with"):
            Value.object("[1]")
        with pytest.raises(ValueError, match="must start with"):
            Value.array('{"a":1}')
        assert Value.array("  [1]").is_array()

    def test_number_accepts_text_and_bytes(self):
        assert Value.number("7").payload == Number("7")
        assert Value.number(b"7").payload == Number("7")


class TestPathNavigation:
    def test_array_index(self):
        first = Value.array("[1,2,3]").get("0")
        assert first.to_i64() == 1

    def test_object_key(self):
        name = Value.object('{"name":"ajson"}').get("name")
        assert name.is_string()
        assert name.as_str() == "ajson"

    def test_nested_composites_stay_raw(self):
        value = Value.object('{"a": {"b": [1, {"c": true}]}}')
        inner = value.get("a")
        assert inner == Value.object('{"b": [1, {"c": true}]}')
        assert inner.get("b.1.c").to_bool() is True

    def test_scalars_have_no_children(self):
        for value in (
            Value.string('{"a":1}'),
            Value.number("1"),
            Value.boolean(True),
            Value.null(),
        ):
            assert value.get("a") is None
            assert value.get("0") is None
            assert value.get_by_utf8(b"a") is None

    def test_missing_path(self):
        assert Value.object('{"a":1}').get("b") is None
        assert Value.array("[1]").get("1") is None

    def test_get_by_utf8(self):
        value = Value.object('{"日本":"語"}')
        assert value.get_by_utf8("日本".encode()) == "語"

    def test_repeated_lookups_give_equal_results(self):
        value = Value.object('{"a":[1,2]}')
        assert value.get("a.1") == value.get("a.1")


class TestScalarConversions:
    def test_true_converts_to_one(self):
        value = Value.boolean(True)
        assert value.to_f64() == 1.0
        assert value.to_u64() == 1
        assert value.to_i64() == 1
        assert value.to_bool() is True

    def test_false_converts_to_zero(self):
        value = Value.boolean(False)
        assert value.to_f64() == 0.0
        assert value.to_u64() == 0
        assert value.to_i64() == 0
        assert value.to_bool() is False

    def test_only_booleans_are_truthy(self):
        for value in (
            Value.string("true"),
            Value.number("1"),
            Value.object('{"a":true}'),
            Value.array("[true]"),
            Value.null(),
        ):
            assert value.to_bool() is False

    def test_composites_and_null_convert_to_zero(self):
        # Objects and arrays are not numeric; they convert like null does.
        for value in (Value.object('{"a":1}'), Value.array("[5]"), Value.null()):
            assert value.to_f64() == 0.0
            assert value.to_u64() == 0
            assert value.to_i64() == 0

    def test_numbers_delegate(self):
        value = Value.number("-12.75")
        assert value.to_f64() == -12.75
        assert value.to_i64() == -12
        assert value.to_u64() == 0

    def test_strings_convert_like_numbers_with_same_text(self):
        for text in ("42", "-7", "3.5", "1e2", "18446744073709551615", "x1"):
            string, number = Value.string(text), Value.number(text)
            assert string.to_f64() == number.to_f64()
            assert string.to_i64() == number.to_i64()
            assert string.to_u64() == number.to_u64()

    def test_non_numeric_string_converts_to_zero(self):
        value = Value.string("ajson")
        assert value.to_f64() == 0.0
        assert value.to_i64() == 0
        assert value.to_u64() == 0


class TestCollectionConversions:
    def test_array_to_vec(self):
        items = Value.array('[1, "two", true, null, {"a":1}, [2], 1]').to_vec()
        assert items == [
            Value.number("1"),
            Value.string("two"),
            Value.boolean(True),
            Value.null(),
            Value.object('{"a":1}'),
            Value.array("[2]"),
            Value.number("1"),
        ]

    def test_null_to_vec_is_empty(self):
        assert Value.null().to_vec() == []

    def test_other_kinds_wrap_themselves(self):
        for value in _all_kinds():
            if value.is_array() or value.is_null():
                continue
            items = value.to_vec()
            assert len(items) == 1
            assert items[0] == value

    def test_object_to_object(self):
        members = Value.object('{"a": 1, "b": "x", "c": [1]}').to_object()
        assert members == {
            "a": Value.number("1"),
            "b": Value.string("x"),
            "c": Value.array("[1]"),
        }

    def test_duplicate_keys_last_wins(self):
        members = Value.object('{"a": 1, "a": 2}').to_object()
        assert members == {"a": Value.number("2")}

    def test_non_objects_give_empty_mapping(self):
        for value in _all_kinds():
            if value.is_object():
                continue
            assert value.to_object() == {}

    def test_empty_composites(self):
        assert Value.array("[]").to_vec() == []
        assert Value.object("{}").to_object() == {}
