"""
Compiled validators: consistency with the evaluator, immutability and schema checks.
"""
from concurrent.futures import ThreadPoolExecutor

import pytest

from structcheck import (
    SchemaDefinitionError,
    ValidationError,
    Validator,
    ViolationKind,
    array,
    boolean,
    compile,
    enum,
    evaluate,
    literal,
    null,
    number,
    obj,
    optional,
    string,
    union,
)
from structcheck.models.formats import FormatRegistry
from structcheck.models.schema import FieldSpec, ObjectSpec, PrimitiveSpec


SCHEMAS = {
    "string": string(min_length=2, max_length=4, pattern="^[a-z]+$", format="email"),
    "number": number(minimum=0, maximum=10),
    "nullable": union(string(), null()),
    "literal": literal({"a": [1, 2]}),
    "array": array(number(minimum=0), min_items=1, max_items=3),
    "strict": obj({"a": string(), "b": optional(number())}, strict=True),
    "nested": obj({
        "items": array(obj({"id": number(), "tags": array(enum("x", "y"))})),
        "meta": optional(obj({"flag": boolean()})),
    }),
}

VALUES = [
    None, True, 0, -1, 5, 11, 2.5, float("nan"), "", "a", "ab@", "abcde", "AB",
    [], [1], [-1, "x", 2, 3], ["x"], (1, 2),
    {}, {"a": "x"}, {"a": 1, "b": "2", "c": 3}, {"a": [1, 2]}, {"a": (1, 2)},
    {"items": []},
    {"items": [{"id": 1, "tags": ["x", "z"]}, {"id": "2"}], "meta": {"flag": "no"}},
    {"items": "nope", "meta": None},
]


# ── equivalence with the evaluator ────────────────────────────────────────────

class TestEquivalence:
    @pytest.mark.parametrize("name", sorted(SCHEMAS))
    def test_errors_match_evaluate(self, name):
        schema = SCHEMAS[name]
        validator = compile(schema)
        for value in VALUES:
            assert validator.errors(value) == evaluate(schema, value), value

    @pytest.mark.parametrize("name", sorted(SCHEMAS))
    def test_check_consistent_with_errors(self, name):
        validator = compile(SCHEMAS[name])
        for value in VALUES:
            assert validator.check(value) == (validator.errors(value) == []), value

    def test_idempotent(self):
        validator = compile(SCHEMAS["nested"])
        value = VALUES[-2]
        first = validator.errors(value)
        for _ in range(3):
            assert validator.errors(value) == first
            assert validator.check(value) is False

    def test_compiling_twice_is_equivalent(self):
        a, b = compile(SCHEMAS["nested"]), compile(SCHEMAS["nested"])
        for value in VALUES:
            assert a.errors(value) == b.errors(value)


# ── Validator API ─────────────────────────────────────────────────────────────

class TestValidator:
    def test_first(self):
        validator = compile(obj({"a": string(), "b": number()}))
        assert validator.first({"a": "x", "b": 1}) is None
        violation = validator.first({"a": 1, "b": "x"})
        assert violation.path == ("a",)
        assert violation.kind is ViolationKind.TYPE_MISMATCH

    def test_assert_valid_returns_value(self):
        value = {"a": "x"}
        assert compile(obj({"a": string()})).assert_valid(value) is value

    def test_assert_valid_message(self):
        with pytest.raises(ValidationError) as exc_info:
            compile(obj({"a": string(), "b": number()})).assert_valid({}, "config")
        assert str(exc_info.value) == (
            "Invalid config:\n"
            "/a: Expected required property\n"
            "/b: Expected required property"
        )
        assert [v.path for v in exc_info.value.violations] == [("a",), ("b",)]

    def test_schema_and_json_schema(self):
        schema = obj({"a": string(min_length=1), "b": optional(enum("x", "y"))}, strict=True)
        validator = compile(schema)
        assert validator.schema is schema
        assert validator.to_json_schema() == {
            "type": "object",
            "properties": {
                "a": {"type": "string", "minLength": 1},
                "b": {"anyOf": [{"const": "x"}, {"const": "y"}]},
            },
            "required": ["a"],
            "additionalProperties": False,
        }

    def test_repr(self):
        assert repr(compile(boolean())).startswith("Validator(")

    def test_literal_isolated_from_later_mutation(self):
        expected = ["a"]
        validator = compile(literal(expected))
        expected.append("b")
        assert validator.check(["a"])
        assert not validator.check(["a", "b"])

    def test_concurrent_use(self):
        validator = compile(SCHEMAS["nested"])
        values = VALUES * 20
        expected = [validator.errors(v) for v in values]
        with ThreadPoolExecutor(max_workers=8) as pool:
            results = list(pool.map(validator.errors, values))
        assert results == expected

    def test_custom_format_registry(self):
        registry = FormatRegistry()
        registry.register("even-length", lambda s: len(s) % 2 == 0)
        validator = compile(string(format="even-length"), formats=registry)
        assert validator.check("ab")
        assert validator.errors("abc")[0].message == "Expected string to match 'even-length' format"

    def test_is_validator(self):
        assert isinstance(compile(null()), Validator)


# ── schema definition errors ──────────────────────────────────────────────────

class TestCompileErrors:
    def test_optional_outside_object(self):
        with pytest.raises(SchemaDefinitionError, match="optional"):
            compile(array(optional(string())))

    def test_unknown_node(self):
        with pytest.raises(SchemaDefinitionError, match="Unknown schema node"):
            compile(union(string(), 42))

    def test_unknown_primitive_kind(self):
        with pytest.raises(SchemaDefinitionError, match="primitive kind"):
            compile(PrimitiveSpec("integer"))

    def test_primitive_kind_given_as_string(self):
        assert compile(PrimitiveSpec("string")).check("x")

    def test_unknown_format(self):
        with pytest.raises(SchemaDefinitionError, match="no-such-format"):
            compile(string(format="no-such-format"))

    def test_invalid_pattern(self):
        with pytest.raises(SchemaDefinitionError, match="pattern"):
            compile(string(pattern="("))

    def test_pattern_must_be_a_string(self):
        with pytest.raises(SchemaDefinitionError, match="'pattern' must be a string"):
            compile(string(pattern=5))

    @pytest.mark.parametrize("spec", [
        string(min_length=-1),
        string(max_length=1.5),
        array(string(), min_items=True),
        number(minimum="0"),
    ])
    def test_malformed_bounds(self, spec):
        with pytest.raises(SchemaDefinitionError):
            compile(spec)

    def test_duplicate_fields(self):
        spec = ObjectSpec(fields=(("a", FieldSpec(string())), ("a", FieldSpec(number()))))
        with pytest.raises(SchemaDefinitionError, match="Duplicate"):
            compile(spec)

    def test_error_location_in_message(self):
        with pytest.raises(SchemaDefinitionError, match="/properties/a/items"):
            compile(obj({"a": array(optional(string()))}))
