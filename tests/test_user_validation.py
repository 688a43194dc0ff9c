"""
End-to-end validation of a "User" shape with nested settings.
"""
import pytest
from jsonschema import Draft7Validator

from structcheck import (
    ValidationError,
    array,
    boolean,
    compile,
    format_violation,
    null,
    number,
    obj,
    optional,
    string,
    union,
    literal,
)


def validate_user(validator, data):
    if validator.check(data):
        return True, []
    return False, [format_violation(v) for v in validator.errors(data)]


# ── validate_user ─────────────────────────────────────────────────────────────

class TestValidateUser:
    def test_valid_user(self, user_schema, valid_user):
        ok, errors = validate_user(compile(user_schema), valid_user)
        assert ok is True
        assert errors == []

    def test_invalid_id_type(self, user_schema, valid_user):
        ok, errors = validate_user(compile(user_schema), {**valid_user, "id": 123})
        assert ok is False
        assert "/id: Expected string" in errors

    def test_name_too_short(self, user_schema, valid_user):
        _, errors = validate_user(compile(user_schema), {**valid_user, "name": "J"})
        assert errors == ["/name: Expected string length greater or equal to 2"]

    def test_name_too_long(self, user_schema, valid_user):
        _, errors = validate_user(compile(user_schema), {**valid_user, "name": "x" * 51})
        assert errors == ["/name: Expected string length less or equal to 50"]

    def test_age_above_maximum(self, user_schema, valid_user):
        _, errors = validate_user(compile(user_schema), {**valid_user, "age": 150})
        assert errors == ["/age: Expected number to be less or equal to 120"]

    def test_age_below_minimum(self, user_schema, valid_user):
        _, errors = validate_user(compile(user_schema), {**valid_user, "age": -1})
        assert errors == ["/age: Expected number to be greater or equal to 0"]

    def test_invalid_role(self, user_schema, valid_user):
        _, errors = validate_user(compile(user_schema), {**valid_user, "roles": ["superuser"]})
        assert errors == ["/roles/0: Expected union value"]

    def test_invalid_settings(self, user_schema, valid_user):
        data = {**valid_user, "settings": {"notifications": "yes", "theme": "blue"}}
        _, errors = validate_user(compile(user_schema), data)
        assert "/settings/notifications: Expected boolean" in errors
        assert "/settings/theme: Expected union value" in errors

    def test_every_violation_reported_in_declaration_order(self, user_schema, valid_user):
        data = {
            **valid_user,
            "id": 123,
            "name": "J",
            "age": 150,
            "roles": ["superuser"],
            "settings": {"notifications": "yes", "theme": "blue"},
        }
        _, errors = validate_user(compile(user_schema), data)
        assert errors == [
            "/id: Expected string",
            "/name: Expected string length greater or equal to 2",
            "/age: Expected number to be less or equal to 120",
            "/roles/0: Expected union value",
            "/settings/notifications: Expected boolean",
            "/settings/theme: Expected union value",
        ]

    def test_missing_required_fields(self, user_schema):
        _, errors = validate_user(compile(user_schema), {"id": "123", "name": "John"})
        assert errors == [
            "/email: Expected required property",
            "/age: Expected required property",
            "/roles: Expected required property",
            "/settings: Expected required property",
        ]


# ── create_user (assert_valid) ────────────────────────────────────────────────

class TestCreateUser:
    def test_returns_valid_data(self, user_schema, valid_user):
        user = compile(user_schema).assert_valid(valid_user, "user data")
        assert user == valid_user

    def test_raises_with_invalid_data(self, user_schema, valid_user):
        data = {**valid_user, "id": 123, "roles": ["superuser"]}
        with pytest.raises(ValidationError, match="Invalid user data") as exc_info:
            compile(user_schema).assert_valid(data, "user data")
        assert "/id: Expected string" in str(exc_info.value)
        assert len(exc_info.value.violations) == 2

    def test_raises_with_missing_fields(self, user_schema):
        with pytest.raises(ValidationError, match="Invalid user data"):
            compile(user_schema).assert_valid({"id": "123", "name": "John"}, "user data")

    @pytest.mark.parametrize("roles", [["admin"], ["guest"], ["admin", "user"], []])
    def test_role_combinations(self, user_schema, valid_user, roles):
        assert compile(user_schema).check({**valid_user, "roles": roles})

    @pytest.mark.parametrize("theme", ["light", "dark"])
    def test_theme_options(self, user_schema, valid_user, theme):
        data = {**valid_user, "settings": {**valid_user["settings"], "theme": theme}}
        assert compile(user_schema).check(data)


# ── basic shapes ──────────────────────────────────────────────────────────────

class TestBasicShapes:
    def test_basic_types(self):
        assert compile(string()).check("hello")
        assert compile(number()).check(42)
        assert compile(boolean()).check(True)
        assert compile(null()).check(None)

    def test_string_and_number_arrays(self):
        assert compile(array(string())).check(["a", "b"])
        assert not compile(array(number())).check([1, "2"])

    def test_optional_properties(self):
        schema = obj({
            "name": string(),
            "age": optional(number()),
            "email": optional(string(format="email")),
        })
        v = compile(schema)
        assert v.check({"name": "John Doe"})
        assert v.check({"name": "John Doe", "age": 30, "email": "john@example.com"})
        assert not v.check({"name": "John Doe", "email": "invalid-email"})

    def test_status_union(self):
        status = union(literal("active"), literal("inactive"), literal("pending"))
        v = compile(status)
        assert v.check("pending")
        assert not v.check("archived")

    def test_user_with_wrong_age_type(self):
        schema = obj({
            "name": string(),
            "age": number(),
            "email": string(),
            "isActive": boolean(),
            "tags": array(string()),
        })
        user = {"name": "John Doe", "age": 30, "email": "john@example.com", "isActive": True, "tags": ["user"]}
        v = compile(schema)
        assert v.check(user)
        assert not v.check({**user, "age": "30"})


# ── jsonschema as an independent oracle ───────────────────────────────────────

class TestJsonSchemaOracle:
    def test_verdicts_agree_with_jsonschema(self, user_schema, valid_user):
        validator = compile(user_schema)
        oracle = Draft7Validator(validator.to_json_schema())
        candidates = [
            valid_user,
            {**valid_user, "id": 123},
            {**valid_user, "name": "J"},
            {**valid_user, "age": 120.5},
            {**valid_user, "age": True},
            {**valid_user, "roles": ["admin", "guest"]},
            {**valid_user, "roles": ["root"]},
            {**valid_user, "settings": {"notifications": False, "theme": "light", "extra": 1}},
            {**valid_user, "settings": {"notifications": False}},
            {"id": "1"},
            {},
            [],
            None,
        ]
        for candidate in candidates:
            assert validator.check(candidate) == oracle.is_valid(candidate), candidate
