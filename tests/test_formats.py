"""
String formats backed by jsonschema's FormatChecker.
"""
import pytest

from structcheck import SchemaDefinitionError, compile, register_format, string
from structcheck.models.formats import FormatRegistry, format_registry


class TestBuiltinFormats:
    @pytest.mark.parametrize("name,good,bad", [
        ("email", "john@example.com", "invalid-email"),
        ("ipv4", "127.0.0.1", "999.1.1.1"),
        ("date", "2024-01-31", "2024-13-01"),
    ])
    def test_builtin(self, name, good, bad):
        validator = compile(string(format=name))
        assert validator.check(good)
        assert not validator.check(bad)

    def test_known_names(self):
        assert {"email", "ipv4", "date"} <= set(format_registry.names())


class TestRegistry:
    def test_unknown_format(self):
        with pytest.raises(SchemaDefinitionError, match="Unknown string format 'nope'"):
            FormatRegistry().resolve("nope")

    def test_invalid_name(self):
        with pytest.raises(SchemaDefinitionError):
            FormatRegistry().register("", lambda s: True)

    def test_raises_means_nonconforming(self):
        registry = FormatRegistry()
        registry.register("int-string", lambda s: int(s) is not None, raises=ValueError)
        conforms = registry.resolve("int-string")
        assert conforms("12")
        assert not conforms("abc")

    def test_compiled_validator_keeps_resolved_predicate(self):
        registry = FormatRegistry()
        registry.register("flag", lambda s: True)
        validator = compile(string(format="flag"), formats=registry)
        registry.register("flag", lambda s: False)
        assert validator.check("x")
        assert not compile(string(format="flag"), formats=registry).check("x")

    def test_registries_are_independent(self):
        registry = FormatRegistry()
        registry.register("only-here", lambda s: True)
        assert registry.has("only-here")
        assert not FormatRegistry().has("only-here")

    def test_register_format_global(self):
        register_format("structcheck-test-upper", str.isupper)
        validator = compile(string(format="structcheck-test-upper"))
        assert validator.check("ABC")
        assert not validator.check("abc")
