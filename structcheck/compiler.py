# Copyright 2026 TIER IV, inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.


"""Schema compiler.

``compile`` turns a schema tree into a :class:`Validator`. Every node is
translated once into a pair of closures:

* ``check(value) -> bool`` stops at the first failure;
* ``collect(value, path, sink)`` appends every violation to ``sink``.

Field lists, regexes, format predicates and messages are resolved at
compile time, so checking a value never walks the schema dataclasses.
The results match :func:`structcheck.evaluator.evaluate`.
"""

from __future__ import annotations

import copy
import logging
from typing import Any, Callable, List, Optional, Tuple

from .evaluator import compile_pattern, primitive_kind, require_count, require_number
from .exceptions import SchemaDefinitionError, ValidationError
from .models.formats import FormatRegistry, format_registry
from .models.schema import (
    FieldSpec,
    ListSpec,
    LiteralSpec,
    ObjectSpec,
    PrimitiveKind,
    PrimitiveSpec,
    SchemaSpec,
    UnionSpec,
    to_json_schema,
)
from .models.violations import Path, Violation, ViolationKind
from .reporter import format_violations, render_message
from .utils.value_types import PRIMITIVE_PREDICATES, deep_equal, is_array, is_object

logger = logging.getLogger(__name__)

CheckFn = Callable[[Any], bool]
CollectFn = Callable[[Any, Path, List[Violation]], None]
# (fails(value) -> bool, kind, message)
Refinement = Tuple[Callable[[Any], bool], ViolationKind, str]


class Validator:
    """A compiled, reusable checker bound to one schema.

    Holds no mutable state; instances can be shared between threads.
    """

    __slots__ = ("_schema", "_check", "_collect")

    def __init__(self, schema: SchemaSpec, check: CheckFn, collect: CollectFn):
        self._schema = schema
        self._check = check
        self._collect = collect

    @property
    def schema(self) -> SchemaSpec:
        return self._schema

    def check(self, value: Any) -> bool:
        """Return True iff ``value`` conforms to the schema."""
        return self._check(value)

    def errors(self, value: Any) -> List[Violation]:
        """Return every violation of ``value``, depth-first in declaration order."""
        sink: List[Violation] = []
        self._collect(value, (), sink)
        return sink

    def first(self, value: Any) -> Optional[Violation]:
        """Return the first violation of ``value``, or None when it conforms."""
        if self._check(value):
            return None
        return self.errors(value)[0]

    def assert_valid(self, value: Any, label: str = "value") -> Any:
        """Return ``value`` unchanged, or raise ValidationError listing every violation."""
        if self._check(value):
            return value
        violations = self.errors(value)
        raise ValidationError(f"Invalid {label}:\n{format_violations(violations)}", violations)

    def to_json_schema(self) -> dict:
        return to_json_schema(self._schema)

    def __repr__(self) -> str:
        return f"Validator({self._schema!r})"


def compile(schema: SchemaSpec, *, formats: Optional[FormatRegistry] = None) -> Validator:
    """Compile ``schema`` into a :class:`Validator`.

    Args:
        schema: Root schema node.
        formats: Registry used to resolve ``format`` refinements
            (default: the process-wide registry).

    Raises:
        SchemaDefinitionError: If the schema breaks a structural rule, e.g. an
            unknown node type, ``optional()`` outside an object, a malformed
            bound, an invalid pattern or an unknown format.
    """
    compiler = _SchemaCompiler(formats if formats is not None else format_registry)
    check, collect = compiler.compile_node(schema, "")
    logger.debug(f"Compiled schema with {compiler.node_count} nodes")
    return Validator(schema, check, collect)


class _SchemaCompiler:
    """Translates schema nodes into closures; ``where`` is the node's location in the schema."""

    def __init__(self, formats: FormatRegistry):
        self._formats = formats
        self.node_count = 0

    def compile_node(self, spec: Any, where: str) -> Tuple[CheckFn, CollectFn]:
        self.node_count += 1
        if isinstance(spec, PrimitiveSpec):
            return self._compile_primitive(spec, where)
        if isinstance(spec, LiteralSpec):
            return self._compile_literal(spec)
        if isinstance(spec, ListSpec):
            return self._compile_list(spec, where)
        if isinstance(spec, ObjectSpec):
            return self._compile_object(spec, where)
        if isinstance(spec, UnionSpec):
            return self._compile_union(spec, where)
        if isinstance(spec, FieldSpec):
            raise SchemaDefinitionError(f"optional() is only allowed as an object field (at '{where}')")
        raise SchemaDefinitionError(f"Unknown schema node at '{where}': {spec!r}")

    # -------------------------
    # primitives
    # -------------------------

    def _compile_primitive(self, spec: PrimitiveSpec, where: str) -> Tuple[CheckFn, CollectFn]:
        kind = primitive_kind(spec)
        is_kind = PRIMITIVE_PREDICATES[kind]
        type_message = render_message(ViolationKind.TYPE_MISMATCH, kind.value)

        refinements: Tuple[Refinement, ...] = ()
        if kind is PrimitiveKind.STRING:
            refinements = self._string_refinements(spec, where)
        elif kind is PrimitiveKind.NUMBER:
            refinements = self._number_refinements(spec, where)

        if not refinements:
            def check(value: Any) -> bool:
                return is_kind(value)
        else:
            def check(value: Any) -> bool:
                if not is_kind(value):
                    return False
                for fails, _, _ in refinements:
                    if fails(value):
                        return False
                return True

        def collect(value: Any, path: Path, sink: List[Violation]) -> None:
            if not is_kind(value):
                sink.append(Violation(path, ViolationKind.TYPE_MISMATCH, type_message))
                return
            for fails, violation_kind, message in refinements:
                if fails(value):
                    sink.append(Violation(path, violation_kind, message))

        return check, collect

    def _string_refinements(self, spec: PrimitiveSpec, where: str) -> Tuple[Refinement, ...]:
        require_count(spec.min_length, "min_length", where)
        require_count(spec.max_length, "max_length", where)

        # Order: length bounds, pattern, format.
        refinements: List[Refinement] = []
        if spec.min_length is not None:
            min_length = spec.min_length
            refinements.append((
                lambda v: len(v) < min_length,
                ViolationKind.LENGTH_TOO_SHORT,
                render_message(ViolationKind.LENGTH_TOO_SHORT, min_length),
            ))
        if spec.max_length is not None:
            max_length = spec.max_length
            refinements.append((
                lambda v: len(v) > max_length,
                ViolationKind.LENGTH_TOO_LONG,
                render_message(ViolationKind.LENGTH_TOO_LONG, max_length),
            ))
        if spec.pattern is not None:
            regex = compile_pattern(spec.pattern)
            refinements.append((
                lambda v: regex.search(v) is None,
                ViolationKind.PATTERN_MISMATCH,
                render_message(ViolationKind.PATTERN_MISMATCH, spec.pattern),
            ))
        if spec.format is not None:
            conforms = self._formats.resolve(spec.format)
            refinements.append((
                lambda v: not conforms(v),
                ViolationKind.FORMAT_INVALID,
                render_message(ViolationKind.FORMAT_INVALID, spec.format),
            ))
        return tuple(refinements)

    def _number_refinements(self, spec: PrimitiveSpec, where: str) -> Tuple[Refinement, ...]:
        require_number(spec.minimum, "minimum", where)
        require_number(spec.maximum, "maximum", where)

        refinements: List[Refinement] = []
        if spec.minimum is not None:
            minimum = spec.minimum
            refinements.append((
                lambda v: v < minimum,
                ViolationKind.BELOW_MINIMUM,
                render_message(ViolationKind.BELOW_MINIMUM, minimum),
            ))
        if spec.maximum is not None:
            maximum = spec.maximum
            refinements.append((
                lambda v: v > maximum,
                ViolationKind.ABOVE_MAXIMUM,
                render_message(ViolationKind.ABOVE_MAXIMUM, maximum),
            ))
        return tuple(refinements)

    # -------------------------
    # literal, list, object, union
    # -------------------------

    def _compile_literal(self, spec: LiteralSpec) -> Tuple[CheckFn, CollectFn]:
        # Private copy: later mutation of the caller's object must not change the validator.
        expected = copy.deepcopy(spec.value)
        message = render_message(ViolationKind.LITERAL_MISMATCH, expected)

        def check(value: Any) -> bool:
            return deep_equal(value, expected)

        def collect(value: Any, path: Path, sink: List[Violation]) -> None:
            if not deep_equal(value, expected):
                sink.append(Violation(path, ViolationKind.LITERAL_MISMATCH, message))

        return check, collect

    def _compile_list(self, spec: ListSpec, where: str) -> Tuple[CheckFn, CollectFn]:
        require_count(spec.min_items, "min_items", where)
        require_count(spec.max_items, "max_items", where)
        item_check, item_collect = self.compile_node(spec.item, f"{where}/items")
        min_items = spec.min_items
        max_items = spec.max_items
        type_message = render_message(ViolationKind.TYPE_MISMATCH, "array")
        too_few = render_message(ViolationKind.TOO_FEW_ITEMS, min_items)
        too_many = render_message(ViolationKind.TOO_MANY_ITEMS, max_items)

        def check(value: Any) -> bool:
            if not is_array(value):
                return False
            if min_items is not None and len(value) < min_items:
                return False
            if max_items is not None and len(value) > max_items:
                return False
            for item in value:
                if not item_check(item):
                    return False
            return True

        def collect(value: Any, path: Path, sink: List[Violation]) -> None:
            if not is_array(value):
                sink.append(Violation(path, ViolationKind.TYPE_MISMATCH, type_message))
                return
            if min_items is not None and len(value) < min_items:
                sink.append(Violation(path, ViolationKind.TOO_FEW_ITEMS, too_few))
            if max_items is not None and len(value) > max_items:
                sink.append(Violation(path, ViolationKind.TOO_MANY_ITEMS, too_many))
            for idx, item in enumerate(value):
                item_collect(item, path + (idx,), sink)

        return check, collect

    def _compile_object(self, spec: ObjectSpec, where: str) -> Tuple[CheckFn, CollectFn]:
        fields = []
        for entry in spec.fields:
            try:
                field_name, field_spec = entry
            except (TypeError, ValueError):
                raise SchemaDefinitionError(f"Object fields must be (name, FieldSpec) pairs at '{where}'") from None
            if not isinstance(field_spec, FieldSpec):
                raise SchemaDefinitionError(
                    f"Field '{field_name}' at '{where}' must be a FieldSpec, got {field_spec!r}"
                )
            field_check, field_collect = self.compile_node(field_spec.spec, f"{where}/properties/{field_name}")
            fields.append((field_name, field_spec.required, field_check, field_collect))
        fields = tuple(fields)

        declared = frozenset(name for name, _, _, _ in fields)
        if len(declared) != len(fields):
            raise SchemaDefinitionError(f"Duplicate object field names at '{where}'")
        strict = bool(spec.strict)
        type_message = render_message(ViolationKind.TYPE_MISMATCH, "object")
        missing_message = render_message(ViolationKind.MISSING_REQUIRED)
        unexpected_message = render_message(ViolationKind.UNEXPECTED_PROPERTY)

        def check(value: Any) -> bool:
            if not is_object(value):
                return False
            for name, required, field_check, _ in fields:
                if name in value:
                    if not field_check(value[name]):
                        return False
                elif required:
                    return False
            if strict:
                for key in value:
                    if key not in declared:
                        return False
            return True

        def collect(value: Any, path: Path, sink: List[Violation]) -> None:
            if not is_object(value):
                sink.append(Violation(path, ViolationKind.TYPE_MISMATCH, type_message))
                return
            for name, required, _, field_collect in fields:
                if name in value:
                    field_collect(value[name], path + (name,), sink)
                elif required:
                    sink.append(Violation(path + (name,), ViolationKind.MISSING_REQUIRED, missing_message))
            if strict:
                for key in value:
                    if key not in declared:
                        sink.append(Violation(path + (key,), ViolationKind.UNEXPECTED_PROPERTY, unexpected_message))

        return check, collect

    def _compile_union(self, spec: UnionSpec, where: str) -> Tuple[CheckFn, CollectFn]:
        option_checks = tuple(
            self.compile_node(option, f"{where}/anyOf/{idx}")[0]
            for idx, option in enumerate(spec.options)
        )
        message = render_message(ViolationKind.NO_ALTERNATIVE_MATCHED)

        def check(value: Any) -> bool:
            for option_check in option_checks:
                if option_check(value):
                    return True
            return False

        # A union reports one aggregate violation, so only the boolean form of
        # each alternative is needed.
        def collect(value: Any, path: Path, sink: List[Violation]) -> None:
            if not check(value):
                sink.append(Violation(path, ViolationKind.NO_ALTERNATIVE_MATCHED, message))

        return check, collect
