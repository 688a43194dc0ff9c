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


"""Constraint evaluator: the reference (tree-walking) semantics of a schema.

``evaluate`` walks the schema alongside the value and returns every
violation, depth-first in declaration and index order. The compiler in
:mod:`structcheck.compiler` produces the same results without re-walking
the schema tree on every call.
"""

from __future__ import annotations

import re
from typing import Any, List

from .exceptions import SchemaDefinitionError
from .models.formats import format_registry
from .models.schema import (
    FieldSpec,
    ListSpec,
    LiteralSpec,
    ObjectSpec,
    PrimitiveKind,
    PrimitiveSpec,
    SchemaSpec,
    UnionSpec,
)
from .models.violations import Path, Violation, ViolationKind
from .reporter import render_message
from .utils.value_types import PRIMITIVE_PREDICATES, deep_equal, is_array, is_object


def _violation(path: Path, kind: ViolationKind, detail: Any = None) -> Violation:
    return Violation(path=path, kind=kind, message=render_message(kind, detail))


def evaluate(spec: SchemaSpec, value: Any, path: Path = ()) -> List[Violation]:
    """Return the violations of ``value`` against ``spec``; empty means the value conforms.

    Raises:
        SchemaDefinitionError: If ``spec`` is not a well-formed schema. Values
            never cause an exception.
    """
    if isinstance(spec, PrimitiveSpec):
        return _evaluate_primitive(spec, value, path)

    if isinstance(spec, LiteralSpec):
        if deep_equal(value, spec.value):
            return []
        return [_violation(path, ViolationKind.LITERAL_MISMATCH, spec.value)]

    if isinstance(spec, ListSpec):
        require_count(spec.min_items, "min_items")
        require_count(spec.max_items, "max_items")
        if not is_array(value):
            return [_violation(path, ViolationKind.TYPE_MISMATCH, "array")]
        issues: List[Violation] = []
        if spec.min_items is not None and len(value) < spec.min_items:
            issues.append(_violation(path, ViolationKind.TOO_FEW_ITEMS, spec.min_items))
        if spec.max_items is not None and len(value) > spec.max_items:
            issues.append(_violation(path, ViolationKind.TOO_MANY_ITEMS, spec.max_items))
        for idx, item in enumerate(value):
            issues.extend(evaluate(spec.item, item, path + (idx,)))
        return issues

    if isinstance(spec, ObjectSpec):
        if not is_object(value):
            return [_violation(path, ViolationKind.TYPE_MISMATCH, "object")]
        issues = []
        for field_name, field_spec in spec.fields:
            if not isinstance(field_spec, FieldSpec):
                raise SchemaDefinitionError(f"Field '{field_name}' must be a FieldSpec, got {field_spec!r}")
            if field_name not in value:
                if field_spec.required:
                    issues.append(_violation(path + (field_name,), ViolationKind.MISSING_REQUIRED))
                continue
            issues.extend(evaluate(field_spec.spec, value[field_name], path + (field_name,)))
        if spec.strict:
            declared = set(spec.field_names())
            for key in value:
                if key not in declared:
                    issues.append(_violation(path + (key,), ViolationKind.UNEXPECTED_PROPERTY))
        return issues

    if isinstance(spec, UnionSpec):
        # Accept if any option validates with no issues; otherwise one concise error.
        for opt in spec.options:
            if not evaluate(opt, value, path):
                return []
        return [_violation(path, ViolationKind.NO_ALTERNATIVE_MATCHED)]

    raise SchemaDefinitionError(f"Unknown schema node: {spec!r}")


def primitive_kind(spec: PrimitiveSpec) -> PrimitiveKind:
    try:
        return PrimitiveKind(spec.kind)
    except ValueError:
        raise SchemaDefinitionError(f"Unknown primitive kind: {spec.kind!r}") from None


def _at(where: str) -> str:
    return f" at '{where}'" if where else ""


def require_count(value: Any, name: str, where: str = "") -> None:
    if value is None:
        return
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise SchemaDefinitionError(f"'{name}' must be a non-negative integer{_at(where)}, got {value!r}")


def require_number(value: Any, name: str, where: str = "") -> None:
    if value is None:
        return
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise SchemaDefinitionError(f"'{name}' must be a number{_at(where)}, got {value!r}")


def compile_pattern(pattern: Any) -> "re.Pattern":
    if not isinstance(pattern, str):
        raise SchemaDefinitionError(f"'pattern' must be a string, got {pattern!r}")
    try:
        return re.compile(pattern)
    except re.error as exc:
        raise SchemaDefinitionError(f"Invalid string pattern '{pattern}': {exc}") from exc


def _evaluate_primitive(spec: PrimitiveSpec, value: Any, path: Path) -> List[Violation]:
    kind = primitive_kind(spec)

    # Malformed refinements raise regardless of the value.
    regex = conforms = None
    if kind is PrimitiveKind.STRING:
        require_count(spec.min_length, "min_length")
        require_count(spec.max_length, "max_length")
        if spec.pattern is not None:
            regex = compile_pattern(spec.pattern)
        if spec.format is not None:
            conforms = format_registry.resolve(spec.format)
    elif kind is PrimitiveKind.NUMBER:
        require_number(spec.minimum, "minimum")
        require_number(spec.maximum, "maximum")

    if not PRIMITIVE_PREDICATES[kind](value):
        return [_violation(path, ViolationKind.TYPE_MISMATCH, kind.value)]

    issues: List[Violation] = []
    if kind is PrimitiveKind.STRING:
        if spec.min_length is not None and len(value) < spec.min_length:
            issues.append(_violation(path, ViolationKind.LENGTH_TOO_SHORT, spec.min_length))
        if spec.max_length is not None and len(value) > spec.max_length:
            issues.append(_violation(path, ViolationKind.LENGTH_TOO_LONG, spec.max_length))
        if regex is not None and regex.search(value) is None:
            issues.append(_violation(path, ViolationKind.PATTERN_MISMATCH, spec.pattern))
        if conforms is not None and not conforms(value):
            issues.append(_violation(path, ViolationKind.FORMAT_INVALID, spec.format))
    elif kind is PrimitiveKind.NUMBER:
        if spec.minimum is not None and value < spec.minimum:
            issues.append(_violation(path, ViolationKind.BELOW_MINIMUM, spec.minimum))
        if spec.maximum is not None and value > spec.maximum:
            issues.append(_violation(path, ViolationKind.ABOVE_MAXIMUM, spec.maximum))
    return issues
