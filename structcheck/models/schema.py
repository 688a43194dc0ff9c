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

"""Schema model: immutable nodes describing the expected shape of a value.

Nodes form a closed set (primitive, literal, list, object, union). They are
plain data; nothing here checks that a schema is internally consistent; a
``minimum`` above ``maximum`` is representable and simply never satisfied.
"""

from __future__ import annotations

import enum as _enum
from dataclasses import dataclass
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple, Union

from ..exceptions import SchemaDefinitionError


class PrimitiveKind(str, _enum.Enum):
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    NULL = "null"


@dataclass(frozen=True)
class PrimitiveSpec:
    kind: PrimitiveKind

    # string refinements
    min_length: Optional[int] = None
    max_length: Optional[int] = None
    pattern: Optional[str] = None
    format: Optional[str] = None

    # number refinements
    minimum: Optional[float] = None
    maximum: Optional[float] = None


@dataclass(frozen=True)
class LiteralSpec:
    value: Any


@dataclass(frozen=True)
class ListSpec:
    item: "SchemaSpec"
    min_items: Optional[int] = None
    max_items: Optional[int] = None


@dataclass(frozen=True)
class FieldSpec:
    spec: "SchemaSpec"
    required: bool = True


@dataclass(frozen=True)
class ObjectSpec:
    fields: Tuple[Tuple[str, FieldSpec], ...] = ()
    strict: bool = False

    def field_names(self) -> Tuple[str, ...]:
        return tuple(name for name, _ in self.fields)


@dataclass(frozen=True)
class UnionSpec:
    options: Tuple["SchemaSpec", ...]


SchemaSpec = Union[PrimitiveSpec, LiteralSpec, ListSpec, ObjectSpec, UnionSpec]


# -------------------------
# Construction API
# -------------------------

def string(
    *,
    min_length: Optional[int] = None,
    max_length: Optional[int] = None,
    pattern: Optional[str] = None,
    format: Optional[str] = None,
) -> PrimitiveSpec:
    return PrimitiveSpec(
        PrimitiveKind.STRING,
        min_length=min_length,
        max_length=max_length,
        pattern=pattern,
        format=format,
    )


def number(*, minimum: Optional[float] = None, maximum: Optional[float] = None) -> PrimitiveSpec:
    return PrimitiveSpec(PrimitiveKind.NUMBER, minimum=minimum, maximum=maximum)


def boolean() -> PrimitiveSpec:
    return PrimitiveSpec(PrimitiveKind.BOOLEAN)


def null() -> PrimitiveSpec:
    return PrimitiveSpec(PrimitiveKind.NULL)


def literal(value: Any) -> LiteralSpec:
    return LiteralSpec(value)


def enum(*values: Any) -> UnionSpec:
    """Union of literals, one per value, in the given order."""
    return UnionSpec(tuple(LiteralSpec(v) for v in values))


def array(item: SchemaSpec, *, min_items: Optional[int] = None, max_items: Optional[int] = None) -> ListSpec:
    return ListSpec(item, min_items=min_items, max_items=max_items)


def optional(spec: SchemaSpec) -> FieldSpec:
    """Mark an object field as optional.

    Only waives the presence check; a present value is still checked against ``spec``.
    """
    return FieldSpec(spec, required=False)


def union(*options: SchemaSpec) -> UnionSpec:
    # Accept union([a, b]) as well as union(a, b).
    if len(options) == 1 and isinstance(options[0], (list, tuple)):
        options = tuple(options[0])
    return UnionSpec(tuple(options))


def obj(
    fields: Union[Mapping[str, Any], Iterable[Tuple[str, Any]]] = (),
    *,
    strict: bool = False,
) -> ObjectSpec:
    """Build an object schema.

    Args:
        fields: Mapping or sequence of ``(name, spec)`` pairs. A bare node is a
            required field; wrap it with :func:`optional` to make it optional.
        strict: Report keys that are not declared in ``fields``.

    Raises:
        SchemaDefinitionError: If a field name is repeated or is not a string.
    """
    items = fields.items() if isinstance(fields, Mapping) else fields

    seen: Dict[str, None] = {}
    entries = []
    for name, value in items:
        if not isinstance(name, str):
            raise SchemaDefinitionError(f"Object field names must be strings, got {name!r}")
        if name in seen:
            raise SchemaDefinitionError(f"Duplicate object field '{name}'")
        seen[name] = None
        field = value if isinstance(value, FieldSpec) else FieldSpec(value, required=True)
        entries.append((name, field))

    return ObjectSpec(fields=tuple(entries), strict=strict)


# -------------------------
# JSON Schema rendering
# -------------------------

def to_json_schema(spec: SchemaSpec) -> Dict[str, Any]:
    """Render a schema node as a JSON-Schema-shaped dict."""
    if isinstance(spec, PrimitiveSpec):
        out: Dict[str, Any] = {"type": spec.kind.value}
        for key, attr in (
            ("minLength", spec.min_length),
            ("maxLength", spec.max_length),
            ("pattern", spec.pattern),
            ("format", spec.format),
            ("minimum", spec.minimum),
            ("maximum", spec.maximum),
        ):
            if attr is not None:
                out[key] = attr
        return out

    if isinstance(spec, LiteralSpec):
        return {"const": spec.value}

    if isinstance(spec, ListSpec):
        out = {"type": "array", "items": to_json_schema(spec.item)}
        if spec.min_items is not None:
            out["minItems"] = spec.min_items
        if spec.max_items is not None:
            out["maxItems"] = spec.max_items
        return out

    if isinstance(spec, ObjectSpec):
        out = {
            "type": "object",
            "properties": {name: to_json_schema(field.spec) for name, field in spec.fields},
        }
        required = [name for name, field in spec.fields if field.required]
        if required:
            out["required"] = required
        if spec.strict:
            out["additionalProperties"] = False
        return out

    if isinstance(spec, UnionSpec):
        return {"anyOf": [to_json_schema(opt) for opt in spec.options]}

    raise SchemaDefinitionError(f"Unknown schema node: {spec!r}")

