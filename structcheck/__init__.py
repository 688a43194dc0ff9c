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

"""Schema-driven runtime validation.

Build a schema once, compile it, and reuse the validator::

    from structcheck import array, compile, literal, number, obj, optional, string, union

    User = obj({
        "name": string(min_length=2),
        "age": optional(number(minimum=0)),
        "roles": array(union(literal("admin"), literal("user"))),
    })
    validator = compile(User)
    validator.check({"name": "Jo", "roles": ["admin"]})  # True
"""

# Version of the schema document format understood by this release.
SCHEMA_FORMAT_VERSION = "0.1.0"

from .compiler import Validator, compile
from .evaluator import evaluate
from .exceptions import (
    DataLoadError,
    FormatVersionError,
    SchemaDefinitionError,
    SchemaLoadError,
    StructCheckError,
    ValidationError,
)
from .models.formats import register_format
from .models.schema import (
    FieldSpec,
    ListSpec,
    LiteralSpec,
    ObjectSpec,
    PrimitiveKind,
    PrimitiveSpec,
    SchemaSpec,
    UnionSpec,
    array,
    boolean,
    enum,
    literal,
    null,
    number,
    obj,
    optional,
    string,
    to_json_schema,
    union,
)
from .models.violations import Violation, ViolationKind
from .reporter import format_violation, format_violations, join_path

__all__ = [
    "SCHEMA_FORMAT_VERSION",
    "DataLoadError",
    "FieldSpec",
    "FormatVersionError",
    "ListSpec",
    "LiteralSpec",
    "ObjectSpec",
    "PrimitiveKind",
    "PrimitiveSpec",
    "SchemaDefinitionError",
    "SchemaLoadError",
    "SchemaSpec",
    "StructCheckError",
    "UnionSpec",
    "ValidationError",
    "Validator",
    "Violation",
    "ViolationKind",
    "array",
    "boolean",
    "compile",
    "enum",
    "evaluate",
    "format_violation",
    "format_violations",
    "join_path",
    "literal",
    "null",
    "number",
    "obj",
    "optional",
    "register_format",
    "string",
    "to_json_schema",
    "union",
]
