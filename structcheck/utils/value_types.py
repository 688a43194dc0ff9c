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


from __future__ import annotations

import math
from collections.abc import Mapping
from typing import Any, Callable, Dict

from ..models.schema import PrimitiveKind


def is_string(value: Any) -> bool:
    return isinstance(value, str)


def is_number(value: Any) -> bool:
    # bool is an int subclass but is not a number here; NaN and infinities are rejected.
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return isinstance(value, int) or math.isfinite(value)


def is_boolean(value: Any) -> bool:
    return isinstance(value, bool)


def is_null(value: Any) -> bool:
    return value is None


def is_array(value: Any) -> bool:
    return isinstance(value, (list, tuple))


def is_object(value: Any) -> bool:
    return isinstance(value, Mapping)


PRIMITIVE_PREDICATES: Dict[PrimitiveKind, Callable[[Any], bool]] = {
    PrimitiveKind.STRING: is_string,
    PrimitiveKind.NUMBER: is_number,
    PrimitiveKind.BOOLEAN: is_boolean,
    PrimitiveKind.NULL: is_null,
}


def deep_equal(left: Any, right: Any) -> bool:
    """JSON-style equality: booleans never equal numbers, lists equal tuples.

    Strings compare by value, so a ``str`` subclass matches like ``string()`` accepts it.
    """
    if is_boolean(left) or is_boolean(right):
        return is_boolean(left) and is_boolean(right) and left == right
    if is_array(left) or is_array(right):
        if not (is_array(left) and is_array(right)) or len(left) != len(right):
            return False
        return all(deep_equal(a, b) for a, b in zip(left, right))
    if is_object(left) or is_object(right):
        if not (is_object(left) and is_object(right)) or set(left.keys()) != set(right.keys()):
            return False
        return all(deep_equal(left[key], right[key]) for key in left)
    if isinstance(left, (int, float)) and isinstance(right, (int, float)):
        return left == right
    if is_string(left) and is_string(right):
        return left == right
    return type(left) is type(right) and left == right
