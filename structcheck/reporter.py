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


"""Error reporter: canonical messages and path-qualified rendering of violations.

Each :class:`ViolationKind` has exactly one message template. Templates
take a single ``detail`` argument (the expected kind, the bound, the
literal, the pattern or the format name) and ignore it when they have no
placeholder.
"""

from __future__ import annotations

import json
from typing import Any, Callable, Dict, Iterable

from .models.violations import Violation, ViolationKind
from .utils.json_pointer import join_path

__all__ = ["format_violation", "format_violations", "join_path", "render_message"]


def _format_bound(bound: Any) -> str:
    # Integral floats render without a trailing ".0", like 120 rather than 120.0.
    if isinstance(bound, float) and bound.is_integer():
        return str(int(bound))
    return str(bound)


def _format_literal(value: Any) -> str:
    if isinstance(value, str):
        return f"'{value}'"
    try:
        return json.dumps(value, sort_keys=True)
    except (TypeError, ValueError):
        return repr(value)


_MESSAGES: Dict[ViolationKind, Callable[[Any], str]] = {
    ViolationKind.TYPE_MISMATCH: lambda kind: f"Expected {kind}",
    ViolationKind.LITERAL_MISMATCH: lambda value: f"Expected {_format_literal(value)}",
    ViolationKind.MISSING_REQUIRED: lambda _: "Expected required property",
    ViolationKind.UNEXPECTED_PROPERTY: lambda _: "Unexpected property",
    ViolationKind.BELOW_MINIMUM: lambda bound: f"Expected number to be greater or equal to {_format_bound(bound)}",
    ViolationKind.ABOVE_MAXIMUM: lambda bound: f"Expected number to be less or equal to {_format_bound(bound)}",
    ViolationKind.LENGTH_TOO_SHORT: lambda bound: f"Expected string length greater or equal to {bound}",
    ViolationKind.LENGTH_TOO_LONG: lambda bound: f"Expected string length less or equal to {bound}",
    ViolationKind.PATTERN_MISMATCH: lambda pattern: f"Expected string to match '{pattern}'",
    ViolationKind.FORMAT_INVALID: lambda name: f"Expected string to match '{name}' format",
    ViolationKind.TOO_FEW_ITEMS: lambda bound: f"Expected array length to be greater or equal to {bound}",
    ViolationKind.TOO_MANY_ITEMS: lambda bound: f"Expected array length to be less or equal to {bound}",
    ViolationKind.NO_ALTERNATIVE_MATCHED: lambda _: "Expected union value",
}


def _check_message_table() -> None:
    missing = [kind.value for kind in ViolationKind if kind not in _MESSAGES]
    if missing:
        raise RuntimeError(f"No canonical message for violation kinds: {', '.join(missing)}")


_check_message_table()


def render_message(kind: ViolationKind, detail: Any = None) -> str:
    """Canonical message for ``kind``."""
    return _MESSAGES[kind](detail)


def format_violation(violation: Violation) -> str:
    """Render ``"<json-pointer>: <message>"``, e.g. ``/roles/0: Expected union value``."""
    return f"{join_path(violation.path)}: {violation.message}"


def format_violations(violations: Iterable[Violation], *, indent: str = "") -> str:
    return "\n".join(f"{indent}{format_violation(v)}" for v in violations)
