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


"""Violation records produced when a value does not conform to a schema."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Tuple, Union

from ..utils.json_pointer import join_path

PathSegment = Union[str, int]
Path = Tuple[PathSegment, ...]


class ViolationKind(str, enum.Enum):
    TYPE_MISMATCH = "TypeMismatch"
    LITERAL_MISMATCH = "LiteralMismatch"
    MISSING_REQUIRED = "MissingRequired"
    UNEXPECTED_PROPERTY = "UnexpectedProperty"
    BELOW_MINIMUM = "BelowMinimum"
    ABOVE_MAXIMUM = "AboveMaximum"
    LENGTH_TOO_SHORT = "LengthTooShort"
    LENGTH_TOO_LONG = "LengthTooLong"
    PATTERN_MISMATCH = "PatternMismatch"
    FORMAT_INVALID = "FormatInvalid"
    TOO_FEW_ITEMS = "TooFewItems"
    TOO_MANY_ITEMS = "TooManyItems"
    NO_ALTERNATIVE_MATCHED = "NoAlternativeMatched"


@dataclass(frozen=True)
class Violation:
    path: Path
    kind: ViolationKind
    message: str

    @property
    def pointer(self) -> str:
        """JSON pointer of the offending value, ``""`` for the root."""
        return join_path(self.path)

    def to_dict(self) -> dict:
        return {
            "path": self.pointer,
            "kind": self.kind.value,
            "message": self.message,
        }
