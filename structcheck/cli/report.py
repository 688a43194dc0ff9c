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


"""Per-file results for the command line checker."""

from pathlib import Path
from typing import Any, Dict, List, Optional

from ..file_io.source_location import SourceLocation, lookup_source
from ..models.violations import Violation
from ..reporter import format_violation


class CheckResult:
    """Container for the outcome of checking a single data file."""

    def __init__(self, file_path: Path):
        self.file_path = file_path
        self.errors: List[Dict[str, Any]] = []

    @property
    def ok(self) -> bool:
        return not self.errors

    def add_error(self, message: str, location: Optional[SourceLocation] = None, kind: Optional[str] = None):
        error: Dict[str, Any] = {"message": message}
        if kind is not None:
            error["kind"] = kind
        if location is not None:
            if location.pointer is not None:
                error["path"] = location.pointer
            if location.line is not None:
                error["line"] = location.line
            if location.column is not None:
                error["column"] = location.column
        self.errors.append(error)

    def add_violations(self, violations: List[Violation], source_map: Optional[Dict[str, Dict[str, int]]] = None):
        for violation in violations:
            location = lookup_source(source_map, violation.pointer, self.file_path)
            self.add_error(format_violation(violation), location, kind=violation.kind.value)

    def to_dict(self) -> Dict[str, Any]:
        return {"file": str(self.file_path), "ok": self.ok, "errors": self.errors}
