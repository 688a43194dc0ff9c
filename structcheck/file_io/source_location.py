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

from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional


@dataclass(frozen=True)
class SourceLocation:
    file_path: Optional[Path] = None
    pointer: Optional[str] = None
    line: Optional[int] = None  # 1-based
    column: Optional[int] = None  # 1-based


def lookup_source(
    source_map: Optional[Dict[str, Dict[str, int]]],
    pointer: str,
    file_path: Optional[Path] = None,
) -> SourceLocation:
    """Locate ``pointer`` in ``source_map``.

    Falls back to the closest ancestor, so a missing property is reported at
    the object that should contain it.
    """
    candidate = pointer
    while source_map:
        entry = source_map.get(candidate)
        if entry:
            return SourceLocation(file_path=file_path, pointer=pointer, line=entry.get("line"), column=entry.get("column"))
        if not candidate:
            break
        candidate = candidate.rsplit("/", 1)[0]
    return SourceLocation(file_path=file_path, pointer=pointer)

