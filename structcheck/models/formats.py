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


"""String formats for the ``format`` refinement.

Built-in formats are the ones jsonschema's ``FormatChecker`` knows about
(``email``, ``ipv4``, ``ipv6``, ``date``, ``uuid``, ``regex``, ... plus any
enabled by optional jsonschema extras). Applications add their own with
:func:`register_format`.
"""

import logging
from typing import Callable, Optional

from jsonschema import FormatChecker

from ..exceptions import SchemaDefinitionError

logger = logging.getLogger(__name__)

FormatFunc = Callable[[str], bool]


class FormatRegistry:
    """Named string formats backed by a jsonschema ``FormatChecker``."""

    def __init__(self, checker: Optional[FormatChecker] = None):
        self._checker = checker if checker is not None else FormatChecker()

    def names(self):
        return sorted(self._checker.checkers)

    def has(self, name: str) -> bool:
        return name in self._checker.checkers

    def register(self, name: str, func: FormatFunc, raises=()) -> None:
        """Register ``func`` under ``name``, replacing any existing format.

        ``func`` returns True when the string conforms. Exceptions listed in
        ``raises`` are treated as a non-conforming result.
        """
        if not isinstance(name, str) or not name:
            raise SchemaDefinitionError(f"Format name must be a non-empty string, got: {name!r}")
        if name in self._checker.checkers:
            logger.debug(f"Replacing string format '{name}'")
        self._checker.checks(name, raises=raises)(func)

    def resolve(self, name: str) -> FormatFunc:
        """Return a predicate for ``name``.

        Raises:
            SchemaDefinitionError: If the format is not registered.
        """
        if not self.has(name):
            raise SchemaDefinitionError(
                f"Unknown string format '{name}'. Known formats: {', '.join(self.names())}"
            )
        func, raises = self._checker.checkers[name]

        def _conforms(value: str) -> bool:
            try:
                return bool(func(value))
            except raises:
                return False

        return _conforms


# Process-wide registry used by the compiler.
format_registry = FormatRegistry()


def register_format(name: str, func: FormatFunc, raises=()) -> None:
    """Register a custom string format on the process-wide registry.

    Validators compiled earlier keep the predicate they resolved at compile time.
    """
    format_registry.register(name, func, raises=raises)
