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

"""Custom exceptions for structcheck.

Checking a value never raises: nonconformance is reported as violations.
These exceptions cover programmer errors in schemas and I/O around them.
"""


class StructCheckError(Exception):
    """Base exception for structcheck errors."""
    pass


class SchemaDefinitionError(StructCheckError):
    """Exception raised when a schema violates the model's structural rules."""
    pass


class SchemaLoadError(StructCheckError):
    """Exception raised when a schema document cannot be read or is malformed."""
    pass


class FormatVersionError(SchemaLoadError):
    """Exception raised when a schema document's format version is incompatible."""
    pass


class DataLoadError(StructCheckError):
    """Exception raised when a data file cannot be read."""
    pass


class ValidationError(StructCheckError):
    """Exception raised by ``Validator.assert_valid`` for nonconforming values."""

    def __init__(self, message: str, violations=()):
        super().__init__(message)
        self.violations = list(violations)
