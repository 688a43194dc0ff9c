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


"""File I/O: loading data files and locating values inside them."""

from .data_loader import build_source_map, load_data_with_source
from .source_location import SourceLocation, lookup_source

__all__ = [
    "SourceLocation",
    "build_source_map",
    "load_data_with_source",
    "lookup_source",
]
