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


"""Load data files (YAML or JSON) together with a source map.

The source map maps JSON pointers (``/settings/theme``) to 1-based
``{"line": ..., "column": ...}`` entries so violations can point at the
line that caused them.
"""

import logging
from pathlib import Path
from typing import Any, Dict, Tuple, Union

import yaml

from ..exceptions import DataLoadError
from ..utils.json_pointer import child_pointer

logger = logging.getLogger(__name__)

SourceMap = Dict[str, Dict[str, int]]


def build_source_map(content: str) -> SourceMap:
    """Build a JSON pointer → line/column table from YAML text.

    Uses PyYAML's node tree (``yaml.compose``) so the parsed data shapes from
    ``safe_load`` stay untouched.
    """
    source_map: SourceMap = {}

    try:
        root = yaml.compose(content, Loader=yaml.SafeLoader)
    except yaml.YAMLError:
        # Parse errors are reported by the loader itself.
        return source_map

    if root is None:
        return source_map

    def _walk(node: yaml.Node, pointer: str) -> None:
        mark = node.start_mark
        # PyYAML marks are 0-based
        source_map[pointer] = {"line": mark.line + 1, "column": mark.column + 1}

        if isinstance(node, yaml.MappingNode):
            for key_node, value_node in node.value:
                key = getattr(key_node, "value", None)
                if key is None:
                    continue
                _walk(value_node, child_pointer(pointer, key))
        elif isinstance(node, yaml.SequenceNode):
            for idx, item_node in enumerate(node.value):
                _walk(item_node, child_pointer(pointer, idx))

    _walk(root, "")
    return source_map


def load_data_with_source(file_path: Union[str, Path]) -> Tuple[Any, SourceMap]:
    """Load a YAML or JSON data file and return ``(data, source_map)``.

    An empty file loads as ``None``.

    Raises:
        DataLoadError: If the file is missing or cannot be parsed.
    """
    path = Path(file_path)
    if not path.is_file():
        raise DataLoadError(f"Data file not found: {path}")

    logger.debug(f"Loading data file: {path}")
    try:
        content = path.read_text(encoding="utf-8")
        data = yaml.safe_load(content)
    except (OSError, UnicodeDecodeError) as e:
        raise DataLoadError(f"Cannot read data file {path}: {e}") from e
    except yaml.YAMLError as e:
        raise DataLoadError(f"Invalid YAML/JSON in data file {path}: {e}") from e

    return data, build_source_map(content)
