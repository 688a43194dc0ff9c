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


"""Schema documents: YAML or JSON files that describe a schema.

A document looks like::

    structcheck_format: 0.1.0
    schema:
      type: object
      properties:
        name: {type: string, minLength: 2}
        theme: {enum: [light, dark]}
      required: [name]

The ``schema`` node uses a subset of JSON Schema (``type``, ``const``,
``enum``, ``anyOf``, ``properties``/``required``/``additionalProperties``,
``items`` and the refinement keywords), which is the same shape
:func:`structcheck.models.schema.to_json_schema` produces. Documents are
validated against the bundled meta-schema with jsonschema before they are
converted into schema nodes.
"""

from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

import yaml
from jsonschema import Draft7Validator, FormatChecker

from .. import SCHEMA_FORMAT_VERSION
from ..config import engine_config
from ..exceptions import FormatVersionError, SchemaLoadError
from ..utils.json_pointer import child_pointer, join_path
from .schema import (
    SchemaSpec,
    array,
    boolean,
    enum,
    literal,
    null,
    number,
    obj,
    optional,
    string,
    union,
)

logger = logging.getLogger(__name__)

# Meta-schema cache, keyed by resolved version
_META_SCHEMA_CACHE: Dict[str, dict] = {}

# Loaded documents, keyed by resolved file path
_DOCUMENT_CACHE: Dict[Path, "SchemaDocument"] = {}


FORMAT_FIELD = "structcheck_format"

_VERSION_RE = re.compile(r"^v?(\d+)\.(\d+)\.(\d+)$")

Version = Tuple[int, int, int]


@dataclass(frozen=True)
class SchemaDocument:
    spec: SchemaSpec
    source: str
    format_version: Optional[str] = None
    title: Optional[str] = None
    description: Optional[str] = None
    # Non-fatal problems found while loading, e.g. a missing format version
    warnings: Tuple[str, ...] = ()


# -------------------------
# Format version
# -------------------------

def parse_format_version(raw: Any) -> Version:
    """Parse ``0.1.0`` or ``v0.1.0`` into ``(major, minor, patch)``.

    Raises:
        FormatVersionError: If ``raw`` is not a version string.
    """
    if not isinstance(raw, str):
        raise FormatVersionError(f"Format version must be a string, got {type(raw).__name__}: {raw!r}")
    m = _VERSION_RE.match(raw.strip())
    if m is None:
        raise FormatVersionError(
            f"Invalid format version string: '{raw}'. Expected 'MAJOR.MINOR.PATCH' (e.g. '{SCHEMA_FORMAT_VERSION}')."
        )
    return int(m.group(1)), int(m.group(2)), int(m.group(3))


def format_version_string(version: Version) -> str:
    return ".".join(str(part) for part in version)


SUPPORTED_FORMAT_VERSION = parse_format_version(SCHEMA_FORMAT_VERSION)


def check_format_version(raw: Any) -> Optional[str]:
    """Check a document's declared format version against this release.

    The major version must match and the patch level is ignored. Returns a
    warning message when the version is missing or has a newer minor
    version, otherwise None.

    Raises:
        FormatVersionError: If the version is malformed or its major differs.
    """
    if raw is None:
        return f"Missing '{FORMAT_FIELD}' field. Consider adding '{FORMAT_FIELD}: {SCHEMA_FORMAT_VERSION}'."

    declared = parse_format_version(raw)
    major, minor, _ = declared
    if major != SUPPORTED_FORMAT_VERSION[0]:
        raise FormatVersionError(
            f"Incompatible format version: document declares {format_version_string(declared)} "
            f"but this release reads major version {SUPPORTED_FORMAT_VERSION[0]} "
            f"(supported: {SCHEMA_FORMAT_VERSION})."
        )
    if minor > SUPPORTED_FORMAT_VERSION[1]:
        return (
            f"Format version {format_version_string(declared)} is newer than the supported "
            f"{SCHEMA_FORMAT_VERSION}; some keywords may not be understood."
        )
    return None


# -------------------------
# Meta-schema
# -------------------------

def _meta_schema_dir() -> Path:
    return Path(__file__).parent.parent / "schema"


def get_meta_schema_path(version: str) -> Path:
    return _meta_schema_dir() / version / "document.json"


def resolve_meta_schema_version(version: str) -> str:
    """Pick the meta-schema for ``version``.

    The exact version wins; otherwise the largest available version with the
    same major number. Returns ``version`` unchanged when nothing matches.
    """
    if get_meta_schema_path(version).exists():
        return version

    wanted = parse_format_version(version)
    available = []
    for version_dir in _meta_schema_dir().iterdir():
        if not (version_dir / "document.json").exists():
            continue
        try:
            candidate = parse_format_version(version_dir.name)
        except SchemaLoadError:
            continue
        if candidate[0] == wanted[0]:
            available.append(candidate)

    if not available:
        return version
    return format_version_string(max(available))


def load_meta_schema(version: str) -> dict:
    """Load the meta-schema used to validate documents of ``version``.

    Raises:
        SchemaLoadError: If no meta-schema exists for the version's major number.
    """
    resolved = resolve_meta_schema_version(version)
    if resolved in _META_SCHEMA_CACHE:
        return _META_SCHEMA_CACHE[resolved]

    path = get_meta_schema_path(resolved)
    if not path.exists():
        raise SchemaLoadError(f"No meta-schema for format version {version} (resolved to {resolved}): {path}")

    with open(path, "r", encoding="utf-8") as f:
        meta_schema = json.load(f)
    logger.debug(f"Loaded meta-schema {resolved} from {path}")

    _META_SCHEMA_CACHE[resolved] = meta_schema
    return meta_schema


def clear_cache() -> None:
    """Clear the meta-schema and document caches."""
    _META_SCHEMA_CACHE.clear()
    _DOCUMENT_CACHE.clear()


# -------------------------
# Conversion
# -------------------------

_STRING_KEYWORDS = {"minLength": "min_length", "maxLength": "max_length", "pattern": "pattern", "format": "format"}
_NUMBER_KEYWORDS = {"minimum": "minimum", "maximum": "maximum"}
_ARRAY_KEYWORDS = {"minItems": "min_items", "maxItems": "max_items"}


def _refinements(node: Dict[str, Any], keywords: Dict[str, str]) -> Dict[str, Any]:
    return {attr: node[key] for key, attr in keywords.items() if key in node}


def schema_from_dict(node: Any, where: str = "") -> SchemaSpec:
    """Convert a JSON-Schema-subset node into a schema node.

    Expects a node that already passed meta-schema validation; checks that
    the meta-schema cannot express are reported here.

    Raises:
        SchemaLoadError: With the JSON pointer of the offending node.
    """
    if not isinstance(node, dict):
        raise SchemaLoadError(f"Schema node at '{where}' must be a mapping, got {type(node).__name__}")

    if "anyOf" in node:
        return union(*(
            schema_from_dict(option, child_pointer(child_pointer(where, "anyOf"), idx))
            for idx, option in enumerate(node["anyOf"])
        ))
    if "const" in node:
        return literal(node["const"])
    if "enum" in node:
        return enum(*node["enum"])

    node_type = node.get("type")
    if node_type == "string":
        return string(**_refinements(node, _STRING_KEYWORDS))
    if node_type == "number":
        return number(**_refinements(node, _NUMBER_KEYWORDS))
    if node_type == "boolean":
        return boolean()
    if node_type == "null":
        return null()
    if node_type == "array":
        if "items" not in node:
            raise SchemaLoadError(f"Array node at '{where}' requires 'items'")
        item = schema_from_dict(node["items"], child_pointer(where, "items"))
        return array(item, **_refinements(node, _ARRAY_KEYWORDS))
    if node_type == "object":
        return _object_from_dict(node, where)

    raise SchemaLoadError(f"Schema node at '{where}' has unsupported type {node_type!r}")


def _object_from_dict(node: Dict[str, Any], where: str):
    properties = node.get("properties", {})
    required = list(node.get("required", []))
    undeclared = [name for name in required if name not in properties]
    if undeclared:
        raise SchemaLoadError(
            f"Object node at '{where}' requires undeclared properties: {', '.join(undeclared)}"
        )

    properties_where = child_pointer(where, "properties")
    fields = []
    for name, child in properties.items():
        spec = schema_from_dict(child, child_pointer(properties_where, name))
        fields.append((name, spec if name in required else optional(spec)))
    return obj(fields, strict=node.get("additionalProperties", True) is False)


# -------------------------
# Documents
# -------------------------

def parse_schema_document(document: Any, source: str = "<memory>") -> SchemaDocument:
    """Check and convert an already-parsed schema document.

    Raises:
        SchemaLoadError: If the document is malformed.
        FormatVersionError: If its declared format version is incompatible.
    """
    if not isinstance(document, dict):
        raise SchemaLoadError(f"Schema document root must be a mapping: {source}")

    raw_version = document.get(FORMAT_FIELD)
    try:
        version_warning = check_format_version(raw_version)
    except FormatVersionError as e:
        raise FormatVersionError(f"{e} ({source})") from None

    warnings: List[str] = []
    if version_warning is not None:
        logger.warning(f"{version_warning} ({source})")
        warnings.append(version_warning)

    version = format_version_string(parse_format_version(raw_version)) if raw_version is not None else None
    meta_schema = load_meta_schema(version or SCHEMA_FORMAT_VERSION)
    validator = Draft7Validator(meta_schema, format_checker=FormatChecker())
    problems: List[str] = [
        f"  - {join_path(error.absolute_path) or '/'}: {error.message}"
        for error in sorted(validator.iter_errors(document), key=lambda e: list(map(str, e.absolute_path)))
    ]
    if problems:
        raise SchemaLoadError(f"Invalid schema document {source}:\n" + "\n".join(problems))

    spec = schema_from_dict(document["schema"], "/schema")
    return SchemaDocument(
        spec=spec,
        source=source,
        format_version=version,
        title=document.get("title"),
        description=document.get("description"),
        warnings=tuple(warnings),
    )


def load_schema_document(file_path: Union[str, Path]) -> SchemaDocument:
    """Load a schema document from a YAML or JSON file.

    Documents are cached by resolved path while ``engine_config.cache_enabled``.

    Raises:
        SchemaLoadError: If the file is missing, unparsable or malformed.
    """
    path = Path(file_path)
    if not path.is_file():
        raise SchemaLoadError(f"Schema document not found: {path}")

    key = path.resolve()
    if engine_config.cache_enabled and key in _DOCUMENT_CACHE:
        logger.debug(f"Loading schema document from cache: {path}")
        return _DOCUMENT_CACHE[key]

    logger.debug(f"Loading schema document: {path}")
    try:
        content = path.read_text(encoding="utf-8")
        document = yaml.safe_load(content)
    except (OSError, UnicodeDecodeError) as e:
        raise SchemaLoadError(f"Cannot read schema document {path}: {e}") from e
    except yaml.YAMLError as e:
        raise SchemaLoadError(f"Invalid YAML in schema document {path}: {e}") from e

    result = parse_schema_document(document, source=str(path))
    if engine_config.cache_enabled:
        _DOCUMENT_CACHE[key] = result
    return result
