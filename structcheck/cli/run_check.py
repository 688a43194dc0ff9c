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


"""Command line checker: validate data files against a schema document."""

import argparse
import json
import logging
import sys
from dataclasses import replace
from pathlib import Path
from typing import List, Optional, Sequence

from ..compiler import Validator, compile
from ..config import engine_config
from ..exceptions import DataLoadError, SchemaDefinitionError, SchemaLoadError
from ..file_io.data_loader import load_data_with_source
from ..models.schema_loader import load_schema_document
from .report import CheckResult

logger = logging.getLogger(__name__)


def check_files(validator: Validator, file_paths: List[Path]) -> List[CheckResult]:
    """Check each data file; unreadable files are reported as errors, not raised."""
    results = []
    for file_path in file_paths:
        result = CheckResult(file_path)
        try:
            data, source_map = load_data_with_source(file_path)
        except DataLoadError as e:
            result.add_error(str(e))
        else:
            result.add_violations(validator.errors(data), source_map)
        logger.debug(f"{file_path}: {len(result.errors)} error(s)")
        results.append(result)
    return results


def _print_human(results: List[CheckResult], schema_path: str, schema_warnings: Sequence[str]) -> None:
    for warning in schema_warnings:
        print(f"{schema_path}: WARNING: {warning}")
    for result in results:
        if result.ok:
            print(f"{result.file_path}: OK")
            continue
        print(f"{result.file_path}:")
        for error in result.errors:
            line_info = f":{error['line']}" if "line" in error else ""
            print(f"  ERROR{line_info}: {error['message']}")


def _print_github_actions(results: List[CheckResult], schema_path: str, schema_warnings: Sequence[str]) -> None:
    for warning in schema_warnings:
        print(f"::warning file={schema_path}::{warning}")
    for result in results:
        for error in result.errors:
            print(f"::error file={result.file_path},line={error.get('line', 1)}::{error['message']}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="structcheck",
        description="Validate YAML/JSON data files against a structcheck schema document",
    )
    parser.add_argument("--schema", required=True, help="Schema document (YAML or JSON)")
    parser.add_argument("paths", nargs="+", help="Data files to check")
    parser.add_argument(
        "--format",
        choices=["human", "json", "github-actions"],
        default="human",
        help="Output format (default: human)",
    )
    parser.add_argument(
        "--strict-exit",
        action="store_true",
        help="Exit with 1 when the schema document has warnings, even if every file conforms",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point. Returns 0 when every file conforms, 1 on violations, 2 on schema errors.

    With ``--strict-exit``, schema document warnings also return 1.
    """
    args = build_parser().parse_args(argv)

    config = replace(engine_config, log_level="DEBUG") if args.verbose else engine_config
    config.set_logging()

    try:
        document = load_schema_document(args.schema)
        validator = compile(document.spec)
    except (SchemaLoadError, SchemaDefinitionError) as e:
        logger.error(str(e))
        return 2

    results = check_files(validator, [Path(p) for p in args.paths])

    if args.format == "json":
        output = {
            "schema": str(args.schema),
            "files": len(results),
            "errors": sum(len(r.errors) for r in results),
            "warnings": list(document.warnings),
            "results": [r.to_dict() for r in results],
        }
        print(json.dumps(output, indent=2))
    elif args.format == "github-actions":
        _print_github_actions(results, args.schema, document.warnings)
    else:
        _print_human(results, args.schema, document.warnings)

    if not all(r.ok for r in results):
        return 1
    if args.strict_exit and document.warnings:
        return 1
    return 0


def run() -> None:
    sys.exit(main())


if __name__ == "__main__":
    run()
