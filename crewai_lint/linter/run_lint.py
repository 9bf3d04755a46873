#!/usr/bin/env python3
# Copyright 2025 TIER IV, inc.
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

"""CLI entry point for linting CrewAI agents.yaml / tasks.yaml files."""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .. import RECOGNIZED_FILE_NAMES
from ..schema.registry import load_default_schemas
from ..utils.logging_utils import configure_cli_logging
from ..utils.version import check_version_compatibility
from . import lint_files, LintResult

logger = logging.getLogger(__name__)


def find_yaml_files(paths: List[str]) -> List[Path]:
    """Find all agents.yaml / tasks.yaml files in given paths."""
    yaml_files = []

    for path_str in paths:
        path = Path(path_str)

        if not path.exists():
            print(f"Warning: Path does not exist: {path}", file=sys.stderr)
            continue

        if path.is_file():
            if path.name in RECOGNIZED_FILE_NAMES:
                yaml_files.append(path)
            else:
                print(f"Warning: File is not agents.yaml or tasks.yaml: {path}", file=sys.stderr)
        elif path.is_dir():
            for name in RECOGNIZED_FILE_NAMES:
                yaml_files.extend(path.rglob(name))
        else:
            print(f"Warning: Path is neither file nor directory: {path}", file=sys.stderr)

    return sorted(set(yaml_files))


def _project_root(paths: List[str]) -> Path:
    first = Path(paths[0])
    return first if first.is_dir() else first.parent


def _print_results(results: List[LintResult], output_format: str):
    if output_format == 'json':
        output = {
            'files': len(results),
            'errors': sum(len(r.errors) for r in results),
            'warnings': sum(len(r.warnings) for r in results),
            'results': [
                {
                    'file': str(r.file_path),
                    'errors': [d.to_dict() for d in r.errors],
                    'warnings': [d.to_dict() for d in r.warnings],
                }
                for r in results
            ],
        }
        print(json.dumps(output, indent=2))
    elif output_format == 'github-actions':
        for result in results:
            for error in result.errors:
                print(f"::error file={result.file_path},line={error.range.start_line + 1}::{error.message}")
            for warning in result.warnings:
                print(f"::warning file={result.file_path},line={warning.range.start_line + 1}::{warning.message}")
    else:  # human-readable
        for result in results:
            if result.diagnostics:
                print(f"\n{result.file_path}:")
                for error in result.errors:
                    print(f"  ERROR:{error.range.start_line + 1}: {error.message}")
                for warning in result.warnings:
                    print(f"  WARNING:{warning.range.start_line + 1}: {warning.message}")


def main(argv: Optional[List[str]] = None) -> None:
    """Main entry point for the linter CLI."""
    parser = argparse.ArgumentParser(
        description='Lint CrewAI agents.yaml and tasks.yaml files',
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        'paths',
        nargs='*',
        default=None,
        help='File paths or directories to lint (default: current directory)',
    )
    parser.add_argument(
        '--format',
        choices=['human', 'json', 'github-actions'],
        default='human',
        help='Output format (default: human)',
    )
    parser.add_argument(
        '--schema-version',
        default=None,
        help='CrewAI schema version to validate against (default: detected from project manifests)',
    )
    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Show informational log messages',
    )

    args = parser.parse_args(argv)

    configure_cli_logging(verbose=args.verbose, machine_output=args.format != 'human')

    if not args.paths:
        args.paths = ['.']

    yaml_files = find_yaml_files(args.paths)

    if not yaml_files:
        print("No agents.yaml or tasks.yaml files found.", file=sys.stderr)
        sys.exit(1)

    registry = load_default_schemas()
    if args.schema_version:
        registry.set_current_version(args.schema_version)
    else:
        registry.set_version_from_workspace(_project_root(args.paths))

    schema = registry.get_current_schema()
    if schema is not None:
        compatibility = check_version_compatibility(schema.version)
        if compatibility is not None and args.format == 'human':
            print(compatibility.message, file=sys.stderr)

    results = lint_files(yaml_files, registry)
    _print_results(results, args.format)

    # Exit with error code if any errors found
    total_errors = sum(len(r.errors) for r in results)
    if total_errors > 0:
        sys.exit(1)
    if args.format == 'human':
        print("Lint succeeded with no errors.")
    sys.exit(0)


if __name__ == '__main__':
    main()
