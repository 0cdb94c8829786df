"""
Rewrite and Check Command Handlers.

This module implements the logic for the `gettext-rewriter rewrite` and
`gettext-rewriter check` commands. It orchestrates:

1. Configuration loading (pyproject.toml + CLI overrides).
2. Source file discovery (single file or directory tree).
3. Rewriting via the Engine.
4. Output writing, trace logging and the batch summary.
"""

import json
from pathlib import Path
from typing import Dict, List, Optional

from pydantic import ValidationError
from rich.markup import escape
from rich.table import Table

from gettext_rewriter.config import RuntimeConfig
from gettext_rewriter.core.engine import RewriteEngine, ConversionResult
from gettext_rewriter.utils.console import (
  console,
  log_error,
  log_info,
  log_success,
  log_warning,
)


def handle_rewrite(
  input_path: Path,
  output_path: Optional[Path],
  fail_fast: Optional[bool],
  interpolate_function: Optional[str],
  json_trace_path: Optional[Path] = None,
) -> int:
  """
  Handles the 'rewrite' command execution.

  Args:
      input_path: Path to the source file or directory to rewrite.
      output_path: Where rewritten code is saved. Required for directories;
          for a single file, the code is printed to stdout when omitted.
      fail_fast: Override for stopping at the first usage error in a file.
      interpolate_function: Override for the interpolation function name.
      json_trace_path: Optional path to dump the execution trace JSON.

  Returns:
      int: Exit code (0 for success, 1 for failure).
  """
  if not input_path.exists():
    log_error(f"Input not found: {escape(str(input_path))}")
    return 1

  config = _load_config(input_path, fail_fast, interpolate_function)
  if config is None:
    return 1

  engine = RewriteEngine(config)

  if input_path.is_file():
    result = _rewrite_single_file(input_path, output_path, engine, json_trace_path)
    _report_errors(str(input_path), result)
    return 0 if result.success else 1

  if not output_path:
    log_error("Directory rewriting requires --out destination directory.")
    return 1

  files = _collect_files(input_path, config.include)
  if not files:
    log_warning(f"No files matching {config.include} found in {escape(str(input_path))}")
    return 0

  log_info(f"Processing {len(files)} files from [path]{escape(str(input_path))}[/path]...")

  batch_results: Dict[str, ConversionResult] = {}
  for src_file in files:
    rel_path = src_file.relative_to(input_path)
    dest_file = output_path / rel_path

    batch_trace = None
    if json_trace_path:
      # One trace per file, written next to the output.
      batch_trace = dest_file.with_suffix(".trace.json")

    batch_results[str(rel_path)] = _rewrite_single_file(src_file, dest_file, engine, batch_trace)

  _print_batch_summary(batch_results)
  return 0 if all(r.success for r in batch_results.values()) else 1


def handle_check(input_path: Path, fail_fast: Optional[bool]) -> int:
  """
  Handles the 'check' command: reports usage errors without writing anything.

  Args:
      input_path: Path to the source file or directory to check.
      fail_fast: Override for stopping at the first usage error in a file.

  Returns:
      int: Exit code (0 if no file has errors, 1 otherwise).
  """
  if not input_path.exists():
    log_error(f"Input not found: {escape(str(input_path))}")
    return 1

  config = _load_config(input_path, fail_fast, None)
  if config is None:
    return 1

  engine = RewriteEngine(config)
  files = [input_path] if input_path.is_file() else _collect_files(input_path, config.include)

  results: Dict[str, ConversionResult] = {}
  for src_file in files:
    label = str(src_file)
    try:
      code = src_file.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
      results[label] = ConversionResult(success=False, errors=[str(e)])
    else:
      results[label] = engine.run(code)
    _report_errors(label, results[label])

  failures = sum(1 for r in results.values() if not r.success)
  if failures:
    log_error(f"{failures} of {len(results)} files have gettext usage errors.")
    return 1

  log_success(f"Checked {len(results)} files: no gettext usage errors.")
  return 0


def _load_config(
  input_path: Path, fail_fast: Optional[bool], interpolate_function: Optional[str]
) -> Optional[RuntimeConfig]:
  try:
    return RuntimeConfig.load(
      fail_fast=fail_fast,
      interpolate_function=interpolate_function,
      search_path=input_path if input_path.is_dir() else input_path.parent,
    )
  except ValidationError as e:
    log_error(f"Invalid configuration: {escape(str(e))}")
    return None


def _collect_files(root: Path, patterns: List[str]) -> List[Path]:
  """
  Finds files below `root` matching any of the glob patterns.

  Args:
      root: Directory to search recursively.
      patterns: Glob patterns such as ``*.py``.

  Returns:
      List[Path]: Matching files, sorted and without duplicates.
  """
  found = set()
  for pattern in patterns:
    found.update(p for p in root.rglob(pattern) if p.is_file())
  return sorted(found)


def _rewrite_single_file(
  input_path: Path,
  output_path: Optional[Path],
  engine: RewriteEngine,
  json_trace_path: Optional[Path] = None,
) -> ConversionResult:
  """
  Helper to execute the rewrite on a single file.

  Args:
      input_path: Source file path.
      output_path: Destination file path. The code is printed if None.
      engine: The configured engine.
      json_trace_path: Path to save trace event logs.

  Returns:
      ConversionResult: Result object containing status and code.
  """
  try:
    code = input_path.read_text(encoding="utf-8")
  except (OSError, UnicodeDecodeError) as e:
    log_error(f"Failed to read {escape(str(input_path))}: {escape(str(e))}")
    return ConversionResult(success=False, errors=[str(e)])

  result = engine.run(code)

  if json_trace_path and result.trace_events:
    try:
      json_trace_path.parent.mkdir(parents=True, exist_ok=True)
      with open(json_trace_path, "wt", encoding="utf-8") as f:
        json.dump(result.trace_events, f, indent=2)
      log_info(f"Trace saved to [path]{escape(str(json_trace_path))}[/path]")
    except OSError as e:
      log_error(f"Failed to write trace: {escape(str(e))}")

  if not result.success:
    return result

  if output_path:
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "wt", encoding="utf-8") as f:
      f.write(result.code)
    log_success(
      f"Rewrote {result.rewritten} calls: [path]{escape(str(input_path))}[/path] -> "
      f"[path]{escape(str(output_path))}[/path]"
    )
  else:
    print(result.code, end="")

  return result


def _report_errors(label: str, result: ConversionResult) -> None:
  for error in result.errors_for(label):
    log_error(escape(error))


def _print_batch_summary(results: Dict[str, ConversionResult]) -> None:
  """
  Renders a summary table of rewrite results to the console.

  Args:
      results: Dictionary mapping filenames to results.
  """
  total = len(results)
  successes = sum(1 for r in results.values() if r.success)
  failures = total - successes

  if failures == 0:
    log_success(f"Batch Complete: {successes}/{total} files rewritten.")
    return

  table = Table(title="Rewrite Report")
  table.add_column("File", style="cyan")
  table.add_column("Status", justify="center")
  table.add_column("Issues", style="red")

  for filename, res in results.items():
    if res.success:
      continue
    issues = "; ".join(res.errors) if res.errors else "Unknown Error"
    table.add_row(escape(filename), "Failed", escape(issues))

  console.print(table)
  console.print(f"\n[bold]Summary:[/bold] {successes} Passed, {failures} with Issues.")
