"""
Main Entry Point for gettext-rewriter CLI.

This module handles argument parsing and dispatches to specific command
handlers defined in `gettext_rewriter.cli.commands`.
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from gettext_rewriter.cli import commands
from gettext_rewriter import __version__


def main(argv: Optional[List[str]] = None) -> int:
  """
  Main CLI entry point.

  Args:
      argv: Optional list of command line arguments (defaults to sys.argv).

  Returns:
      int: Exit code (0 for success, non-zero for failure).
  """
  parser = argparse.ArgumentParser(description="gettext-rewriter: Normalize gettext calls for a localization runtime")
  parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

  subparsers = parser.add_subparsers(dest="command", required=True)

  # --- Command: REWRITE ---
  cmd_rw = subparsers.add_parser("rewrite", help="Rewrite gettext calls in a Python file or directory")
  cmd_rw.add_argument("path", type=Path, help="Input source file or directory")
  cmd_rw.add_argument("--out", type=Path, help="Output destination (file or dir). Prints to stdout for a single file.")
  cmd_rw.add_argument(
    "--fail-fast",
    action="store_true",
    default=None,
    help="Stop at the first usage error in each file (Overrides config)",
  )
  cmd_rw.add_argument(
    "--interpolate",
    default=None,
    help="Name of the runtime interpolation function (default: from toml, else 'interpolate')",
  )
  cmd_rw.add_argument(
    "--json-trace", type=Path, default=None, help="Dump the execution trace (phases, rewrites) to a JSON file."
  )

  # --- Command: CHECK ---
  cmd_chk = subparsers.add_parser("check", help="Report gettext usage errors without writing")
  cmd_chk.add_argument("path", type=Path, help="Input source file or directory")
  cmd_chk.add_argument(
    "--fail-fast",
    action="store_true",
    default=None,
    help="Stop at the first usage error in each file (Overrides config)",
  )

  # --- Command: RULES ---
  subparsers.add_parser("rules", help="Show the recognized gettext functions")

  args = parser.parse_args(argv)

  if args.command == "rewrite":
    return commands.handle_rewrite(args.path, args.out, args.fail_fast, args.interpolate, args.json_trace)

  elif args.command == "check":
    return commands.handle_check(args.path, args.fail_fast)

  elif args.command == "rules":
    return commands.handle_rules()

  return 0


if __name__ == "__main__":
  sys.exit(main())
