"""
CLI Command Handlers Facade.

Re-exports the handlers from `gettext_rewriter.cli.handlers` so the dispatcher
(and tests patching it) has a single import location.
"""

from gettext_rewriter.cli.handlers.rewrite import (
  handle_check,
  handle_rewrite,
  _collect_files,
  _print_batch_summary,
  _rewrite_single_file,
)
from gettext_rewriter.cli.handlers.rules import handle_rules

__all__ = [
  "_collect_files",
  "_print_batch_summary",
  "_rewrite_single_file",
  "handle_check",
  "handle_rewrite",
  "handle_rules",
]
