"""
Core rewrite engine.

Exposes the registry lookup, the LibCST transformer and the pipeline driver.
"""

from gettext_rewriter.core.registry import GettextRule, get_rule, iter_rules
from gettext_rewriter.core.errors import GettextUsageError, UsageIssue
from gettext_rewriter.core.rewriter import GettextRewriter
from gettext_rewriter.core.engine import RewriteEngine
from gettext_rewriter.core.conversion_result import ConversionResult

__all__ = [
  "ConversionResult",
  "GettextRewriter",
  "GettextRule",
  "GettextUsageError",
  "RewriteEngine",
  "UsageIssue",
  "get_rule",
  "iter_rules",
]
