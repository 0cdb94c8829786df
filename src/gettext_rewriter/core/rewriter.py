"""
Gettext Call Rewriter.

The LibCST transformer that drives the rewrite. For every call it:

1.  Looks up the callee name in the call-shape registry and determines whether
    the call is a plain call or a tagged template (``tag(f"...")``).
2.  Skips the children of recognized calls on the way down, so the builders
    work on the call exactly as written.
3.  On the way up, replaces the call with the built expression and then visits
    the replacement with the same rewriter, so constructs nested in
    pass-through arguments or interpolated values are rewritten as well.

Nodes produced by the builders are registered with the ``TransformGuard`` and
never rewritten again, neither while descending into a replacement nor when the
same rewriter is run over its own output.

Usage errors are recorded as ``UsageIssue`` entries (with source positions when
run through ``libcst.MetadataWrapper``) and the offending call is left as is.
With ``fail_fast`` the first error is raised instead.
"""

from typing import List, Optional, Tuple

import libcst as cst
from libcst.metadata import CodeRange, PositionProvider

from gettext_rewriter.config import RuntimeConfig
from gettext_rewriter.enums import NodeCategory
from gettext_rewriter.core.context import RewriterContext
from gettext_rewriter.core.errors import GettextUsageError, UsageIssue
from gettext_rewriter.core.extractor import is_tagged_template
from gettext_rewriter.core.guard import TransformGuard
from gettext_rewriter.core.registry import Builder, GettextRule, get_rule
from gettext_rewriter.core.tracer import TraceLogger

_EMPTY_MODULE = cst.Module(body=[])


class GettextRewriter(cst.CSTTransformer):
  """
  Rewrites gettext-family calls and tagged templates into runtime calls.

  Attributes:
      ctx (RewriterContext): Configuration and idempotency guard shared with the builders.
      issues (List[UsageIssue]): Usage errors recorded during traversal.
      rewritten_count (int): Number of calls replaced so far.
  """

  METADATA_DEPENDENCIES = (PositionProvider,)

  def __init__(self, config: Optional[RuntimeConfig] = None, tracer: Optional[TraceLogger] = None) -> None:
    """
    Initializes the rewriter.

    Args:
        config: Runtime configuration. Defaults are used if None.
        tracer: Optional trace logger receiving mutation and error events.
    """
    super().__init__()
    self.ctx = RewriterContext(config, rule_lookup=get_rule)
    self.tracer = tracer
    self.issues: List[UsageIssue] = []
    self.rewritten_count = 0

  @property
  def guard(self) -> TransformGuard:
    return self.ctx.guard

  def visit_Call(self, node: cst.Call) -> Optional[bool]:
    # Recognized calls are replaced in leave_Call before their children are visited.
    return self._resolve(node) is None

  def leave_Call(self, original_node: cst.Call, updated_node: cst.Call) -> cst.BaseExpression:
    """
    Replaces a recognized call, or keeps guarded output up to date.
    """
    if self.guard.is_transformed(original_node):
      if updated_node is not original_node:
        # Nested constructs were rewritten inside our own output.
        self.guard.mark(updated_node)
      return updated_node

    resolved = self._resolve(original_node)
    if resolved is None:
      return updated_node

    rule, builder = resolved

    try:
      replacement = builder(rule, original_node, self.ctx)
    except GettextUsageError as e:
      self._report_failure(e, original_node)
      return updated_node

    self.rewritten_count += 1
    if self.tracer:
      self.tracer.log_mutation(
        rule.name,
        _EMPTY_MODULE.code_for_node(original_node),
        _EMPTY_MODULE.code_for_node(replacement),
      )

    return replacement.visit(self)

  def _resolve(self, node: cst.Call) -> Optional[Tuple[GettextRule, Builder]]:
    """
    Finds the rule and builder applying to a call.

    Returns:
        The (rule, builder) pair, or None if the call must be left alone.
    """
    if self.guard.is_transformed(node) or not isinstance(node.func, cst.Name):
      return None

    rule = get_rule(node.func.value)
    if rule is None:
      return None

    # A lone f-string argument is a call unless the name has a template builder.
    category = NodeCategory.CALL
    if rule.template_builder is not None and is_tagged_template(node):
      category = NodeCategory.TAGGED_TEMPLATE

    builder = rule.builder_for(category)
    if builder is None:
      return None

    return rule, builder

  def _report_failure(self, error: GettextUsageError, call: cst.Call) -> None:
    """
    Records a usage error at the most precise position available.

    Raises:
        GettextUsageError: If the rewriter is configured to fail fast.
    """
    position = None
    if error.node is not None:
      position = self._position_of(error.node)
    if position is None:
      position = self._position_of(call)

    error.position = position

    if position is not None:
      issue = UsageIssue(error.message, position.start.line, position.start.column + 1)
    else:
      issue = UsageIssue(error.message)

    self.issues.append(issue)
    if self.tracer:
      self.tracer.log_usage_error(issue.message, issue.line, issue.column)

    if self.ctx.config.fail_fast:
      raise error

  def _position_of(self, node: cst.CSTNode) -> Optional[CodeRange]:
    if PositionProvider not in self.metadata:
      return None
    return self.get_metadata(PositionProvider, node, None)
