"""
Replacement Call Builders.

Each recognized call shape has a transform function that validates the call's
arguments, extracts its text arguments, and builds the replacement expression:

*   ``gettext(msg)`` / ``gettext_noop(msg)``: one message.
*   ``pgettext(context, msg)``: the context is passed through untouched.
*   ``ngettext(singular, plural, count)``: both texts may only interpolate bare
    variable names; their substitutions are merged.
*   ``npgettext(context, singular, plural, count)``: as ``ngettext`` with a context.
*   Tagged templates (``_(f"...")``): the tag's own template is the message.

When the extracted text has substitutions, the gettext call is wrapped as
``interpolate(<call>, {'name': value, ...}, True)`` so the values are applied
to the translated format string at runtime.
"""

from typing import TYPE_CHECKING, List, Sequence

import libcst as cst

from gettext_rewriter.core.context import RewriterContext
from gettext_rewriter.core.errors import GettextUsageError
from gettext_rewriter.core.extractor import extract_text, make_string_node
from gettext_rewriter.core.merging import merge_substitutions
from gettext_rewriter.core.types import Substitution

if TYPE_CHECKING:
  from gettext_rewriter.core.registry import GettextRule


def build_call(func_name: str, arg_nodes: Sequence[cst.BaseExpression]) -> cst.Call:
  """
  Builds a call expression from a function name and argument nodes.

  Args:
      func_name: The name of the function.
      arg_nodes: The expressions to pass as positional arguments.

  Returns:
      cst.Call: The resulting call.
  """
  return cst.Call(func=cst.Name(func_name), args=[cst.Arg(value=node) for node in arg_nodes])


def build_gettext_call(
  rule: "GettextRule",
  arg_nodes: Sequence[cst.BaseExpression],
  substitutions: Sequence[Substitution],
  ctx: RewriterContext,
) -> cst.Call:
  """
  Common logic for building a call to a gettext function.

  Calls the rule's runtime function directly, or wraps it in an interpolation
  call when the text requires substitutions. Every produced call is registered
  with the context's guard.

  Args:
      rule: The rule of the call being rewritten.
      arg_nodes: The arguments to pass to the gettext function.
      substitutions: Zero or more named values requiring interpolation.
      ctx: The rewriter context.

  Returns:
      cst.Call: The replacement expression.
  """
  gettext_call = ctx.guard.mark(build_call(rule.func_name, arg_nodes))

  if not substitutions:
    return gettext_call

  values = cst.Dict([cst.DictElement(key=make_string_node(sub.name), value=sub.value) for sub in substitutions])

  return ctx.guard.mark(build_call(ctx.interpolate_function, [gettext_call, values, cst.Name("True")]))


def _positional_args(rule: "GettextRule", node: cst.Call) -> List[cst.BaseExpression]:
  """
  Validates the argument list of a call form against the rule's arity.

  Raises:
      GettextUsageError: On arity mismatch, keyword arguments or star arguments.
  """
  for arg in node.args:
    if arg.keyword is not None or arg.star:
      raise GettextUsageError(f"Only positional arguments may be passed to '{rule.name}'", node)

  if len(node.args) != rule.arity:
    noun = "argument" if rule.arity == 1 else "arguments"
    raise GettextUsageError(
      f"Expecting {rule.arity} {noun} passed to '{rule.name}', got {len(node.args)}",
      node,
    )

  return [arg.value for arg in node.args]


def transform_gettext_call(rule: "GettextRule", node: cst.Call, ctx: RewriterContext) -> cst.Call:
  """Transforms ``gettext(msg)`` and ``gettext_noop(msg)`` style calls."""
  (message,) = _positional_args(rule, node)
  info = extract_text(rule, message, rule_lookup=ctx.rule_lookup)

  return build_gettext_call(rule, [info.text_node], info.substitutions, ctx)


def transform_pgettext_call(rule: "GettextRule", node: cst.Call, ctx: RewriterContext) -> cst.Call:
  """Transforms ``pgettext(context, msg)`` style calls."""
  context, message = _positional_args(rule, node)
  info = extract_text(rule, message, rule_lookup=ctx.rule_lookup)

  return build_gettext_call(rule, [context, info.text_node], info.substitutions, ctx)


def transform_ngettext_call(rule: "GettextRule", node: cst.Call, ctx: RewriterContext) -> cst.Call:
  """Transforms ``ngettext(singular, plural, count)`` style calls."""
  singular, plural, count = _positional_args(rule, node)
  singular_info = extract_text(rule, singular, allow_expressions=False, rule_lookup=ctx.rule_lookup)
  plural_info = extract_text(rule, plural, allow_expressions=False, rule_lookup=ctx.rule_lookup)
  substitutions = merge_substitutions([singular_info.substitutions, plural_info.substitutions])

  return build_gettext_call(
    rule,
    [singular_info.text_node, plural_info.text_node, count],
    substitutions,
    ctx,
  )


def transform_npgettext_call(rule: "GettextRule", node: cst.Call, ctx: RewriterContext) -> cst.Call:
  """Transforms ``npgettext(context, singular, plural, count)`` style calls."""
  context, singular, plural, count = _positional_args(rule, node)
  singular_info = extract_text(rule, singular, allow_expressions=False, rule_lookup=ctx.rule_lookup)
  plural_info = extract_text(rule, plural, allow_expressions=False, rule_lookup=ctx.rule_lookup)
  substitutions = merge_substitutions([singular_info.substitutions, plural_info.substitutions])

  return build_gettext_call(
    rule,
    [context, singular_info.text_node, plural_info.text_node, count],
    substitutions,
    ctx,
  )


def transform_gettext_template(rule: "GettextRule", node: cst.Call, ctx: RewriterContext) -> cst.Call:
  """
  Transforms a tagged template such as ``_(f"Hello {name}")`` into a gettext call.

  Only gettext functions taking a single text argument support the tagged form.
  The call itself is the tag, so only its template argument is extracted.
  """
  info = extract_text(rule, node.args[0].value, rule_lookup=ctx.rule_lookup)

  return build_gettext_call(rule, [info.text_node], info.substitutions, ctx)
