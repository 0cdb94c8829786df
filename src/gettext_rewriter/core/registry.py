"""
Call-Shape Registry.

Static, read-only table mapping every recognized gettext function or tag name
to the rule used to rewrite it: the runtime function to call, whether the text
is kept verbatim (``raw``), the expected number of arguments, and the builders
available for each node category.
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Callable, Iterator, Mapping, Optional

import libcst as cst

from gettext_rewriter.enums import NodeCategory
from gettext_rewriter.core.context import RewriterContext
from gettext_rewriter.core.builders import (
  transform_gettext_call,
  transform_gettext_template,
  transform_ngettext_call,
  transform_npgettext_call,
  transform_pgettext_call,
)

Builder = Callable[["GettextRule", cst.Call, RewriterContext], cst.BaseExpression]


@dataclass(frozen=True)
class GettextRule:
  """
  Processing rule for a single recognized name.

  Attributes:
      name: The surface name as written in source (e.g. ``gettext_raw``).
      func_name: The runtime function the call is rewritten to (e.g. ``gettext``).
      arity: Number of positional arguments the call form requires.
      raw: If True, text is used verbatim. Otherwise whitespace is collapsed and trimmed.
      call_builder: Builder for plain calls, or None if the name is tag-only.
      template_builder: Builder for tagged templates, or None if unsupported.
  """

  name: str
  func_name: str
  arity: int
  raw: bool = False
  call_builder: Optional[Builder] = None
  template_builder: Optional[Builder] = None

  def builder_for(self, category: NodeCategory) -> Optional[Builder]:
    """
    Returns the builder registered for a node category.

    Args:
        category: Whether the node is a plain call or a tagged template.

    Returns:
        The builder, or None if the rule does not handle that category.
    """
    if category == NodeCategory.TAGGED_TEMPLATE:
      return self.template_builder
    return self.call_builder


_GETTEXT_RULES: Mapping[str, GettextRule] = MappingProxyType(
  {
    rule.name: rule
    for rule in (
      # gettext variants
      GettextRule("_", "gettext", 1, template_builder=transform_gettext_template),
      GettextRule(
        "gettext",
        "gettext",
        1,
        call_builder=transform_gettext_call,
        template_builder=transform_gettext_template,
      ),
      GettextRule(
        "gettext_raw",
        "gettext",
        1,
        raw=True,
        call_builder=transform_gettext_call,
        template_builder=transform_gettext_template,
      ),
      # gettext_noop variants
      GettextRule(
        "gettext_noop",
        "gettext_noop",
        1,
        call_builder=transform_gettext_call,
        template_builder=transform_gettext_template,
      ),
      GettextRule(
        "gettext_noop_raw",
        "gettext_noop",
        1,
        raw=True,
        call_builder=transform_gettext_call,
        template_builder=transform_gettext_template,
      ),
      # ngettext variants
      GettextRule("N_", "ngettext", 3, call_builder=transform_ngettext_call),
      GettextRule("ngettext", "ngettext", 3, call_builder=transform_ngettext_call),
      GettextRule("ngettext_raw", "ngettext", 3, raw=True, call_builder=transform_ngettext_call),
      # pgettext variants
      GettextRule("pgettext", "pgettext", 2, call_builder=transform_pgettext_call),
      GettextRule("pgettext_raw", "pgettext", 2, raw=True, call_builder=transform_pgettext_call),
      # npgettext variants
      GettextRule("npgettext", "npgettext", 4, call_builder=transform_npgettext_call),
      GettextRule("npgettext_raw", "npgettext", 4, raw=True, call_builder=transform_npgettext_call),
    )
  }
)


def get_rule(name: str) -> Optional[GettextRule]:
  """
  Looks up the rule for a surface name.

  Args:
      name: The callee or tag name.

  Returns:
      The rule, or None if the name is not part of the gettext family.
  """
  return _GETTEXT_RULES.get(name)


def iter_rules() -> Iterator[GettextRule]:
  """Yields all rules in registration order."""
  return iter(_GETTEXT_RULES.values())
