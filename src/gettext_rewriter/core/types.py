"""
Type definitions shared by the extractor, merger and builders.
"""

from typing import TYPE_CHECKING, Callable, List, NamedTuple, Optional

import libcst as cst

if TYPE_CHECKING:
  from gettext_rewriter.core.registry import GettextRule

# Maps a callee or tag name to its rule, or None for names outside the gettext family.
RuleLookup = Callable[[str], Optional["GettextRule"]]


class Substitution(NamedTuple):
  """A placeholder key and the source expression that fills it."""

  name: str
  value: cst.BaseExpression


class TextInfo(NamedTuple):
  """
  Result of processing a text node.

  Attributes:
      text: The processed text, possibly containing ``%(name)s`` placeholders.
      text_node: The expression to pass to the gettext function in place of the original.
      substitutions: Named values for each placeholder, unique by name, in slot order.
  """

  text: str
  text_node: cst.BaseExpression
  substitutions: List[Substitution]
