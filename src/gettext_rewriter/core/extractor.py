"""
Text Extraction for gettext Arguments.

Turns the text argument of a gettext call into:

*   the processed text (whitespace-normalized unless the rule is raw), with every
    f-string slot replaced by a ``%(name)s`` placeholder, and
*   the ordered list of named substitutions mapping each placeholder to the
    original slot expression.

Accepted text nodes are string literals, f-strings (including implicit
concatenations of the two), and tagged templates (``tag(f"...")``). An
unrecognized tag such as ``dedent`` is kept around the processed string so it
still runs at evaluation time; a recognized gettext tag is dropped. Any other
call in place of the text is a usage error.
"""

import ast
import re
from typing import TYPE_CHECKING, List, Optional, Union

import libcst as cst

from gettext_rewriter.core.errors import GettextUsageError
from gettext_rewriter.core.merging import merge_substitutions
from gettext_rewriter.core.types import RuleLookup, Substitution, TextInfo

if TYPE_CHECKING:
  from gettext_rewriter.core.registry import GettextRule

_WHITESPACE_RE = re.compile(r"\s+")

# Constants parse as names but are not variables.
_CONSTANT_NAMES = frozenset({"None", "True", "False"})

StringPiece = Union[cst.SimpleString, cst.FormattedString]


def normalize_text(text: str, raw: bool = False) -> str:
  """
  Applies the whitespace policy of a rule.

  Args:
      text: The text as written in source.
      raw: If True, the text is returned unchanged.

  Returns:
      str: The text with whitespace runs collapsed and trimmed, or the original text.
  """
  if raw:
    return text
  return _WHITESPACE_RE.sub(" ", text).strip()


def make_string_node(text: str) -> cst.SimpleString:
  """Builds a string literal node holding `text`."""
  return cst.SimpleString(repr(text))


def is_template(node: cst.CSTNode) -> bool:
  """
  Checks whether a node is a template literal (an f-string, or an implicit
  concatenation containing one).
  """
  if isinstance(node, cst.FormattedString):
    return True
  if isinstance(node, cst.ConcatenatedString):
    return is_template(node.left) or is_template(node.right)
  return False


def is_tagged_template(node: cst.CSTNode) -> bool:
  """
  Checks whether a node is a tag applied to a template, e.g. ``_(f"Hi {name}")``.

  The call must have exactly one plain positional argument holding a template literal.
  """
  if not isinstance(node, cst.Call) or len(node.args) != 1:
    return False

  arg = node.args[0]
  return arg.keyword is None and not arg.star and is_template(arg.value)


def extract_text(
  rule: "GettextRule",
  node: cst.CSTNode,
  allow_expressions: bool = True,
  rule_lookup: Optional[RuleLookup] = None,
) -> TextInfo:
  """
  Returns processed information from a text-based node.

  Args:
      rule: The rule of the gettext call being rewritten.
      node: A string literal, f-string, or tagged template call.
      allow_expressions: Whether slots may hold arbitrary expressions (``{x + 1}``,
          ``{a[b]}``). If False, only bare variable names are accepted.
      rule_lookup: Resolves tag names, so gettext tags (``_(f"...")``) are dropped
          instead of kept. Without it every tag is kept.

  Returns:
      TextInfo: The processed text node and its substitutions.

  Raises:
      GettextUsageError: If the node shape or one of its slots is not supported.
  """
  tag: Optional[cst.BaseExpression] = None
  text_source = node

  if is_tagged_template(node):
    text_source = node.args[0].value
    tag_rule = _tag_rule(node.func, rule_lookup)
    if tag_rule is None:
      # Not ours. Keep the tag so it still applies to the processed text.
      tag = node.func
    elif tag_rule.template_builder is None:
      raise GettextUsageError(f"'{tag_rule.name}' cannot be used as a tag on text passed to '{rule.name}'", node)

  if not isinstance(text_source, (cst.SimpleString, cst.FormattedString, cst.ConcatenatedString)):
    raise GettextUsageError(
      f"Expected a string literal or f-string passed to '{rule.name}', got {type(text_source).__name__}",
      node,
    )

  text_parts: List[str] = []
  substitutions: List[Substitution] = []
  slot_index = 0

  for piece in _flatten_strings(text_source):
    if isinstance(piece, cst.SimpleString):
      if "b" in piece.prefix.lower():
        raise GettextUsageError(f"Bytes literals cannot be passed to '{rule.name}'", piece)
      text_parts.append(piece.evaluated_value)
      continue

    # f-string: join the raw segments with placeholders, then evaluate escapes once
    # so that quotes and backslashes are interpreted against the original delimiters.
    raw_parts: List[str] = []
    for part in piece.parts:
      if isinstance(part, cst.FormattedStringText):
        raw_parts.append(part.value.replace("{{", "{").replace("}}", "}"))
      else:
        slot_index += 1
        name = _substitution_name(rule, part, slot_index, allow_expressions)
        substitutions.append(Substitution(name, part.expression))
        raw_parts.append(f"%({name})s")

    text_parts.append(_cook(piece.prefix, piece.quote, "".join(raw_parts)))

  text = normalize_text("".join(text_parts), rule.raw)
  text_node: cst.BaseExpression = make_string_node(text)

  if tag is not None:
    text_node = cst.Call(func=tag, args=[cst.Arg(value=text_node)])

  return TextInfo(text=text, text_node=text_node, substitutions=merge_substitutions([substitutions]))


def _tag_rule(func: cst.BaseExpression, rule_lookup: Optional[RuleLookup]) -> Optional["GettextRule"]:
  if rule_lookup is None or not isinstance(func, cst.Name):
    return None
  return rule_lookup(func.value)


def _flatten_strings(node: cst.BaseExpression) -> List[StringPiece]:
  if isinstance(node, cst.ConcatenatedString):
    return _flatten_strings(node.left) + _flatten_strings(node.right)
  return [node]


def _substitution_name(
  rule: "GettextRule", part: cst.FormattedStringExpression, position: int, allow_expressions: bool
) -> str:
  """
  Determines the placeholder key for an f-string slot.

  Bare variable names reuse the name. Anything else, including None, True and False, is keyed by its 1-based slot position.
  """
  if part.conversion is not None or part.format_spec is not None or part.equal is not None:
    raise GettextUsageError(
      f"Conversions and format specs are not supported in text passed to '{rule.name}'",
      part,
    )

  expr = part.expression
  if isinstance(expr, cst.Name) and expr.value not in _CONSTANT_NAMES:
    return expr.value

  if not allow_expressions:
    raise GettextUsageError(
      f"Only variable names may be interpolated into text passed to '{rule.name}', "
      f"got {type(expr).__name__}",
      part,
    )

  return f"value{position}"


def _cook(prefix: str, quote: str, raw_text: str) -> str:
  """Evaluates escape sequences in f-string text as Python would."""
  string_prefix = prefix.lower().replace("f", "")
  return ast.literal_eval(f"{string_prefix}{quote}{raw_text}{quote}")

