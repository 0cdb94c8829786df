"""
Rewriter Context Module.

Holds the state shared between the traversal glue and the call builders for a
single ``GettextRewriter``: the runtime configuration, the idempotency guard,
and the rule lookup used to recognize gettext tags nested in text arguments.
"""

from typing import Optional

from gettext_rewriter.config import RuntimeConfig
from gettext_rewriter.core.guard import TransformGuard
from gettext_rewriter.core.types import RuleLookup


def _no_rules(name: str) -> None:
  return None


class RewriterContext:
  """
  Shared state container passed to every builder.

  Attributes:
      config: Runtime configuration (interpolation function name, fail-fast).
      guard: Identity set of nodes already produced by this rewriter.
      rule_lookup: Resolves tag names to rules. Without one, every tag is kept
          as an ordinary function call around the text.
  """

  def __init__(
    self,
    config: Optional[RuntimeConfig] = None,
    guard: Optional[TransformGuard] = None,
    rule_lookup: Optional[RuleLookup] = None,
  ) -> None:
    self.config = config or RuntimeConfig()
    self.guard = guard or TransformGuard()
    self.rule_lookup = rule_lookup or _no_rules

  @property
  def interpolate_function(self) -> str:
    return self.config.interpolate_function
