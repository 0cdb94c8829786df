"""
Rules Command Handler.

Prints the call-shape registry: every recognized name, the runtime function it
is rewritten to, its text policy, arity and supported forms.
"""

from rich.table import Table

from gettext_rewriter.core.registry import iter_rules
from gettext_rewriter.utils.console import console


def handle_rules() -> int:
  """
  Handles the 'rules' command.

  Returns:
      int: Exit code (always 0).
  """
  table = Table(title="Recognized gettext Functions")
  table.add_column("Name", style="code")
  table.add_column("Rewritten To", style="cyan")
  table.add_column("Text")
  table.add_column("Arity", justify="right")
  table.add_column("Forms")

  for rule in iter_rules():
    forms = []
    if rule.call_builder:
      forms.append("call")
    if rule.template_builder:
      forms.append("tagged f-string")

    table.add_row(
      rule.name,
      rule.func_name,
      "raw" if rule.raw else "normalized",
      str(rule.arity),
      ", ".join(forms),
    )

  console.print(table)
  return 0
