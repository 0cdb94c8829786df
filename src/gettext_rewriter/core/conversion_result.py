"""
Outcome of rewriting one unit of source.

`ConversionResult` carries the rewritten code (or the unchanged input when the
run failed), the usage errors both as display strings and as positioned
`UsageIssue` records, the number of replaced calls, and the trace events.
"""

from typing import Any, Dict, List

from pydantic import BaseModel, Field

from gettext_rewriter.core.errors import UsageIssue


class ConversionResult(BaseModel):
  """
  Container for the results of a rewrite job.
  """

  code: str = Field(default="", description="Rewritten source, or the unchanged input if the run failed.")
  errors: List[str] = Field(default_factory=list, description="Usage or parse errors, formatted 'line:column: message'.")
  issues: List[UsageIssue] = Field(default_factory=list, description="Usage errors with 1-based positions.")
  success: bool = Field(default=True, description="True if no parse or usage error was found.")
  rewritten: int = Field(default=0, description="Number of gettext calls and tagged f-strings replaced.")
  trace_events: List[Dict[str, Any]] = Field(default_factory=list, description="Execution trace log data.")

  @property
  def has_errors(self) -> bool:
    return len(self.errors) > 0

  def errors_for(self, label: str) -> List[str]:
    """
    Prefixes every error with a file label.

    Args:
        label: Usually the source path.

    Returns:
        List[str]: Errors formatted ``label:line:column: message``.
    """
    return [f"{label}:{error}" for error in self.errors]
