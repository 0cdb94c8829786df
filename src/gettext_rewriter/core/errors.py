"""
Usage Error Reporting.

Static misuse of a recognized gettext function (wrong arity, unsupported text
node, computed expressions in a plural pair) is reported as a
``GettextUsageError``. The rewriter records these as ``UsageIssue`` entries so
the engine can fail the build with precise source locations.
"""

from typing import NamedTuple, Optional

import libcst as cst
from libcst.metadata import CodeRange


class GettextUsageError(ValueError):
  """
  Raised when a recognized gettext call or tagged template is malformed.

  Attributes:
      node: The offending CST node, if known.
      position: The source range of the node, attached by the rewriter when
          position metadata is available.
  """

  def __init__(self, message: str, node: Optional[cst.CSTNode] = None) -> None:
    super().__init__(message)
    self.message = message
    self.node = node
    self.position: Optional[CodeRange] = None

  def __str__(self) -> str:
    if self.position is not None:
      start = self.position.start
      return f"{start.line}:{start.column + 1}: {self.message}"
    return self.message


class UsageIssue(NamedTuple):
  """A recorded usage error, with a 1-based line and column when known."""

  message: str
  line: Optional[int] = None
  column: Optional[int] = None

  def format(self) -> str:
    if self.line is None:
      return self.message
    return f"{self.line}:{self.column}: {self.message}"
