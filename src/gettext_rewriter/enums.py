"""
Enumerations shared across the rewriter.
"""

from enum import Enum


class NodeCategory(str, Enum):
  """
  The syntactic shape of a recognized gettext construct.

  A ``TAGGED_TEMPLATE`` is a tag applied to a single f-string, e.g. ``_(f"Hi {name}")``.
  Every other call is a ``CALL``.
  """

  CALL = "call"
  TAGGED_TEMPLATE = "tagged_template"
