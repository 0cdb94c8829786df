"""
Idempotency Guard.

Replacement calls produced by the rewriter look exactly like input it would
otherwise match (``gettext('...')`` is itself a recognized call). The guard
remembers every node the rewriter built so that descending into a replacement,
or running the same rewriter over its own output again, never rewrites it a
second time.

LibCST nodes are frozen and compare by identity, so the guard is a plain set of
node objects rather than a flag stored on the nodes.
"""

from typing import Set, TypeVar

import libcst as cst

NodeT = TypeVar("NodeT", bound=cst.CSTNode)


class TransformGuard:
  """
  Tracks nodes in the terminal ``transformed`` state.
  """

  def __init__(self) -> None:
    self._transformed: Set[cst.CSTNode] = set()

  def mark(self, node: NodeT) -> NodeT:
    """
    Marks a node as transformed.

    Args:
        node: The node produced by the rewriter.

    Returns:
        The same node, for use in expressions.
    """
    self._transformed.add(node)
    return node

  def is_transformed(self, node: cst.CSTNode) -> bool:
    return node in self._transformed

  def __len__(self) -> int:
    return len(self._transformed)
