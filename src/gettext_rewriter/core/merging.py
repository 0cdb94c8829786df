"""
Substitution Merging.

Singular and plural texts of ``ngettext``/``npgettext`` usually reference the
same variables. Their substitutions are merged so the interpolation mapping is
built once.
"""

from typing import Iterable, List, Sequence

from gettext_rewriter.core.types import Substitution


def merge_substitutions(substitution_lists: Iterable[Sequence[Substitution]]) -> List[Substitution]:
  """
  Merges lists of substitutions, deduplicated by key.

  Keys are expected to map to the same value in every list. When they do not,
  the first occurrence wins.

  Args:
      substitution_lists: The lists to merge, in priority order.

  Returns:
      List[Substitution]: The merged list, in first-seen order.
  """
  used_keys = set()
  merged = []

  for substitutions in substitution_lists:
    for sub in substitutions:
      if sub.name not in used_keys:
        used_keys.add(sub.name)
        merged.append(sub)

  return merged
