import libcst as cst

from gettext_rewriter.core.merging import merge_substitutions
from gettext_rewriter.core.types import Substitution


def sub(name, expr=None):
  return Substitution(name, cst.Name(expr or name))


def test_merge_keeps_first_seen_order():
  merged = merge_substitutions([[sub("a"), sub("b")], [sub("c"), sub("a")]])
  assert [s.name for s in merged] == ["a", "b", "c"]


def test_first_occurrence_wins():
  first = sub("x", "left")
  merged = merge_substitutions([[first], [sub("x", "right")]])

  assert merged == [first]
  assert merged[0].value.value == "left"


def test_duplicates_within_one_list():
  merged = merge_substitutions([[sub("n"), sub("n"), sub("m")]])
  assert [s.name for s in merged] == ["n", "m"]


def test_empty():
  assert merge_substitutions([]) == []
  assert merge_substitutions([[], []]) == []
