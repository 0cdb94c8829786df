"""
Pytest Configuration and Fixtures.

Includes:
- Syspath patching for local imports.
- A mock localization runtime mirroring Django's JavaScript catalog, used to
  execute rewritten code and check what it evaluates to.
"""

import re
import sys
import textwrap
from pathlib import Path
from typing import Any, Callable, Dict

import pytest

# Add src to path so we can import 'gettext_rewriter' without installing it
src_path = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_path))

from gettext_rewriter import rewrite  # noqa: E402


def _gettext(s):
  return f"##gettext##{s}"


def _gettext_noop(s):
  return f"##gettext_noop##{s}"


def _ngettext(singular, plural, count):
  return f"##ngettext##{singular if count == 1 else plural}"


def _pgettext(context, s):
  return f"##pgettext##{context}##{s}"


def _npgettext(context, singular, plural, count):
  return f"##npgettext##{context}##{singular if count == 1 else plural}"


def _interpolate(fmt, obj, named=False):
  """Same matching as Django's JavaScript interpolate()."""
  if named:
    return re.sub(r"%\(\w+\)s", lambda m: str(obj[m.group(0)[2:-2]]), fmt)

  values = list(obj)
  return re.sub(r"%s", lambda m: str(values.pop(0)), fmt)


@pytest.fixture
def gettext_runtime() -> Dict[str, Any]:
  """The runtime functions rewritten code calls into."""
  return {
    "gettext": _gettext,
    "gettext_noop": _gettext_noop,
    "ngettext": _ngettext,
    "pgettext": _pgettext,
    "npgettext": _npgettext,
    "interpolate": _interpolate,
    "dedent": textwrap.dedent,
  }


@pytest.fixture
def run_rewritten(gettext_runtime) -> Callable[..., Any]:
  """
  Rewrites `code`, executes it against the mock runtime plus `env`, and
  returns the value bound to `result`.
  """

  def _run(code: str, **env: Any) -> Any:
    namespace = {**gettext_runtime, **env}
    exec(rewrite(code), namespace)
    return namespace["result"]

  return _run

