"""
gettext-rewriter Package.

A source-to-source transformer that rewrites gettext-family calls and tagged
f-strings into normalized calls for a Django-style localization runtime
(``gettext``, ``ngettext``, ``pgettext``, ``npgettext``, ``gettext_noop`` and
``interpolate``).

Usage
-----

Simple String Rewrite
^^^^^^^^^^^^^^^^^^^^^

.. code-block:: python

    import gettext_rewriter as gr
    code = "msg = _(f'Hello,   {name}!')"
    print(gr.rewrite(code))
    # msg = interpolate(gettext('Hello, %(name)s!'), {'name': name}, True)

Advanced Usage (Engine)
^^^^^^^^^^^^^^^^^^^^^^^

.. code-block:: python

    from gettext_rewriter import RewriteEngine, RuntimeConfig

    engine = RewriteEngine(RuntimeConfig(interpolate_function="format_message"))
    res = engine.run("msg = ngettext('one', 'many', n)")

    if res.success:
        print(res.code)
    else:
        print(f"Errors: {res.errors}")
"""

from typing import Optional

from gettext_rewriter.config import RuntimeConfig
from gettext_rewriter.core.engine import RewriteEngine, ConversionResult
from gettext_rewriter.core.errors import GettextUsageError
from gettext_rewriter.core.rewriter import GettextRewriter

__version__ = "0.1.0"


def rewrite(code: str, fail_fast: bool = False, interpolate_function: Optional[str] = None) -> str:
  """
  Rewrites the gettext calls in a string of Python code.

  This is a convenience wrapper around `RewriteEngine`. For file-based
  rewriting, use the ``gettext-rewriter`` command line.

  Args:
      code (str): The source code to rewrite.
      fail_fast (bool): Stop at the first usage error instead of collecting all of them.
      interpolate_function (str, optional): Name of the runtime interpolation function.
          Defaults to ``interpolate``.

  Returns:
      str: The rewritten source code.

  Raises:
      ValueError: If the code cannot be parsed or contains malformed gettext calls.
  """
  config = RuntimeConfig(fail_fast=fail_fast, interpolate_function=interpolate_function or "interpolate")
  result = RewriteEngine(config).run(code)

  if not result.success:
    error_msg = "\n".join(result.errors)
    raise ValueError(f"Rewrite failed:\n{error_msg}")

  return result.code


__all__ = [
  "ConversionResult",
  "GettextRewriter",
  "GettextUsageError",
  "RewriteEngine",
  "RuntimeConfig",
  "rewrite",
  "__version__",
]
