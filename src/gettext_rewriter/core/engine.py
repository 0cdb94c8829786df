"""
Orchestration Engine for gettext Rewriting.

This module provides the `RewriteEngine`, the driver that takes Python source
text through the pipeline:

1.  **Parsing**: source text into a LibCST module.
2.  **Rewriting**: a single `GettextRewriter` traversal, with position metadata
    so usage errors point at the offending call.
3.  **Code Generation**: the rewritten module back into source text.

Any usage error fails the run: the result carries the formatted errors and the
original, unmodified code.
"""

from typing import Optional

import libcst as cst

from gettext_rewriter.config import RuntimeConfig
from gettext_rewriter.core.conversion_result import ConversionResult
from gettext_rewriter.core.errors import GettextUsageError
from gettext_rewriter.core.rewriter import GettextRewriter
from gettext_rewriter.core.tracer import TraceLogger


class RewriteEngine:
  """
  The main rewrite unit.

  Encapsulates the configuration and drives the parse, rewrite and code
  generation of a single unit of code.
  """

  def __init__(self, config: Optional[RuntimeConfig] = None) -> None:
    """
    Initializes the Engine.

    Args:
        config (RuntimeConfig, optional): The runtime configuration object. Defaults are used if None.
    """
    self.config = config or RuntimeConfig()

  def parse(self, code: str) -> cst.Module:
    """
    Parses source string into a LibCST Module.

    Args:
        code (str): Python source code.

    Returns:
        cst.Module: The parsed syntax tree.

    Raises:
        libcst.ParserSyntaxError: If the input code is invalid Python.
    """
    return cst.parse_module(code)

  def to_source(self, tree: cst.Module) -> str:
    """
    Converts CST back to source string.

    Args:
        tree (cst.Module): The modified syntax tree.

    Returns:
        str: Generated Python code.
    """
    return tree.code

  def run(self, code: str) -> ConversionResult:
    """
    Executes the full rewrite pipeline.

    Args:
        code (str): The input source string.

    Returns:
        ConversionResult: Object containing transformed code and error logs.
    """
    tracer = TraceLogger()
    tracer.start_phase("Rewrite Pipeline", f"fail_fast={self.config.fail_fast}")

    tracer.start_phase("Parsing", "Source -> CST")
    try:
      tree = self.parse(code)
    except cst.ParserSyntaxError as e:
      return ConversionResult(code=code, errors=[f"Parse Error: {e}"], success=False, trace_events=tracer.export())
    tracer.end_phase()

    tracer.start_phase("Gettext Rewrite", "Visitor Traversal")
    rewriter = GettextRewriter(self.config, tracer)
    try:
      tree = cst.MetadataWrapper(tree).visit(rewriter)
    except GettextUsageError as e:
      return ConversionResult(
        code=code, errors=[str(e)], issues=rewriter.issues, success=False, trace_events=tracer.export()
      )
    tracer.end_phase()

    if rewriter.issues:
      return ConversionResult(
        code=code,
        errors=[issue.format() for issue in rewriter.issues],
        issues=rewriter.issues,
        success=False,
        trace_events=tracer.export(),
      )

    tracer.start_phase("Code Generation", "CST -> Source")
    final_code = self.to_source(tree)
    tracer.end_phase()

    tracer.end_phase()
    return ConversionResult(
      code=final_code,
      success=True,
      rewritten=rewriter.rewritten_count,
      trace_events=tracer.export(),
    )
