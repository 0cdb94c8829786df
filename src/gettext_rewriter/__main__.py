"""
Entry point for module execution (``python -m gettext_rewriter``).

This module delegates execution to the CLI handler in ``gettext_rewriter.cli.__main__``.
"""

import sys
from gettext_rewriter.cli.__main__ import main

if __name__ == "__main__":
  sys.exit(main())
