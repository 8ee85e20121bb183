# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
slicejson: Slice (`.ice`) to JSON AST compiler.

Packages:
  core:    diagnostics, spans and logging setup shared by the other packages
  parser:  Slice grammar and AST
  loader:  logical-name resolution and include-closure loading
  builtin: bundled Ice slice root directory
  driver:  command-line entrypoint
"""

__version__ = "0.1.0"

__all__ = ["builtin", "core", "driver", "loader", "parser", "__version__"]
