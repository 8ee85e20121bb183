# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Command-line driver (`slicejson`).

The CLI entrypoint is `slicejson.driver.cli:main`.
"""

from .compile import CompileOptions, compile_slices

__all__ = ["CompileOptions", "compile_slices"]
