# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Built-in Slice root directory.

Ships the standard `Ice/*.ice` definitions user files commonly include. The
driver appends this directory after the user's `--root-dir` entries, so user
roots win for physical lookup.
"""

from __future__ import annotations

import os
from pathlib import Path

BUILTIN_DIR_ENV = "SLICEJSON_BUILTIN_DIR"

_BUNDLED_DIR = Path(__file__).with_name("slice")


def builtin_slice_dir(environ: dict[str, str] | None = None) -> str:
	"""Absolute path of the built-in Slice directory (`$SLICEJSON_BUILTIN_DIR` overrides)."""
	env = os.environ if environ is None else environ
	override = env.get(BUILTIN_DIR_ENV)
	if override:
		return os.path.abspath(override)
	return str(_BUNDLED_DIR.resolve())


__all__ = ["BUILTIN_DIR_ENV", "builtin_slice_dir"]
