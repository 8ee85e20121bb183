# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Compile orchestration: CLI inputs -> logical names -> include closure -> JSON files.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

from slicejson.loader import load_closure, resolve_logical_name

from .emit import write_artifacts
from .globs import resolve_globs

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CompileOptions:
	inputs: list[str]
	root_dirs: list[str]
	out_dir: Path
	excludes: list[str] = field(default_factory=list)
	# Appended after `root_dirs`; None disables it.
	builtin_dir: str | None = None


def effective_root_dirs(opts: CompileOptions) -> list[str]:
	"""User roots made absolute, in order, followed by the built-in directory."""
	roots = [os.path.abspath(d) for d in opts.root_dirs]
	if opts.builtin_dir is not None:
		roots.append(os.path.abspath(opts.builtin_dir))
	return roots


async def compile_slices(opts: CompileOptions) -> dict[str, Path]:
	"""
	Run one compilation and return logical name -> written JSON path.

	Any `SliceLoadError` propagates before a single artifact is written.
	"""
	paths = resolve_globs(opts.inputs, opts.excludes)
	root_dirs = effective_root_dirs(opts)
	names: list[str] = []
	for path in paths:
		name = resolve_logical_name(os.path.abspath(path), root_dirs)
		logger.debug("%s: logical name %s", path, name)
		names.append(name)

	loaded = await load_closure(names, root_dirs)
	logger.info("loaded %d slice file(s) from %d input(s)", len(loaded), len(names))
	return await write_artifacts(loaded, opts.out_dir)


__all__ = ["CompileOptions", "compile_slices", "effective_root_dirs"]
