# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Input expansion: CLI file arguments and glob patterns -> concrete file paths.
"""

from __future__ import annotations

import glob
import logging
import os
import re
from typing import Iterable

logger = logging.getLogger(__name__)

_MAGIC_RE = re.compile(r"[*?[]")


def _has_magic(pattern: str) -> bool:
	return _MAGIC_RE.search(pattern) is not None


def _expand(pattern: str) -> list[str]:
	if _has_magic(pattern):
		return sorted(p for p in glob.glob(pattern, recursive=True) if os.path.isfile(p))
	return [pattern] if os.path.isfile(pattern) else []


def _key(path: str) -> str:
	return os.path.normpath(os.path.abspath(path))


def resolve_globs(patterns: Iterable[str], excludes: Iterable[str] = ()) -> list[str]:
	"""
	Expand `patterns` (plain paths or globs, `**` allowed) into existing files.

	Results are de-duplicated by absolute path and keep first-seen order;
	anything matched by an `excludes` pattern is dropped.
	"""
	excluded: set[str] = set()
	for pattern in excludes:
		excluded.update(_key(p) for p in _expand(pattern))

	seen: set[str] = set()
	paths: list[str] = []
	for pattern in patterns:
		matches = _expand(pattern)
		if not matches:
			logger.warning("%s: matched no files", pattern)
			continue
		for path in matches:
			key = _key(path)
			if key in excluded:
				logger.debug("%s: excluded", path)
				continue
			if key in seen:
				continue
			seen.add(key)
			paths.append(path)
	return paths


__all__ = ["resolve_globs"]
