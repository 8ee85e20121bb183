# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Logical-name resolution.

A logical name is the path of a Slice file relative to a root directory,
`/`-separated, without the `.ice` extension (`/proj/a/B.ice` under `/proj` is
`a/B`). Root directories may overlap; the most specific one names the file.
"""

from __future__ import annotations

import os
import re
from typing import Sequence

from slicejson.parser import SLICE_EXTENSION

from .errors import InvalidExtensionError, NotInAnyRootDirError

_SLICE_PATH_RE = re.compile(r"(.+)" + re.escape(SLICE_EXTENSION), re.DOTALL)


def resolve_logical_name(abs_path: str, root_dirs: Sequence[str]) -> str:
	"""
	Map an absolute file path to its logical name.

	Rules:
	- a root dir matches when `abs_path` starts with `root + os.sep`;
	- among matching roots the shortest remaining relative path wins, so a
	  nested root (`/x/y`) beats its parent (`/x`); on a tie the first root in
	  `root_dirs` order is kept;
	- the relative path must end in `.ice`, which is stripped.

	Pure string computation; no filesystem access.
	"""
	relative: str | None = None
	for root in root_dirs:
		prefix = root if root.endswith(os.sep) else root + os.sep
		if not abs_path.startswith(prefix):
			continue
		candidate = abs_path[len(prefix) :]
		if relative is None or len(candidate) < len(relative):
			relative = candidate

	if relative is None:
		raise NotInAnyRootDirError(abs_path, root_dirs)

	match = _SLICE_PATH_RE.fullmatch(relative)
	if match is None:
		raise InvalidExtensionError(abs_path, relative)
	return to_logical_name(match.group(1))


def to_logical_name(relative_path: str) -> str:
	"""Normalise host separators to `/`."""
	if os.sep != "/":
		relative_path = relative_path.replace(os.sep, "/")
	if os.altsep and os.altsep != "/":
		relative_path = relative_path.replace(os.altsep, "/")
	return relative_path


def logical_name_to_relpath(logical_name: str) -> str:
	"""Relative host path (with extension) for a logical name."""
	return os.path.join(*logical_name.split("/")) + SLICE_EXTENSION


__all__ = ["logical_name_to_relpath", "resolve_logical_name", "to_logical_name"]
