# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Slice module loader.

Entry points:
- `resolve_logical_name(abs_path, root_dirs)`: path -> logical name;
- `load_closure(names, root_dirs)`: logical names -> every transitively
  included unit, loaded once each.
"""

from .closure import load_closure, load_closure_sync
from .errors import (
	InvalidExtensionError,
	NotInAnyRootDirError,
	SliceLoadError,
	SliceNotFoundError,
	SliceParseError,
)
from .load import LoadedSlice, load_slice, read_text_file
from .names import resolve_logical_name

__all__ = [
	"InvalidExtensionError",
	"LoadedSlice",
	"NotInAnyRootDirError",
	"SliceLoadError",
	"SliceNotFoundError",
	"SliceParseError",
	"load_closure",
	"load_closure_sync",
	"load_slice",
	"read_text_file",
	"resolve_logical_name",
]
