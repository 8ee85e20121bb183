# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Slice parser: `.ice` source text to a `SliceDocument` AST.

The loader only relies on `parse_slice(source).includes`; the rest of the
document is what the driver serialises to JSON.
"""

from __future__ import annotations

from .ast import SliceDocument, node_to_json
from .parser import SLICE_EXTENSION, SliceSyntaxError, parse_slice

__all__ = ["SLICE_EXTENSION", "SliceDocument", "SliceSyntaxError", "node_to_json", "parse_slice"]
