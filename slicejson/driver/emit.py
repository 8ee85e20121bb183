# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
JSON artifact emission: one `<out_dir>/<logical name>.json` per loaded unit.
"""

from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path
from typing import Any, Mapping

from slicejson.loader import LoadedSlice
from slicejson.parser import node_to_json

logger = logging.getLogger(__name__)


def artifact_path(out_dir: Path, logical_name: str) -> Path:
	"""`a/B` -> `<out_dir>/a/B.json` (the last segment keeps any dots it has)."""
	*dirs, leaf = logical_name.split("/")
	return Path(out_dir).joinpath(*dirs, f"{leaf}.json")


def document_to_json(document: Any) -> Any:
	to_dict = getattr(document, "to_dict", None)
	if callable(to_dict):
		return to_dict()
	return node_to_json(document)


def render_document(document: Any) -> str:
	return json.dumps(document_to_json(document), indent=2)


def _write_artifact(path: Path, text: str) -> None:
	path.parent.mkdir(parents=True, exist_ok=True)
	path.write_text(text, encoding="utf-8")


async def write_artifacts(loaded: Mapping[str, LoadedSlice], out_dir: Path) -> dict[str, Path]:
	"""Write every unit's parsed document concurrently; returns name -> written path."""
	written = {name: artifact_path(out_dir, name) for name in loaded}
	await asyncio.gather(
		*(asyncio.to_thread(_write_artifact, written[name], render_document(unit.parsed)) for name, unit in loaded.items())
	)
	for name, path in written.items():
		logger.info("%s -> %s", name, path)
	return written


__all__ = ["artifact_path", "document_to_json", "render_document", "write_artifacts"]
