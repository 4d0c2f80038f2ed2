from __future__ import annotations

import importlib
import importlib.util
import json
import sys
from pathlib import Path
from types import ModuleType
from typing import Any, Literal, TypedDict


class ParsedTarget(TypedDict):
	mode: Literal["path", "module"]
	module_name: str
	attr: str
	file_path: Path | None


def parse_target(target: str) -> ParsedTarget:
	"""Parse 'path/to/file.py:Name' or 'module.path:Name'."""
	if ":" not in target:
		raise ValueError(f"Target must look like 'file.py:Name' or 'module:Name', got {target!r}")
	location, attr = target.rsplit(":", 1)
	if not location or not attr:
		raise ValueError(f"Invalid target {target!r}")

	path = Path(location)
	if path.suffix == ".py" or path.exists():
		if not path.exists():
			raise FileNotFoundError(f"File not found: {path}")
		path = path.resolve()
		return {
			"mode": "path",
			"module_name": path.stem,
			"attr": attr,
			"file_path": path,
		}
	return {"mode": "module", "module_name": location, "attr": attr, "file_path": None}


def load_target(target: str) -> Any:
	parsed = parse_target(target)
	if parsed["mode"] == "module":
		module = importlib.import_module(parsed["module_name"])
	else:
		file_path = parsed["file_path"]
		assert file_path is not None
		module = _load_module_from_file(parsed["module_name"], file_path)

	try:
		return getattr(module, parsed["attr"])
	except AttributeError:
		raise AttributeError(
			f"'{parsed['attr']}' not found in {parsed['module_name']}"
		) from None


def _load_module_from_file(name: str, file_path: Path) -> ModuleType:
	# Add the file's directory to Python path so sibling imports work
	parent = str(file_path.parent)
	sys.path.insert(0, parent)
	try:
		spec = importlib.util.spec_from_file_location(name, file_path)
		if spec is None or spec.loader is None:
			raise ImportError(f"Could not load module from: {file_path}")
		module = importlib.util.module_from_spec(spec)
		spec.loader.exec_module(module)
		return module
	finally:
		if parent in sys.path:
			sys.path.remove(parent)


def parse_props(items: list[str]) -> dict[str, Any]:
	"""Parse `key=value` pairs. Values are decoded as JSON when possible."""
	props: dict[str, Any] = {}
	for item in items:
		key, sep, raw = item.partition("=")
		key = key.strip()
		if not sep or not key:
			raise ValueError(f"Props must look like key=value, got {item!r}")
		try:
			props[key] = json.loads(raw)
		except json.JSONDecodeError:
			props[key] = raw
	return props
