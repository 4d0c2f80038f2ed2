"""
Serializer turning component trees into the plain tree sent to the host.

Output shapes::

    root     {"props": {...}, "children": ...}
    element  {"type": "Text", "props": {...}, "children": ...}

`children` is a bare primitive when a node has exactly one primitive child,
otherwise a list mixing serialized elements and bare primitives (possibly
empty). Function props are replaced by the integer handle returned by the
host's `register_function`.
"""

from __future__ import annotations

import json
import logging
import math
from collections.abc import Callable, Iterator
from typing import Any, Union, cast

from pangea.component import MODAL_CONTAINER_PROP, Component
from pangea.env import env
from pangea.errors import (
	RegistrationError,
	RenderError,
	RenderPhase,
	SerializationError,
)
from pangea.host import FunctionRegistrar
from pangea.vdom import (
	ComponentNode,
	Element,
	Node,
	Props,
	SerializedChild,
	SerializedChildren,
	SerializedElement,
	SerializedRoot,
	flatten_children,
)

logger = logging.getLogger(__name__)

RenderPath = str
Renderable = Union[Component, ComponentNode, Element, list[Element]]

# Props that address the component on the host rather than describe it
_ROOT_EXCLUDED_PROPS = frozenset({"children", MODAL_CONTAINER_PROP})


class Serializer:
	# (node path, prop name) -> handle. The root node's path is "".
	handles: dict[tuple[RenderPath, str], int]

	def __init__(self, registry: FunctionRegistrar, *, strict: bool | None = None):
		self.registry = registry
		self.strict = env.strict if strict is None else strict
		self.handles = {}

	# ------------------------------------------------------------------
	# Entry points
	# ------------------------------------------------------------------

	def serialize(
		self, root: Renderable, *, phase: RenderPhase = "message"
	) -> SerializedRoot:
		"""Render `root` once and serialize the result.

		`root` is usually a class component instance or a function component
		node. Anything else is treated as already rendered output with no props.
		"""
		self.handles = {}
		if isinstance(root, Component):
			props = root.props
			rendered = render_component(root, phase=phase)
		elif isinstance(root, ComponentNode):
			props = root.props
			rendered = render_component(root, phase=phase)
		else:
			props = {}
			rendered = root

		root_props = {k: v for k, v in props.items() if k not in _ROOT_EXCLUDED_PROPS}
		tree: SerializedRoot = {
			"props": self._serialize_props(root_props, path=""),
			"children": self._serialize_children([rendered], path=""),
		}
		logger.debug(
			"Serialized %r (%s) with %d function handle(s)", root, phase, len(self.handles)
		)
		return tree

	def serialize_element(
		self, node: Element, *, path: RenderPath = ""
	) -> SerializedElement | SerializedChild | None:
		"""Serialize a single element. Null-like values return None."""
		if isinstance(node, Node):
			return self._serialize_node(node, path=path)
		children = list(self._expand([node], path=path))
		if not children:
			return None
		if len(children) > 1:
			raise SerializationError(
				path, f"expected a single element, the tree expanded to {len(children)}"
			)
		child = children[0]
		if isinstance(child, Node):
			return self._serialize_node(child, path=path)
		return child

	# ------------------------------------------------------------------
	# Tree walking
	# ------------------------------------------------------------------

	def _serialize_node(self, node: Node, *, path: RenderPath) -> SerializedElement:
		return {
			"type": node.tag,
			"props": self._serialize_props(node.props or {}, path=path),
			"children": self._serialize_children(node.children, path=path),
		}

	def _serialize_children(
		self, children: Any, *, path: RenderPath
	) -> SerializedChildren:
		items: list[SerializedChild] = []
		for child in self._expand(children, path=path):
			if isinstance(child, Node):
				child_path = join_path(path, len(items))
				items.append(self._serialize_node(child, path=child_path))
			else:
				items.append(child)

		if len(items) == 1 and not isinstance(items[0], dict):
			return items[0]
		return items

	def _expand(
		self, children: Any, *, path: RenderPath
	) -> Iterator[Node | str | int | float]:
		"""Yield renderable children, expanding components and dropping null-likes."""
		for child in flatten_children(children):
			if child is None or isinstance(child, bool):
				continue
			if isinstance(child, float) and not math.isfinite(child):
				raise SerializationError(path, f"cannot render {child!r} as a child")
			if isinstance(child, (Node, str, int, float)):
				yield child
			elif isinstance(child, (ComponentNode, Component)):
				rendered = render_component(child, phase="component")
				yield from self._expand([rendered], path=path)
			else:
				raise SerializationError(
					path, f"cannot render a child of type {type(child).__name__}"
				)

	# ------------------------------------------------------------------
	# Props
	# ------------------------------------------------------------------

	def _serialize_props(self, props: Props, *, path: RenderPath) -> Props:
		out: Props = {}
		for key, value in props.items():
			if key == "children":
				continue
			prop_path = join_path(path, key)
			if callable(value):
				handle = self._register(cast(Callable[..., Any], value), prop_path)
				self.handles[(path, key)] = handle
				out[key] = handle
				continue
			if self.strict:
				check_json_value(value, prop_path)
			out[key] = value
		return out

	def _register(self, fn: Callable[..., Any], path: RenderPath) -> int:
		try:
			handle = self.registry.register_function(fn)
		except Exception as exc:
			raise RegistrationError(path, str(exc) or type(exc).__name__) from exc
		if isinstance(handle, bool) or not isinstance(handle, int):
			raise RegistrationError(
				path, f"host returned {handle!r} instead of an integer handle"
			)
		return handle


def render_component(
	component: Component | ComponentNode, *, phase: RenderPhase
) -> Any:
	if isinstance(component, Component):
		name = component.get_name()
	else:
		name = component.name
	try:
		return component.render()
	except RenderError:
		# Already attributed to the innermost failing component
		raise
	except Exception as exc:
		raise RenderError(name, phase) from exc


def check_json_value(value: Any, path: RenderPath) -> None:
	if isinstance(value, float) and not math.isfinite(value):
		raise SerializationError(path, f"{value!r} has no JSON representation")
	if value is None or isinstance(value, (str, bool, int, float)):
		return
	if isinstance(value, (list, tuple)):
		for idx, item in enumerate(cast(list[Any], value)):
			check_json_value(item, join_path(path, idx))
		return
	if isinstance(value, dict):
		for key, item in cast(dict[Any, Any], value).items():
			if not isinstance(key, str):
				raise SerializationError(
					path, f"object keys must be strings, got {type(key).__name__}"
				)
			check_json_value(item, join_path(path, key))
		return
	raise SerializationError(
		path, f"prop value of type {type(value).__name__} is not JSON-serializable"
	)


def to_json(tree: SerializedRoot) -> str:
	"""Encode a serialized tree the way the host expects it on the wire.

	Raises `SerializationError` for values JSON cannot represent (NaN,
	infinities, arbitrary objects left in by non-strict serialization).
	"""
	try:
		return json.dumps(
			tree, separators=(",", ":"), ensure_ascii=False, allow_nan=False
		)
	except (TypeError, ValueError) as exc:
		raise SerializationError("", str(exc)) from exc


def join_path(prefix: RenderPath, path: str | int) -> RenderPath:
	if prefix:
		return f"{prefix}.{path}"
	return str(path)


__all__ = [
	"Serializer",
	"render_component",
	"check_json_value",
	"to_json",
	"join_path",
]
