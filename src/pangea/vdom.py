"""
Node model for Pangea UI trees.

Host elements are plain `Node` objects identified by a tag string. Function
components are wrapped with `@component` and produce `ComponentNode`
placeholders that the serializer expands in place.
"""

from __future__ import annotations

import functools
from collections.abc import Callable, Iterable, Sequence
from typing import (
	TYPE_CHECKING,
	Any,
	Generic,
	ParamSpec,
	TypedDict,
	Union,
	cast,
	overload,
)

if TYPE_CHECKING:
	from pangea.component import Component as ClassComponent

# ============================================================================
# Core VDOM
# ============================================================================

Primitive = Union[str, int, float]
PrimitiveNode = Union[str, int, float, bool, None]
Element = Union["Node", "ComponentNode", "ClassComponent", PrimitiveNode]
# A child can be an Element or any iterable yielding children (e.g., generators)
Child = Union[Element, Iterable["Child"]]
Children = Sequence[Child]
Props = dict[str, Any]

P = ParamSpec("P")


class SerializedElement(TypedDict):
	type: str
	props: Props
	children: "SerializedChildren"


class SerializedRoot(TypedDict):
	props: Props
	children: "SerializedChildren"


SerializedChild = Union[SerializedElement, Primitive]
SerializedChildren = Union[list[SerializedChild], Primitive]


def _as_children(children_arg: Child | tuple[Child, ...]) -> list[Child]:
	if isinstance(children_arg, tuple):
		return list(cast(tuple[Child, ...], children_arg))
	return [children_arg]


class Node:
	"""
	A host element: a tag string, a props mapping and ordered children.
	The host decides what each tag means (e.g. "View", "Text", "Button").
	"""

	def __init__(
		self,
		tag: str,
		props: Props | None = None,
		children: Children | Primitive | None = None,
		key: str | None = None,
	):
		if props and "children" in props:
			raise ValueError(f"{tag}: pass children by indexing, not as a prop")
		# A lone string is one child, not a sequence of characters
		if isinstance(children, (str, int, float)):
			children = [children]
		self.tag = tag
		self.props = props or None
		self.children = children or None
		self.key = key or None

	def __repr__(self) -> str:  # pragma: no cover - trivial formatting
		n_children = len(self.children) if self.children else 0
		return f"<{self.tag} props={self.props or {}} children={n_children}>"

	def __getitem__(self, children_arg: Child | tuple[Child, ...]) -> Node:
		"""`View()[a, b]` returns a copy of the node holding `a` and `b`.

		Children may include lists or generators of nodes, flattened during
		serialization.
		"""
		if self.children:
			raise ValueError(f"<{self.tag}> already has children")
		return Node(self.tag, self.props, _as_children(children_arg), self.key)


def flatten_children(children: Children | None) -> list[Element]:
	"""Flatten nested lists, tuples and generators of children.

	Strings are leaves. `None` and booleans are kept here and dropped by the
	serializer so that the rule lives in a single place.
	"""
	out: list[Element] = []

	def visit(child: Child):
		if isinstance(child, (str, Node, ComponentNode)) or not isinstance(
			child, Iterable
		):
			out.append(cast(Element, child))
			return
		for item in child:
			visit(item)

	for child in children or ():
		visit(child)
	return out


# --- Function components ---


class FunctionComponent(Generic[P]):
	"""Wraps a render function; calling it builds a `ComponentNode`."""

	def __init__(self, fn: Callable[P, Any], name: str | None = None) -> None:
		self.fn = fn
		self.name = name or component_name(fn)

	def __call__(self, *args: P.args, **kwargs: P.kwargs) -> ComponentNode:
		key = cast(str | None, kwargs.pop("key", None))
		return ComponentNode(self.fn, args, kwargs, name=self.name, key=key)

	def __repr__(self) -> str:  # pragma: no cover - trivial formatting
		return f"<component {self.name}>"


class ComponentNode:
	"""A deferred call to a function component, rendered by the serializer."""

	def __init__(
		self,
		fn: Callable[..., Any],
		args: tuple[Any, ...],
		kwargs: dict[str, Any],
		name: str | None = None,
		key: str | None = None,
	) -> None:
		self.fn = fn
		self.args = args
		self.kwargs = kwargs
		self.name = name or component_name(fn)
		self.key = key

	@property
	def props(self) -> Props:
		return {k: v for k, v in self.kwargs.items() if k != "children"}

	def render(self) -> Any:
		return self.fn(*self.args, **self.kwargs)

	def __getitem__(self, children_arg: Child | tuple[Child, ...]) -> ComponentNode:
		if self.kwargs.get("children"):
			raise ValueError(f"<{self.name}> already has children")
		kwargs = {**self.kwargs, "children": _as_children(children_arg)}
		return ComponentNode(self.fn, self.args, kwargs, name=self.name, key=self.key)

	def __repr__(self) -> str:  # pragma: no cover - trivial formatting
		return f"<{self.name} props={self.props}>"


@overload
def component(fn: Callable[P, Any]) -> FunctionComponent[P]: ...
@overload
def component(
	fn: None = None, *, name: str | None = None
) -> Callable[[Callable[P, Any]], FunctionComponent[P]]: ...


def component(
	fn: Callable[P, Any] | None = None, *, name: str | None = None
) -> FunctionComponent[P] | Callable[[Callable[P, Any]], FunctionComponent[P]]:
	"""Turn a render function into a component, usable bare or as
	`@component(name="Receipt")`."""

	def decorator(fn: Callable[P, Any]) -> FunctionComponent[P]:
		return FunctionComponent(fn, name)

	if fn is None:
		return decorator
	return decorator(fn)


def component_name(fn: Callable[..., Any]) -> str:
	target = fn.func if isinstance(fn, functools.partial) else fn
	name = getattr(target, "__name__", None)
	if name is None:
		# Callable instance
		return type(target).__name__
	if name == "<lambda>":
		return "Component"
	return name
