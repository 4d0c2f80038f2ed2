"""
Tag builders for host elements.

The host runtime owns the meaning of each tag. The builders below cover the
tags Pangea hosts ship with; `define_tag` creates builders for any other.
"""

from __future__ import annotations

from typing import Any, overload

from pangea.vdom import Child, Node


def define_tag(name: str, default_props: dict[str, Any] | None = None):
	"""
	Defines a host tag with optional default props.

	The returned function can be called in these ways:
	1. tag() -> Node (can use indexing syntax)
	2. tag(**props) -> Node (can use indexing syntax)
	3. tag(*children, **props) -> Node with children (indexing not allowed)

	A `key` keyword is taken out of the props and kept on the node.
	"""

	default_props = default_props or {}

	@overload
	def create_element(*, key: str | None = None, **props: Any) -> Node: ...
	@overload
	def create_element(*children: Child, key: str | None = None, **props: Any) -> Node: ...

	def create_element(*children: Child, key: str | None = None, **props: Any) -> Node:
		return Node(
			tag=name,
			props=default_props | props,
			children=list(children) or None,
			key=key,
		)

	create_element.__name__ = name
	return create_element


View = define_tag("View")
Text = define_tag("Text")
Button = define_tag("Button")
Image = define_tag("Image")
TextInput = define_tag("TextInput")
ScrollView = define_tag("ScrollView")
