"""Interfaces of the host runtime that embeds a Pangea DApp."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, Protocol, runtime_checkable

from pangea.vdom import SerializedRoot

Ack = Callable[[], None]
# Delivers the rendered tree of a chat message back to the host
Reply = Callable[[SerializedRoot], None]
MessageRenderer = Callable[[Any, Reply], None]
OpenHandler = Callable[[], None]
MessageHandler = Callable[[Any], None]


@runtime_checkable
class FunctionRegistrar(Protocol):
	def register_function(self, fn: Callable[..., Any]) -> int: ...


@runtime_checkable
class Host(FunctionRegistrar, Protocol):
	"""The narrow host surface the renderer depends on.

	- `register_function` returns a process-unique integer handle for `fn`.
	- `render_modal` displays `tree` (a JSON string) for `ui_id` and must call
	  `ack` exactly once when it is done processing it.
	"""

	def render_modal(self, ui_id: str, tree: str, ack: Ack) -> None: ...


@runtime_checkable
class DAppHost(Host, Protocol):
	"""Full host surface used by the `Pangea` facade."""

	def new_modal_uiid(self) -> str: ...

	def set_message_renderer(self, renderer: MessageRenderer) -> None: ...

	def set_open_handler(self, handler: OpenHandler) -> None: ...

	def set_message_handler(self, handler: MessageHandler) -> None: ...

	def send_message(self, message: Any, callback: Callable[[Any], None]) -> None: ...


__all__ = [
	"Ack",
	"Reply",
	"MessageRenderer",
	"OpenHandler",
	"MessageHandler",
	"FunctionRegistrar",
	"Host",
	"DAppHost",
]
