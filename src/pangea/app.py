"""
Pangea DApp facade.

Binds a host once and exposes the renderer operations plus the host's DApp
hooks (message renderer, open handler, message handler).
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from pangea.component import Modal
from pangea.container import Container
from pangea.errors import ModalSessionError
from pangea.host import DAppHost, MessageHandler, OpenHandler, Reply
from pangea.renderer import Continuation, ModalSession, render_message, render_modal
from pangea.serializer import Renderable, Serializer
from pangea.vdom import SerializedRoot

logger = logging.getLogger(__name__)


class Pangea:
	host: DAppHost
	modals: dict[str, ModalSession]

	def __init__(self, host: DAppHost, *, strict: bool | None = None) -> None:
		self.host = host
		self.strict = strict
		self.modals = {}

	def render_message(
		self, element: Renderable, callback: Callable[[SerializedRoot], None]
	) -> None:
		render_message(element, callback, self.host, strict=self.strict)

	def render_modal(self, element: Modal, done: Continuation) -> ModalSession:
		"""Mount `element` in its container. A modal already living in the same
		container is closed first."""
		ui_id = element.container.ui_id
		previous = self.modals.pop(ui_id, None)
		if previous is not None:
			logger.info("Replacing modal '%s' (%s)", ui_id, previous.component.get_name())
			previous.close()
		session = render_modal(
			element,
			done,
			self.host,
			serializer=Serializer(self.host, strict=self.strict),
		)
		self.modals[ui_id] = session
		return session

	def get_modal(self, ui_id: str) -> ModalSession:
		try:
			return self.modals[ui_id]
		except KeyError:
			raise ModalSessionError(f"No modal mounted in '{ui_id}'") from None

	def discard_modal(self, ui_id: str) -> None:
		session = self.modals.pop(ui_id, None)
		if session is not None:
			session.close()

	def new_modal_container(self) -> Container:
		return Container(self.host.new_modal_uiid())

	def set_message_renderer(self, renderer: Callable[[Any], Renderable]) -> None:
		"""Register `renderer(message) -> element` to draw chat messages.

		The host calls back with a message and a reply function; the element
		returned by `renderer` is rendered once and handed to the reply.
		"""

		def on_render(message: Any, reply: Reply) -> None:
			self.render_message(renderer(message), reply)

		self.host.set_message_renderer(on_render)

	def set_open_handler(self, handler: OpenHandler) -> None:
		self.host.set_open_handler(handler)

	def set_message_handler(self, handler: MessageHandler) -> None:
		self.host.set_message_handler(handler)

	def send_message(self, message: Any, callback: Callable[[Any], None]) -> None:
		self.host.send_message(message, callback)
