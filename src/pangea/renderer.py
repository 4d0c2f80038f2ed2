"""
Message rendering and modal sessions.

A message is rendered once and handed to a callback. A modal is bound to a
host UI id: every state update re-renders it, and the new tree is pushed to
the host only when it differs from the last tree the host acknowledged. At
most one push is in flight per session; updates requested meanwhile wait in
a FIFO queue.
"""

from __future__ import annotations

import json
import logging
from collections import deque
from collections.abc import Callable
from typing import NamedTuple

from pangea.component import Component, Modal, StateUpdate
from pangea.errors import ModalSessionError, RenderPhase
from pangea.host import FunctionRegistrar, Host
from pangea.serializer import Renderable, Serializer, to_json
from pangea.vdom import SerializedRoot

logger = logging.getLogger(__name__)

Continuation = Callable[[], None]


def render_message(
	element: Renderable,
	callback: Callable[[SerializedRoot], None],
	registry: FunctionRegistrar,
	*,
	strict: bool | None = None,
) -> None:
	"""Render `element` once and pass the serialized tree to `callback`.

	Errors raised while rendering or registering function props propagate to
	the caller and `callback` is not called.
	"""
	serializer = Serializer(registry, strict=strict)
	tree = serializer.serialize(element, phase="message")
	callback(tree)


def render_modal(
	element: Modal,
	done: Continuation,
	host: Host,
	*,
	serializer: Serializer | None = None,
) -> ModalSession:
	"""Mount `element` in the host modal named by its `modal_container` prop.

	`done` is called once the host acknowledged the first tree.
	"""
	session = ModalSession(element, host, serializer=serializer)
	session.mount(done)
	return session


class PendingUpdate(NamedTuple):
	update: StateUpdate | None
	callback: Continuation | None
	phase: RenderPhase


class ModalSession:
	ui_id: str
	component: Modal
	host: Host
	serializer: Serializer
	# Last tree acknowledged by the host, decoded from the pushed payload
	last_delivered: SerializedRoot | None
	# Wire form of `last_delivered`; changes are detected on this string
	last_payload: str | None
	push_count: int

	def __init__(
		self,
		component: Modal,
		host: Host,
		*,
		serializer: Serializer | None = None,
	) -> None:
		if not isinstance(component, Modal):
			raise ModalSessionError(
				f"Only Modal components can be rendered in a modal, got {type(component).__name__}"
			)
		if component.mounted:
			raise ModalSessionError(f"{component.get_name()} is already mounted")
		self.ui_id = component.container.ui_id
		self.component = component
		self.host = host
		self.serializer = serializer or Serializer(host)
		self.last_delivered = None
		self.last_payload = None
		self.push_count = 0
		self._queue: deque[PendingUpdate] = deque()
		self._in_flight = False
		self._draining = False
		self._closed = False

	def __repr__(self) -> str:  # pragma: no cover - trivial formatting
		return (
			f"ModalSession(ui_id={self.ui_id!r}, component={self.component.get_name()}, "
			f"pushes={self.push_count}, pending={len(self._queue)})"
		)

	@property
	def in_flight(self) -> bool:
		return self._in_flight

	@property
	def pending(self) -> int:
		return len(self._queue)

	@property
	def closed(self) -> bool:
		return self._closed

	def mount(self, done: Continuation | None = None) -> None:
		if self._closed:
			raise ModalSessionError(f"Modal session '{self.ui_id}' is closed")
		if self.component.mounted:
			raise ModalSessionError(f"{self.component.get_name()} is already mounted")
		logger.debug("Mounting %s in modal '%s'", self.component.get_name(), self.ui_id)
		self.component._updater = self._request_update  # pyright: ignore[reportPrivateUsage]
		self._queue.append(PendingUpdate(update=None, callback=done, phase="modal.mount"))
		self._drain()

	def close(self) -> None:
		"""Detach the component. Queued updates are dropped and late acks ignored."""
		if self._closed:
			return
		self._closed = True
		dropped = len(self._queue)
		self._queue.clear()
		self.component._updater = None  # pyright: ignore[reportPrivateUsage]
		logger.debug(
			"Closed modal session '%s' (%d pending update(s) dropped)", self.ui_id, dropped
		)

	def _request_update(
		self,
		component: Component,
		update: StateUpdate,
		callback: Continuation | None,
	) -> None:
		if self._closed:
			raise ModalSessionError(f"Modal session '{self.ui_id}' is closed")
		self._queue.append(
			PendingUpdate(update=update, callback=callback, phase="modal.update")
		)
		if self._in_flight:
			logger.debug(
				"Queued update for modal '%s' behind in-flight push (%d pending)",
				self.ui_id,
				len(self._queue),
			)
		self._drain()

	def _drain(self) -> None:
		# Re-entrant calls (synchronous acks, updates requested from a
		# continuation) return here and are picked up by the running loop.
		if self._draining:
			return
		self._draining = True
		try:
			while self._queue and not self._in_flight and not self._closed:
				self._process(self._queue.popleft())
		finally:
			self._draining = False

	def _process(self, item: PendingUpdate) -> None:
		if item.update is not None:
			self.component.apply_state_update(item.update)
		tree = self.serializer.serialize(self.component, phase=item.phase)
		# Compared as JSON: 0 and False differ on the wire, and props may share
		# mutable state with the component
		payload = to_json(tree)

		if payload == self.last_payload:
			logger.debug("Modal '%s' rendered an unchanged tree, skipping push", self.ui_id)
			if item.callback is not None:
				item.callback()
			return

		settled = False

		def ack() -> None:
			nonlocal settled
			if settled:
				logger.warning(
					"Ignoring duplicate or late acknowledgement for modal '%s'", self.ui_id
				)
				return
			settled = True
			self._in_flight = False
			if self._closed:
				return
			self.last_payload = payload
			self.last_delivered = json.loads(payload)
			self.push_count += 1
			try:
				if item.callback is not None:
					item.callback()
			finally:
				self._drain()

		self._in_flight = True
		logger.debug("Pushing tree #%d to modal '%s'", self.push_count + 1, self.ui_id)
		try:
			self.host.render_modal(self.ui_id, payload, ack)
		except Exception:
			if not settled:
				settled = True
				self._in_flight = False
			raise


__all__ = [
	"render_message",
	"render_modal",
	"ModalSession",
	"PendingUpdate",
	"Continuation",
]
