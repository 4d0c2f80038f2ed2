from __future__ import annotations

import json
from collections.abc import Callable
from typing import Any, NamedTuple

import pytest
from pangea.env import ENV_PANGEA_ENV, ENV_PANGEA_LOG_LEVEL, ENV_PANGEA_STRICT
from pangea.registry import FunctionRegistry


class Push(NamedTuple):
	ui_id: str
	tree: str
	ack: Callable[[], None]

	@property
	def data(self) -> Any:
		return json.loads(self.tree)


class RecordingHost(FunctionRegistry):
	"""Host double: records every push. Acks are manual unless `auto_ack` is set.

	`on_push` runs before the automatic ack, which lets tests request state
	updates while a push is in flight.
	"""

	def __init__(self, *, auto_ack: bool = False) -> None:
		super().__init__()
		self.auto_ack = auto_ack
		self.pushes: list[Push] = []
		self.registered: list[Callable[..., Any]] = []
		self.on_push: Callable[[Push], None] | None = None
		# DApp surface
		self.next_uiid = 0
		self.message_renderer: Any = None
		self.open_handler: Any = None
		self.message_handler: Any = None
		self.sent: list[Any] = []

	def register_function(self, fn: Callable[..., Any]) -> int:
		self.registered.append(fn)
		return super().register_function(fn)

	def render_modal(self, ui_id: str, tree: str, ack: Callable[[], None]) -> None:
		push = Push(ui_id, tree, ack)
		self.pushes.append(push)
		if self.on_push is not None:
			self.on_push(push)
		if self.auto_ack:
			ack()

	@property
	def trees(self) -> list[Any]:
		return [push.data for push in self.pushes]

	def ack_last(self) -> None:
		self.pushes[-1].ack()

	def new_modal_uiid(self) -> str:
		self.next_uiid += 1
		return f"modal-{self.next_uiid}"

	def set_message_renderer(self, renderer: Any) -> None:
		self.message_renderer = renderer

	def set_open_handler(self, handler: Any) -> None:
		self.open_handler = handler

	def set_message_handler(self, handler: Any) -> None:
		self.message_handler = handler

	def send_message(self, message: Any, callback: Callable[[Any], None]) -> None:
		self.sent.append(message)
		callback({"status": "sent"})


@pytest.fixture(autouse=True)
def _clean_pangea_env(monkeypatch: pytest.MonkeyPatch):  # pyright: ignore[reportUnusedFunction]
	for name in (ENV_PANGEA_ENV, ENV_PANGEA_LOG_LEVEL, ENV_PANGEA_STRICT):
		monkeypatch.delenv(name, raising=False)
	yield


@pytest.fixture
def host() -> RecordingHost:
	return RecordingHost()


@pytest.fixture
def auto_host() -> RecordingHost:
	return RecordingHost(auto_ack=True)
