"""Class-based components: `Message` snapshots and stateful `Modal`s.

```python
class Counter(Modal):
    def __init__(self, **props):
        super().__init__(**props)
        self.state = {"count": 0}

    def render(self):
        return Button(onPress=self.increment)[f"Count: {self.state['count']}"]

    def increment(self):
        self.set_state({"count": self.state["count"] + 1})
```
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any, ClassVar

from pangea.container import Container
from pangea.errors import ModalSessionError
from pangea.vdom import Element, Props

State = dict[str, Any]
StateUpdate = Mapping[str, Any] | Callable[[State, Props], Mapping[str, Any] | None]
Updater = Callable[["Component", StateUpdate, Callable[[], None] | None], None]

MODAL_CONTAINER_PROP = "modal_container"


class Component:
	"""Base class for class components.

	Props are the keyword arguments given to the constructor. Subclasses set
	their initial `state` in `__init__` and implement `render`.
	"""

	display_name: ClassVar[str | None] = None

	props: Props
	state: State
	_updater: Updater | None

	def __init__(self, **props: Any) -> None:
		self.props = props
		self.state = {}
		self._updater = None

	def render(self) -> Element | list[Element]:
		raise NotImplementedError(f"{type(self).__name__} must implement render()")

	@classmethod
	def get_name(cls) -> str:
		return cls.display_name or cls.__name__

	@property
	def mounted(self) -> bool:
		return self._updater is not None

	def set_state(
		self,
		update: StateUpdate,
		callback: Callable[[], None] | None = None,
	) -> None:
		"""Request a state change followed by a re-render.

		`update` is merged into `state` when the request is processed. It can
		also be a function `(state, props) -> dict | None`. `callback` runs once
		the resulting tree has been acknowledged by the host (or immediately
		after the update if the tree did not change).
		"""
		if self._updater is None:
			raise ModalSessionError(
				f"{self.get_name()}.set_state() called on a component that is not mounted in a modal session"
			)
		self._updater(self, update, callback)

	def apply_state_update(self, update: StateUpdate) -> None:
		if callable(update):
			update = update(self.state, self.props)
			if update is None:
				return
		self.state = {**self.state, **update}

	def __repr__(self) -> str:  # pragma: no cover - trivial formatting
		return f"<{self.get_name()} props={sorted(self.props)} state={sorted(self.state)}>"


class Message(Component):
	"""A render-only component, displayed by the host as a chat message."""


class Modal(Component):
	"""A stateful component displayed in a host modal.

	Must receive a `modal_container` prop identifying the host modal.
	"""

	@property
	def container(self) -> Container:
		container = self.props.get(MODAL_CONTAINER_PROP)
		if container is None:
			raise ModalSessionError(
				f"{self.get_name()} is missing the '{MODAL_CONTAINER_PROP}' prop"
			)
		if not isinstance(container, Container):
			raise ModalSessionError(
				f"{self.get_name()}: '{MODAL_CONTAINER_PROP}' must be a Container, got {type(container).__name__}"
			)
		return container


__all__ = [
	"Component",
	"Message",
	"Modal",
	"State",
	"StateUpdate",
	"Updater",
	"MODAL_CONTAINER_PROP",
]
