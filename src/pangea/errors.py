from __future__ import annotations

from typing import Literal

RenderPhase = Literal["message", "modal.mount", "modal.update", "component"]


class PangeaError(Exception):
	"""Base class for errors raised by the Pangea renderer."""


class RenderError(PangeaError):
	"""A component's render step raised.

	The original exception is available as `__cause__`.
	"""

	component: str
	phase: RenderPhase

	def __init__(self, component: str, phase: RenderPhase) -> None:
		self.component = component
		self.phase = phase
		super().__init__(f"Error while rendering {component} ({phase})")


class RegistrationError(PangeaError):
	"""The host failed to register a function prop, or returned a non-integer handle."""

	prop: str

	def __init__(self, prop: str, message: str) -> None:
		self.prop = prop
		super().__init__(f"Could not register function prop '{prop}': {message}")


class SerializationError(PangeaError):
	"""A render produced a value that cannot be sent to the host."""

	path: str

	def __init__(self, path: str, message: str) -> None:
		self.path = path
		location = path or "<root>"
		super().__init__(f"{location}: {message}")


class ModalSessionError(PangeaError):
	"""Misuse of a modal session (missing container, unmounted component, ...)."""


__all__ = [
	"PangeaError",
	"RenderError",
	"RenderPhase",
	"RegistrationError",
	"SerializationError",
	"ModalSessionError",
]
