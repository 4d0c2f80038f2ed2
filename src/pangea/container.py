from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Container:
	"""Addresses a modal on the host through its UI identifier."""

	ui_id: str

	def __post_init__(self):
		if not isinstance(self.ui_id, str) or not self.ui_id:
			raise ValueError(f"Container needs a non-empty UI id, got {self.ui_id!r}")
