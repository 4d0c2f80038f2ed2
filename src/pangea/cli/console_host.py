from __future__ import annotations

import json
from typing import Any

from rich.console import Console

from pangea.host import Ack
from pangea.registry import FunctionRegistry


class ConsoleHost(FunctionRegistry):
	"""Host that prints every modal push to a console and acknowledges it immediately."""

	def __init__(self, console: Console, *, compact: bool = False) -> None:
		super().__init__()
		self.console = console
		self.compact = compact
		self.pushes: list[tuple[str, str]] = []

	def render_modal(self, ui_id: str, tree: str, ack: Ack) -> None:
		self.pushes.append((ui_id, tree))
		self.console.log(f"🪟 Push #{len(self.pushes)} to modal [cyan]{ui_id}[/cyan]")
		self.print_tree(json.loads(tree))
		ack()

	def print_tree(self, tree: Any) -> None:
		if self.compact:
			self.console.out(
				json.dumps(tree, separators=(",", ":"), ensure_ascii=False),
				highlight=False,
			)
		else:
			self.console.print_json(data=tree)
