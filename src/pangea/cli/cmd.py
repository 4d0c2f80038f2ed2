"""
Command-line interface for Pangea.

Renders components to the JSON trees a host would receive, for inspecting
messages and modals without a host runtime.
"""
# typer relies on function calls used as default values
# pyright: reportCallInDefaultInitializer=false

from __future__ import annotations

import inspect
import logging
from typing import Any

import typer
from rich.console import Console
from rich.logging import RichHandler

from pangea.cli.console_host import ConsoleHost
from pangea.cli.helpers import load_target, parse_props
from pangea.component import MODAL_CONTAINER_PROP, Component, Modal
from pangea.container import Container
from pangea.env import env
from pangea.errors import PangeaError
from pangea.renderer import render_message, render_modal
from pangea.vdom import FunctionComponent, SerializedRoot

logger = logging.getLogger(__name__)

cli = typer.Typer(
	name="pangea",
	help="Pangea - render DApp messages and modals to host JSON trees",
	no_args_is_help=True,
)


@cli.callback()
def main_callback(
	log_level: str | None = typer.Option(
		None, "--log-level", help="Overrides PANGEA_LOG_LEVEL"
	),
):
	if log_level is not None:
		env.log_level = log_level
	try:
		level = env.log_level
	except ValueError as exc:
		typer.echo(f"❌ {exc}", err=True)
		raise typer.Exit(1) from None
	pkg_logger = logging.getLogger("pangea")
	pkg_logger.setLevel(level)
	if not any(isinstance(h, RichHandler) for h in pkg_logger.handlers):
		pkg_logger.addHandler(
			RichHandler(console=Console(stderr=True), show_path=False)
		)


@cli.command("render")
def render(
	target: str = typer.Argument(
		...,
		help="Component target: 'path/to/file.py:Name' or 'module.path:Name'",
	),
	prop: list[str] = typer.Option(
		[], "--prop", "-p", help="Prop as key=value, value parsed as JSON when possible"
	),
	modal: bool = typer.Option(False, "--modal", help="Render as a modal session"),
	ui_id: str = typer.Option("cli-modal", "--ui-id", help="UI id of the modal"),
	compact: bool = typer.Option(False, "--compact", help="Print compact JSON"),
):
	"""Render a component once and print the serialized tree."""
	console = Console()
	host = ConsoleHost(console, compact=compact)

	try:
		props = parse_props(prop)
		loaded = load_target(target)
	except (ValueError, ImportError, AttributeError, OSError) as exc:
		console.print(f"❌ {exc}", highlight=False, soft_wrap=True)
		raise typer.Exit(1) from None

	if modal:
		props[MODAL_CONTAINER_PROP] = Container(ui_id)

	try:
		element = build_element(loaded, props)
		if modal:
			if not isinstance(element, Modal):
				console.print(
					f"❌ {target} is not a Modal component",
					highlight=False,
					soft_wrap=True,
				)
				raise typer.Exit(1)
			render_modal(
				element,
				lambda: console.log(f"✅ Modal [cyan]{ui_id}[/cyan] acknowledged"),
				host,
			)
		else:

			def on_rendered(tree: SerializedRoot):
				host.print_tree(tree)

			render_message(element, on_rendered, host)
	except PangeaError as exc:
		logger.exception("Rendering %s failed", target)
		console.print(f"❌ {exc}", highlight=False, soft_wrap=True)
		raise typer.Exit(1) from None


def build_element(loaded: Any, props: dict[str, Any]) -> Any:
	if inspect.isclass(loaded) and issubclass(loaded, Component):
		return loaded(**props)
	if isinstance(loaded, FunctionComponent):
		return loaded(**props)
	if props:
		logger.warning("Ignoring props for pre-built element %r", loaded)
	return loaded


def main():
	cli()


if __name__ == "__main__":
	main()
