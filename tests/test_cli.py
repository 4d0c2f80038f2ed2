import json
from pathlib import Path
from typing import Any

import pytest
from pangea.cli.cmd import cli
from pangea.cli.helpers import load_target, parse_props, parse_target
from typer.testing import CliRunner

runner = CliRunner()

COMPONENTS = '''
import pangea as ps


class Receipt(ps.Message):
	def render(self):
		return ps.Text()[f"{self.props['amount']} ETH"]


class Broken(ps.Message):
	def render(self):
		raise RuntimeError("boom")


class Confirm(ps.Modal):
	def render(self):
		return ps.Button(onPress=lambda: None)["Confirm"]


@ps.component
def Badge(label: str):
	return ps.Text()[label]


tree = ps.View()["static"]
'''


@pytest.fixture
def components(tmp_path: Path) -> Path:
	path = tmp_path / "components.py"
	path.write_text(COMPONENTS)
	return path


def json_lines(output: str) -> list[Any]:
	return [json.loads(line) for line in output.splitlines() if line.startswith("{")]


def test_parse_target_path_mode(components: Path):
	parsed = parse_target(f"{components}:Receipt")
	assert parsed["mode"] == "path"
	assert parsed["module_name"] == "components"
	assert parsed["attr"] == "Receipt"
	assert parsed["file_path"] == components.resolve()


def test_parse_target_module_mode():
	parsed = parse_target("my_dapp.messages:Receipt")
	assert parsed == {
		"mode": "module",
		"module_name": "my_dapp.messages",
		"attr": "Receipt",
		"file_path": None,
	}


@pytest.mark.parametrize("target", ["no_colon", ":Name", "module:"])
def test_parse_target_rejects_bad_format(target: str):
	with pytest.raises(ValueError):
		parse_target(target)


def test_parse_target_missing_file(tmp_path: Path):
	with pytest.raises(FileNotFoundError):
		parse_target(f"{tmp_path / 'missing.py'}:App")


def test_load_target_missing_attribute(components: Path):
	with pytest.raises(AttributeError):
		load_target(f"{components}:Nope")


def test_parse_props():
	assert parse_props(["amount=3", "to=0x30", 'tags=["a"]', "label=hello world"]) == {
		"amount": 3,
		"to": "0x30",
		"tags": ["a"],
		"label": "hello world",
	}
	with pytest.raises(ValueError):
		parse_props(["amount"])


def test_render_message_compact(components: Path):
	result = runner.invoke(
		cli, ["render", f"{components}:Receipt", "--prop", "amount=3", "--compact"]
	)
	assert result.exit_code == 0, result.output
	assert json.loads(result.stdout.strip()) == {
		"props": {"amount": 3},
		"children": [{"type": "Text", "props": {}, "children": "3 ETH"}],
	}


def test_render_function_component(components: Path):
	result = runner.invoke(
		cli, ["render", f"{components}:Badge", "-p", "label=gm", "--compact"]
	)
	assert result.exit_code == 0, result.output
	assert json.loads(result.stdout.strip())["children"] == [
		{"type": "Text", "props": {}, "children": "gm"}
	]


def test_render_prebuilt_tree(components: Path):
	result = runner.invoke(cli, ["render", f"{components}:tree", "--compact"])
	assert result.exit_code == 0, result.output
	assert json.loads(result.stdout.strip()) == {
		"props": {},
		"children": [{"type": "View", "props": {}, "children": "static"}],
	}


def test_render_modal_prints_push(components: Path):
	result = runner.invoke(
		cli,
		["render", f"{components}:Confirm", "--modal", "--ui-id", "m-1", "--compact"],
	)
	assert result.exit_code == 0, result.output
	assert "acknowledged" in result.stdout
	assert json_lines(result.stdout) == [
		{
			"props": {},
			"children": [
				{"type": "Button", "props": {"onPress": 1}, "children": "Confirm"}
			],
		}
	]


def test_modal_flag_requires_modal_component(components: Path):
	result = runner.invoke(cli, ["render", f"{components}:Receipt", "--modal"])
	assert result.exit_code == 1
	assert "is not a Modal" in result.stdout


def test_render_failure_exits_with_error(components: Path):
	result = runner.invoke(cli, ["render", f"{components}:Broken"])
	assert result.exit_code == 1
	assert "Broken" in result.stdout


@pytest.mark.parametrize(
	"args",
	[
		["render", "missing_file.py:App"],
		["render", "not-a-target"],
		["render", "pangea:View", "--prop", "novalue"],
	],
)
def test_bad_arguments_exit_with_error(args: list[str]):
	result = runner.invoke(cli, args)
	assert result.exit_code == 1
	assert "❌" in result.stdout
