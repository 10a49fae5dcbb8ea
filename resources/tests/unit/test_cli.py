import json

import click
import pytest
from unittest.mock import patch
from click.testing import CliRunner

from ld_agent.main import _parse_argument, cli
from ld_agent.utils.config import LdAgentSettings

from resources.tests.helpers.plugins import plugin_source


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture(autouse=True)
def mock_configure_root_logging():
    with patch('ld_agent.main.configure_root_logging') as mock_configure:
        yield mock_configure


@pytest.fixture
def mock_settings(plugins_dir):
    with patch('ld_agent.main.get_settings') as mock_get_settings:
        mock_get_settings.return_value = LdAgentSettings(plugins_directory=str(plugins_dir))
        yield mock_get_settings.return_value


def test_list_command(runner, mock_settings, write_plugin):
    write_plugin("calc", plugin_source(name="Calculator"))

    result = runner.invoke(cli, ['list'])

    assert result.exit_code == 0, result.output
    assert "Loaded 1 plugins" in result.output
    assert "Available tools (1):" in result.output
    assert "  - calc.add" in result.output
    assert "  - calc: Calculator v1.0.0" in result.output


def test_list_command_plugins_dir_option(runner, mock_settings, tmp_path):
    empty_dir = tmp_path / "other"
    empty_dir.mkdir()

    result = runner.invoke(cli, ['--plugins-dir', str(empty_dir), 'list'])

    assert result.exit_code == 0, result.output
    assert "Loaded 0 plugins" in result.output


def test_call_command(runner, mock_settings, write_plugin):
    write_plugin("calc", plugin_source())

    result = runner.invoke(cli, ['call', 'calc.add', '-a', 'a=1', '-a', 'b=2'])

    assert result.exit_code == 0, result.output
    assert json.loads(result.output.strip()) == 3


def test_call_command_tool_not_found(runner, mock_settings, write_plugin):
    write_plugin("calc", plugin_source())

    result = runner.invoke(cli, ['call', 'calc.missing'])

    assert result.exit_code == 1
    assert "Error [TOOL_NOT_FOUND]: Tool not found: calc.missing" in result.output


def test_call_command_tool_failure(runner, mock_settings, write_plugin):
    body = "def add(a, b):\n    raise RuntimeError('boom')\n"
    write_plugin("calc", plugin_source(body=body))

    result = runner.invoke(cli, ['call', 'calc.add'])

    assert result.exit_code == 1
    assert "Error [TOOL_INVOCATION_FAILED]" in result.output


def test_check_command(runner, mock_settings, write_plugin):
    path = write_plugin("calc", plugin_source(name="Calculator"))

    result = runner.invoke(cli, ['check', str(path)])

    assert result.exit_code == 0, result.output
    assert "OK: calc (Calculator v1.0.0) with 1 tools" in result.output


def test_check_command_incompatible_plugin(runner, mock_settings, write_plugin):
    path = write_plugin("elsewhere", plugin_source(platform="no-such-platform"))

    result = runner.invoke(cli, ['check', str(path)])

    assert result.exit_code == 1
    assert "Error [INCOMPATIBLE_PLUGIN]" in result.output


def test_invalid_settings_exit(runner):
    with patch('ld_agent.main.get_settings') as mock_get_settings:
        mock_get_settings.return_value = LdAgentSettings(log_level="LOUD")
        result = runner.invoke(cli, ['list'])

    assert result.exit_code == 1
    assert "Error [CONFIGURATION_ERROR]: Unknown log level: LOUD" in result.output


def test_verbose_configures_debug_logging(runner, mock_settings, mock_configure_root_logging):
    result = runner.invoke(cli, ['-v', 'list'])

    assert result.exit_code == 0, result.output
    assert mock_configure_root_logging.call_args.kwargs["level"] == "DEBUG"


@pytest.mark.parametrize("raw, expected", [
    ("a=1", ("a", 1)),
    ("ratio=1.5", ("ratio", 1.5)),
    ("name=world", ("name", "world")),
    ('items=[1, 2]', ("items", [1, 2])),
    ("expr=a=b", ("expr", "a=b")),
    ("empty=", ("empty", "")),
])
def test_parse_argument(raw, expected):
    assert _parse_argument(raw) == expected


@pytest.mark.parametrize("raw", ["novalue", "=1"])
def test_parse_argument_rejects_malformed(raw):
    with pytest.raises(click.BadParameter):
        _parse_argument(raw)
