"""
Main entry point for the ld-agent CLI.

This module provides a small command-line host that loads a plugins
directory, lists what it exposes and calls tools.
"""

import asyncio
import json
from pathlib import Path
from typing import Any, Optional

import click

from ld_agent.errors import ConfigurationError, LdAgentError
from ld_agent.loader import PluginLoader
from ld_agent.utils.config import LdAgentSettings, get_settings
from ld_agent.utils.logging import configure_root_logging
import logging

logger = logging.getLogger(__name__)


def _parse_argument(raw: str) -> tuple[str, Any]:
    """Parse a ``key=value`` option; values are JSON where possible."""
    key, sep, value = raw.partition("=")
    if not sep or not key:
        raise click.BadParameter(f"Expected key=value, got {raw!r}")
    try:
        return key, json.loads(value)
    except json.JSONDecodeError:
        return key, value


def _check_settings(settings: LdAgentSettings) -> None:
    """Raise ConfigurationError if the settings cannot be used."""
    validation_result = settings.validate_settings()
    for warning in validation_result.warnings:
        logger.debug(f"Settings warning: {warning}")
    if not validation_result.valid:
        raise ConfigurationError("; ".join(validation_result.errors))


def _build_loader(ctx: click.Context) -> PluginLoader:
    return PluginLoader(ctx.obj["plugins_dir"], silent=ctx.obj["silent"])


@click.group()
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose logging')
@click.option('--plugins-dir', type=click.Path(path_type=Path),
              help='Directory to load plugins from')
@click.pass_context
def cli(ctx: click.Context, verbose: bool, plugins_dir: Optional[Path]) -> None:
    """ld-agent - dynamic tool loading for agentic systems."""
    settings = get_settings()
    ctx.ensure_object(dict)
    ctx.obj['plugins_dir'] = plugins_dir or settings.get_plugins_directory()
    ctx.obj['silent'] = settings.silent and not verbose

    try:
        _check_settings(settings)
    except ConfigurationError as e:
        click.echo(f"Error [{e.error_code}]: {e}", err=True)
        ctx.exit(1)

    configure_root_logging(
        level="DEBUG" if verbose else settings.log_level.upper(),
        structured=settings.log_structured,
        log_file=settings.get_log_file_path(),
    )


@cli.command('list')
@click.pass_context
def list_command(ctx: click.Context) -> None:
    """Load all plugins and list their tools."""
    loader = _build_loader(ctx)
    loaded = asyncio.run(loader.load_all())
    click.echo(f"Loaded {loaded} plugins")

    tools = loader.list_tools()
    click.echo(f"Available tools ({len(tools)}):")
    for tool in tools:
        click.echo(f"  - {tool}")

    plugins = loader.list_plugins()
    click.echo(f"Loaded plugins ({len(plugins)}):")
    for name, info in plugins.items():
        click.echo(f"  - {name}: {info.name} v{info.version} - {info.description}")


@cli.command()
@click.argument('tool_name')
@click.option('--arg', '-a', 'arguments', multiple=True, help='Tool argument as key=value')
@click.pass_context
def call(ctx: click.Context, tool_name: str, arguments: tuple[str, ...]) -> None:
    """Load all plugins and call TOOL_NAME."""
    args = dict(_parse_argument(raw) for raw in arguments)
    loader = _build_loader(ctx)

    async def _run() -> Any:
        await loader.load_all()
        return await loader.call_tool(tool_name, args)

    try:
        result = asyncio.run(_run())
    except LdAgentError as e:
        click.echo(f"Error [{e.error_code}]: {e}", err=True)
        ctx.exit(1)

    click.echo(json.dumps(result, default=str))


@cli.command()
@click.argument('location', type=click.Path(path_type=Path, exists=True))
@click.pass_context
def check(ctx: click.Context, location: Path) -> None:
    """Load a single plugin at LOCATION and report any error."""
    loader = _build_loader(ctx)
    try:
        plugin = asyncio.run(loader.load_plugin_file(location))
    except LdAgentError as e:
        click.echo(f"Error [{e.error_code}]: {e}", err=True)
        ctx.exit(1)

    tools = loader.get_registry().tools_for(plugin.name)
    click.echo(f"OK: {plugin.name} ({plugin.info.name} v{plugin.info.version}) with {len(tools)} tools")
    for tool in tools:
        click.echo(f"  - {tool}")


if __name__ == '__main__':
    cli()
