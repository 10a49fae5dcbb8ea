"""
Plugin loader for ld-agent.

This module loads plugin modules from disk, validates what they declare,
filters out incompatible ones and registers their tools.
"""

import asyncio
import hashlib
import importlib
import importlib.util
import inspect
import logging
import sys
from pathlib import Path
from typing import Any

from ld_agent.compatibility import RuntimeEnvironment, incompatibility_reason
from ld_agent.discovery import PluginDiscovery, resolve_entry_point
from ld_agent.errors import (
    IncompatiblePluginError,
    MissingMetadataError,
    PluginLoadError,
)
from ld_agent.interfaces import ModuleInfo, Plugin, PluginInterface, Tool
from ld_agent.invoker import ToolInvoker
from ld_agent.registry import ToolRegistry
from ld_agent.utils.config import get_settings
from ld_agent.validation import SchemaValidator

logger = logging.getLogger(__name__)

MODULE_PREFIX = "ld_agent_plugin_"


def plugin_name_for(location: Path) -> str:
    """Derive a plugin name: the file stem, or the directory name for packages."""
    return location.name if location.is_dir() else location.stem


def module_name_for(plugin_name: str, entry_point: Path) -> str:
    """Build the sys.modules key a plugin is loaded under.

    The path digest keeps same-named plugins from different directories apart.
    """
    digest = hashlib.sha1(str(entry_point).encode("utf-8")).hexdigest()[:10]
    return f"{MODULE_PREFIX}{plugin_name}_{digest}"


class PluginLoader:
    """Discovers, loads and registers plugins, and invokes their tools."""

    def __init__(
        self,
        plugins_dir: str | Path = "plugins",
        silent: bool = False,
        environment: RuntimeEnvironment | None = None,
    ):
        """Initialize the plugin loader.

        Args:
            plugins_dir: Directory scanned by load_all
            silent: Log progress and failures at DEBUG level only
            environment: Environment plugins are checked against
                (defaults to the running interpreter)
        """
        self.plugins_dir = Path(plugins_dir)
        self.silent = silent
        self.environment = environment or RuntimeEnvironment.current()
        self.registry = ToolRegistry()
        self.discovery = PluginDiscovery(self.plugins_dir)
        self.validator = SchemaValidator()
        self.invoker = ToolInvoker(self.registry)
        self._loading_lock = asyncio.Lock()

    def _log(self, level: int, message: str) -> None:
        logger.log(logging.DEBUG if self.silent else level, message)

    async def load_all(self) -> int:
        """Load every plugin found in the plugins directory.

        Returns:
            Number of plugins loaded successfully
        """
        loaded = await self.discovery.load_into(self)
        if loaded > 0:
            self._log(logging.INFO, f"Loaded {loaded} plugins from {self.plugins_dir}")
        return loaded

    async def load_plugin(self, location: str | Path) -> bool:
        """Load a single plugin without raising.

        Args:
            location: Plugin file or package directory

        Returns:
            True if the plugin was loaded and registered
        """
        try:
            await self.load_plugin_file(location)
            return True
        except Exception:
            return False

    async def load_plugin_file(self, location: str | Path) -> Plugin:
        """Load, validate and register a single plugin.

        Args:
            location: Plugin file or package directory

        Returns:
            The registered plugin

        Raises:
            MissingMetadataError: If module_info or module_exports is absent
            IncompatiblePluginError: If the platform or runtime does not match
            PluginLoadError: On any other failure, validation and SystemExit
                raised at import included
        """
        location = Path(location).resolve()

        async with self._loading_lock:
            try:
                plugin_name = plugin_name_for(location)
                entry_point = self._resolve_entry_point(location)
                module = self._import_fresh(
                    module_name_for(plugin_name, entry_point), entry_point, is_package=location.is_dir()
                )
                interface = self._extract_interface(module, location)

                info, exports = self.validator.validate(interface.module_info, interface.module_exports)

                reason = incompatibility_reason(info, self.environment)
                if reason is not None:
                    self._log(logging.WARNING, f"{location.name} not compatible: {reason}")
                    raise IncompatiblePluginError(plugin_name, reason)

                plugin = Plugin(
                    name=plugin_name,
                    info=info,
                    exports=exports,
                    location=entry_point,
                    module=module,
                )
                self.registry.register(plugin)

            except (MissingMetadataError, IncompatiblePluginError):
                raise
            except (Exception, SystemExit) as e:
                self._log(logging.ERROR, f"Failed to load {location.name}: {e}")
                raise PluginLoadError(location, e) from e

            await self._run_init(plugin)

        self._log(logging.INFO, f"Loaded {info.name} {info.version} as {plugin_name}")
        return plugin

    def get_tool(self, name: str) -> Tool | None:
        """Get a tool by qualified name."""
        return self.registry.get(name)

    def list_tools(self) -> list[str]:
        """List qualified names of all registered tools."""
        return self.registry.list_tool_names()

    def list_plugins(self) -> dict[str, ModuleInfo]:
        """Snapshot of loaded plugin metadata keyed by plugin name."""
        return self.registry.list_plugins()

    async def call_tool(self, name: str, args: dict[str, Any] | None = None) -> Any:
        """Invoke a tool by qualified name with named arguments."""
        return await self.invoker.call(name, args)

    def get_registry(self) -> ToolRegistry:
        """Get the registry owned by this loader."""
        return self.registry

    def _resolve_entry_point(self, location: Path) -> Path:
        if not location.is_dir():
            return location

        entry_point = resolve_entry_point(location)
        if entry_point is None:
            raise FileNotFoundError(f"No entry point found in {location}")
        return entry_point

    def _import_fresh(self, module_name: str, entry_point: Path, is_package: bool = False):
        """Import a plugin module, discarding any previously loaded copy.

        Package plugins get their directory as submodule search location so
        relative imports inside the package resolve.
        """
        self._invalidate(module_name, entry_point)

        search_locations = [str(entry_point.parent)] if is_package else None

        spec = importlib.util.spec_from_file_location(
            module_name, entry_point, submodule_search_locations=search_locations
        )
        if spec is None or spec.loader is None:
            raise ImportError(f"Could not create module spec for {entry_point}")

        module = importlib.util.module_from_spec(spec)
        sys.modules[module_name] = module
        try:
            spec.loader.exec_module(module)
        except BaseException:
            sys.modules.pop(module_name, None)
            raise

        return module

    def _invalidate(self, module_name: str, entry_point: Path) -> None:
        for name in list(sys.modules):
            if name == module_name or name.startswith(f"{module_name}."):
                del sys.modules[name]

        if sys.implementation.cache_tag is not None:
            cached = Path(importlib.util.cache_from_source(str(entry_point)))
            try:
                cached.unlink(missing_ok=True)
            except OSError as e:
                logger.debug(f"Could not remove cached bytecode {cached}: {e}")
        importlib.invalidate_caches()

    def _extract_interface(self, module: Any, location: Path) -> PluginInterface:
        for attribute in ("module_info", "module_exports"):
            if getattr(module, attribute, None) is None:
                self._log(logging.WARNING, f"{location.name} missing {attribute}")
                raise MissingMetadataError(location, attribute)
        return module

    async def _run_init(self, plugin: Plugin) -> None:
        """Call the plugin's init function; failures are logged, never raised."""
        init = getattr(plugin.module, "init", None)
        if init is None:
            return

        try:
            result = init()
            if inspect.isawaitable(result):
                await result
            self._log(logging.INFO, f"Initialized {plugin.name}")
        except (Exception, SystemExit) as e:
            self._log(logging.WARNING, f"Failed to initialize {plugin.name}: {e}")


def create_loader(plugins_dir: str | Path | None = None, silent: bool | None = None) -> PluginLoader:
    """Create a loader, falling back to configured settings for unset options."""
    settings = get_settings()
    return PluginLoader(
        plugins_dir=plugins_dir if plugins_dir is not None else settings.get_plugins_directory(),
        silent=settings.silent if silent is None else silent,
    )
