"""
Tool registry for ld-agent.

Holds three consistent views keyed by name: tools (by qualified name),
plugins and plugin metadata. The registry trusts its caller; validation
happens in the loader before anything is written here.
"""

import threading

from ld_agent.interfaces import ModuleInfo, Plugin, Tool
import logging

logger = logging.getLogger(__name__)


def qualified_name(plugin_name: str, tool_name: str) -> str:
    """Join a plugin name and tool name into a registry key."""
    return f"{plugin_name}.{tool_name}"


class ToolRegistry:
    """Registry of loaded plugins and the tools they export."""

    def __init__(self):
        """Initialize an empty registry."""
        self.tools: dict[str, Tool] = {}
        self.plugins: dict[str, Plugin] = {}
        self.metadata: dict[str, ModuleInfo] = {}
        self._owners: dict[str, str] = {}  # qualified tool name -> plugin name
        self._lock = threading.RLock()

    def register(self, plugin: Plugin) -> None:
        """Register a plugin, its metadata and all of its tools in one step.

        Tools previously owned by a plugin of the same name are dropped first,
        so reloading never leaves stale entries behind. When two tools share a
        qualified name the later one wins.
        """
        with self._lock:
            self._drop_tools(plugin.name)
            self.register_plugin(plugin)
            for tool in plugin.exports.tools:
                self.register_tool(plugin.name, tool)

    def register_plugin(self, plugin: Plugin) -> None:
        """Register a plugin and its metadata, overwriting any prior entry."""
        with self._lock:
            if plugin.name in self.plugins:
                logger.debug(f"Plugin {plugin.name} already registered, overwriting")
            self.plugins[plugin.name] = plugin
            self.metadata[plugin.name] = plugin.info

    def register_tool(self, plugin_name: str, tool: Tool) -> str:
        """Register a tool under ``<plugin_name>.<tool.name>``.

        Returns:
            The qualified name the tool was stored under
        """
        key = qualified_name(plugin_name, tool.name)
        with self._lock:
            self.tools[key] = tool
            self._owners[key] = plugin_name
        return key

    def get(self, name: str) -> Tool | None:
        """Look up a tool by qualified name."""
        with self._lock:
            return self.tools.get(name)

    def get_plugin(self, plugin_name: str) -> Plugin | None:
        """Look up a plugin by name."""
        with self._lock:
            return self.plugins.get(plugin_name)

    def tools_for(self, plugin_name: str) -> list[str]:
        """List the qualified tool names owned by a plugin."""
        with self._lock:
            return [name for name in self.tools if self._owners.get(name) == plugin_name]

    def list_tool_names(self) -> list[str]:
        """List qualified tool names in registration order."""
        with self._lock:
            return list(self.tools.keys())

    def list_plugins(self) -> dict[str, ModuleInfo]:
        """Return a snapshot of plugin metadata, detached from the registry."""
        with self._lock:
            return {name: info.model_copy(deep=True) for name, info in self.metadata.items()}

    def _drop_tools(self, plugin_name: str) -> None:
        for name in self.tools_for(plugin_name):
            del self.tools[name]
            del self._owners[name]
