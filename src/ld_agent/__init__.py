"""
ld-agent - dynamic linking for agentic systems.

This package provides:
- Discovery of plugin files and package plugins in a directory
- Validation of plugin metadata and exported tools
- Platform and runtime compatibility filtering
- A per-loader registry of tools addressed as ``<plugin>.<tool>``
- Invocation of sync and async tools with named arguments

Usage:
    from ld_agent import create_loader

    loader = create_loader("plugins")
    await loader.load_all()
    result = await loader.call_tool("calculator.add_numbers", {"a": 1, "b": 2})
"""

from ld_agent.compatibility import RuntimeEnvironment, is_compatible
from ld_agent.errors import (
    ConfigurationError,
    IncompatiblePluginError,
    LdAgentError,
    MissingMetadataError,
    PluginError,
    PluginLoadError,
    ToolInvocationError,
    ToolNotFoundError,
    ValidationError,
)
from ld_agent.interfaces import (
    ANY_PLATFORM,
    EnvVar,
    ModuleExports,
    ModuleInfo,
    Parameter,
    Plugin,
    PluginInterface,
    Tool,
)
from ld_agent.loader import PluginLoader, create_loader
from ld_agent.registry import ToolRegistry

__all__ = [
    # Data model
    "ANY_PLATFORM",
    "EnvVar",
    "ModuleInfo",
    "ModuleExports",
    "Parameter",
    "Plugin",
    "PluginInterface",
    "Tool",

    # Main components
    "PluginLoader",
    "ToolRegistry",
    "RuntimeEnvironment",
    "create_loader",
    "is_compatible",

    # Exceptions
    "LdAgentError",
    "ConfigurationError",
    "PluginError",
    "ToolNotFoundError",
    "ToolInvocationError",
    "PluginLoadError",
    "IncompatiblePluginError",
    "MissingMetadataError",
    "ValidationError",
]

__version__ = "0.1.0"
