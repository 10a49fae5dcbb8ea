"""
Custom exception classes for ld-agent.

Every error carries a machine-readable ``error_code`` next to its message so
hosts can branch on the kind of failure without parsing text.
"""

from pathlib import Path
from typing import Any


class LdAgentError(Exception):
    """Base exception for all ld-agent errors."""

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        context: dict[str, Any] | None = None
    ):
        """Initialize the error.

        Args:
            message: Human-readable error message
            error_code: Machine-readable error code
            context: Additional context information for debugging
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.__class__.__name__.upper()
        self.context = context or {}


class ConfigurationError(LdAgentError):
    """Raised when there is an issue with the loader configuration."""

    def __init__(self, message: str):
        super().__init__(message, "CONFIGURATION_ERROR")


class PluginError(LdAgentError):
    """Base exception for plugin loading and tool invocation errors."""
    pass


class MissingMetadataError(PluginError):
    """Raised when a plugin module lacks module_info or module_exports."""

    def __init__(self, plugin_path: str | Path, missing: str):
        super().__init__(
            f"Plugin {plugin_path} missing required metadata: {missing}",
            "MISSING_METADATA",
            {"plugin_path": str(plugin_path), "missing": missing},
        )
        self.plugin_path = str(plugin_path)
        self.missing = missing


class ValidationError(PluginError):
    """Raised when plugin metadata or exports do not match the expected shape."""

    def __init__(self, message: str, field: str | None = None):
        super().__init__(message, "VALIDATION_FAILED", {"field": field})
        self.field = field


class IncompatiblePluginError(PluginError):
    """Raised when a plugin's platform or runtime requirement is not met."""

    def __init__(self, plugin_name: str, reason: str):
        super().__init__(
            f"Plugin {plugin_name} is not compatible: {reason}",
            "INCOMPATIBLE_PLUGIN",
            {"plugin_name": plugin_name, "reason": reason},
        )
        self.plugin_name = plugin_name
        self.reason = reason


class PluginLoadError(PluginError):
    """Raised when any other failure occurs while loading a plugin."""

    def __init__(self, plugin_path: str | Path, cause: BaseException | str):
        super().__init__(
            f"Failed to load plugin {plugin_path}: {cause}",
            "PLUGIN_LOAD_FAILED",
            {"plugin_path": str(plugin_path)},
        )
        self.plugin_path = str(plugin_path)
        self.cause = cause


class ToolNotFoundError(PluginError):
    """Raised when a qualified tool name has no registry entry."""

    def __init__(self, tool_name: str):
        super().__init__(f"Tool not found: {tool_name}", "TOOL_NOT_FOUND", {"tool_name": tool_name})
        self.tool_name = tool_name


class ToolInvocationError(PluginError):
    """Raised when a tool function fails or its awaitable result fails."""

    def __init__(self, tool_name: str, cause: Exception):
        super().__init__(
            f"Error calling tool {tool_name}: {cause}",
            "TOOL_INVOCATION_FAILED",
            {"tool_name": tool_name},
        )
        self.tool_name = tool_name
        self.cause = cause
