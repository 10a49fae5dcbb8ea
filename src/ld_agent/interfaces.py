"""
Plugin interfaces and data models for ld-agent.

This module defines the records a plugin declares (metadata, tools and their
parameters) and the records the loader builds from them.
"""

from collections.abc import Callable
from pathlib import Path
from typing import Any, Protocol

from pydantic import BaseModel, ConfigDict, Field

ANY_PLATFORM = "any"


class EnvVar(BaseModel):
    """Declaration of an environment variable a plugin reads."""
    description: str
    default: str = ""
    required: bool = False


class ModuleInfo(BaseModel):
    """Plugin metadata model."""
    name: str
    description: str
    author: str
    version: str
    platform: str = ANY_PLATFORM
    runtime_requires: str | None = None
    dependencies: list[str] = Field(default_factory=list)
    environment_variables: dict[str, EnvVar] = Field(default_factory=dict)


class Parameter(BaseModel):
    """One named input of a tool."""
    type: str
    description: str
    required: bool = True
    default: Any = None


class Tool(BaseModel):
    """An invocable capability exported by a plugin."""
    name: str
    description: str
    function: Callable[..., Any]
    parameters: dict[str, Parameter] = Field(default_factory=dict)
    return_type: str = "any"
    is_async: bool = Field(default=False, alias="async")

    # Pydantic v2 configuration
    model_config = ConfigDict(populate_by_name=True)

    def parameter_order(self) -> list[str]:
        """Return parameter names in declaration order.

        This is the positional order used when the tool is invoked.
        """
        return list(self.parameters.keys())


class ModuleExports(BaseModel):
    """Everything a plugin exposes. Only tools are registered."""
    tools: list[Tool] = Field(default_factory=list)
    agents: list[Any] = Field(default_factory=list)
    resources: list[Any] = Field(default_factory=list)
    models: list[Any] = Field(default_factory=list)
    utilities: list[Tool] = Field(default_factory=list)


class Plugin(BaseModel):
    """A successfully loaded plugin."""
    name: str
    info: ModuleInfo
    exports: ModuleExports
    location: Path
    module: Any = Field(default=None, repr=False)

    # Pydantic v2 configuration
    model_config = ConfigDict(arbitrary_types_allowed=True)


class PluginInterface(Protocol):
    """Members a plugin module exposes.

    A module may also define a zero-argument ``init`` function, sync or async,
    which the loader calls once the plugin is registered.
    """
    module_info: ModuleInfo | dict[str, Any]
    module_exports: ModuleExports | dict[str, Any]
