"""
Tool invocation for ld-agent.

Maps named arguments onto a tool's declared parameter order and normalizes
sync and async tool results into one awaited outcome.
"""

import inspect
from typing import Any

from ld_agent.errors import ToolInvocationError, ToolNotFoundError
from ld_agent.interfaces import Tool
from ld_agent.registry import ToolRegistry
import logging

logger = logging.getLogger(__name__)


def build_positional_args(tool: Tool, arguments: dict[str, Any]) -> list[Any]:
    """Project named arguments onto the tool's parameter order.

    Parameters missing from ``arguments`` become None. Declared defaults are
    not substituted, and names the tool does not declare are ignored.
    """
    return [arguments.get(name) for name in tool.parameter_order()]


class ToolInvoker:
    """Executes registered tools by qualified name."""

    def __init__(self, registry: ToolRegistry):
        """Initialize the invoker.

        Args:
            registry: Registry to resolve qualified tool names against
        """
        self.registry = registry

    async def call(self, name: str, arguments: dict[str, Any] | None = None) -> Any:
        """Invoke a tool and return its result.

        Args:
            name: Qualified tool name, e.g. ``calculator.add_numbers``
            arguments: Named arguments for the tool

        Returns:
            The tool's return value, awaited if the tool returned an awaitable

        Raises:
            ToolNotFoundError: If no tool is registered under ``name``
            ToolInvocationError: If the tool raises or its awaitable fails
        """
        tool = self.registry.get(name)
        if tool is None:
            raise ToolNotFoundError(name)

        args = build_positional_args(tool, arguments or {})
        try:
            result = tool.function(*args)
            if inspect.isawaitable(result):
                result = await result
        except Exception as e:
            logger.error(f"Tool {name} execution failed: {e}")
            raise ToolInvocationError(name, e) from e

        logger.debug(f"Tool {name} executed successfully")
        return result
