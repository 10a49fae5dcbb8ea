"""
Simple calculator plugin for ld-agent.

Exposes ``calculator.add_numbers``.
"""

import logging

logger = logging.getLogger(__name__)


def add_numbers(a: float, b: float) -> float:
    """Add two numbers together."""
    return a + b


module_info = {
    "name": "Simple Calculator",
    "description": "Basic arithmetic operations",
    "author": "ld-agent Team",
    "version": "1.0.0",
    "platform": "any",
    "runtime_requires": ">=3.10",
    "dependencies": [],
    "environment_variables": {},
}

module_exports = {
    "tools": [
        {
            "name": "add_numbers",
            "description": "Add two numbers together and return the result",
            "function": add_numbers,
            "parameters": {
                "a": {
                    "type": "number",
                    "description": "First number to add",
                    "required": True,
                },
                "b": {
                    "type": "number",
                    "description": "Second number to add",
                    "required": True,
                },
            },
            "return_type": "number",
            "async": False,
        },
    ],
    "agents": [],
    "resources": [],
    "models": [],
    "utilities": [],
}


async def init() -> None:
    logger.info("Calculator plugin initialized")
