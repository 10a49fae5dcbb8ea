"""
Platform and runtime compatibility checks for plugins.
"""

import platform
import sys
from dataclasses import dataclass

from ld_agent.interfaces import ANY_PLATFORM, ModuleInfo

MIN_VERSION_PREFIX = ">="


@dataclass(frozen=True)
class RuntimeEnvironment:
    """The platform and Python version plugins are checked against."""

    platform: str
    runtime_version: str

    @classmethod
    def current(cls) -> "RuntimeEnvironment":
        """Describe the running interpreter."""
        return cls(platform=sys.platform, runtime_version=platform.python_version())


def incompatibility_reason(info: ModuleInfo, environment: RuntimeEnvironment) -> str | None:
    """Explain why a plugin cannot run here, or return None if it can.

    The runtime check is a plain string comparison against a ``>=`` constraint,
    so "3.9" sorts above "3.10". Constraints in any other form are ignored.
    """
    if info.platform != ANY_PLATFORM and info.platform != environment.platform:
        return f"requires platform {info.platform}, running on {environment.platform}"

    if info.runtime_requires and info.runtime_requires.startswith(MIN_VERSION_PREFIX):
        required = info.runtime_requires[len(MIN_VERSION_PREFIX):].strip()
        if environment.runtime_version < required:
            return f"requires Python {info.runtime_requires}, running {environment.runtime_version}"

    return None


def is_compatible(info: ModuleInfo, environment: RuntimeEnvironment | None = None) -> bool:
    """Check whether a plugin's declared requirements match the environment."""
    return incompatibility_reason(info, environment or RuntimeEnvironment.current()) is None
