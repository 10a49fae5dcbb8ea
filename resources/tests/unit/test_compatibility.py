"""
Unit tests for plugin compatibility checks.
"""

import platform
import sys

import pytest

from ld_agent.compatibility import RuntimeEnvironment, incompatibility_reason, is_compatible
from ld_agent.interfaces import ModuleInfo


def _info(**overrides) -> ModuleInfo:
    return ModuleInfo(
        name="Test Plugin",
        description="A test plugin",
        author="Test Author",
        version="1.0.0",
        **overrides,
    )


class TestRuntimeEnvironment:
    """Test RuntimeEnvironment."""

    def test_current(self):
        """The current environment describes the running interpreter."""
        env = RuntimeEnvironment.current()

        assert env.platform == sys.platform
        assert env.runtime_version == platform.python_version()


class TestCompatibility:
    """Test platform and runtime checks."""

    def test_any_platform(self, environment):
        assert is_compatible(_info(), environment)

    def test_matching_platform(self, environment):
        assert is_compatible(_info(platform="linux"), environment)

    def test_platform_mismatch(self, environment):
        info = _info(platform="win32")

        assert not is_compatible(info, environment)
        assert "win32" in incompatibility_reason(info, environment)

    def test_runtime_satisfied(self, environment):
        assert is_compatible(_info(runtime_requires=">=3.10"), environment)

    def test_runtime_too_old(self, environment):
        info = _info(runtime_requires=">=9.0")

        assert not is_compatible(info, environment)
        assert ">=9.0" in incompatibility_reason(info, environment)

    def test_runtime_with_space_after_prefix(self, environment):
        assert not is_compatible(_info(runtime_requires=">= 9.0"), environment)

    def test_runtime_compared_as_strings(self):
        """Versions are compared as plain strings, so 3.9 sorts above 3.10."""
        env = RuntimeEnvironment(platform="linux", runtime_version="3.9.18")

        assert is_compatible(_info(runtime_requires=">=3.10"), env)

    @pytest.mark.parametrize("constraint", ["<3.0", "==2.7", "~=3.8"])
    def test_other_constraints_ignored(self, environment, constraint):
        assert is_compatible(_info(runtime_requires=constraint), environment)

    def test_platform_checked_before_runtime(self, environment):
        info = _info(platform="darwin", runtime_requires=">=9.0")

        assert "darwin" in incompatibility_reason(info, environment)

    def test_defaults_to_current_environment(self):
        assert is_compatible(_info(platform=sys.platform))
