"""
Plugin discovery for ld-agent.

Scans a plugins directory (non-recursively) for single-file plugins and
package plugins, and drives a loader over each candidate.
"""

from pathlib import Path
from typing import TYPE_CHECKING

import logging

if TYPE_CHECKING:
    from ld_agent.loader import PluginLoader

logger = logging.getLogger(__name__)

SOURCE_SUFFIXES = (".py",)
# Checked in this order; the first entry point found wins.
INDEX_ENTRY_POINTS = ("main.py", "__init__.py")
HIDDEN_PREFIXES = (".", "_")


def resolve_entry_point(package_dir: Path) -> Path | None:
    """Find the index entry point of a package plugin.

    Args:
        package_dir: Directory holding the plugin

    Returns:
        Path to the entry point or None if the directory has none
    """
    for entry_point in INDEX_ENTRY_POINTS:
        candidate = package_dir / entry_point
        if candidate.is_file():
            return candidate
    return None


class PluginDiscovery:
    """Finds loadable plugins in a single directory."""

    def __init__(self, plugins_dir: Path):
        """Initialize plugin discovery.

        Args:
            plugins_dir: Directory to scan for plugins
        """
        self.plugins_dir = Path(plugins_dir)

    def find_candidates(self) -> list[Path]:
        """List plugin files and package directories, sorted by entry name.

        Package directories are only listed when they hold an entry point.
        Files and directories whose names start with "." or "_" are skipped,
        so a plugin file named like "_draft.py" is never loaded.

        Returns:
            Resolved paths of every loadable unit; empty if the directory
            does not exist
        """
        if not self.plugins_dir.is_dir():
            logger.debug(f"Plugins directory does not exist: {self.plugins_dir}")
            return []

        candidates = []
        for item in sorted(self.plugins_dir.iterdir()):
            if item.name.startswith(HIDDEN_PREFIXES):
                continue

            if item.is_file() and item.suffix in SOURCE_SUFFIXES:
                candidates.append(item.resolve())
            elif item.is_dir():
                if resolve_entry_point(item) is None:
                    logger.debug(f"Skipping {item}: no entry point")
                    continue
                candidates.append(item.resolve())

        logger.debug(f"Found {len(candidates)} plugin candidates in {self.plugins_dir}")
        return candidates

    async def load_into(self, loader: "PluginLoader") -> int:
        """Load every candidate through the loader, one at a time.

        A failing candidate never stops the others from loading.

        Args:
            loader: Loader that validates and registers each candidate

        Returns:
            Number of candidates that loaded successfully
        """
        loaded = 0
        for candidate in self.find_candidates():
            try:
                if await loader.load_plugin(candidate):
                    loaded += 1
            except Exception as e:
                logger.error(f"Unexpected error loading {candidate}: {e}")

        return loaded
