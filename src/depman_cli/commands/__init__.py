"""Click commands for depman."""

import sys

from ..deps.package_manager import PackageManager
from ..project import Project
from ..utils.console import _rich_error


def load_manager_or_exit(project: Project) -> PackageManager:
    """Load project state, exiting with a readable error on a bad manifest."""
    try:
        return project.load_manager()
    except (FileNotFoundError, ValueError) as e:
        _rich_error(f"Failed to load {project.manifest_path}: {e}")
        sys.exit(1)
