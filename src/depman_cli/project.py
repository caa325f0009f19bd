"""Project state: the manifest and lock file a CLI run works against."""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .config import get_lockfile_filename, get_manifest_filename
from .deps.lockfile import LockFile, get_lockfile_path
from .deps.manifest import get_manifest_path, parse_manifest
from .deps.package_manager import PackageManager

logger = logging.getLogger(__name__)


@dataclass
class Project:
    """Locations of a project's manifest and lock file."""

    manifest_path: Path
    lockfile_path: Path

    @classmethod
    def from_paths(
        cls,
        project_root: Path,
        manifest_path: Optional[Path] = None,
        lockfile_path: Optional[Path] = None,
    ) -> "Project":
        """Resolve paths, falling back to the configured file names."""
        return cls(
            manifest_path=manifest_path or get_manifest_path(project_root, get_manifest_filename()),
            lockfile_path=lockfile_path or get_lockfile_path(project_root, get_lockfile_filename()),
        )

    def has_manifest(self) -> bool:
        return self.manifest_path.exists()

    def has_lockfile(self) -> bool:
        return self.lockfile_path.exists()

    def load_manager(self) -> PackageManager:
        """Build a manager from the manifest, then restore installed state.

        A missing manifest yields an empty graph. A missing or unreadable lock
        file means nothing is installed.

        Raises:
            ValueError: If the manifest is malformed
        """
        manager = PackageManager()
        if self.has_manifest():
            parse_manifest(self.manifest_path).apply(manager)
            logger.debug("Loaded %d package definitions from %s",
                         len(manager.packages), self.manifest_path)

        lockfile = LockFile.read(self.lockfile_path)
        if lockfile:
            lockfile.apply(manager)
            logger.debug("Restored %d installed packages from %s",
                         len(lockfile.packages), self.lockfile_path)
        elif self.has_lockfile():
            logger.warning("Ignoring unreadable lock file %s", self.lockfile_path)
        return manager

    def save(self, manager: PackageManager) -> None:
        """Write the manager's installed state to the lock file."""
        LockFile.from_manager(manager).write(self.lockfile_path)
        logger.debug("Wrote %s", self.lockfile_path)

    def clear(self) -> None:
        """Forget all installed state."""
        if self.has_lockfile():
            self.lockfile_path.unlink()
