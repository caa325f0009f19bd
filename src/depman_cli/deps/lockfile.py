"""Lock file support for depman installed state.

Records which packages are installed, the dependency list each was installed
with, and which installed packages require it, so a later run can pick up
exactly where the previous one left off.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from .. import __version__
from .package_manager import PackageManager


@dataclass
class LockedPackage:
    """An installed package as recorded in the lock file."""

    name: str
    depends_on: List[str] = field(default_factory=list)
    required_by: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to dict for YAML output."""
        result: Dict[str, Any] = {"name": self.name}
        if self.depends_on:
            result["depends_on"] = list(self.depends_on)
        if self.required_by:
            result["required_by"] = list(self.required_by)
        return result

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "LockedPackage":
        """Deserialize from dict.

        Raises:
            ValueError: If a name list is not a list of strings
        """
        return cls(
            name=data["name"],
            depends_on=_name_list(data, "depends_on"),
            required_by=_name_list(data, "required_by"),
        )


def _name_list(data: Dict[str, Any], key: str) -> List[str]:
    value = data.get(key)
    if value is None:
        return []
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise ValueError(f"'{key}' of locked package '{data.get('name')}' must be a list of names")
    return list(value)


@dataclass
class LockFile:
    """depman lock file."""

    lockfile_version: str = "1"
    generated_at: str = field(
        default_factory=lambda: datetime.now(timezone.utc).isoformat()
    )
    depman_version: Optional[str] = None
    packages: Dict[str, LockedPackage] = field(default_factory=dict)

    def add_package(self, locked: LockedPackage) -> None:
        """Add a package to the lock file."""
        self.packages[locked.name] = locked

    def get_package(self, name: str) -> Optional[LockedPackage]:
        return self.packages.get(name)

    def get_all_packages(self) -> List[LockedPackage]:
        """Get all locked packages sorted by name."""
        return sorted(self.packages.values(), key=lambda p: p.name)

    def to_yaml(self) -> str:
        """Serialize to YAML string."""
        data: Dict[str, Any] = {
            "lockfile_version": self.lockfile_version,
            "generated_at": self.generated_at,
        }
        if self.depman_version:
            data["depman_version"] = self.depman_version
        data["packages"] = [p.to_dict() for p in self.get_all_packages()]
        return yaml.dump(
            data, default_flow_style=False, sort_keys=False, allow_unicode=True
        )

    @classmethod
    def from_yaml(cls, yaml_str: str) -> "LockFile":
        """Deserialize from YAML string."""
        data = yaml.safe_load(yaml_str)
        if not data or not isinstance(data, dict):
            return cls()
        lock = cls(
            lockfile_version=str(data.get("lockfile_version", "1")),
            generated_at=data.get("generated_at", ""),
            depman_version=data.get("depman_version"),
        )
        for pkg_data in data.get("packages") or []:
            lock.add_package(LockedPackage.from_dict(pkg_data))
        return lock

    def write(self, path: Path) -> None:
        """Write lock file to disk."""
        path.write_text(self.to_yaml(), encoding="utf-8")

    @classmethod
    def read(cls, path: Path) -> Optional["LockFile"]:
        """Read lock file from disk. Returns None if not exists or corrupt."""
        if not path.exists():
            return None
        try:
            return cls.from_yaml(path.read_text(encoding="utf-8"))
        except (yaml.YAMLError, ValueError, KeyError, TypeError):
            return None

    @classmethod
    def from_manager(cls, manager: PackageManager) -> "LockFile":
        """Capture the installed state of a manager."""
        lock = cls(depman_version=__version__)
        for package, required_by in manager.snapshot():
            lock.add_package(LockedPackage(
                name=package.name,
                depends_on=list(package.depends_on),
                required_by=required_by,
            ))
        return lock

    def apply(self, manager: PackageManager) -> None:
        """Restore the recorded installed state onto a manager."""
        for locked in self.packages.values():
            manager.restore(locked.name, locked.depends_on, locked.required_by)


def get_lockfile_path(project_root: Path, filename: str = "depman.lock") -> Path:
    """Get the path to the lock file for a project."""
    return project_root / filename
