"""Parser for package graph manifests (depman.yml format).

A manifest declares every known package and its direct dependencies:

    name: my-project
    packages:
      a: [b, c]
      b: [c, d]
      f:

Entries are applied to a PackageManager in file order.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from .package_manager import PackageManager


@dataclass
class Manifest:
    """Package definitions loaded from a manifest file."""

    name: Optional[str] = None
    packages: Dict[str, List[str]] = field(default_factory=dict)

    def add_package(self, name: str, dependencies: List[str]) -> None:
        """Add or replace the definition of a package."""
        self.packages[name] = list(dependencies)

    def apply(self, manager: PackageManager) -> None:
        """Define every manifest package on the manager."""
        for name, dependencies in self.packages.items():
            manager.define(name, *dependencies)

    def to_yaml(self) -> str:
        """Serialize to YAML string."""
        data: Dict[str, Any] = {}
        if self.name:
            data["name"] = self.name
        data["packages"] = {name: list(deps) for name, deps in self.packages.items()}
        return yaml.safe_dump(data, default_flow_style=None, sort_keys=False, allow_unicode=True)

    def write(self, path: Path) -> None:
        """Write manifest to disk."""
        path.write_text(self.to_yaml(), encoding="utf-8")

    @classmethod
    def from_dict(cls, data: Any) -> "Manifest":
        """Build a manifest from parsed YAML data.

        Raises:
            ValueError: If the data does not follow the manifest layout
        """
        if data is None:
            return cls()
        if not isinstance(data, dict):
            raise ValueError("Manifest must be a mapping")

        raw_packages = data.get("packages") or {}
        if not isinstance(raw_packages, dict):
            raise ValueError("'packages' must map package names to dependency lists")

        manifest = cls(name=data.get("name"))
        for name, deps in raw_packages.items():
            manifest.add_package(str(name), _parse_dependency_list(name, deps))
        return manifest


def _parse_dependency_list(name: Any, deps: Any) -> List[str]:
    if deps is None:
        return []
    if isinstance(deps, str):
        # Allow the single-dependency shorthand "a: b"
        return [deps]
    if not isinstance(deps, list) or not all(isinstance(d, str) for d in deps):
        raise ValueError(f"Dependencies of '{name}' must be a list of package names")
    return list(deps)


def parse_manifest(manifest_path: Path) -> Manifest:
    """Parse a depman.yml manifest file.

    Args:
        manifest_path: Path to the manifest file

    Returns:
        Manifest: Parsed manifest

    Raises:
        FileNotFoundError: If the manifest does not exist
        ValueError: If the manifest is invalid YAML or malformed
    """
    if not manifest_path.exists():
        raise FileNotFoundError(f"Manifest not found: {manifest_path}")

    try:
        with open(manifest_path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in {manifest_path.name}: {e}")

    return Manifest.from_dict(data)


def load_manifest_or_create(manifest_path: Path) -> Manifest:
    """Load an existing manifest or start an empty one named after its directory."""
    if manifest_path.exists():
        return parse_manifest(manifest_path)
    return Manifest(name=manifest_path.resolve().parent.name)


def get_manifest_path(project_root: Path, filename: str = "depman.yml") -> Path:
    """Get the path to the manifest for a project."""
    return project_root / filename
