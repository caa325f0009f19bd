"""Dependency graph management package for depman."""

from .errors import (
    DependencyError, PackageNotDefinedError, DependentsExistError,
    CircularDependencyError
)
from .package_manager import PackageManager
from .manifest import Manifest, parse_manifest, load_manifest_or_create, get_manifest_path
from .lockfile import LockFile, LockedPackage, get_lockfile_path

__all__ = [
    'DependencyError',
    'PackageNotDefinedError',
    'DependentsExistError',
    'CircularDependencyError',
    'PackageManager',
    'Manifest',
    'parse_manifest',
    'load_manifest_or_create',
    'get_manifest_path',
    'LockFile',
    'LockedPackage',
    'get_lockfile_path',
]
