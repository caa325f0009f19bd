"""Exceptions raised by dependency graph operations."""

from typing import Iterable, List


class DependencyError(Exception):
    """Base class for dependency graph errors."""


class PackageNotDefinedError(DependencyError):
    """Raised when installing a package that was never defined."""

    def __init__(self, package: str):
        self.package = package
        super().__init__(f"Package '{package}' is not defined")


class DependentsExistError(DependencyError):
    """Raised when removing a package that installed packages still need."""

    def __init__(self, package: str, dependents: Iterable[str]):
        self.package = package
        self.dependents: List[str] = sorted(dependents)
        super().__init__(
            f"Cannot remove '{package}': required by {', '.join(self.dependents)}"
        )


class CircularDependencyError(DependencyError):
    """Raised when an install would traverse a dependency cycle."""

    def __init__(self, cycle: List[str]):
        self.cycle = list(cycle)
        super().__init__(f"Circular dependency detected: {' -> '.join(self.cycle)}")
