"""Dependency graph manager.

Tracks a graph of named packages and which of them are installed. Installing
walks dependencies depth-first so that every dependency is installed before
the packages that need it. Removing a package cascades to dependencies that
no other installed package still requires.
"""

import heapq
import logging
from typing import Dict, Iterable, List, Optional, Set, Tuple

from ..models.package import Package
from .errors import CircularDependencyError, DependentsExistError, PackageNotDefinedError

logger = logging.getLogger(__name__)


class PackageManager:
    """Owns a dependency graph and the installed state over it.

    The graph is append-only: definitions can be replaced but never deleted.
    Installed packages keep the dependency list they were installed with,
    so redefining an installed package only affects later installs.

    Example:
        >>> manager = PackageManager()
        >>> manager.define("a", "b", "c")
        >>> manager.define("b", "c")
        >>> manager.install("a")
        ['c', 'b', 'a']
    """

    def __init__(self):
        self._packages: Dict[str, Package] = {}
        self._installed: Dict[str, Package] = {}
        # name -> installed packages that reached it through a direct edge
        self._dependents: Dict[str, Set[str]] = {}

    # ------------------------------------------------------------------
    # Graph definition
    # ------------------------------------------------------------------

    def define(self, name: str, *dependencies: str) -> None:
        """Define a package and its direct dependencies.

        Replaces any earlier definition of ``name``. Dependencies that are not
        yet known are registered as packages without dependencies.
        """
        self._packages[name] = Package.create(name, dependencies)
        for dep in dependencies:
            if dep not in self._packages:
                self._packages[dep] = Package(dep)
        logger.debug("Defined %s -> %s", name, list(dependencies))

    @property
    def packages(self) -> List[Package]:
        """All defined packages in definition order."""
        return list(self._packages.values())

    def get_package(self, name: str) -> Optional[Package]:
        """Return the current definition of ``name``, if any."""
        return self._packages.get(name)

    # ------------------------------------------------------------------
    # Install
    # ------------------------------------------------------------------

    def install(self, name: str) -> List[str]:
        """Install a package and, first, its transitive dependencies.

        The order is built by prepending each dependency's own result, then
        stably re-sorted wherever that leaves a package ahead of a dependency
        it shares with an earlier sibling. So ``a -> b, c`` with ``b -> d``
        and ``c -> d`` yields ``d, c, b, a`` rather than ``c, d, b, a``.

        Args:
            name: Package to install

        Returns:
            List[str]: Newly installed packages, dependencies before their
                dependents and ``name`` last. Empty when ``name`` was
                already installed.

        Raises:
            PackageNotDefinedError: If ``name`` was never defined
            CircularDependencyError: If the packages that would be installed
                contain a cycle. Nothing is installed in that case.
        """
        package = self._packages.get(name)
        if package is None:
            raise PackageNotDefinedError(name)

        if name in self._installed:
            logger.debug("%s already installed", name)
            return []

        cycle = self._find_cycle(name)
        if cycle:
            raise CircularDependencyError(cycle)

        return self._dependencies_first(self._install(package))

    def _install(self, package: Package) -> List[str]:
        self._installed[package.name] = package

        order: List[str] = []
        for dep in package.depends_on:
            self._dependents.setdefault(dep, set()).add(package.name)
            if dep in self._installed:
                continue
            order = self._install(self._packages[dep]) + order

        order.append(package.name)
        logger.debug("Installed %s", package.name)
        return order

    def _dependencies_first(self, order: List[str]) -> List[str]:
        """Stable topological reorder of a fresh install result.

        Prepending each dependency's result leaves a later sibling ahead of a
        package an earlier sibling installed for it (diamonds). Packages are
        emitted in their prepend position unless a newly installed
        dependency has not been emitted yet, so results that are already
        ordered come back unchanged.
        """
        position = {name: i for i, name in enumerate(order)}
        waiting: Dict[str, Set[str]] = {
            name: {dep for dep in self._installed[name].depends_on if dep in position}
            for name in order
        }
        users: Dict[str, List[str]] = {name: [] for name in order}
        for name, deps in waiting.items():
            for dep in deps:
                users[dep].append(name)

        ready = [position[name] for name in order if not waiting[name]]
        heapq.heapify(ready)
        result: List[str] = []
        while ready:
            name = order[heapq.heappop(ready)]
            result.append(name)
            for user in users[name]:
                waiting[user].discard(name)
                if not waiting[user]:
                    heapq.heappush(ready, position[user])
        return result

    def _find_cycle(self, name: str) -> Optional[List[str]]:
        """Find a cycle among the not-yet-installed packages reachable from ``name``.

        Installed packages end the walk, as they do during installation.
        Returns the cycle as a path that starts and ends on the same package.
        """
        path: List[str] = []
        on_path: Set[str] = set()
        visited: Set[str] = set()

        def visit(current: str) -> Optional[List[str]]:
            if current in self._installed or current in visited:
                return None
            if current in on_path:
                return path[path.index(current):] + [current]

            path.append(current)
            on_path.add(current)
            for dep in self._packages[current].depends_on:
                cycle = visit(dep)
                if cycle:
                    return cycle
            path.pop()
            on_path.discard(current)
            visited.add(current)
            return None

        return visit(name)

    # ------------------------------------------------------------------
    # Remove
    # ------------------------------------------------------------------

    def remove(self, name: str) -> List[str]:
        """Remove an installed package and the dependencies only it needed.

        Dependencies still required by another installed package stay
        installed and are left out of the result.

        Args:
            name: Package to remove

        Returns:
            List[str]: Removed packages, ``name`` first. Empty when ``name``
                is not installed.

        Raises:
            DependentsExistError: If another installed package depends on
                ``name``. Nothing is removed in that case.
        """
        package = self._installed.get(name)
        if package is None:
            return []

        dependents = self._dependents.get(name)
        if dependents:
            raise DependentsExistError(name, dependents)

        del self._installed[name]
        self._dependents.pop(name, None)
        logger.debug("Removed %s", name)

        order = [name]
        for dep in package.depends_on:
            self._dependents.get(dep, set()).discard(name)
            try:
                order.extend(self.remove(dep))
            except DependentsExistError as e:
                logger.debug("Keeping %s, still required by %s", dep, e.dependents)
        return order

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def list_installed(self) -> Set[str]:
        """Return the names of all installed packages."""
        return set(self._installed)

    def is_installed(self, name: str) -> bool:
        return name in self._installed

    def get_dependents(self, name: str) -> Set[str]:
        """Return the installed packages that directly depend on ``name``."""
        return set(self._dependents.get(name, ()))

    def get_installed_dependencies(self, name: str) -> Tuple[str, ...]:
        """Return the dependency list ``name`` was installed with."""
        package = self._installed.get(name)
        return package.depends_on if package else ()

    # ------------------------------------------------------------------
    # Persistence support
    # ------------------------------------------------------------------

    def snapshot(self) -> List[Tuple[Package, List[str]]]:
        """Return installed packages with their sorted dependents, in install order."""
        return [
            (package, sorted(self._dependents.get(name, ())))
            for name, package in self._installed.items()
        ]

    def restore(self, name: str, depends_on: Iterable[str], required_by: Iterable[str] = ()) -> None:
        """Mark a package installed exactly as it was recorded.

        Used to reload state saved with :meth:`snapshot`. Packages missing
        from the graph are registered so that later removals can walk them.
        """
        package = Package.create(name, depends_on)
        self._installed[name] = package
        self._packages.setdefault(name, package)
        for dep in package.depends_on:
            self._packages.setdefault(dep, Package(dep))

        dependents = set(required_by)
        if dependents:
            self._dependents[name] = dependents
        else:
            self._dependents.pop(name, None)
