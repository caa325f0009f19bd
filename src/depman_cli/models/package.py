"""Package data model."""

from dataclasses import dataclass, field
from typing import Iterable, Tuple


@dataclass(frozen=True)
class Package:
    """A named node in the dependency graph.

    Attributes:
        name: Unique package name
        depends_on: Ordered names of direct dependencies
    """
    name: str
    depends_on: Tuple[str, ...] = field(default_factory=tuple)

    @classmethod
    def create(cls, name: str, dependencies: Iterable[str] = ()) -> "Package":
        """Create a package from any iterable of dependency names."""
        return cls(name=name, depends_on=tuple(dependencies))

    def __str__(self) -> str:
        if not self.depends_on:
            return self.name
        return f"{self.name} -> {', '.join(self.depends_on)}"
