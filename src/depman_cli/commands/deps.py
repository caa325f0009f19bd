"""depman dependency inspection commands."""

import sys
from typing import Optional, Set

import click
from rich.markup import escape
from rich.tree import Tree

from ..deps.package_manager import PackageManager
from ..project import Project
from ..utils.console import _get_console, _rich_error, _rich_info, _rich_success, _rich_warning
from . import load_manager_or_exit


@click.group(help="Inspect installed dependencies")
def deps():
    """depman dependency commands."""
    pass


def _add_installed_children(branch: Tree, manager: PackageManager, name: str, ancestors: Set[str]) -> None:
    """Recursively add installed dependencies of ``name`` under ``branch``."""
    for dep in manager.get_installed_dependencies(name):
        if dep in ancestors:
            branch.add(f"[red]{escape(dep)} (cycle)[/red]")
            continue
        child = branch.add(f"[dim]{escape(dep)}[/dim]")
        _add_installed_children(child, manager, dep, ancestors | {dep})


@deps.command(help="🌳 Show installed dependency tree")
@click.argument("package", required=False)
@click.pass_obj
def tree(project: Project, package: Optional[str]):
    """Display installed packages in hierarchical tree format.

    Without PACKAGE, every installed package nothing else requires is a root.
    """
    manager = load_manager_or_exit(project)
    installed = manager.list_installed()

    if package:
        if package not in installed:
            _rich_error(f"Package '{package}' is not installed")
            sys.exit(1)
        roots = [package]
    else:
        roots = sorted(name for name in installed if not manager.get_dependents(name))

    root_tree = Tree(f"[bold cyan]{escape(project.manifest_path.name)}[/bold cyan] (installed)")
    if not installed:
        root_tree.add("[dim]No packages installed[/dim]")
    for name in roots:
        branch = root_tree.add(f"[green]{escape(name)}[/green]")
        _add_installed_children(branch, manager, name, {name})

    _get_console().print(root_tree)


@deps.command(help="ℹ️  Show details for a package")
@click.argument("package")
@click.pass_obj
def info(project: Project, package: str):
    """Show definition and install status of one package."""
    manager = load_manager_or_exit(project)

    definition = manager.get_package(package)
    if definition is None:
        _rich_error(f"Package '{package}' is not defined")
        sys.exit(1)

    console = _get_console()
    console.print(f"[bold]{escape(package)}[/bold]")
    console.print(f"  Dependencies: {escape(', '.join(definition.depends_on) or '-')}")

    if not manager.is_installed(package):
        console.print("  Installed:    no")
        return

    console.print("  Installed:    yes")
    installed_deps = manager.get_installed_dependencies(package)
    if installed_deps != definition.depends_on:
        _rich_warning(
            f"Installed with dependencies: {', '.join(installed_deps) or '-'} "
            f"(reinstall to pick up the current definition)"
        )
    dependents = sorted(manager.get_dependents(package))
    console.print(f"  Required by:  {escape(', '.join(dependents) or '-')}")


@deps.command(help="🧹 Uninstall everything")
@click.option("--yes", "-y", is_flag=True, help="Skip confirmation")
@click.pass_obj
def clean(project: Project, yes: bool):
    """Forget all installed state by deleting the lock file."""
    if not project.has_lockfile():
        _rich_info("Nothing installed - already clean")
        return

    if not yes:
        _rich_warning(f"This will delete {project.lockfile_path.name} and mark every package uninstalled")
        if not click.confirm("Continue?", default=False):
            _rich_info("Operation cancelled")
            return

    try:
        project.clear()
        _rich_success(f"Removed {project.lockfile_path.name}")
    except OSError as e:
        _rich_error(f"Error removing {project.lockfile_path}: {e}")
        sys.exit(1)
