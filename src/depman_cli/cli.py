"""Command-line interface for depman."""

import logging
import sys
from pathlib import Path
from typing import Optional, Tuple

import click

from . import __version__
from .commands import load_manager_or_exit
from .commands.config import config
from .commands.deps import deps
from .config import get_log_level
from .deps.errors import DependencyError, DependentsExistError
from .deps.manifest import load_manifest_or_create
from .models.package import Package
from .project import Project
from .utils.console import _get_console, _rich_error, _rich_info, _rich_success
from .utils.logger import configure_logging


@click.group(help="Manage an in-memory package dependency graph")
@click.version_option(__version__, prog_name="depman")
@click.option(
    "--manifest",
    "manifest_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Package manifest (default: depman.yml in the current directory)",
)
@click.option(
    "--lockfile",
    "lockfile_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Lock file holding installed state (default: depman.lock)",
)
@click.option("--verbose", "-v", is_flag=True, help="Show debug output")
@click.pass_context
def cli(ctx, manifest_path: Optional[Path], lockfile_path: Optional[Path], verbose: bool):
    """depman command group."""
    configure_logging(logging.DEBUG if verbose else get_log_level())
    ctx.obj = Project.from_paths(Path("."), manifest_path, lockfile_path)


@cli.command(help="📝 Define a package and its direct dependencies")
@click.argument("name")
@click.argument("dependencies", nargs=-1)
@click.pass_obj
def define(project: Project, name: str, dependencies: Tuple[str, ...]):
    """Add or replace a package entry in the manifest."""
    try:
        manifest = load_manifest_or_create(project.manifest_path)
    except (FileNotFoundError, ValueError) as e:
        _rich_error(f"Failed to load {project.manifest_path}: {e}")
        sys.exit(1)

    replaced = name in manifest.packages
    manifest.add_package(name, list(dependencies))
    # Dependencies must exist in the graph too
    for dep in dependencies:
        if dep not in manifest.packages:
            manifest.add_package(dep, [])
    manifest.write(project.manifest_path)

    target = str(Package.create(name, dependencies))
    if replaced:
        _rich_success(f"Updated {target}")
    else:
        _rich_success(f"Defined {target}")


@cli.command(help="📦 Install packages and their dependencies")
@click.argument("packages", nargs=-1, required=True)
@click.pass_obj
def install(project: Project, packages: Tuple[str, ...]):
    """Install each package in order, stopping at the first failure."""
    manager = load_manager_or_exit(project)
    changed = False
    failed = False

    for name in packages:
        try:
            order = manager.install(name)
        except DependencyError as e:
            _rich_error(str(e))
            if not project.has_manifest():
                _rich_info("Run 'depman define <package> [dependencies...]' to define packages")
            failed = True
            break

        if not order:
            _rich_info(f"{name} is already installed")
            continue
        changed = True
        _rich_success(f"Installed {name}: {', '.join(order)}")

    if changed:
        project.save(manager)
    if failed:
        sys.exit(1)


@cli.command(help="🗑️  Uninstall packages no longer needed")
@click.argument("packages", nargs=-1, required=True)
@click.pass_obj
def uninstall(project: Project, packages: Tuple[str, ...]):
    """Remove each package plus dependencies nothing else requires."""
    manager = load_manager_or_exit(project)
    changed = False
    failed = False

    for name in packages:
        try:
            order = manager.remove(name)
        except DependentsExistError as e:
            _rich_error(str(e))
            _rich_info(f"Uninstall {', '.join(e.dependents)} first")
            failed = True
            break

        if not order:
            _rich_info(f"{name} is not installed")
            continue
        changed = True
        _rich_success(f"Removed {name}: {', '.join(order)}")
        transitive = order[1:]
        if transitive:
            _rich_info(f"Also removed {len(transitive)} transitive dependency(ies)")

    if changed:
        project.save(manager)
    if failed:
        sys.exit(1)


cli.add_command(uninstall, name="remove")


@cli.command(name="list", help="📋 List installed packages")
@click.pass_obj
def list_packages(project: Project):
    """Show installed packages with their dependencies and dependents."""
    from rich.markup import escape
    from rich.table import Table

    manager = load_manager_or_exit(project)
    installed = sorted(manager.list_installed())
    if not installed:
        _rich_info("No packages installed")
        return

    table = Table(title="📋 Installed Packages", show_header=True, header_style="bold cyan")
    table.add_column("Package", style="bold white")
    table.add_column("Dependencies", style="yellow")
    table.add_column("Required by", style="blue")

    for name in installed:
        dependencies = manager.get_installed_dependencies(name)
        dependents = sorted(manager.get_dependents(name))
        table.add_row(
            escape(name),
            escape(", ".join(dependencies)) if dependencies else "-",
            escape(", ".join(dependents)) if dependents else "-",
        )

    _get_console().print(table)


cli.add_command(deps)
cli.add_command(config)


def main():
    """Entry point for the depman console script."""
    cli()


if __name__ == "__main__":
    main()
