"""Tests for the depman uninstall command.

Uninstalling a package also removes the dependencies it brought in, as long
as no other installed package still needs them.
"""

import os

from click.testing import CliRunner

from depman_cli.cli import cli
from depman_cli.deps.lockfile import LockFile


class TestUninstallCommand:
    """Uninstalling removes orphaned transitive dependencies."""

    def setup_method(self):
        self.runner = CliRunner()
        self.original_dir = os.getcwd()

    def teardown_method(self):
        os.chdir(self.original_dir)

    def _installed(self, root):
        lock = LockFile.read(root / "depman.lock")
        return sorted(lock.packages) if lock else []

    def test_uninstall_removes_transitive_deps(self, sample_project):
        os.chdir(sample_project)
        self.runner.invoke(cli, ["install", "a"])

        result = self.runner.invoke(cli, ["uninstall", "a"])

        assert result.exit_code == 0, result.output
        assert "Removed a: a, b, d, c, f" in result.output
        assert "transitive dependency" in result.output.lower()
        assert self._installed(sample_project) == []

    def test_uninstall_keeps_shared_dependency(self, sample_project):
        os.chdir(sample_project)
        self.runner.invoke(cli, ["install", "a", "e"])

        result = self.runner.invoke(cli, ["uninstall", "a"])

        assert result.exit_code == 0
        assert "Removed a: a, b, d" in result.output
        assert self._installed(sample_project) == ["c", "e", "f"]

    def test_uninstall_blocked_by_dependents(self, sample_project):
        os.chdir(sample_project)
        self.runner.invoke(cli, ["install", "a"])
        before = (sample_project / "depman.lock").read_text(encoding="utf-8")

        result = self.runner.invoke(cli, ["uninstall", "c"])

        assert result.exit_code == 1
        assert "required by a, b" in result.output
        assert "Uninstall a, b first" in result.output
        assert (sample_project / "depman.lock").read_text(encoding="utf-8") == before

    def test_uninstall_not_installed(self, sample_project):
        os.chdir(sample_project)

        result = self.runner.invoke(cli, ["uninstall", "x"])

        assert result.exit_code == 0
        assert "x is not installed" in result.output
        assert not (sample_project / "depman.lock").exists()

    def test_remove_alias(self, sample_project):
        os.chdir(sample_project)
        self.runner.invoke(cli, ["install", "g"])

        blocked = self.runner.invoke(cli, ["remove", "h"])
        result = self.runner.invoke(cli, ["remove", "g"])

        assert blocked.exit_code == 1
        assert result.exit_code == 0
        assert "Removed g: g, h" in result.output

    def test_state_carries_across_invocations(self, sample_project):
        os.chdir(sample_project)
        self.runner.invoke(cli, ["install", "a"])
        self.runner.invoke(cli, ["uninstall", "a"])

        install = self.runner.invoke(cli, ["install", "e"])
        uninstall = self.runner.invoke(cli, ["uninstall", "e"])

        assert "Installed e: f, c, e" in install.output
        assert "Removed e: e, c, f" in uninstall.output


class TestListCommand:
    """Test cases for depman list."""

    def setup_method(self):
        self.runner = CliRunner()
        self.original_dir = os.getcwd()

    def teardown_method(self):
        os.chdir(self.original_dir)

    def test_list_empty(self, sample_project):
        os.chdir(sample_project)

        result = self.runner.invoke(cli, ["list"])

        assert result.exit_code == 0
        assert "No packages installed" in result.output

    def test_list_installed(self, sample_project):
        os.chdir(sample_project)
        self.runner.invoke(cli, ["install", "g"])

        result = self.runner.invoke(cli, ["list"])

        assert result.exit_code == 0
        assert "Installed Packages" in result.output
        lines = [line for line in result.output.splitlines() if " g " in line or " h " in line]
        assert len(lines) == 2

    def test_list_shows_bracketed_names(self, tmp_path):
        os.chdir(tmp_path)
        (tmp_path / "depman.yml").write_text(
            "packages:\n  'requests[security]': [core]\n  core: []\n", encoding="utf-8"
        )
        self.runner.invoke(cli, ["install", "requests[security]"])

        result = self.runner.invoke(cli, ["list"])

        assert result.exit_code == 0, result.output
        core_line = next(line for line in result.output.splitlines() if " core " in line)
        assert "requests[security]" in core_line
        assert result.output.count("requests[security]") == 2
