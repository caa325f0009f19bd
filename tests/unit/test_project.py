"""Tests for project state loading and saving."""

from pathlib import Path

import pytest

from depman_cli.config import update_config
from depman_cli.project import Project


SAMPLE_MANIFEST = """\
packages:
  a: [b, c]
  b: [c, d]
  c: [f]
  e: [c]
  g: [h]
"""


@pytest.fixture
def project(tmp_path):
    (tmp_path / "depman.yml").write_text(SAMPLE_MANIFEST, encoding="utf-8")
    return Project.from_paths(tmp_path)


class TestProject:
    def test_default_paths(self, tmp_path):
        project = Project.from_paths(tmp_path)
        assert project.manifest_path == tmp_path / "depman.yml"
        assert project.lockfile_path == tmp_path / "depman.lock"

    def test_configured_filenames(self, tmp_path):
        update_config({"manifest_file": "graph.yml", "lockfile": "graph.lock"})
        project = Project.from_paths(tmp_path)
        assert project.manifest_path == tmp_path / "graph.yml"
        assert project.lockfile_path == tmp_path / "graph.lock"

    def test_explicit_paths_win(self, tmp_path):
        project = Project.from_paths(tmp_path, Path("other.yml"), Path("other.lock"))
        assert project.manifest_path == Path("other.yml")
        assert project.lockfile_path == Path("other.lock")

    def test_load_without_manifest_is_empty(self, tmp_path):
        manager = Project.from_paths(tmp_path).load_manager()
        assert manager.packages == []
        assert manager.list_installed() == set()

    def test_state_survives_save_and_load(self, project):
        manager = project.load_manager()
        manager.install("a")
        project.save(manager)

        reloaded = project.load_manager()
        assert reloaded.list_installed() == {"a", "b", "c", "d", "f"}
        assert reloaded.install("e") == ["e"]
        assert reloaded.remove("a") == ["a", "b", "d"]

    def test_unreadable_lockfile_means_nothing_installed(self, project):
        project.lockfile_path.write_text(": [\n", encoding="utf-8")
        assert project.load_manager().list_installed() == set()

    def test_malformed_manifest_raises(self, tmp_path):
        (tmp_path / "depman.yml").write_text("packages: [a]\n", encoding="utf-8")
        with pytest.raises(ValueError):
            Project.from_paths(tmp_path).load_manager()

    def test_clear(self, project):
        manager = project.load_manager()
        manager.install("g")
        project.save(manager)
        assert project.has_lockfile()

        project.clear()
        assert not project.has_lockfile()
        assert project.load_manager().list_installed() == set()
