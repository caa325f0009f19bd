"""Shared pytest fixtures."""

import os

import pytest

import depman_cli.config
from depman_cli.utils.logger import shutdown_logging
from depman_cli.deps.package_manager import PackageManager


@pytest.fixture(autouse=True)
def isolated_config(tmp_path_factory, monkeypatch):
    """Keep tests from reading or writing the user's ~/.depman config."""
    config_dir = tmp_path_factory.mktemp("depman-config")
    monkeypatch.setattr(depman_cli.config, "CONFIG_DIR", str(config_dir))
    monkeypatch.setattr(depman_cli.config, "CONFIG_FILE", os.path.join(str(config_dir), "config.json"))
    return config_dir


@pytest.fixture(autouse=True)
def reset_logging():
    """Detach the CLI log handler so each test starts from plain logging."""
    yield
    shutdown_logging()


@pytest.fixture
def sample_manager():
    """Manager over the graph a->{b,c}, b->{c,d}, c->{f}, e->{c}, g->{h}."""
    manager = PackageManager()
    manager.define("a", "b", "c")
    manager.define("b", "c", "d")
    manager.define("c", "f")
    manager.define("e", "c")
    manager.define("g", "h")
    return manager


SAMPLE_MANIFEST = """\
name: sample
packages:
  a: [b, c]
  b: [c, d]
  c: [f]
  e: [c]
  g: [h]
"""


@pytest.fixture
def sample_project(tmp_path):
    """Project directory holding a depman.yml for the sample graph."""
    (tmp_path / "depman.yml").write_text(SAMPLE_MANIFEST, encoding="utf-8")
    return tmp_path
