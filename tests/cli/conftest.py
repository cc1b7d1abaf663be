"""Pytest configuration and fixtures for CLI tests."""

import pytest
import yaml
from click.testing import CliRunner


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Keep configuration lookups away from the user's files."""
    config_home = tmp_path / "config"
    config_home.mkdir()
    workdir = tmp_path / "work"
    workdir.mkdir()
    monkeypatch.setenv("XDG_CONFIG_HOME", str(config_home))
    monkeypatch.chdir(workdir)
    return config_home


@pytest.fixture
def cli_runner():
    """Click CLI test runner invoking the lucenequery group."""

    class LuceneQueryCliRunner(CliRunner):
        def invoke(self, args, **kwargs):  # type: ignore
            from lucenequery.cli.main import cli

            if isinstance(args, list):
                return super().invoke(cli, args, **kwargs)
            return super().invoke(args, **kwargs)

    return LuceneQueryCliRunner()


@pytest.fixture
def write_config(tmp_path):
    """Write a YAML configuration file and return its path."""

    def _write(data, name="custom.yaml"):
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(yaml.safe_dump(data))
        return path

    return _write
