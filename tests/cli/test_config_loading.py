"""Tests for configuration loading."""

import pytest

from lucenequery.cli.config import (
    Config,
    _deep_merge,
    load_config,
    modifier_from_config,
)
from lucenequery.core.modifiers import DEFAULT_MODIFIER, QueryModifier, TermModifier


class TestConfigFiles:
    """Test reading configuration files."""

    def test_from_file(self, write_config):
        """YAML content is returned as a dict."""
        path = write_config({"modifier": {"split": True}})

        assert Config.from_file(path) == {"modifier": {"split": True}}

    def test_empty_file(self, tmp_path):
        """An empty file is an empty configuration."""
        path = tmp_path / "empty.yaml"
        path.write_text("")

        assert Config.from_file(path) == {}

    def test_invalid_yaml(self, tmp_path):
        """Broken YAML is reported as ValueError."""
        path = tmp_path / "broken.yaml"
        path.write_text("modifier: [unclosed\n")

        with pytest.raises(ValueError, match="Invalid YAML"):
            Config.from_file(path)

    def test_config_paths(self, isolated_config):
        """The user file comes first, then the working directory."""
        paths = Config.get_config_paths()

        assert paths[0] == isolated_config / "lucenequery" / "config.yaml"
        assert [p.name for p in paths[1:]] == [".lucenequery.yaml", "lucenequery.yaml"]

    def test_merge_configs(self):
        """Later configurations win, nested sections are merged."""
        merged = Config.merge_configs(
            {"modifier": {"split": True, "disjunct": True}},
            {"modifier": {"split": False}},
        )

        assert merged == {"modifier": {"split": False, "disjunct": True}}

    def test_deep_merge_replaces_scalars(self):
        """Non-dict values are replaced."""
        assert _deep_merge({"a": {"b": 1}}, {"a": 2}) == {"a": 2}


class TestLoadConfig:
    """Test the full lookup order."""

    def test_nothing_configured(self):
        """Without files or variables the configuration is empty."""
        assert load_config() == {}

    def test_working_directory_file(self):
        """A file in the working directory is read."""
        with open(".lucenequery.yaml", "w") as f:
            f.write("modifier:\n  disjunct: true\n")

        assert load_config() == {"modifier": {"disjunct": True}}

    def test_explicit_path_wins(self, write_config):
        """An explicit file overrides the default locations."""
        with open("lucenequery.yaml", "w") as f:
            f.write("modifier:\n  disjunct: true\n  split: true\n")
        path = write_config({"modifier": {"disjunct": False}})

        assert load_config(path) == {"modifier": {"disjunct": False, "split": True}}

    def test_environment_wins(self, write_config, monkeypatch):
        """Environment variables override every file."""
        path = write_config({"modifier": {"term_modifier": "required"}})
        monkeypatch.setenv("LUCENEQUERY_TERM_MODIFIER", " Prohibited ")
        monkeypatch.setenv("LUCENEQUERY_SPLIT", "1")
        monkeypatch.setenv("LUCENEQUERY_FUZZINESS", "0.25")

        config = load_config(path)

        assert config == {
            "modifier": {"term_modifier": "prohibited", "split": True, "fuzziness": 0.25}
        }

    @pytest.mark.parametrize("raw", ["none", "off", ""])
    def test_environment_disables_fuzziness(self, monkeypatch, raw):
        """Fuzziness can be switched off from the environment."""
        monkeypatch.setenv("LUCENEQUERY_FUZZINESS", raw)

        assert load_config() == {"modifier": {"fuzziness": None}}

    def test_invalid_environment_boolean(self, monkeypatch):
        """Unrecognised booleans are rejected."""
        monkeypatch.setenv("LUCENEQUERY_WILDCARDED", "maybe")

        with pytest.raises(ValueError, match="wildcarded"):
            load_config()

    def test_invalid_environment_fuzziness(self, monkeypatch):
        """Non-numeric fuzziness is rejected."""
        monkeypatch.setenv("LUCENEQUERY_FUZZINESS", "fuzzy")

        with pytest.raises(ValueError, match="fuzziness"):
            load_config()


class TestModifierFromConfig:
    """Test converting configuration into a modifier."""

    @pytest.mark.parametrize("config", [None, {}, {"modifier": None}, {"modifier": {}}])
    def test_default(self, config):
        """Without a modifier section the default modifier is used."""
        assert modifier_from_config(config) is DEFAULT_MODIFIER

    def test_full_section(self):
        """Every modifier field can be configured."""
        modifier = modifier_from_config(
            {
                "modifier": {
                    "term_modifier": "required",
                    "split": True,
                    "disjunct": True,
                    "wildcarded": True,
                    "fuzziness": 0.6,
                }
            }
        )

        assert modifier == QueryModifier(
            term_modifier=TermModifier.REQUIRED,
            split=True,
            disjunct=True,
            wildcarded=True,
            fuzziness=0.6,
        )

    @pytest.mark.parametrize(
        "section",
        [
            {"fuzziness": 1.5},
            {"term_modifier": "often"},
            {"wildcard": True},
            {"split": "sometimes"},
        ],
    )
    def test_invalid_section(self, section):
        """Invalid values and unknown keys are rejected."""
        with pytest.raises(ValueError, match="Invalid modifier configuration"):
            modifier_from_config({"modifier": section})

    def test_section_not_mapping(self):
        """The modifier section must be a mapping."""
        with pytest.raises(ValueError, match="mapping"):
            modifier_from_config({"modifier": ["required"]})
