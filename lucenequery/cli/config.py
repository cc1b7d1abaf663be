"""Configuration management for the CLI.

Configuration is read from YAML files and environment variables. The only
section understood so far is ``modifier``, holding the default modifier::

    modifier:
      term_modifier: required
      wildcarded: true
      fuzziness: 0.6
"""

import os
from pathlib import Path
from typing import Any

import msgspec
import yaml

from lucenequery.core.modifiers import DEFAULT_MODIFIER, QueryModifier

ENV_PREFIX = "LUCENEQUERY_"

_BOOLEAN_KEYS = ("split", "disjunct", "wildcarded")
_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off", ""}


class Config:
    """Configuration management for the CLI application."""

    @staticmethod
    def from_file(path: Path) -> dict[str, Any]:
        """Load configuration from a YAML file."""
        try:
            with open(path) as f:
                return yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in config file: {e}")
        except OSError as e:
            raise ValueError(f"Error reading config file: {e}")

    @staticmethod
    def get_config_paths() -> list[Path]:
        """Get the default configuration file paths to check."""
        paths = []

        xdg_config_home = Path(
            os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config")
        )
        paths.append(xdg_config_home / "lucenequery" / "config.yaml")

        paths.append(Path(".lucenequery.yaml"))
        paths.append(Path("lucenequery.yaml"))

        return paths

    @staticmethod
    def merge_configs(*configs: dict[str, Any]) -> dict[str, Any]:
        """Merge multiple configuration dictionaries."""
        result = {}
        for config in configs:
            result = _deep_merge(result, config)
        return result


def load_config(path: Path | None = None) -> dict[str, Any]:
    """Load configuration from files and environment variables.

    Default locations are merged in order (later files win), then an
    explicit ``path``, then environment overrides.
    """
    config: dict[str, Any] = {}

    for candidate in Config.get_config_paths():
        if candidate.exists():
            config = Config.merge_configs(config, Config.from_file(candidate))

    if path is not None:
        config = Config.merge_configs(config, Config.from_file(path))

    return Config.merge_configs(config, _env_overrides())


def _env_overrides() -> dict[str, Any]:
    modifier: dict[str, Any] = {}

    if term := os.environ.get(ENV_PREFIX + "TERM_MODIFIER"):
        modifier["term_modifier"] = term.strip().lower()

    for key in _BOOLEAN_KEYS:
        raw = os.environ.get(ENV_PREFIX + key.upper())
        if raw is not None:
            modifier[key] = _parse_bool(key, raw)

    if (fuzziness := os.environ.get(ENV_PREFIX + "FUZZINESS")) is not None:
        if fuzziness.strip().lower() in ("", "none", "off"):
            modifier["fuzziness"] = None
        else:
            try:
                modifier["fuzziness"] = float(fuzziness)
            except ValueError:
                raise ValueError(f"Invalid fuzziness in environment: {fuzziness!r}")

    return {"modifier": modifier} if modifier else {}


def _parse_bool(key: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ValueError(f"Invalid boolean for {key} in environment: {raw!r}")


def modifier_from_config(config: dict[str, Any] | None) -> QueryModifier:
    """Build the default modifier from the ``modifier`` section.

    Raises:
        ValueError: If the section holds unknown keys or invalid values.
    """
    section = (config or {}).get("modifier")
    if not section:
        return DEFAULT_MODIFIER
    if not isinstance(section, dict):
        raise ValueError("The 'modifier' section must be a mapping")

    try:
        return msgspec.convert(section, type=QueryModifier)
    except (msgspec.ValidationError, ValueError) as e:
        raise ValueError(f"Invalid modifier configuration: {e}")


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Deep merge two dictionaries."""
    result = base.copy()

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value

    return result
