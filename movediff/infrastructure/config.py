"""Configuration file loading.

An optional YAML file supplies defaults for the command-line options.
Parse-once pattern: the YAML mapping is turned into a typed MovediffConfig
at the boundary; command-line flags are layered on top afterwards.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

import yaml

from movediff.domain.moved import MovedMode, MovedWsMode
from movediff.domain.options import DiffOptions
from movediff.infrastructure.diff_engine.factory import DiffEngineKind

KNOWN_KEYS = frozenset(
    {
        "context_lines",
        "ignore_all_space",
        "ignore_space_change",
        "ignore_blank_lines",
        "minimal",
        "algorithm",
        "show_function",
        "moved",
        "moved_ws",
        "diff_engine",
    }
)


class ConfigError(Exception):
    """Raised when the config file cannot be read or is invalid."""

    pass


@dataclass
class MovediffConfig:
    """Defaults for a diff run, as read from a config file."""

    options: DiffOptions = field(default_factory=DiffOptions)
    moved_mode: MovedMode = MovedMode.PLAIN
    moved_ws: MovedWsMode = MovedWsMode.NONE
    diff_engine: DiffEngineKind = DiffEngineKind.AUTO

    # --------------------------------------------------------
    # Factory Methods
    # --------------------------------------------------------

    @classmethod
    def from_dict(cls, data: dict | None) -> MovediffConfig:
        """Parse config values from a YAML mapping.

        Args:
            data: Raw dictionary from YAML, or None for defaults

        Returns:
            Typed MovediffConfig instance

        Raises:
            ConfigError: On unknown keys or invalid values
        """
        if data is None:
            return cls()
        if not isinstance(data, dict):
            raise ConfigError("top level must be a mapping")

        unknown = sorted(set(data) - KNOWN_KEYS)
        if unknown:
            raise ConfigError(f"unknown keys: {', '.join(unknown)}")

        try:
            return cls(
                options=DiffOptions.from_dict(data),
                moved_mode=MovedMode.from_string(str(data.get("moved", MovedMode.PLAIN.value))),
                moved_ws=MovedWsMode.from_string(str(data.get("moved_ws", MovedWsMode.NONE.value))),
                diff_engine=DiffEngineKind.from_string(
                    str(data.get("diff_engine", DiffEngineKind.AUTO.value))
                ),
            )
        except ValueError as e:
            raise ConfigError(str(e)) from e

    @classmethod
    def from_file(cls, path: str | Path) -> MovediffConfig:
        """Load config from a YAML file.

        Raises:
            ConfigError: If the file cannot be read, is not valid YAML,
                or holds invalid values
        """
        try:
            text = Path(path).read_text()
        except OSError as e:
            raise ConfigError(f"cannot read config file '{path}': {e.strerror or e}") from e

        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as e:
            raise ConfigError(f"invalid YAML in '{path}': {e}") from e

        return cls.from_dict(data)
