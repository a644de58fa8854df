"""
Game configuration.

Holds the building layout and pacing parameters, with YAML load/save helpers.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any, Dict, Union

import yaml

from elevator_dispatch.errors import ConfigError


def _is_int(value) -> bool:
    # bool is a subclass of int but never a valid count
    return isinstance(value, int) and not isinstance(value, bool)


@dataclass
class GameConfig:
    """
    Parameters a game is created from.

    Attributes:
        num_floors: Number of floors (floor 0 is the ground, the last is the pit)
        num_elevators: Number of elevators, all starting at floor 0
        arrival_rate: Per-tick probability that a new passenger arrives (0-1)
        starting_time: Ticks on the clock when the game starts
        elevator_capacity: Passengers each elevator can carry
    """
    num_floors: int = 7
    num_elevators: int = 1
    arrival_rate: float = 0.3
    starting_time: int = 110
    elevator_capacity: int = 5

    def __post_init__(self):
        self.validate()

    def validate(self) -> None:
        if not _is_int(self.num_floors) or self.num_floors < 2:
            raise ConfigError(f"num_floors must be an integer >= 2, got {self.num_floors!r}")
        if not _is_int(self.num_elevators) or self.num_elevators < 1:
            raise ConfigError(f"num_elevators must be an integer >= 1, got {self.num_elevators!r}")
        if (isinstance(self.arrival_rate, bool) or not isinstance(self.arrival_rate, (int, float))
                or not 0 <= self.arrival_rate <= 1):
            raise ConfigError(f"arrival_rate must be 0-1, got {self.arrival_rate!r}")
        if not _is_int(self.starting_time) or self.starting_time <= 0:
            raise ConfigError(f"starting_time must be a positive integer, got {self.starting_time!r}")
        if not _is_int(self.elevator_capacity) or self.elevator_capacity < 1:
            raise ConfigError(
                f"elevator_capacity must be an integer >= 1, got {self.elevator_capacity!r}"
            )

    @property
    def pit_floor(self) -> int:
        """The only floor where an elevator may dump its passengers."""
        return self.num_floors - 1

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GameConfig":
        """
        Build a config from a plain mapping.

        Missing keys fall back to defaults; unknown keys are rejected so that
        typos in a config file don't go unnoticed.
        """
        if data is None:
            return cls()
        if not isinstance(data, dict):
            raise ConfigError(f"Config must be a mapping, got {type(data).__name__}")

        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigError(f"Unknown config keys: {', '.join(unknown)}")

        return cls(**data)


DEFAULT_CONFIG = GameConfig()


class ConfigLoader:
    """Utility class for loading and saving configuration files"""

    @staticmethod
    def load(file_path: Union[str, Path]) -> GameConfig:
        """
        Load GameConfig from YAML file

        Args:
            file_path: Path to YAML file

        Returns:
            GameConfig instance

        Raises:
            FileNotFoundError: If file doesn't exist
            ConfigError: If validation fails
        """
        file_path = Path(file_path)

        if not file_path.exists():
            raise FileNotFoundError(f"Config file not found: {file_path}")

        with open(file_path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f)

        return GameConfig.from_dict(data)

    @staticmethod
    def save(config: GameConfig, file_path: Union[str, Path]):
        """
        Save GameConfig to YAML file

        Args:
            config: GameConfig instance
            file_path: Path to save YAML file
        """
        file_path = Path(file_path)
        file_path.parent.mkdir(parents=True, exist_ok=True)

        with open(file_path, 'w', encoding='utf-8') as f:
            yaml.dump(config.to_dict(), f, default_flow_style=False, sort_keys=False)


def load_game_config(file_path: Union[str, Path]) -> GameConfig:
    """Load GameConfig from YAML file"""
    return ConfigLoader.load(file_path)


def save_game_config(config: GameConfig, file_path: Union[str, Path]):
    """Save GameConfig to YAML file"""
    ConfigLoader.save(config, file_path)
