"""Configuration management for the hairpin layout engine."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from pathlib import Path

import yaml

from .exceptions import ConfigurationError
from .models import Bounds


@dataclass
class LayoutConfig:
    """Layout and classification settings."""

    width: float = 420.0
    height: float = 380.0

    # Classic stem-loop geometry
    unit_spacing: float = 34.0
    stem_width: float = 90.0
    min_radius: float = 50.0
    per_base_radius: float = 18.0
    top_offset: float = 130.0
    loop_gap: float = 60.0
    loop_flatten: float = 0.65
    min_stem_pairs: int = 2
    max_stem_pairs: int = 15

    # Flat arc geometry
    flat_padding: float = 40.0
    flat_max_base_width: float = 18.0
    arc_height_per_span: float = 3.0
    arc_max_height: float = 80.0
    baseline_offset: float = 50.0

    # Linear fallback
    linear_margin: float = 60.0
    linear_amplitude: float = 25.0

    # Risk classification and folding
    critical_region: int = 10
    min_fold_length: int = 6
    temperature: float = 55.0
    fold_cache_size: int = 256

    log_level: str = "INFO"

    def __post_init__(self):
        """Validate configuration after initialization."""
        if self.width <= 0 or self.height <= 0:
            raise ConfigurationError(f"Invalid canvas size: {self.width}x{self.height}")

        for name in ("unit_spacing", "stem_width", "min_radius", "per_base_radius"):
            if getattr(self, name) <= 0:
                raise ConfigurationError(f"Must be positive: {getattr(self, name)}", parameter=name)

        if not 0 < self.loop_flatten <= 1:
            raise ConfigurationError(f"Invalid loop_flatten: {self.loop_flatten}", parameter="loop_flatten")

        if self.min_stem_pairs < 1 or self.max_stem_pairs < self.min_stem_pairs:
            raise ConfigurationError(
                f"Invalid stem pair range: {self.min_stem_pairs}-{self.max_stem_pairs}"
            )

        if self.critical_region <= 0:
            raise ConfigurationError(f"Invalid critical_region: {self.critical_region}")

        if self.min_fold_length < 0:
            raise ConfigurationError(f"Invalid min_fold_length: {self.min_fold_length}")

        if self.fold_cache_size < 1:
            raise ConfigurationError(
                f"Invalid fold_cache_size: {self.fold_cache_size}", parameter="fold_cache_size"
            )

    @property
    def bounds(self) -> Bounds:
        return Bounds(width=self.width, height=self.height)

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return asdict(self)

    @classmethod
    def from_yaml(cls, yaml_file: Path) -> "LayoutConfig":
        """Load configuration from YAML file."""
        yaml_file = Path(yaml_file)
        if not yaml_file.exists():
            raise ConfigurationError(f"Config file not found: {yaml_file}")

        try:
            with open(yaml_file, 'r') as f:
                data = yaml.safe_load(f) or {}

            if not isinstance(data, dict):
                raise ConfigurationError("Expected a mapping", config_file=str(yaml_file))

            return cls(**data)
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML config: {e}")
        except TypeError as e:
            raise ConfigurationError(f"Invalid config parameters: {e}")

    @classmethod
    def from_args(cls, args: dict, base: "LayoutConfig" = None) -> "LayoutConfig":
        """Create configuration from command-line arguments, overriding ``base``."""
        arg_mapping = {
            'width': 'width',
            'height': 'height',
            'unit_spacing': 'unit_spacing',
            'stem_width': 'stem_width',
            'critical_region': 'critical_region',
            'temperature': 'temperature',
            'log_level': 'log_level',
        }

        config_args = base.to_dict() if base is not None else {}
        for arg_name, config_name in arg_mapping.items():
            if arg_name in args and args[arg_name] is not None:
                config_args[config_name] = args[arg_name]

        return cls(**config_args)
