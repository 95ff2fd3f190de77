"""
SDF Configuration - Classification threshold and output encoding
Settings can come from built-in presets or YAML files
"""

import numbers
import yaml
from pathlib import Path
from typing import Dict, List, Optional, Any, Union
from dataclasses import dataclass, asdict


# ============================================================================
# Config Data Structure
# ============================================================================

@dataclass
class SDFConfig:
    """Distance field generation settings"""

    # 16-bit red intensity below which a pixel counts as ink
    threshold: int = 128

    # Output byte = clamp(signed_distance * scale + bias, 0, 255)
    scale: int = 3
    bias: int = 128

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for YAML serialization"""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'SDFConfig':
        """Create from dictionary, ignoring unknown keys"""
        valid_fields = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in data.items() if k in valid_fields}
        for key, value in filtered.items():
            if isinstance(value, bool) or not isinstance(value, numbers.Integral):
                raise ValueError(f"{key} must be an integer, got {value!r}")
        return cls(**{k: int(v) for k, v in filtered.items()})

    def merged(self, **overrides) -> 'SDFConfig':
        """Copy with the non-None overrides applied"""
        data = self.to_dict()
        data.update({k: v for k, v in overrides.items() if v is not None})
        return SDFConfig.from_dict(data)

    def validate(self) -> None:
        """Raise ValueError if any setting is out of range"""
        if not 0 <= self.threshold <= 65536:
            raise ValueError(f"threshold must be within 0-65536, got {self.threshold}")
        if self.scale <= 0:
            raise ValueError(f"scale must be positive, got {self.scale}")
        if not 0 <= self.bias <= 255:
            raise ValueError(f"bias must be within 0-255, got {self.bias}")


# ============================================================================
# Built-in Presets
# ============================================================================

PRESETS: Dict[str, Dict[str, Any]] = {
    # Fixed on-disk encoding
    "default": {"threshold": 128, "scale": 3, "bias": 128},
    # One gray level per pixel, for fields that must reach further out
    "wide": {"threshold": 128, "scale": 1, "bias": 128},
    # Steep ramp for small glyphs
    "tight": {"threshold": 128, "scale": 8, "bias": 128},
    # Anything darker than mid-gray is ink
    "midgray": {"threshold": 32768, "scale": 3, "bias": 128},
}


def list_presets() -> List[str]:
    """List all preset names"""
    return sorted(PRESETS)


def get_preset(name: str) -> SDFConfig:
    """Get a preset config by name"""
    if name not in PRESETS:
        raise ValueError(f"Unknown preset '{name}'. Available: {list_presets()}")
    return SDFConfig.from_dict(PRESETS[name])


# ============================================================================
# YAML Files
# ============================================================================

def load_config(path: Union[str, Path], base: Optional[SDFConfig] = None) -> SDFConfig:
    """
    Load settings from a YAML file.

    The file holds either a flat mapping or one nested under an 'sdf' key.
    Keys missing from the file keep their value from base.

    Args:
        path: YAML file path
        base: Config to start from (default: SDFConfig())

    Returns:
        The merged, validated config
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    with open(path, 'r') as f:
        try:
            data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Could not parse config file {path}: {e}") from e

    if not isinstance(data, dict):
        raise ValueError(f"Config file {path} must contain a mapping")
    if isinstance(data.get('sdf'), dict):
        data = data['sdf']

    bad_keys = [k for k in data if not isinstance(k, str)]
    if bad_keys:
        raise ValueError(f"Config file {path} has non-string keys: {bad_keys}")

    config = (base or SDFConfig()).merged(**data)
    config.validate()
    return config


def save_config(config: SDFConfig, path: Union[str, Path]) -> Path:
    """Save settings to a YAML file, nested under an 'sdf' key"""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    with open(path, 'w') as f:
        yaml.dump({'sdf': config.to_dict()}, f, default_flow_style=False, sort_keys=False)

    return path
