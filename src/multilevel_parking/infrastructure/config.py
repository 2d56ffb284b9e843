# File: src/multilevel_parking/infrastructure/config.py
"""
Configuration for the Multilevel Parking System

The lot layout is fixed for the lifetime of the process. It can come from a
YAML file, from command-line flags, or both (flags win).

Example lot.yaml:

    name: Downtown Garage
    floors: 2
    spaces_per_floor: 3
"""

from pathlib import Path
from typing import Any, Dict, List, Optional, Union
import logging

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError


logger = logging.getLogger(__name__)

DEFAULT_FLOORS = 2
DEFAULT_SPACES_PER_FLOOR = 3


class ConfigurationError(Exception):
    """Raised for unreadable or invalid configuration"""
    pass


class ParkingLotConfig(BaseModel):
    """Construction-time layout of a parking lot"""

    model_config = ConfigDict(extra="forbid", frozen=True)

    name: str = Field(default="Parking Lot", min_length=1)
    floors: int = Field(default=DEFAULT_FLOORS, ge=1, description="Number of floors")
    spaces_per_floor: int = Field(default=DEFAULT_SPACES_PER_FLOOR, ge=1, description="Spaces on each floor")

    def with_overrides(self, **overrides: Optional[Any]) -> 'ParkingLotConfig':
        """Return a copy with every non-None override applied and re-validated"""
        data = self.model_dump()
        data.update({k: v for k, v in overrides.items() if v is not None})
        return build_config(data)


def build_config(data: Dict[str, Any]) -> ParkingLotConfig:
    """Validate a mapping into a ParkingLotConfig"""
    try:
        return ParkingLotConfig(**data)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid parking lot configuration: {e}") from e


def _read_yaml(path: Union[str, Path]) -> Any:
    path = Path(path)
    try:
        with path.open("r", encoding="utf-8") as fh:
            return yaml.safe_load(fh)
    except OSError as e:
        raise ConfigurationError(f"Cannot read {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in {path}: {e}") from e


def load_config(path: Union[str, Path]) -> ParkingLotConfig:
    """Load a ParkingLotConfig from a YAML file"""
    data = _read_yaml(path)
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"{path}: top level must be a mapping")

    config = build_config(data)
    logger.info(f"Loaded configuration from {path}: {config.floors} floor(s) x {config.spaces_per_floor} space(s)")
    return config


def load_script(path: Union[str, Path]) -> List[Dict[str, Any]]:
    """
    Load a command script: a YAML list of mappings, each with an ``action``
    key (park, remove or status)
    """
    data = _read_yaml(path)
    if data is None:
        return []
    if not isinstance(data, list):
        raise ConfigurationError(f"{path}: a command script must be a list")
    return data
