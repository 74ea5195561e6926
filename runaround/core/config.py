"""
Configuration management for the router with Pydantic validation
"""

from typing import Dict, List, Optional, Union, Any
from pathlib import Path
import os
import re

import yaml
from pydantic import BaseModel, Field, model_validator, ConfigDict


# ============================================================================
# Pydantic Models for Configuration Validation
# ============================================================================

class RoutingAttempt(BaseModel):
    """One rung of the resolution ladder"""
    model_config = ConfigDict(frozen=True)

    cell_size: float = Field(..., gt=0, description="Grid cell size in pixels")
    margin: float = Field(..., ge=0, description="Clearance around rectangles in pixels")


def _default_ladder() -> List[RoutingAttempt]:
    return [
        RoutingAttempt(cell_size=10, margin=6),
        RoutingAttempt(cell_size=5, margin=4),
        RoutingAttempt(cell_size=5, margin=2),
        RoutingAttempt(cell_size=3, margin=2),
    ]


class SearchConfig(BaseModel):
    """A* cost model and search bounds"""
    base_cost: float = Field(1, gt=0, description="Cost of a single grid step")
    turn_penalty: float = Field(3, ge=0, description="Extra cost when the direction changes")
    search_margin: int = Field(5, ge=0, description="Cells the search may explore beyond the room grid")
    grid_extra_cells: int = Field(10, ge=0, description="Cells rasterized beyond the room grid")
    iteration_factor: int = Field(4, gt=0, description="Iteration cap = factor * grid width * grid height")

    @model_validator(mode='after')
    def validate_extent(self):
        """Search must stay inside the rasterized extent"""
        if self.search_margin > self.grid_extra_cells:
            raise ValueError(
                f"search_margin ({self.search_margin}) cannot be greater than "
                f"grid_extra_cells ({self.grid_extra_cells})"
            )
        return self


class RoutingConfig(BaseModel):
    """Orchestrator settings"""
    stub_cells: int = Field(3, ge=1, description="Grid cells a dock point is projected outward")
    ladder: List[RoutingAttempt] = Field(default_factory=_default_ladder, min_length=1,
                                         description="Resolution attempts, coarse to fine")
    final_attempt: RoutingAttempt = Field(default_factory=lambda: RoutingAttempt(cell_size=2, margin=1),
                                          description="Last grid attempt before the fallback route")
    fallback_margin: float = Field(10, ge=0, description="Exit distance of the fallback route in pixels")
    validation_margin: float = Field(0, ge=0, description="Clearance used when validating routes")

    @model_validator(mode='after')
    def validate_ladder_order(self):
        """Ladder rungs must run from coarse to fine"""
        sizes = [attempt.cell_size for attempt in self.ladder]
        if any(later > earlier for earlier, later in zip(sizes, sizes[1:])):
            raise ValueError(f"ladder must be ordered coarse to fine, got cell sizes {sizes}")
        return self


class OverlapConfig(BaseModel):
    """Lane offset settings"""
    spacing: float = Field(6, ge=4, le=12, description="Distance between parallel lanes in pixels")
    base_thickness: float = Field(2, gt=0, description="Stroke width of a single path")
    epsilon: float = Field(0.5, ge=0, description="Tolerance for collinear segments")


class RouterConfigModel(BaseModel):
    """Pydantic model for router configuration validation"""
    model_config = ConfigDict(extra='ignore')  # Ignore extra fields in YAML

    version: Optional[Union[int, float, str]] = None
    description: Optional[str] = None

    search: SearchConfig = Field(default_factory=SearchConfig)
    routing: RoutingConfig = Field(default_factory=RoutingConfig)
    overlap: OverlapConfig = Field(default_factory=OverlapConfig)


# ============================================================================
# Environment Variable Substitution
# ============================================================================

def _substitute_env_vars(value: Any) -> Any:
    """
    Recursively substitute environment variables in configuration values

    Supports multiple formats:
    - ${VAR_NAME}
    - $VAR_NAME
    - ${VAR_NAME:-default_value}  (with default)

    Args:
        value: Configuration value (can be str, dict, list, or other)

    Returns:
        Value with environment variables substituted
    """
    if isinstance(value, str):
        def replace_with_default(match):
            var_name = match.group(1)
            default_value = match.group(3) if match.group(2) else None
            env_value = os.environ.get(var_name)
            if env_value is not None:
                return env_value
            elif default_value is not None:
                return default_value
            else:
                raise ValueError(f"Environment variable '{var_name}' is not set and no default value provided")

        value = re.sub(r'\$\{([A-Za-z_][A-Za-z0-9_]*)(:-([^}]*))?\}', replace_with_default, value)

        def replace_simple(match):
            var_name = match.group(1)
            env_value = os.environ.get(var_name)
            if env_value is not None:
                return env_value
            else:
                raise ValueError(f"Environment variable '{var_name}' is not set")

        value = re.sub(r'\$([A-Za-z_][A-Za-z0-9_]*)', replace_simple, value)

        return value

    elif isinstance(value, dict):
        return {k: _substitute_env_vars(v) for k, v in value.items()}

    elif isinstance(value, list):
        return [_substitute_env_vars(item) for item in value]

    else:
        return value


# ============================================================================
# RouterConfig Class (wrapper around Pydantic model)
# ============================================================================

class RouterConfig:
    """Configuration class for routing parameters with validation"""

    def __init__(self, config_dict: Optional[Dict] = None):
        """Initialize from dictionary (parsed from YAML) with Pydantic validation"""
        config_dict = _substitute_env_vars(config_dict or {})

        try:
            self._model = RouterConfigModel(**config_dict)
        except Exception as e:
            raise ValueError(f"Configuration validation failed: {str(e)}") from e

        self.config_version = self._model.version
        self.config_description = self._model.description

        # Search
        self.base_cost = self._model.search.base_cost
        self.turn_penalty = self._model.search.turn_penalty
        self.search_margin = self._model.search.search_margin
        self.grid_extra_cells = self._model.search.grid_extra_cells
        self.iteration_factor = self._model.search.iteration_factor

        # Routing
        self.stub_cells = self._model.routing.stub_cells
        self.ladder = list(self._model.routing.ladder)
        self.final_attempt = self._model.routing.final_attempt
        self.fallback_margin = self._model.routing.fallback_margin
        self.validation_margin = self._model.routing.validation_margin

        # Overlap
        self.overlap_spacing = self._model.overlap.spacing
        self.base_thickness = self._model.overlap.base_thickness
        self.overlap_epsilon = self._model.overlap.epsilon

    @property
    def attempts(self) -> List[RoutingAttempt]:
        """Every grid attempt in order: the ladder followed by the final fine attempt"""
        return self.ladder + [self.final_attempt]

    @classmethod
    def default(cls) -> 'RouterConfig':
        """Configuration with every value at its default"""
        return cls({})

    @classmethod
    def from_yaml(cls, yaml_path: Union[str, Path]) -> 'RouterConfig':
        """Load configuration from YAML file with validation"""
        try:
            with open(yaml_path, 'r') as f:
                config_dict = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValueError(f"Failed to parse YAML file: {str(e)}") from e
        except FileNotFoundError:
            raise FileNotFoundError(f"Configuration file not found: {yaml_path}")

        return cls(config_dict)

    def to_dict(self) -> Dict:
        """Convert config back to a plain dictionary"""
        return self._model.model_dump()


DEFAULT_CONFIG = RouterConfig.default()
