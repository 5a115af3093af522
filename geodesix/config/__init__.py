"""Configuration module for geodesix runs."""

from .parser import load_config
from .schema import (
    GeodesicConfig,
    MetricConfig,
    InitialConditionConfig,
    IntegratorConfig,
)

__all__ = [
    "load_config",
    "GeodesicConfig",
    "MetricConfig",
    "InitialConditionConfig",
    "IntegratorConfig",
]
