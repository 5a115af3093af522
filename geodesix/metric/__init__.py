"""
Metric tensors, Christoffel symbols and geodesic systems.

All builders work symbolically on :class:`TwoForm` metrics over two named
coordinates and return optimized expressions.
"""

from geodesix.metric.two_form import (
    DEFAULT_COORDINATES,
    TwoForm,
    symmetric_two_form,
    parse_two_form,
    determinant,
    invert,
    evaluate_two_form,
    velocity_name,
    energy,
)
from geodesix.metric.christoffel import (
    christoffel_first_1,
    christoffel_first_2,
    christoffel_second_1,
    christoffel_second_2,
)
from geodesix.metric.geodesic import System, geodesic_system, state_names
from geodesix.metric.presets import PRESETS, MetricPreset, get_preset, preset_names

__all__ = [
    "DEFAULT_COORDINATES",
    "TwoForm",
    "symmetric_two_form",
    "parse_two_form",
    "determinant",
    "invert",
    "evaluate_two_form",
    "velocity_name",
    "energy",
    "christoffel_first_1",
    "christoffel_first_2",
    "christoffel_second_1",
    "christoffel_second_2",
    "System",
    "geodesic_system",
    "state_names",
    "PRESETS",
    "MetricPreset",
    "get_preset",
    "preset_names",
]
