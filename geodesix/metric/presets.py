"""
Named metrics in the default ``(x, y)`` chart.

Each preset is stored as the three independent component strings so it can be
shown in, and edited from, a text field.
"""

from typing import NamedTuple

from geodesix.metric.two_form import TwoForm, parse_two_form


class MetricPreset(NamedTuple):
    g11: str
    g12: str
    g22: str
    description: str


PRESETS: dict[str, MetricPreset] = {
    "flat": MetricPreset("1", "0", "1", "Euclidean plane"),
    "polar": MetricPreset("1", "0", "x ^ 2", "Euclidean plane, x = r and y = theta"),
    "sphere": MetricPreset(
        "1", "0", "sin(x) ^ 2", "Unit sphere, x = polar angle and y = azimuth"
    ),
    "torus": MetricPreset(
        "1",
        "0",
        "(2 + cos(x)) ^ 2",
        "Torus with radii 2 and 1, x = tube angle and y = ring angle",
    ),
    "poincare": MetricPreset(
        "y ^ -2", "0", "y ^ -2", "Poincare half-plane, defined for y > 0"
    ),
    "exponential": MetricPreset(
        "1", "0", "2.718281828459045 ^ (2 * x)", "Warped product with exp(2x) fibre"
    ),
}


def preset_names() -> list[str]:
    return sorted(PRESETS)


def get_preset(name: str) -> TwoForm:
    """
    Parse a named preset metric.

    Raises
    ------
    ValueError
        If ``name`` is not a known preset.
    """
    if name not in PRESETS:
        raise ValueError(
            f"Unknown metric preset {name!r}. Available: {', '.join(preset_names())}"
        )
    preset = PRESETS[name]
    return parse_two_form(preset.g11, preset.g12, preset.g22)
