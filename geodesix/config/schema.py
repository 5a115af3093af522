r"""Pydantic models describing one geodesic integration run."""

from typing import Literal, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from geodesix.errors import ParseError
from geodesix.expression import parse
from geodesix.expression.parser import FUNCTIONS, IDENTIFIER
from geodesix.metric import (
    PRESETS,
    TwoForm,
    get_preset,
    parse_two_form,
    state_names,
    velocity_name,
)


class MetricConfig(BaseModel):
    """Configuration of the metric.

    Either ``preset`` names one of :data:`geodesix.metric.PRESETS` (in the
    default ``x``, ``y`` chart) or the three independent components are given
    as expression strings over ``coordinates``.

    Attributes
    ----------
    coordinates : tuple[str, str]
        Names of the two coordinates
    preset : str, optional
        Name of a preset metric
    g11, g12, g22 : str, optional
        Metric components (``g21`` equals ``g12``)
    """

    coordinates: tuple[str, str] = ("x", "y")
    preset: Optional[str] = None
    g11: Optional[str] = None
    g12: str = "0"
    g22: Optional[str] = None

    @field_validator("coordinates")
    @classmethod
    def validate_coordinates(cls, v: tuple[str, str]) -> tuple[str, str]:
        """Coordinates must be distinct ASCII identifiers that do not clash with velocities."""
        for name in v:
            if IDENTIFIER.fullmatch(name) is None or name in FUNCTIONS:
                raise ValueError(f"Invalid coordinate name: {name!r}")
        state_names(v)
        return v

    @field_validator("preset")
    @classmethod
    def validate_preset(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and v not in PRESETS:
            raise ValueError(
                f"Unknown metric preset {v!r}. Available: {', '.join(sorted(PRESETS))}"
            )
        return v

    @model_validator(mode="after")
    def validate_components(self) -> "MetricConfig":
        """Exactly one of preset or (g11, g22) must be given and components must parse."""
        if self.preset is not None:
            if self.g11 is not None or self.g22 is not None:
                raise ValueError("Give either a preset or metric components, not both")
            if self.coordinates != ("x", "y"):
                raise ValueError("Presets are defined in the ('x', 'y') chart")
            return self
        if self.g11 is None or self.g22 is None:
            raise ValueError("g11 and g22 are required when no preset is given")
        for label, text in (("g11", self.g11), ("g12", self.g12), ("g22", self.g22)):
            try:
                parse(text, self.coordinates)
            except ParseError as e:
                raise ValueError(f"Invalid metric component {label}: {e}") from e
        return self

    def build(self) -> TwoForm:
        """Parse the configured metric."""
        if self.preset is not None:
            return get_preset(self.preset)
        return parse_two_form(self.g11, self.g12, self.g22, self.coordinates)


class InitialConditionConfig(BaseModel):
    """Starting point and velocity of the geodesic.

    Attributes
    ----------
    position : tuple[float, float]
        Coordinates of the starting point
    velocity : tuple[float, float]
        Initial velocity components
    """

    position: tuple[float, float]
    velocity: tuple[float, float]

    def state(self, coordinates: tuple[str, str]) -> dict[str, float]:
        """Initial state environment for the given coordinate names."""
        state = dict(zip(coordinates, self.position))
        state.update(
            zip((velocity_name(name) for name in coordinates), self.velocity)
        )
        return state


class IntegratorConfig(BaseModel):
    """Configuration of the fixed-step integrator.

    Attributes
    ----------
    step_size : float
        Fixed integration step
    max_steps : int
        Step budget before the solution is truncated
    solver : Literal["euler", "heun", "midpoint", "ralston", "bosh3", "tsit5"]
        Explicit Runge-Kutta scheme
    strict : bool
        Raise instead of truncating when the step budget runs out
    """

    step_size: float = Field(default=1e-3, gt=0.0)
    max_steps: int = Field(default=100_000, ge=1)
    solver: Literal["euler", "heun", "midpoint", "ralston", "bosh3", "tsit5"] = "tsit5"
    strict: bool = False


class GeodesicConfig(BaseModel):
    """Top-level configuration of a geodesic run.

    Attributes
    ----------
    metric : MetricConfig
        Metric definition
    initial : InitialConditionConfig
        Initial position and velocity
    integrator : IntegratorConfig
        Integrator settings
    t_start, t_stop : float
        Parameter interval
    output : str, optional
        Path of the ``.npz`` file receiving the trajectory
    """

    metric: MetricConfig
    initial: InitialConditionConfig
    integrator: IntegratorConfig = Field(default_factory=IntegratorConfig)
    t_start: float = 0.0
    t_stop: float = 1.0
    output: Optional[str] = None

    @model_validator(mode="after")
    def validate_interval(self) -> "GeodesicConfig":
        if self.t_stop < self.t_start:
            raise ValueError(
                f"t_stop ({self.t_stop}) must not be smaller than t_start ({self.t_start})"
            )
        return self

    @field_validator("output")
    @classmethod
    def validate_output_extension(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not v.endswith(".npz"):
            raise ValueError(f"Output file must have .npz extension, got: {v}")
        return v
