"""Exception types raised by geodesix."""

from typing import Optional


class GeodesixError(Exception):
    """Base class for all geodesix errors."""


class ParseError(GeodesixError, ValueError):
    """
    Raised when expression text cannot be parsed.

    This is a recoverable error: editors holding user input are expected to
    catch it and flag the text as invalid.

    Attributes
    ----------
    text : str
        The text that failed to parse.
    position : int or None
        Character offset of the offending token, if known.
    """

    def __init__(self, message: str, text: str = "", position: Optional[int] = None):
        self.text = text
        self.position = position
        if position is not None:
            message = f"{message} (at position {position} in {text!r})"
        super().__init__(message)


class MissingVariableError(GeodesixError, KeyError):
    """
    Raised by the unchecked evaluation path when a variable is unbound.

    Reaching this means a symbolic system was evaluated against an incomplete
    state, which is a programming error rather than a user error.
    """

    def __init__(self, name: str):
        self.name = name
        super().__init__(name)

    def __str__(self) -> str:
        return f"variable {self.name!r} is not bound in the environment"


class IntegrationBudgetExhausted(GeodesixError, RuntimeError):
    """Raised by strict integrations that hit max_steps before t_stop."""

    def __init__(self, t_reached: float, t_stop: float, max_steps: int):
        self.t_reached = t_reached
        self.t_stop = t_stop
        self.max_steps = max_steps
        super().__init__(
            f"Integration stopped at t={t_reached:.6g} after {max_steps} steps, "
            f"before reaching t_stop={t_stop:.6g}"
        )
