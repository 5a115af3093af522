"""Configuration file parser for geodesix runs."""

import yaml
from pathlib import Path
from typing import Union

from geodesix.logging_config import get_logger

from .schema import GeodesicConfig

logger = get_logger(__name__)


def load_config(config_path: Union[str, Path]) -> GeodesicConfig:
    """Load and validate a geodesic run configuration from a YAML file.

    Parameters
    ----------
    config_path : str or Path
        Path to YAML configuration file

    Returns
    -------
    GeodesicConfig
        Validated configuration object

    Raises
    ------
    FileNotFoundError
        If config file does not exist
    yaml.YAMLError
        If YAML parsing fails
    ValueError
        If the file is empty or configuration validation fails

    Examples
    --------
    >>> config = load_config("sphere.yaml")
    >>> print(config.metric.preset)
    'sphere'
    """
    config_path = Path(config_path).resolve()

    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    with open(config_path, "r") as f:
        try:
            config_dict = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise yaml.YAMLError(
                f"Error parsing YAML configuration file {config_path}: {e}"
            ) from e

    if config_dict is None:
        raise ValueError(f"Configuration file is empty: {config_path}")

    # Relative output paths are relative to the config file, not CWD
    output = config_dict.get("output")
    if output is not None and not Path(output).is_absolute():
        config_dict["output"] = str((config_path.parent / output).resolve())

    try:
        config = GeodesicConfig(**config_dict)
    except Exception as e:
        raise ValueError(
            f"Error validating configuration from {config_path}: {e}"
        ) from e

    logger.debug(f"Loaded configuration from {config_path}: {config.model_dump()}")
    return config
