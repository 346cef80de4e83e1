"""YAML configuration loading utilities."""

from pathlib import Path

import yaml

from newsdesk.config.models import NewsdeskConfig


def load_config(path: Path | str) -> NewsdeskConfig:
    """Load configuration from YAML file.

    Args:
        path: Path to YAML config file.

    Returns:
        Validated NewsdeskConfig.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        pydantic.ValidationError: If config is invalid.
    """
    path = Path(path)
    with path.open() as f:
        raw = yaml.safe_load(f)

    # An empty file means "all defaults".
    return NewsdeskConfig.model_validate(raw or {})


def get_default_config_path() -> Path:
    """Get path to default config file."""
    return Path(__file__).parents[3] / "configs" / "default.yaml"
