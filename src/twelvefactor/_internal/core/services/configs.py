from pathlib import Path
from typing import Union

import yaml
from pydantic import ValidationError

from twelvefactor._internal.core.errors import ConfigurationError
from twelvefactor._internal.core.models.apps import App

DEFAULT_APP_FILENAME = "twelvefactor.yml"


def load_app(path: Union[str, Path] = DEFAULT_APP_FILENAME) -> App:
    """
    Loads an app declaration from a YAML file.
    A `.yml` path falls back to `.yaml` if the former does not exist.
    """
    path = Path(path)
    if not path.exists() and path.suffix == ".yml":
        path = path.with_suffix(".yaml")
    try:
        with path.open("r") as f:
            data = yaml.safe_load(f)
    except FileNotFoundError:
        raise ConfigurationError(f"App file not found: {path}")
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in {path}: {e}")
    if not isinstance(data, dict):
        raise ConfigurationError(f"{path} must contain a mapping")
    try:
        return App.parse_obj(data)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid app in {path}: {e}")
