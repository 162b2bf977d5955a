from typing import Any, Union
from pathlib import Path

import json5  # type: ignore
import yaml

from unipatch.logger import logger

from .models import Settings


def _load_raw_file(path: Path) -> Any:
    ext = path.suffix.lower()
    text = path.read_text(encoding="utf-8")
    if ext in {".yaml", ".yml"}:
        data = yaml.safe_load(text)
    elif ext in {".json5", ".jsonc", ".json"}:
        data = json5.loads(text)
    else:
        raise ValueError(f"Unsupported config file extension: {ext}")
    # An empty document means all defaults
    return {} if data is None else data


def load_settings(path: Union[str, Path]) -> Settings:
    """
    Load parser, renderer and display settings from a YAML or JSON5 file.
    The root must be a mapping; unknown sections are ignored.
    """
    p = Path(path)
    data = _load_raw_file(p)
    if not isinstance(data, dict):
        raise ValueError("Root configuration must be a mapping/object")

    settings = Settings.model_validate(data)
    logger.debug("Loaded settings", path=str(p), sections=sorted(data))
    return settings
