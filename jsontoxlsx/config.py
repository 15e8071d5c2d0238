"""Merge options and their YAML loader."""

# Module responsibilities:
# - Describe the tunables of a merge as a validated pydantic model.
# - Load overrides from a YAML file, reporting problems as ConfigError.

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .errors import ConfigError

# Excel built-in number format 14.
DEFAULT_DATE_FORMAT = "mm-dd-yy"


class MergeOptions(BaseModel):
    """Options applied to every merge call."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    date_format: str = DEFAULT_DATE_FORMAT
    freeze_header: bool = True
    copy_column_widths: bool = True
    chunk_size: int = Field(default=65536, gt=0)
    log_dir: Optional[Path] = None


def load_options(path: str | Path) -> MergeOptions:
    """Load merge options from a YAML file.

    Raises:
        ConfigError: When the file is missing, is not a mapping, or fails validation.
    """

    config_path = Path(path)
    if not config_path.exists():
        raise ConfigError(f"Config file not found: {config_path}")
    with config_path.open("r", encoding="utf-8") as fh:
        try:
            payload = yaml.safe_load(fh)
        except yaml.YAMLError as exc:
            raise ConfigError(f"Invalid YAML in {config_path}: {exc}") from exc
    if payload is None:
        payload = {}
    if not isinstance(payload, dict):
        raise ConfigError("Invalid config YAML structure (expected mapping)")
    data: Dict[str, Any] = {str(key): value for key, value in payload.items()}
    try:
        return MergeOptions.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(f"Invalid merge options in {config_path}: {exc}") from exc
