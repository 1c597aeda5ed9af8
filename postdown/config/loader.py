"""YAML config discovery and loading with env var expansion."""

import logging
import os
import re
from pathlib import Path

import yaml
from pydantic import ValidationError

from .models import PostdownConfig

logger = logging.getLogger(__name__)

_ENV_REF = re.compile(r"\$\{(\w+)\}")


def config_search_paths() -> list[Path]:
    """Implicit config locations, most specific first."""
    return [Path("./postdown.yaml"), Path.home() / ".postdown" / "config.yaml"]


def find_config(cli_path: str | None = None) -> Path | None:
    """Return the config file to use, or None to run on defaults.

    An explicit path must exist; implicit locations are skipped when missing.
    """
    if cli_path:
        path = Path(cli_path)
        if not path.is_file():
            raise ValueError(f"Config file not found: {path}")
        return path
    return next((p for p in config_search_paths() if p.is_file()), None)


def load_config(cli_path: str | None = None) -> PostdownConfig:
    """Load config from an explicit path, ./postdown.yaml or ~/.postdown/config.yaml.

    An empty file means defaults. The returned config records the file it
    came from in ``source``.
    """
    path = find_config(cli_path)
    if path is None:
        return PostdownConfig()

    try:
        raw = yaml.safe_load(path.read_text())
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in {path}: {e}") from e

    if raw is None:
        logger.debug("Config file %s is empty, using defaults", path)
        return PostdownConfig(source=str(path))
    if not isinstance(raw, dict):
        raise ValueError(f"Invalid config in {path}: expected a mapping, got {type(raw).__name__}")

    try:
        cfg = PostdownConfig.model_validate({**_expand_env_vars(raw), "source": str(path)})
    except ValidationError as e:
        raise ValueError(f"Invalid config in {path}: {e}") from e
    logger.debug("Loaded config from %s", path)
    return cfg


def _expand_env_vars(obj: object) -> object:
    """Recursively expand ${VAR} references in strings; unset vars become ''."""
    if isinstance(obj, str):
        return _ENV_REF.sub(lambda m: os.environ.get(m.group(1), ""), obj)
    elif isinstance(obj, dict):
        return {k: _expand_env_vars(v) for k, v in obj.items()}
    elif isinstance(obj, list):
        return [_expand_env_vars(v) for v in obj]
    return obj


# Default YAML template for `postdown config init`
DEFAULT_CONFIG_TEMPLATE = """\
# postdown.yaml

# Rendering
render:
  # Node types to drop entirely (children included), on top of embeds.
  # Any of: text heading paragraph image figure horizontalRule
  #         orderedList unorderedList listItem
  # skip_types: [figure]
  bullet_marker: "*"           # * | - | +

# Logging (written to stderr)
log_level: "info"              # debug | info | warn | error
log_format: "text"             # text | json
"""
