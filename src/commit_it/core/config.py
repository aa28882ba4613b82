"""Loading of validation options from a JSON configuration file.

Example ``.commit-it.json``::

    {
      "scopes": ["cli", "core"],
      "types": ["build", "chore", "docs"]
    }
"""

import json
import logging
from pathlib import Path
from typing import Iterable, Optional, Union

from pydantic import ValidationError

from commit_it.errors import ConfigError
from commit_it.models.options import ConventionalCommitOptions

logger = logging.getLogger(__name__)

CONFIG_FILE_NAME = ".commit-it.json"


def find_config_file(root_path: Union[str, Path]) -> Optional[Path]:
    """Return the configuration file in ``root_path`` if there is one."""
    config_file = Path(root_path) / CONFIG_FILE_NAME
    return config_file if config_file.is_file() else None


def load_options(config_file: Optional[Union[str, Path]]) -> ConventionalCommitOptions:
    """Read options from ``config_file``; defaults when it does not exist."""
    if config_file is None or not Path(config_file).exists():
        return ConventionalCommitOptions()

    config_file = Path(config_file)
    try:
        data = json.loads(config_file.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ConfigError(config_file, f"not valid JSON ({e.msg})") from e

    if not isinstance(data, dict):
        raise ConfigError(config_file, "expected a JSON object")

    try:
        options = ConventionalCommitOptions.model_validate(data)
    except ValidationError as e:
        errors = "; ".join(
            f"{'.'.join(str(loc) for loc in error['loc'])}: {error['msg']}"
            for error in e.errors()
        )
        raise ConfigError(config_file, errors) from e

    logger.debug("Loaded options from %s: %s", config_file, options)
    return options


def merge_options(
    base: ConventionalCommitOptions,
    scopes: Iterable[str] = (),
    types: Iterable[str] = (),
) -> ConventionalCommitOptions:
    """Extend ``base`` with additional scopes and types."""
    return ConventionalCommitOptions(
        scopes=list(base.scopes) + list(scopes),
        types=list(base.types) + list(types),
    )
