"""TOML loader for db-merge configuration.

Example ``db-merge.toml``::

    [merge]
    ignore_tables = ["schema_migrations", "sessions"]
    max_concurrency = 8

    [connection]
    connect_timeout = 10
    pool_size = 5
    max_overflow = 10
"""

import tomllib
from pathlib import Path

from pydantic import ValidationError

from db_merge.config.models import ConnectionSettings, MergeConfig
from db_merge.errors import ConfigurationError

DEFAULT_CONFIG_FILE = "db-merge.toml"


def load_merge_config(config_path: Path | None = None) -> MergeConfig:
    """Load merge configuration from a TOML file.

    Args:
        config_path: Path to the config file.  When ``None``, reads
            ``db-merge.toml`` from the current working directory if it
            exists and falls back to defaults otherwise.

    Returns:
        MergeConfig built from the file.

    Raises:
        ConfigurationError: If an explicit *config_path* does not exist, the
            TOML is malformed, or a value fails validation.
    """
    if config_path is None:
        config_path = Path.cwd() / DEFAULT_CONFIG_FILE
        if not config_path.exists():
            return MergeConfig()
    elif not config_path.exists():
        raise ConfigurationError(f"Config file not found: {config_path}")

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigurationError(f"Invalid TOML in {config_path}: {e}") from e

    merge_settings = data.get("merge", {})

    try:
        return MergeConfig(
            connection=ConnectionSettings(**data.get("connection", {})),
            **merge_settings,
        )
    except (ValidationError, TypeError) as e:
        raise ConfigurationError(f"Invalid configuration in {config_path}: {e}") from e
