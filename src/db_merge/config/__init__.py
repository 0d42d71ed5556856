"""Configuration: TOML loading and config models.

Usage:
    >>> from db_merge.config import load_merge_config, MergeConfig
"""

from db_merge.config.loader import load_merge_config
from db_merge.config.models import ConnectionSettings, MergeConfig

__all__ = ["load_merge_config", "MergeConfig", "ConnectionSettings"]
