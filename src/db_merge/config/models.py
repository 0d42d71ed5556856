"""Pydantic models for db-merge configuration."""

from pydantic import BaseModel, Field


class ConnectionSettings(BaseModel):
    """Engine and pool settings from the ``[connection]`` table."""

    connect_timeout: int = Field(default=10, ge=1)
    pool_size: int = Field(default=5, ge=1)
    max_overflow: int = Field(default=10, ge=0)


class MergeConfig(BaseModel):
    """Complete configuration from db-merge.toml."""

    ignore_tables: list[str] = Field(default_factory=list)
    max_concurrency: int = Field(default=10, ge=1)  # tables described at once
    connection: ConnectionSettings = Field(default_factory=ConnectionSettings)
