"""Configuration models for enum-collections."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from enum_collections.core.memory.models import AllocatorConfig


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = Field(default="INFO", pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$")
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    structured: bool = Field(default=False, description="Emit one JSON object per record")
    filename: str | None = Field(default=None, description="Log file path (stdout if None)")


class CollectionsConfig(BaseModel):
    """Library-level configuration shared by every container."""

    model_config = ConfigDict(extra="ignore")  # Forward compatibility

    allocator: AllocatorConfig = AllocatorConfig()
    verify_contracts: bool = Field(
        default=False,
        description="Prove the key bijection of every key type when a container is built",
    )
    logging: LoggingConfig = LoggingConfig()
