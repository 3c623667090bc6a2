"""
Shared configuration management for the segmentation service.
"""

from functools import lru_cache
from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class SegmentationConfig(BaseSettings):
    """Segmentation engine configuration, read from SEGMENTATION_* variables."""

    model_config = SettingsConfigDict(
        env_prefix="SEGMENTATION_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore"
    )
    
    # Environment
    env: str = Field(default="local")
    log_level: str = Field(default="info")
    
    # Campaign builder
    preview_limit: int = Field(default=5, ge=0)
    delivery_success_rate: float = Field(default=0.9, ge=0.0, le=1.0)
    default_segments: List[str] = Field(default_factory=lambda: ["VIP", "Premium", "Regular", "New"])


@lru_cache()
def get_config() -> SegmentationConfig:
    """Get the process-wide segmentation configuration."""
    return SegmentationConfig()
