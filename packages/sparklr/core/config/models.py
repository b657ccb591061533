"""Application configuration models for Sparklr."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = Field(default="INFO", pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$")
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    structured: bool = Field(default=False, description="Emit JSON lines instead of text")
    filename: str | None = Field(default=None, description="Log file (stderr when unset)")


class ViewportConfig(BaseModel):
    """Canvas size ``sparklr recentre`` fits documents onto when no target is given."""

    model_config = ConfigDict(extra="forbid")

    width: int = Field(default=800, gt=0)
    height: int = Field(default=600, gt=0)


class ExportConfig(BaseModel):
    """YAML export settings."""

    model_config = ConfigDict(extra="forbid")

    indent: int = Field(default=2, ge=2, le=8, description="YAML indentation width")


class AppConfig(BaseModel):
    """Application-level configuration."""

    model_config = ConfigDict(extra="ignore")  # Forward compatibility

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    viewport: ViewportConfig = Field(default_factory=ViewportConfig)
    export: ExportConfig = Field(default_factory=ExportConfig)
