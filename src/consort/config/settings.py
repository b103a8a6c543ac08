"""Configuration management using Pydantic Settings."""

from pathlib import Path
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..core.models import GridSpec


class Settings(BaseSettings):
    """Application settings loaded from environment variables and .env file."""

    model_config = SettingsConfigDict(
        env_prefix="CONSORT_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Grid defaults (reference diagram)
    column_count: int = Field(4, gt=0)
    column_width: float = Field(28.0, gt=0)
    column_spacing: float = Field(5.0, gt=0)
    layer_count: int = Field(5, gt=0)
    layer_depth: float = Field(13.0, gt=0)
    layer_spacing: float = Field(8.0, gt=0)

    # Output
    output_dir: Path = Field(Path("output"))
    figure_dpi: int = Field(200, ge=50, le=1200)
    figure_scale: float = Field(
        0.08,
        gt=0,
        description="Inches per grid unit when sizing the figure",
    )

    # Logging
    log_level: str = Field("INFO")
    log_format: str = Field("json", pattern="^(json|text)$")

    def grid_spec(self) -> GridSpec:
        """Build the default grid specification from these settings."""
        return GridSpec(
            column_count=self.column_count,
            column_width=self.column_width,
            column_spacing=self.column_spacing,
            layer_count=self.layer_count,
            layer_depth=self.layer_depth,
            layer_spacing=self.layer_spacing,
        )


# Instantiate global settings
settings = Settings()
