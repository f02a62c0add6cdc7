"""Configuration management."""

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings pulled from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="TERRAIN_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Logging Configuration
    log_level: str = Field(default="INFO", description="Logging level")
    log_format: Literal["json", "console"] = Field(default="console", description="Logging format")

    # Rendering variant defaults
    color_mode: Literal["dark", "light"] = Field(default="dark", description="Default colour mode")
    hemisphere: Literal["north", "south"] = Field(default="north", description="Hemisphere for seasons")
    seasonal_tint: bool = Field(default=True, description="Tint terrain colours by season")

    # Grid layout
    cell_size: float = Field(default=11, gt=0, description="Orthogonal cell size")
    cell_gap: float = Field(default=2, ge=0, description="Gap between orthogonal cells")
    offset_x: float = Field(default=24, description="Orthogonal grid left offset")
    offset_y: float = Field(default=42, description="Orthogonal grid top offset")

    # Isometric projection
    iso_origin_x: float = Field(default=405, description="Screen X of grid origin")
    iso_origin_y: float = Field(default=6, description="Screen Y of grid origin")
    tile_half_width: float = Field(default=7, gt=0, description="Half width of an isometric tile")
    tile_half_height: float = Field(default=3, gt=0, description="Half height of an isometric tile")

    # World synthesis
    grid_weeks: int = Field(default=52, ge=0, description="Biome grid columns")
    grid_days: int = Field(default=7, ge=0, description="Biome grid rows")
    biome_seed_offset: int = Field(default=7919, description="Offset added to the world seed for biomes")
    asset_density: float = Field(default=5, ge=0, description="Asset density, 5 keeps the tabulated chances")


settings = Settings()
