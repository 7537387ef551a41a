"""Application configuration and settings management."""

from pathlib import Path
from typing import Any, Optional

import json
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration loaded from environment variables or defaults."""

    model_config = SettingsConfigDict(
        env_prefix="KLYNN_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    app_name: str = "Klynn Operations API"
    api_prefix: str = "/api"
    data_root: Path = Field(default=Path("data"), description="Root directory for itinerary exports.")
    frontend_allowed_origins: tuple[str, ...] = Field(
        default=(
            "http://localhost:3000",
            "http://127.0.0.1:3000",
        ),
        description="Permitted web origins for browser clients (CORS).",
    )

    # Supabase configuration
    supabase_url: Optional[str] = Field(
        default=None,
        description="Supabase project URL (e.g., https://xxx.supabase.co).",
    )
    supabase_key: Optional[str] = Field(
        default=None,
        description="Supabase service role key for backend operations.",
    )
    orders_table: str = "orders"
    vendors_table: str = "vendors"

    # Vendor feeds, tried after the vendors table
    vendor_sheet_url: Optional[str] = Field(
        default=None,
        description="Published CSV export URL of the vendor sheet.",
    )
    vendor_file: Optional[Path] = Field(
        default=None,
        description="Local vendor list (.csv or .xlsx).",
    )
    http_timeout_seconds: float = Field(default=15.0, gt=0.0)

    rider_webhook_url: Optional[str] = Field(
        default=None,
        description="Webhook notified when an order is approved for pickup.",
    )

    default_route_start: tuple[float, float] = Field(
        default=(3.139, 101.6869),
        description="Route start (lat, lng) when the rider location is unknown. Defaults to KL city centre.",
    )
    minutes_per_km: float = Field(default=2.0, ge=0.0)

    rate_limit_max_requests: int = Field(default=100, ge=1)
    rate_limit_window_seconds: float = Field(default=60.0, gt=0.0)

    assignment_tracker_limit: int = Field(
        default=1000,
        ge=1,
        description="Orders whose auto-assignment state is kept in memory before settled ones are dropped.",
    )

    @field_validator("data_root", mode="before")
    @classmethod
    def _expand_path(cls, value: Any) -> Path:
        path_value = value if isinstance(value, Path) else Path(str(value))
        return path_value.expanduser().resolve()

    @field_validator("vendor_file", mode="before")
    @classmethod
    def _expand_optional_path(cls, value: Any) -> Optional[Path]:
        if value is None or (isinstance(value, str) and not value.strip()):
            return None
        path_value = value if isinstance(value, Path) else Path(str(value))
        return path_value.expanduser().resolve()

    @field_validator("frontend_allowed_origins", mode="before")
    @classmethod
    def _parse_str_tuple_from_env(cls, value: Any) -> tuple[str, ...]:
        """Parse string tuple from environment variable (comma-separated or JSON array)."""
        if isinstance(value, tuple):
            return value
        if isinstance(value, list):
            return tuple(str(item) for item in value)
        if isinstance(value, str):
            # Try JSON first
            try:
                parsed = json.loads(value)
                if isinstance(parsed, list):
                    return tuple(str(item) for item in parsed)
            except (json.JSONDecodeError, TypeError):
                pass
            # Try comma-separated
            if "," in value:
                return tuple(item.strip() for item in value.split(",") if item.strip())
            # Single value
            if value.strip():
                return (value.strip(),)
        return tuple()

    @field_validator("default_route_start", mode="before")
    @classmethod
    def _parse_coordinate_pair(cls, value: Any) -> tuple[float, float]:
        """Parse a "lat,lng" pair from environment variable (comma-separated or JSON array)."""
        if isinstance(value, (tuple, list)):
            items = list(value)
        elif isinstance(value, str):
            try:
                items = json.loads(value)
            except (json.JSONDecodeError, TypeError):
                items = [item.strip() for item in value.split(",") if item.strip()]
        else:
            raise ValueError("default_route_start must be a (lat, lng) pair")
        if len(items) != 2:
            raise ValueError("default_route_start must be a (lat, lng) pair")
        return (float(items[0]), float(items[1]))


settings = Settings()
