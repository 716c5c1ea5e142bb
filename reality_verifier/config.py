"""
Central application configuration.

Every tunable value lives here as a typed, documented field.
Any field can be overridden at runtime via an environment variable of the
same name (case-insensitive), e.g.:

    AUTHENTIC_THRESHOLD=70 uvicorn reality_verifier.main:app   # stricter verdicts
    export BATCH_MAX_WORKERS=4                                  # parallel batches

A `.env` file at the project root is loaded automatically.
"""

from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,   # AUTHENTIC_THRESHOLD == authentic_threshold
        extra="ignore",         # silently drop unknown env vars
    )

    # ------------------------------------------------------------------ #
    # Verdict Policy                                                      #
    # ------------------------------------------------------------------ #
    authentic_threshold: int = Field(
        60, description="Trust score must be strictly above this to be authentic"
    )
    compression_artifact_threshold: float = Field(
        0.5, description="Metadata-method score below this → compression artifacts flagged"
    )

    # ------------------------------------------------------------------ #
    # Progress & Scheduling                                               #
    # ------------------------------------------------------------------ #
    progress_checkpoints: list[int] = Field(
        [10, 25, 45, 70, 85, 100],
        description="Per-item progress readings emitted while one item is analyzed",
    )
    detection_step_delay_sec: float = Field(
        0.0, description="Simulated latency for each placeholder detection method"
    )
    parallel_methods: bool = Field(
        False, description="Run one item's detection methods concurrently"
    )
    batch_max_workers: int = Field(
        1, description="Items analyzed concurrently in a batch (1 = sequential)"
    )
    max_batch_items: int = Field(
        50, description="Max media items accepted in one batch request"
    )

    # ------------------------------------------------------------------ #
    # Placeholder Detectors                                               #
    # ------------------------------------------------------------------ #
    detector_seed: Optional[int] = Field(
        None, description="Seed for the placeholder score generator (None = random)"
    )

    # ------------------------------------------------------------------ #
    # Metadata Defaults (absent real inspection)                          #
    # ------------------------------------------------------------------ #
    default_resolution_width: int = Field(1920, description="Fallback frame width (px)")
    default_resolution_height: int = Field(1080, description="Fallback frame height (px)")
    default_duration_sec: float = Field(45.0, description="Fallback clip duration (seconds)")

    # ------------------------------------------------------------------ #
    # Result Store                                                        #
    # ------------------------------------------------------------------ #
    upstash_redis_url: Optional[str] = Field(
        None, description="Upstash REST URL; unset → in-memory store"
    )
    upstash_redis_token: Optional[str] = Field(
        None, description="Upstash REST token"
    )
    result_store_ttl_sec: int = Field(
        2_592_000, description="30 d: stored analysis lifetime (analysis:{id})"
    )
    local_store_max_size: int = Field(
        500, description="Max entries in the in-memory result store"
    )
    result_index_max_size: int = Field(
        1000, ge=1, description="Max ids kept in the Redis recent-results index (analysis:index)"
    )
    dashboard_recent_limit: int = Field(
        100, description="Results considered by the dashboard statistics"
    )

    # ------------------------------------------------------------------ #
    # File Size Limits                                                    #
    # ------------------------------------------------------------------ #
    max_upload_mb: int = Field(
        200, description="Max MB for multipart media uploads"
    )

    @field_validator("progress_checkpoints")
    @classmethod
    def _checkpoints_ascending_to_100(cls, v: list[int]) -> list[int]:
        if len(v) < 2 or v != sorted(set(v)) or v[-1] != 100 or v[0] < 0:
            raise ValueError("progress_checkpoints must be >= 2 ascending values ending at 100")
        return v

    @property
    def max_upload_bytes(self) -> int:
        return self.max_upload_mb * 1024 * 1024


# Single shared instance, imported everywhere.
settings = Settings()
