"""Data models for the checkpoint system."""

from pydantic import BaseModel, Field, ConfigDict, field_validator
from typing import Optional
from datetime import datetime

from discuss_digest.utils.timestamps import parse_lookback


class CheckpointConfig(BaseModel):
    """Checkpoint configuration"""

    model_config = ConfigDict(protected_namespaces=())

    path: str = Field("last_processed_timestamp.txt", min_length=1)
    # First-run window when no checkpoint exists yet
    initial_lookback: str = Field("24h", pattern=r"^\d+[hd]$")
    # Fixed first-run cutoff; takes precedence over initial_lookback
    initial_cutoff: Optional[datetime] = None

    @field_validator("initial_lookback")
    @classmethod
    def validate_lookback(cls, v: str) -> str:
        unit = v[-1]
        amount = int(v[:-1])
        if amount == 0:
            raise ValueError("initial_lookback must be greater than zero")
        if unit == "h" and amount > 720:  # Max 30 days
            raise ValueError("Hour-based lookback cannot exceed 720h (30 days)")
        if unit == "d" and amount > 365:
            raise ValueError("Day-based lookback cannot exceed 365d (1 year)")
        parse_lookback(v)
        return v

    @field_validator("initial_cutoff")
    @classmethod
    def validate_initial_cutoff(cls, v: Optional[datetime]) -> Optional[datetime]:
        if v is not None and v.tzinfo is None:
            raise ValueError("initial_cutoff must include a UTC offset")
        return v
