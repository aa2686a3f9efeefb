# File: src/parking_allocator/config.py
"""
Configuration for the parking allocator demo.

Everything has a default; values can come from a dict or from the command
line. Validation is done by pydantic.
"""

from typing import Optional, Dict, Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .domain.models import RegistrationId


class ParkingConfig(BaseModel):
    """Settings for building the pool and running the batch"""

    model_config = ConfigDict(frozen=True)

    total_slots: int = Field(default=100, ge=0, description="Number of slots in the pool")
    seed: Optional[int] = Field(default=None, description="Seed for random slot sizes")
    registration_id: str = Field(default="MH12AB1111", min_length=2, max_length=12)
    stop_on_first_failure: bool = True
    currency: str = Field(default="INR", min_length=3, max_length=3)
    currency_symbol: str = Field(default="Rs", min_length=1)
    log_level: str = "INFO"
    log_file: str = Field(default="logs/parking_app.log", min_length=1)
    log_to_console: bool = False

    @field_validator('registration_id')
    @classmethod
    def validate_registration_id(cls, v):
        return str(RegistrationId(v))

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v):
        v = v.upper()
        if v not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Unknown log level: {v}")
        return v

    @field_validator('currency')
    @classmethod
    def validate_currency(cls, v):
        return v.upper()

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ParkingConfig':
        """Create config from a dict, ignoring keys set to None"""
        return cls(**{k: v for k, v in data.items() if v is not None})
