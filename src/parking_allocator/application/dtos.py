# File: src/parking_allocator/application/dtos.py
"""
Data Transfer Objects (DTOs) for the Parking Slot Allocator

This module defines DTOs for data transfer between layers:
1. Input DTOs - Allocation requests coming from a caller
2. Output DTOs - Tickets and batch reports handed back to a caller

DTO Principles:
- Validation at creation (pydantic)
- Clear separation between internal and external representations
- No business logic, only data
- Serialization/deserialization support
"""

from typing import Dict, List, Optional, Any
from datetime import datetime
from decimal import Decimal
import json

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..domain.models import Ticket, RegistrationId, parse_vehicle_kind


# ============================================================================
# BASE DTO CLASSES
# ============================================================================

class BaseDTO(BaseModel):
    """Base DTO with common functionality"""

    model_config = ConfigDict(
        from_attributes=True,
        populate_by_name=True,
        use_enum_values=True,
    )

    def to_dict(self, exclude_none: bool = False, **kwargs) -> Dict[str, Any]:
        """Convert DTO to dictionary"""
        data = self.model_dump(**kwargs)
        if exclude_none:
            data = {k: v for k, v in data.items() if v is not None}
        return data

    def to_json(self, **kwargs) -> str:
        """Convert DTO to JSON string"""
        return self.model_dump_json(**kwargs)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'BaseDTO':
        """Create DTO from dictionary"""
        return cls(**data)

    @classmethod
    def from_json(cls, json_str: str) -> 'BaseDTO':
        """Create DTO from JSON string"""
        return cls(**json.loads(json_str))


# ============================================================================
# INPUT DTOs
# ============================================================================

class AllocationRequestDTO(BaseDTO):
    """A vehicle asking for a slot"""
    registration_id: str = Field(min_length=2, max_length=12, description="Vehicle registration number")
    vehicle_kind: str = Field(description="motorcycle, car or truck")

    @field_validator('registration_id')
    @classmethod
    def validate_registration_id(cls, v):
        return str(RegistrationId(v))

    @field_validator('vehicle_kind')
    @classmethod
    def validate_vehicle_kind(cls, v):
        return parse_vehicle_kind(v).value


# ============================================================================
# OUTPUT DTOs
# ============================================================================

class TicketDTO(BaseDTO):
    """Receipt view of an issued ticket"""
    ticket_id: str
    issued_at: datetime
    registration_id: str
    price: Decimal = Field(ge=0)
    currency: str = Field(min_length=3, max_length=3)
    price_display: str
    slot_number: int = Field(ge=1)
    size_class: str
    vehicle_kind: str

    @classmethod
    def from_ticket(cls, ticket: Ticket) -> 'TicketDTO':
        return cls(
            ticket_id=ticket.ticket_id,
            issued_at=ticket.issued_at,
            registration_id=ticket.registration_id,
            price=ticket.price.amount,
            currency=ticket.price.currency,
            price_display=ticket.price.format(),
            slot_number=ticket.slot_number,
            size_class=ticket.size_class.value,
            vehicle_kind=ticket.vehicle_kind.value
        )


class BatchReportDTO(BaseDTO):
    """Summary of one processed batch of vehicles"""
    tickets: List[TicketDTO] = Field(default_factory=list)
    failed_registration_ids: List[str] = Field(default_factory=list)
    unprocessed_count: int = Field(default=0, ge=0)
    stopped_early: bool = False

    @property
    def issued_count(self) -> int:
        return len(self.tickets)

    @classmethod
    def from_result(cls, result: Any) -> 'BatchReportDTO':
        """Build from a parking_service.BatchResult"""
        return cls(
            tickets=[TicketDTO.from_ticket(t) for t in result.tickets],
            failed_registration_ids=[str(e.registration_id) for e in result.errors],
            unprocessed_count=len(result.unprocessed),
            stopped_early=result.stopped_early
        )


class PoolStatusDTO(BaseDTO):
    """Occupancy snapshot of a slot pool"""
    pool_id: str
    total_slots: int = Field(ge=0)
    available_slots: int = Field(ge=0)
    used_slots: int = Field(ge=0)
    available_by_size: Dict[str, int] = Field(default_factory=dict)
    timestamp: Optional[datetime] = None
