# File: src/parking_allocator/domain/models.py
"""
Domain Models for the Parking Slot Allocator
Following Domain-Driven Design (DDD) principles with rich domain models

This module contains:
1. Value Objects: Money, RegistrationId
2. Enums: SizeClass, VehicleClass, VehicleKind
3. Entities: Slot
4. Vehicles: a single Vehicle record dispatched through a profile table
5. Tickets: immutable receipts and the issuing domain service
6. Domain Events: events raised by the slot pool aggregate

All models include validation and business logic.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional, Dict, Any, Tuple, Callable
from datetime import datetime
from decimal import Decimal
import re
import uuid
from enum import Enum


# ============================================================================
# DOMAIN PRIMITIVES / VALUE OBJECTS
# ============================================================================

@dataclass(frozen=True)  # Value objects are immutable
class RegistrationId:
    """
    Value Object: Vehicle registration number with validation
    """
    value: str

    def __post_init__(self):
        """Validate registration number after initialization"""
        if not self.value or not self.value.strip():
            raise ValueError("Registration id cannot be empty")

        object.__setattr__(self, 'value', self.value.strip().upper())

        if len(self.value) < 2 or len(self.value) > 12:
            raise ValueError(f"Registration id must be 2-12 characters, got: {self.value}")

        if not re.match(r'^[A-Z0-9\s\-]+$', self.value):
            raise ValueError(
                f"Registration id can only contain letters, numbers, spaces, and hyphens: {self.value}"
            )

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Money:
    """
    Value Object: Monetary amount with currency
    Provides arithmetic operations with validation
    """
    amount: Decimal
    currency: str = "INR"
    symbol: str = "Rs"

    def __post_init__(self):
        """Validate money amount"""
        if not isinstance(self.amount, Decimal):
            object.__setattr__(self, 'amount', Decimal(str(self.amount)))

        if self.amount < Decimal('0'):
            raise ValueError("Money amount cannot be negative")

        if len(self.currency) != 3:
            raise ValueError(f"Currency must be 3-letter code: {self.currency}")

    def __add__(self, other: 'Money') -> 'Money':
        """Add two money amounts (same currency only)"""
        if self.currency != other.currency:
            raise ValueError(f"Cannot add {self.currency} to {other.currency}")
        return Money(self.amount + other.amount, self.currency, self.symbol)

    def __mul__(self, multiplier: Decimal) -> 'Money':
        """Multiply money by a decimal"""
        multiplier = Decimal(str(multiplier))
        if multiplier < Decimal('0'):
            raise ValueError("Multiplier cannot be negative")
        return Money(self.amount * multiplier, self.currency, self.symbol)

    def format(self) -> str:
        """Format money for display, currency symbol first"""
        return f"{self.symbol} {self.amount:.2f}"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "amount": str(self.amount),
            "currency": self.currency
        }

    def __str__(self) -> str:
        return self.format()


# ============================================================================
# ENUMS FOR DOMAIN TYPES
# ============================================================================

class SizeClass(Enum):
    """
    Physical size of a slot; a vehicle may only occupy a slot of its own size
    """
    MOTORCYCLE = "motorcycle"
    CAR = "car"
    TRUCK = "truck"

    def __str__(self) -> str:
        names = {
            SizeClass.MOTORCYCLE: "Motorcycle size",
            SizeClass.CAR: "Car size",
            SizeClass.TRUCK: "Truck size",
        }
        return names[self]


class VehicleClass(Enum):
    """Light / heavy motor vehicle classification, independent of size"""
    LMV = "LMV"
    HMV = "HMV"


class VehicleKind(Enum):
    """
    Closed set of vehicle variants
    Everything a variant knows lives in VEHICLE_PROFILES below.
    """
    MOTORCYCLE = "motorcycle"
    CAR = "car"
    TRUCK = "truck"

    @property
    def profile(self) -> 'VehicleProfile':
        return VEHICLE_PROFILES[self]

    def __str__(self) -> str:
        return self.value.title()


@dataclass(frozen=True)
class VehicleProfile:
    """Fixed per-kind attributes and pricing rule"""
    wheel_count: int
    size_class: SizeClass
    vehicle_class: VehicleClass
    base_price: Decimal
    surcharge_rate: Decimal = Decimal('0')

    def price(self) -> Decimal:
        """Base price plus the fixed surcharge (trucks pay 20% on top)"""
        return self.base_price + self.base_price * self.surcharge_rate


TWO_WHEELER_BASE_PRICE = Decimal('10')
FOUR_WHEELER_BASE_PRICE = Decimal('20')
HEAVY_VEHICLE_SURCHARGE = Decimal('0.2')

VEHICLE_PROFILES: Dict[VehicleKind, VehicleProfile] = {
    VehicleKind.MOTORCYCLE: VehicleProfile(
        wheel_count=2,
        size_class=SizeClass.MOTORCYCLE,
        vehicle_class=VehicleClass.LMV,
        base_price=TWO_WHEELER_BASE_PRICE,
    ),
    VehicleKind.CAR: VehicleProfile(
        wheel_count=4,
        size_class=SizeClass.CAR,
        vehicle_class=VehicleClass.LMV,
        base_price=FOUR_WHEELER_BASE_PRICE,
    ),
    VehicleKind.TRUCK: VehicleProfile(
        wheel_count=4,
        size_class=SizeClass.TRUCK,
        vehicle_class=VehicleClass.HMV,
        base_price=FOUR_WHEELER_BASE_PRICE,
        surcharge_rate=HEAVY_VEHICLE_SURCHARGE,
    ),
}

# Other names accepted for a vehicle kind
VEHICLE_KIND_ALIASES: Dict[str, VehicleKind] = {
    "scooter": VehicleKind.MOTORCYCLE,
    "bike": VehicleKind.MOTORCYCLE,
    "two_wheeler": VehicleKind.MOTORCYCLE,
}


def parse_vehicle_kind(kind: Any) -> VehicleKind:
    """
    Resolve a kind name or alias to a VehicleKind
    Raises: ValueError for unknown names
    """
    if isinstance(kind, VehicleKind):
        return kind

    key = str(kind).strip().lower()
    if key in VEHICLE_KIND_ALIASES:
        return VEHICLE_KIND_ALIASES[key]
    try:
        return VehicleKind(key)
    except ValueError:
        raise ValueError(f"Unknown vehicle kind: {kind}") from None


# ============================================================================
# VEHICLES
# ============================================================================

@dataclass(frozen=True)
class Vehicle:
    """
    A vehicle requesting a slot.
    Immutable once constructed; all behaviour is looked up from its kind.
    """
    kind: VehicleKind
    registration_id: RegistrationId

    def __post_init__(self):
        if isinstance(self.registration_id, str):
            object.__setattr__(self, 'registration_id', RegistrationId(self.registration_id))

    @property
    def profile(self) -> VehicleProfile:
        return self.kind.profile

    @property
    def wheel_count(self) -> int:
        return self.profile.wheel_count

    @property
    def size_class(self) -> SizeClass:
        return self.profile.size_class

    @property
    def vehicle_class(self) -> VehicleClass:
        return self.profile.vehicle_class

    @property
    def base_price(self) -> Decimal:
        return self.profile.base_price

    def ticket_price(self, currency: str = "INR", symbol: str = "Rs") -> Money:
        """Price charged on the ticket for this vehicle"""
        return Money(self.profile.price(), currency, symbol)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": self.kind.value,
            "registration_id": str(self.registration_id),
            "wheel_count": self.wheel_count,
            "size_class": self.size_class.value,
            "vehicle_class": self.vehicle_class.value,
        }

    def __str__(self) -> str:
        return f"{self.kind} [{self.registration_id}]"


# ============================================================================
# DOMAIN ENTITIES
# ============================================================================

class Slot:
    """
    Entity: A numbered parking space of a fixed size class.
    Identity is the slot number; only the availability flag ever changes,
    and only from available to used.
    """

    def __init__(self, slot_number: int, size_class: SizeClass):
        if slot_number <= 0:
            raise ValueError("Slot number must be positive")
        if not isinstance(size_class, SizeClass):
            raise ValueError(f"Unknown size class: {size_class!r}")

        self._slot_number = slot_number
        self._size_class = size_class
        self._available = True

    @property
    def slot_number(self) -> int:
        return self._slot_number

    @property
    def size_class(self) -> SizeClass:
        return self._size_class

    @property
    def available(self) -> bool:
        return self._available

    def can_fit(self, size_class: SizeClass) -> bool:
        """A slot only fits vehicles of exactly its own size"""
        return self._size_class == size_class

    def mark_used(self) -> None:
        """
        Take the slot out of circulation.
        Calling this on an already used slot leaves it used; there is no
        way back to available.
        """
        self._available = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "slot_number": self._slot_number,
            "size_class": self._size_class.value,
            "available": self._available
        }

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Slot):
            return False
        return self._slot_number == other._slot_number

    def __hash__(self) -> int:
        return hash(("Slot", self._slot_number))

    def __repr__(self) -> str:
        return (f"Slot(slot_number={self._slot_number}, size_class={self._size_class.name}, "
                f"available={self._available})")


# ============================================================================
# TICKETS
# ============================================================================

@dataclass(frozen=True)
class Ticket:
    """
    Immutable receipt for a committed allocation.
    slot_number is a back-reference for display, not ownership.
    """
    ticket_id: str
    price: Money
    registration_id: str
    issued_at: datetime
    slot_number: int
    size_class: SizeClass
    vehicle_kind: VehicleKind

    def receipt_fields(self) -> Tuple[Tuple[str, str], ...]:
        """The externally visible fields, in receipt order"""
        return (
            ("Ticket No", self.ticket_id),
            ("Ticket issue Date and Time", self.issued_at.isoformat()),
            ("Vehicle No", self.registration_id),
            ("Price", self.price.format()),
            ("Slot number", str(self.slot_number)),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "ticket_id": self.ticket_id,
            "price": self.price.to_dict(),
            "registration_id": self.registration_id,
            "issued_at": self.issued_at.isoformat(),
            "slot_number": self.slot_number,
            "size_class": self.size_class.value,
            "vehicle_kind": self.vehicle_kind.value
        }


def issue_ticket(
    vehicle: Vehicle,
    slot: Slot,
    clock: Optional[Callable[[], datetime]] = None,
    id_factory: Optional[Callable[[], Any]] = None,
    currency: str = "INR",
    symbol: str = "Rs"
) -> Ticket:
    """
    Build the receipt for a slot that has already been committed to a vehicle.

    The slot must already be marked used. Whether its size matches the
    vehicle is not re-checked here; allocation is trusted to have done it.

    Raises: ValueError if the slot is still available
    """
    if slot.available:
        raise ValueError(f"Slot {slot.slot_number} has not been allocated; refusing to issue ticket")

    clock = clock or datetime.now
    id_factory = id_factory or uuid.uuid4

    return Ticket(
        ticket_id=str(id_factory()),
        price=vehicle.ticket_price(currency, symbol),
        registration_id=str(vehicle.registration_id),
        issued_at=clock(),
        slot_number=slot.slot_number,
        size_class=slot.size_class,
        vehicle_kind=vehicle.kind
    )


# ============================================================================
# DOMAIN EVENTS
# ============================================================================

class DomainEvent(ABC):
    """
    Base class for all domain events
    Events represent something that happened in the domain
    """

    def __init__(self):
        self.event_id = str(uuid.uuid4())
        self.timestamp = datetime.now()
        self.version = "1.0"

    @abstractmethod
    def to_dict(self) -> Dict[str, Any]:
        """Convert event to dictionary for serialization"""
        pass

    def __str__(self) -> str:
        return f"{self.__class__.__name__} at {self.timestamp}"


class SlotAllocatedEvent(DomainEvent):
    """Event raised when a slot goes from available to used"""

    def __init__(self, pool_id: str, slot_number: int, size_class: SizeClass):
        super().__init__()
        self.pool_id = pool_id
        self.slot_number = slot_number
        self.size_class = size_class

    def to_dict(self) -> Dict[str, Any]:
        return {
            "event_type": "slot.allocated",
            "event_id": self.event_id,
            "timestamp": self.timestamp.isoformat(),
            "version": self.version,
            "data": {
                "pool_id": self.pool_id,
                "slot_number": self.slot_number,
                "size_class": self.size_class.value
            }
        }
