# File: src/parking_allocator/application/parking_service.py
"""
Parking Allocation Application Service

This module implements the application service layer. It orchestrates the
domain: a vehicle asks for a slot, the pool commits one, and a ticket is
issued for it.

Responsibilities:
1. Run the allocate-then-issue use case for a single vehicle
2. Run a batch of vehicles under an explicit failure policy
3. Turn the expected "no slot" failure into a result value
4. Handle cross-cutting concerns (logging)

Key Principles:
- Dependency Injection for testability (pool, strategy, clock, id factory)
- A ticket is never issued without a committed slot
- Failures are returned, not thrown; the caller decides what to do next
"""

from typing import Dict, List, Optional, Any, Callable, Iterable
from datetime import datetime
from dataclasses import dataclass, field
import logging

from ..config import ParkingConfig
from ..domain.models import Vehicle, Ticket, issue_ticket
from ..domain.aggregates import SlotPool
from ..domain.strategies import (
    AllocationStrategy, ParkingError, SlotAllocationError, SlotUnavailableError,
    request_slot
)
from ..infrastructure.factories import SlotPoolFactory, RandomSizeClassSource
from .dtos import PoolStatusDTO

__all__ = [
    "AllocationOutcome", "BatchResult", "ParkingService", "ParkingServiceFactory",
    "ParkingError", "SlotAllocationError", "SlotUnavailableError",
]


# ============================================================================
# RESULT TYPES
# ============================================================================

@dataclass(frozen=True)
class AllocationOutcome:
    """
    Result of one slot request: either a ticket or the reason there is none
    """
    vehicle: Vehicle
    ticket: Optional[Ticket] = None
    error: Optional[SlotUnavailableError] = None

    @property
    def success(self) -> bool:
        return self.ticket is not None

    def raise_for_failure(self) -> Ticket:
        """Return the ticket, or raise the carried error"""
        if self.error is not None:
            raise self.error
        return self.ticket

    def to_dict(self) -> Dict[str, Any]:
        return {
            "success": self.success,
            "vehicle": self.vehicle.to_dict(),
            "ticket": self.ticket.to_dict() if self.ticket else None,
            "error": str(self.error) if self.error else None
        }


@dataclass
class BatchResult:
    """Outcome of processing a batch of vehicles in order"""
    outcomes: List[AllocationOutcome] = field(default_factory=list)
    unprocessed: List[Vehicle] = field(default_factory=list)
    stopped_early: bool = False

    @property
    def tickets(self) -> List[Ticket]:
        return [o.ticket for o in self.outcomes if o.success]

    @property
    def errors(self) -> List[SlotUnavailableError]:
        return [o.error for o in self.outcomes if o.error is not None]

    @property
    def success(self) -> bool:
        return not self.errors and not self.unprocessed


# ============================================================================
# APPLICATION SERVICE
# ============================================================================

class ParkingService:
    """
    Application service for slot allocation and ticket issuance

    All slot state lives in the injected pool; the service itself keeps no
    record of issued tickets.
    """

    def __init__(
        self,
        pool: SlotPool,
        strategy: Optional[AllocationStrategy] = None,
        clock: Optional[Callable[[], datetime]] = None,
        id_factory: Optional[Callable[[], Any]] = None,
        currency: str = "INR",
        currency_symbol: str = "Rs"
    ):
        self.pool = pool
        self.strategy = strategy
        self.clock = clock or datetime.now
        self.id_factory = id_factory
        self.currency = currency
        self.currency_symbol = currency_symbol
        self.logger = logging.getLogger(self.__class__.__name__)

    def _allocate(self, vehicle: Vehicle):
        return request_slot(vehicle, self.pool, strategy=self.strategy)

    def request_ticket(self, vehicle: Vehicle) -> AllocationOutcome:
        """
        Allocate a slot for the vehicle and issue its ticket

        Returns: AllocationOutcome with the ticket, or with SlotUnavailableError
        """
        self.logger.debug(f"Slot requested for {vehicle} ({vehicle.size_class.name})")

        try:
            slot = self._allocate(vehicle)
        except SlotUnavailableError as e:
            self.logger.warning(
                f"No {vehicle.size_class.name} slot available for {vehicle.registration_id}"
            )
            return AllocationOutcome(vehicle=vehicle, error=e)

        ticket = issue_ticket(
            vehicle,
            slot,
            clock=self.clock,
            id_factory=self.id_factory,
            currency=self.currency,
            symbol=self.currency_symbol
        )
        self.logger.info(
            f"Issued ticket {ticket.ticket_id} to {vehicle.registration_id}: "
            f"slot {ticket.slot_number}, {ticket.price.format()}"
        )
        return AllocationOutcome(vehicle=vehicle, ticket=ticket)

    def process_batch(
        self,
        vehicles: Iterable[Vehicle],
        stop_on_first_failure: bool = True
    ) -> BatchResult:
        """
        Request tickets for vehicles in order

        With stop_on_first_failure (the default) the first failed request
        ends the batch and the remaining vehicles are left unprocessed.
        Tickets already issued are kept either way.
        """
        pending = list(vehicles)
        result = BatchResult()

        for position, vehicle in enumerate(pending):
            outcome = self.request_ticket(vehicle)
            result.outcomes.append(outcome)

            if not outcome.success and stop_on_first_failure:
                result.unprocessed = pending[position + 1:]
                result.stopped_early = True
                self.logger.warning(
                    f"Stopping batch after failure for {vehicle.registration_id}; "
                    f"{len(result.unprocessed)} vehicle(s) not processed"
                )
                break

        self.logger.info(
            f"Batch finished: {len(result.tickets)} ticket(s), {len(result.errors)} failure(s)"
        )
        return result

    def get_pool_status(self) -> PoolStatusDTO:
        distribution = self.pool.size_distribution()
        return PoolStatusDTO(
            pool_id=self.pool.id,
            total_slots=len(self.pool),
            available_slots=self.pool.available_count(),
            used_slots=self.pool.used_count(),
            available_by_size={
                size.value: self.pool.available_count(size) for size in distribution
            },
            timestamp=self.clock()
        )


# ============================================================================
# SERVICE FACTORY
# ============================================================================

class ParkingServiceFactory:
    """Factory for creating ParkingService instances"""

    @staticmethod
    def create_default_service(
        config: Optional[ParkingConfig] = None,
        size_source: Any = None
    ) -> ParkingService:
        """Build a pool from config and wrap it in a service"""
        config = config or ParkingConfig()
        size_source = size_source or RandomSizeClassSource(seed=config.seed)
        pool = SlotPoolFactory().create(config.total_slots, size_source)

        return ParkingService(
            pool,
            currency=config.currency,
            currency_symbol=config.currency_symbol
        )

    @staticmethod
    def create_service_with_pool(pool: SlotPool, config: Optional[ParkingConfig] = None) -> ParkingService:
        config = config or ParkingConfig()
        return ParkingService(
            pool,
            currency=config.currency,
            currency_symbol=config.currency_symbol
        )
