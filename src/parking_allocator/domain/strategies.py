# File: src/parking_allocator/domain/strategies.py
"""
Strategy Pattern Implementation for Slot Allocation

This module encapsulates the slot allocation algorithm behind a strategy
interface so the pool can be searched in different ways without touching the
pool itself. The shipped strategy is a first-fit linear scan.

It also defines the allocation error taxonomy: there is exactly one
expected failure, SlotUnavailableError, raised when no free slot of the
requested size exists.
"""

from abc import ABC, abstractmethod
from typing import Optional, Iterable, TYPE_CHECKING
import logging

from .models import Slot, SizeClass, Vehicle

if TYPE_CHECKING:
    from .aggregates import SlotPool


# ============================================================================
# ALLOCATION ERRORS
# ============================================================================

class ParkingError(Exception):
    """Base exception for parking operations"""
    pass


class SlotAllocationError(ParkingError):
    """Raised when a slot cannot be allocated"""
    pass


class SlotUnavailableError(SlotAllocationError):
    """
    No available slot of the requested size class.
    An expected, checked condition rather than a defect.
    """

    def __init__(self, registration_id: str, size_class: SizeClass):
        self.registration_id = str(registration_id)
        self.size_class = size_class
        super().__init__(f"Parking slot not available for vehicle :: {self.registration_id}")


# ============================================================================
# STRATEGY INTERFACES
# ============================================================================

class AllocationStrategy(ABC):
    """
    Abstract base class for allocation strategies
    Defines the interface for picking a slot out of a pool
    """

    def __init__(self):
        self.logger = logging.getLogger(self.__class__.__name__)

    @abstractmethod
    def select_slot(self, slots: Iterable[Slot], size_class: SizeClass) -> Optional[Slot]:
        """
        Pick a slot for the given size class without modifying it
        Returns: Slot if one is available, None otherwise
        """
        pass

    def get_strategy_name(self) -> str:
        """Get human-readable strategy name"""
        return self.__class__.__name__.replace("Strategy", "")

    def __str__(self) -> str:
        return f"{self.get_strategy_name()} Strategy"


# ============================================================================
# ALLOCATION STRATEGIES
# ============================================================================

class FirstFitStrategy(AllocationStrategy):
    """
    Strategy: first fit in insertion order
    - Scans slots in the order they were added to the pool
    - Returns the earliest available slot whose size matches exactly
    """

    def select_slot(self, slots: Iterable[Slot], size_class: SizeClass) -> Optional[Slot]:
        for slot in slots:
            if slot.available and slot.can_fit(size_class):
                self.logger.debug(f"First fit for {size_class.name}: slot {slot.slot_number}")
                return slot

        self.logger.debug(f"No available slot for {size_class.name}")
        return None


def request_slot(
    vehicle: Vehicle,
    pool: 'SlotPool',
    strategy: Optional[AllocationStrategy] = None
) -> Slot:
    """
    Allocate the first free slot matching the vehicle's size class.

    The returned slot is already marked used; find and mark happen as one
    step inside the pool. `strategy` overrides the pool's own policy for
    this request only.

    Raises: SlotUnavailableError when no matching slot is free
    """
    slot = pool.allocate(vehicle.size_class, strategy=strategy)
    if slot is None:
        raise SlotUnavailableError(str(vehicle.registration_id), vehicle.size_class)
    return slot
