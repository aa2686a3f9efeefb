# File: src/parking_allocator/domain/aggregates.py
"""
Aggregate Roots for the Parking Slot Allocator
Following Domain-Driven Design (DDD) Aggregate Pattern

Aggregates:
1. SlotPool - Root aggregate owning every parking slot

Key Concepts:
- Slots are only reached and modified through the pool
- Domain events are raised for important state changes
- Allocation (find + mark used) is a single guarded operation
"""

from typing import List, Optional, Dict, Iterable, Iterator, Union, Any
import threading
import uuid
import logging

from .models import Slot, SizeClass, DomainEvent, SlotAllocatedEvent
from .strategies import AllocationStrategy, FirstFitStrategy


# ============================================================================
# BASE AGGREGATE ROOT
# ============================================================================

class AggregateRoot:
    """
    Base class for all aggregate roots
    Provides identity, domain event collection and versioning
    """

    def __init__(self, id: Optional[str] = None):
        self._id = id or str(uuid.uuid4())
        self._version: int = 1
        self._changes: List[DomainEvent] = []
        self._logger = logging.getLogger(self.__class__.__name__)

    @property
    def id(self) -> str:
        return self._id

    @property
    def version(self) -> int:
        """Get current aggregate version"""
        return self._version

    def _increment_version(self) -> None:
        self._version += 1

    def _add_domain_event(self, event: DomainEvent) -> None:
        """Add a domain event to the list of changes"""
        self._changes.append(event)
        self._logger.debug(f"Added domain event: {event.__class__.__name__}")

    def clear_events(self) -> List[DomainEvent]:
        """Clear and return all domain events"""
        events = self._changes.copy()
        self._changes.clear()
        return events

    @property
    def has_changes(self) -> bool:
        """Check if aggregate has pending domain events"""
        return len(self._changes) > 0


# ============================================================================
# SLOT POOL AGGREGATE
# ============================================================================

class SlotPool(AggregateRoot):
    """
    Aggregate Root: fixed collection of parking slots.

    Slots keep their insertion order, which is also the scan order used for
    allocation. The pool is built once; slots are never removed, resized or
    released.

    Invariants:
    - slot numbers are unique within the pool
    - a slot is handed out by allocate() at most once
    """

    def __init__(
        self,
        slots: Optional[Iterable[Slot]] = None,
        strategy: Optional[AllocationStrategy] = None,
        id: Optional[str] = None
    ):
        super().__init__(id)
        self._slots: List[Slot] = []
        self._index: Dict[int, int] = {}
        self._strategy = strategy or FirstFitStrategy()
        self._lock = threading.Lock()

        for slot in slots or []:
            self._add_slot(slot)

    @classmethod
    def build(
        cls,
        total_slots: int,
        size_source: Any,
        strategy: Optional[AllocationStrategy] = None
    ) -> 'SlotPool':
        """
        Create a pool of slots numbered 1..total_slots.

        Each slot's size class is drawn from size_source, any object with a
        next_size_class() method.
        """
        if total_slots < 0:
            raise ValueError(f"Total slots cannot be negative: {total_slots}")

        slots = [
            Slot(slot_number, size_source.next_size_class())
            for slot_number in range(1, total_slots + 1)
        ]
        pool = cls(slots, strategy=strategy)
        pool._logger.info(f"Built slot pool {pool.id} with {total_slots} slots: "
                          f"{pool._format_distribution()}")
        return pool

    def _add_slot(self, slot: Slot) -> None:
        if slot.slot_number in self._index:
            raise ValueError(f"Duplicate slot number: {slot.slot_number}")
        self._index[slot.slot_number] = len(self._slots)
        self._slots.append(slot)

    def _format_distribution(self) -> str:
        return ", ".join(f"{size.name}={count}" for size, count in self.size_distribution().items())

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @property
    def strategy(self) -> AllocationStrategy:
        return self._strategy

    def __len__(self) -> int:
        return len(self._slots)

    def __iter__(self) -> Iterator[Slot]:
        return iter(list(self._slots))

    def get(self, slot_number: int) -> Slot:
        """
        Look up a slot by number
        Raises: KeyError if the number is not in this pool
        """
        position = self._index.get(slot_number)
        if position is None:
            raise KeyError(f"Slot {slot_number} is not part of pool {self.id}")
        return self._slots[position]

    def find_first_available(self, size_class: SizeClass) -> Optional[Slot]:
        """First available slot of the size class in insertion order, or None"""
        return self._strategy.select_slot(self._slots, size_class)

    def available_count(self, size_class: Optional[SizeClass] = None) -> int:
        return sum(
            1 for slot in self._slots
            if slot.available and (size_class is None or slot.size_class == size_class)
        )

    def used_count(self) -> int:
        return sum(1 for slot in self._slots if not slot.available)

    def size_distribution(self) -> Dict[SizeClass, int]:
        distribution = {size: 0 for size in SizeClass}
        for slot in self._slots:
            distribution[slot.size_class] += 1
        return distribution

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def mark_used(self, slot: Union[Slot, int]) -> None:
        """
        Mark a slot used. Marking an already used slot again is a no-op.
        Raises: KeyError if the slot does not belong to this pool
        """
        slot_number = slot.slot_number if isinstance(slot, Slot) else slot
        target = self.get(slot_number)

        with self._lock:
            was_available = target.available
            target.mark_used()
            if was_available:
                self._record_allocation(target)

    def allocate(
        self,
        size_class: SizeClass,
        strategy: Optional[AllocationStrategy] = None
    ) -> Optional[Slot]:
        """
        Find and commit a slot of the given size class in one step.

        Returns the slot, already marked used, or None when nothing fits.
        """
        strategy = strategy or self._strategy

        with self._lock:
            slot = strategy.select_slot(self._slots, size_class)
            if slot is None:
                self._logger.debug(f"Pool {self.id}: no {size_class.name} slot available")
                return None

            slot.mark_used()
            self._record_allocation(slot)

        self._logger.debug(f"Pool {self.id}: allocated slot {slot.slot_number} ({size_class.name})")
        return slot

    def _record_allocation(self, slot: Slot) -> None:
        self._add_domain_event(SlotAllocatedEvent(self.id, slot.slot_number, slot.size_class))
        self._increment_version()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "version": self.version,
            "total_slots": len(self),
            "available_slots": self.available_count(),
            "slots": [slot.to_dict() for slot in self._slots]
        }

    def __repr__(self) -> str:
        return f"SlotPool(id={self.id}, slots={len(self)}, available={self.available_count()})"
