# File: src/parking_allocator/infrastructure/factories.py
"""
Factory Pattern Implementation for the Parking Slot Allocator

This module centralises the creation of domain objects:
1. Size-class sources - Injectable generators deciding each slot's size
2. Slot pool factory - Builds pools from a total count or a distribution
3. Vehicle factory - Builds vehicles from enums, strings or request DTOs

Size-class sources replace a process-wide random generator so that tests can
build the exact pool they need.
"""

from abc import ABC, abstractmethod
from typing import Optional, Dict, List, Sequence, Union
import itertools
import logging
import random

from ..domain.models import (
    SizeClass, Vehicle, VehicleKind, RegistrationId, Slot, parse_vehicle_kind
)
from ..domain.aggregates import SlotPool
from ..domain.strategies import AllocationStrategy
from ..application.dtos import AllocationRequestDTO


# ============================================================================
# SIZE-CLASS SOURCES
# ============================================================================

class SizeClassSource(ABC):
    """Supplies the size class of each newly created slot"""

    @abstractmethod
    def next_size_class(self) -> SizeClass:
        pass


class RandomSizeClassSource(SizeClassSource):
    """
    Uniform random size classes.
    Pass a seed (or a ready random.Random) for a reproducible pool.
    """

    def __init__(self, seed: Optional[int] = None, rng: Optional[random.Random] = None):
        self._rng = rng or random.Random(seed)
        self._choices = list(SizeClass)

    def next_size_class(self) -> SizeClass:
        return self._rng.choice(self._choices)


class SequenceSizeClassSource(SizeClassSource):
    """Repeats a fixed sequence of size classes"""

    def __init__(self, sizes: Sequence[Union[SizeClass, str]]):
        if not sizes:
            raise ValueError("Size sequence cannot be empty")
        self._sizes = [SizeClass(s) if isinstance(s, str) else s for s in sizes]
        self._cycle = itertools.cycle(self._sizes)

    def next_size_class(self) -> SizeClass:
        return next(self._cycle)


# ============================================================================
# SLOT POOL FACTORY
# ============================================================================

class SlotPoolFactory:
    """Factory for creating SlotPool aggregates"""

    def __init__(self, strategy: Optional[AllocationStrategy] = None):
        self.strategy = strategy
        self.logger = logging.getLogger(self.__class__.__name__)

    def create(self, total_slots: int, size_source: Optional[SizeClassSource] = None) -> SlotPool:
        """
        Create a pool of total_slots slots numbered from 1

        Args:
            total_slots: Number of slots in the pool
            size_source: Where slot sizes come from (unseeded random if omitted)
        """
        size_source = size_source or RandomSizeClassSource()
        return SlotPool.build(total_slots, size_source, strategy=self.strategy)

    def create_from_distribution(
        self,
        slot_distribution: Dict[Union[SizeClass, str], int],
        start_number: int = 1
    ) -> SlotPool:
        """Create slots grouped by size class, in the distribution's order"""
        slots: List[Slot] = []
        current_number = start_number

        for size_class, count in slot_distribution.items():
            if isinstance(size_class, str):
                size_class = SizeClass(size_class)
            if count < 0:
                raise ValueError(f"Slot count for {size_class.name} cannot be negative")

            for _ in range(count):
                slots.append(Slot(current_number, size_class))
                current_number += 1

        self.logger.info(f"Creating slot pool from distribution with {len(slots)} slots")
        return SlotPool(slots, strategy=self.strategy)


# ============================================================================
# VEHICLE FACTORY
# ============================================================================

class VehicleFactory:
    """Factory for creating Vehicle domain objects"""

    @classmethod
    def create(cls, kind: Union[VehicleKind, str], registration_id: Union[RegistrationId, str]) -> Vehicle:
        """
        Create a Vehicle

        Args:
            kind: Vehicle kind or its name ("car", "truck", "motorcycle", "scooter")
            registration_id: Registration number
        """
        if isinstance(registration_id, str):
            registration_id = RegistrationId(registration_id)
        return Vehicle(kind=parse_vehicle_kind(kind), registration_id=registration_id)

    @classmethod
    def create_from_dto(cls, dto: AllocationRequestDTO) -> Vehicle:
        return cls.create(dto.vehicle_kind, dto.registration_id)

    @classmethod
    def create_batch(
        cls,
        kinds: Sequence[Union[VehicleKind, str]],
        registration_id: Union[RegistrationId, str]
    ) -> List[Vehicle]:
        """Vehicles of the given kinds sharing one registration id"""
        return [cls.create(kind, registration_id) for kind in kinds]
