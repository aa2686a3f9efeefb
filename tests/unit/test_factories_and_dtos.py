# File: tests/unit/test_factories_and_dtos.py
#!/usr/bin/env python3
"""
Infrastructure and Application DTO Unit Tests
"""

import unittest
from datetime import datetime
from decimal import Decimal
import random

from pydantic import ValidationError

from parking_allocator.config import ParkingConfig
from parking_allocator.domain.models import SizeClass, VehicleKind, Slot, issue_ticket, Vehicle
from parking_allocator.application.dtos import AllocationRequestDTO, TicketDTO, BatchReportDTO
from parking_allocator.infrastructure.factories import (
    RandomSizeClassSource, SequenceSizeClassSource, SlotPoolFactory, VehicleFactory
)


class TestSizeClassSources(unittest.TestCase):

    def test_seeded_sources_repeat(self):
        a = RandomSizeClassSource(seed=7)
        b = RandomSizeClassSource(seed=7)
        self.assertEqual(
            [a.next_size_class() for _ in range(50)],
            [b.next_size_class() for _ in range(50)]
        )

    def test_random_source_only_yields_size_classes(self):
        source = RandomSizeClassSource(rng=random.Random(3))
        self.assertTrue(all(isinstance(source.next_size_class(), SizeClass) for _ in range(30)))

    def test_sequence_source_cycles(self):
        source = SequenceSizeClassSource(["car", SizeClass.TRUCK])
        self.assertEqual(
            [source.next_size_class() for _ in range(4)],
            [SizeClass.CAR, SizeClass.TRUCK, SizeClass.CAR, SizeClass.TRUCK]
        )

    def test_sequence_source_needs_values(self):
        with self.assertRaises(ValueError):
            SequenceSizeClassSource([])


class TestSlotPoolFactory(unittest.TestCase):

    def test_create_with_seed_is_deterministic(self):
        factory = SlotPoolFactory()
        one = factory.create(20, RandomSizeClassSource(seed=11))
        two = factory.create(20, RandomSizeClassSource(seed=11))
        self.assertEqual([s.size_class for s in one], [s.size_class for s in two])

    def test_create_from_distribution(self):
        pool = SlotPoolFactory().create_from_distribution({
            SizeClass.MOTORCYCLE: 1, "car": 2, SizeClass.TRUCK: 0
        })
        self.assertEqual(len(pool), 3)
        self.assertEqual([s.slot_number for s in pool], [1, 2, 3])
        self.assertEqual(pool.available_count(SizeClass.TRUCK), 0)

    def test_create_from_distribution_rejects_negative(self):
        with self.assertRaises(ValueError):
            SlotPoolFactory().create_from_distribution({SizeClass.CAR: -1})


class TestVehicleFactory(unittest.TestCase):

    def test_create_from_names(self):
        self.assertEqual(VehicleFactory.create("car", "MH12AB1111").kind, VehicleKind.CAR)
        self.assertEqual(VehicleFactory.create("SCOOTER", "MH12AB1111").kind, VehicleKind.MOTORCYCLE)
        self.assertEqual(VehicleFactory.create(VehicleKind.TRUCK, "MH12AB1111").kind, VehicleKind.TRUCK)

    def test_unknown_kind(self):
        with self.assertRaises(ValueError):
            VehicleFactory.create("tractor", "MH12AB1111")

    def test_create_from_dto(self):
        dto = AllocationRequestDTO(registration_id=" mh12ab1111", vehicle_kind="Truck")
        vehicle = VehicleFactory.create_from_dto(dto)
        self.assertEqual(vehicle.kind, VehicleKind.TRUCK)
        self.assertEqual(str(vehicle.registration_id), "MH12AB1111")

    def test_create_batch_keeps_order(self):
        vehicles = VehicleFactory.create_batch(["car", "truck", "motorcycle"], "MH12AB1111")
        self.assertEqual(
            [v.kind for v in vehicles],
            [VehicleKind.CAR, VehicleKind.TRUCK, VehicleKind.MOTORCYCLE]
        )


class TestDTOs(unittest.TestCase):

    def test_allocation_request_validation(self):
        with self.assertRaises(ValidationError):
            AllocationRequestDTO(registration_id="MH12AB1111", vehicle_kind="bus")
        with self.assertRaises(ValidationError):
            AllocationRequestDTO(registration_id="MH12@B", vehicle_kind="car")
        with self.assertRaises(ValidationError):
            AllocationRequestDTO(registration_id="MH\u00c912", vehicle_kind="car")

    def test_allocation_request_normalizes_alias(self):
        dto = AllocationRequestDTO(registration_id="mh12ab1111", vehicle_kind="scooter")
        self.assertEqual(dto.vehicle_kind, "motorcycle")
        self.assertEqual(dto.registration_id, "MH12AB1111")

    def test_ticket_dto_from_ticket(self):
        slot = Slot(12, SizeClass.TRUCK)
        slot.mark_used()
        issued_at = datetime(2024, 5, 1, 8, 0)
        ticket = issue_ticket(
            Vehicle(VehicleKind.TRUCK, "MH12AB1111"), slot,
            clock=lambda: issued_at, id_factory=lambda: "abc"
        )

        dto = TicketDTO.from_ticket(ticket)

        self.assertEqual(dto.ticket_id, "abc")
        self.assertEqual(dto.price, Decimal('24'))
        self.assertEqual(dto.price_display, "Rs 24.00")
        self.assertEqual(dto.slot_number, 12)
        self.assertEqual(dto.to_dict()["vehicle_kind"], "truck")
        self.assertEqual(TicketDTO.from_json(dto.to_json()), dto)

    def test_empty_batch_report(self):
        report = BatchReportDTO()
        self.assertEqual(report.issued_count, 0)
        self.assertFalse(report.stopped_early)


class TestParkingConfig(unittest.TestCase):

    def test_defaults(self):
        config = ParkingConfig()
        self.assertEqual(config.total_slots, 100)
        self.assertEqual(config.registration_id, "MH12AB1111")
        self.assertTrue(config.stop_on_first_failure)
        self.assertIsNone(config.seed)

    def test_from_dict_ignores_none(self):
        config = ParkingConfig.from_dict({"total_slots": 10, "seed": None, "log_level": "debug"})
        self.assertEqual(config.total_slots, 10)
        self.assertEqual(config.log_level, "DEBUG")

    def test_invalid_values(self):
        with self.assertRaises(ValidationError):
            ParkingConfig(total_slots=-5)
        with self.assertRaises(ValidationError):
            ParkingConfig(log_level="LOUD")

    def test_registration_id_uses_registration_rules(self):
        with self.assertRaises(ValidationError):
            ParkingConfig(registration_id="MH#12")
        with self.assertRaises(ValidationError):
            ParkingConfig(registration_id="MH\u00c912")
        self.assertEqual(ParkingConfig(registration_id=" ka01xy2222 ").registration_id, "KA01XY2222")

    def test_logging_defaults_to_file_only(self):
        config = ParkingConfig()
        self.assertEqual(config.log_file, "logs/parking_app.log")
        self.assertFalse(config.log_to_console)


if __name__ == "__main__":
    unittest.main()
