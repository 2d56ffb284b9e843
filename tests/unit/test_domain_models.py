#!/usr/bin/env python3
"""
Domain Layer Unit Tests

Tests for vehicles, tickets, parking spaces and floors.
"""

import unittest
import sys
from datetime import datetime
from enum import Enum
from pathlib import Path

# Add the src directory to the Python path
sys.path.insert(0, str(Path(__file__).resolve().parents[2] / "src"))

from multilevel_parking.domain.factories import VehicleFactory
from multilevel_parking.domain.models import (
    Floor, ParkingSpace, ParkingTicket, SpaceOccupiedError,
    Vehicle, VehicleLeftEvent, VehicleParkedEvent, VehicleType
)


ENTRY_TIME = datetime(2024, 1, 1, 9, 0, 0)


def make_vehicle(registration_number: str, vehicle_type: VehicleType = VehicleType.CAR) -> Vehicle:
    return Vehicle(registration_number, vehicle_type, "red")


def make_ticket(registration_number: str) -> ParkingTicket:
    return ParkingTicket(registration_number, ENTRY_TIME)


# ============================================================================
# VALUE OBJECTS
# ============================================================================

class TestVehicleType(unittest.TestCase):
    """Unit tests for VehicleType"""

    def test_from_string_accepts_values_and_names(self):
        self.assertEqual(VehicleType.from_string("car"), VehicleType.CAR)
        self.assertEqual(VehicleType.from_string("BIKE"), VehicleType.BIKE)
        self.assertEqual(VehicleType.from_string("  Truck "), VehicleType.TRUCK)
        self.assertEqual(VehicleType.from_string("bus"), VehicleType.BUS)

    def test_from_string_matches_names_that_differ_from_values(self):
        Coach = Enum("Coach", {"MINIBUS": "van"})
        parse = VehicleType.from_string.__func__

        self.assertIs(parse(Coach, "Minibus"), Coach.MINIBUS)
        self.assertIs(parse(Coach, "VAN"), Coach.MINIBUS)

    def test_from_string_rejects_unknown(self):
        with self.assertRaises(ValueError):
            VehicleType.from_string("tractor")

    def test_str(self):
        self.assertEqual(str(VehicleType.BIKE), "Bike")


class TestVehicle(unittest.TestCase):
    """Unit tests for Vehicle value object"""

    def test_vehicle_creation(self):
        vehicle = Vehicle("py01jf5634", VehicleType.CAR, "red")
        self.assertEqual(vehicle.registration_number, "py01jf5634")
        self.assertEqual(vehicle.vehicle_type, VehicleType.CAR)
        self.assertEqual(vehicle.color, "red")

    def test_registration_is_stripped_but_case_preserved(self):
        vehicle = Vehicle("  Hr26ff4533 ", VehicleType.BIKE)
        self.assertEqual(vehicle.registration_number, "Hr26ff4533")

    def test_vehicle_is_immutable(self):
        vehicle = make_vehicle("A")
        with self.assertRaises(AttributeError):
            vehicle.color = "blue"

    def test_blank_registration_rejected(self):
        with self.assertRaises(ValueError):
            Vehicle("   ", VehicleType.CAR)

    def test_invalid_type_rejected(self):
        with self.assertRaises(ValueError):
            Vehicle("A", "car")


class TestVehicleFactory(unittest.TestCase):
    """Unit tests for VehicleFactory"""

    def setUp(self):
        self.factory = VehicleFactory()

    def test_create_from_class_name(self):
        vehicle = self.factory.create(" KA01 ", "Truck", "white")
        self.assertEqual(vehicle, Vehicle("KA01", VehicleType.TRUCK, "white"))

    def test_create_from_enum_without_color(self):
        vehicle = self.factory.create("KA02", VehicleType.BUS, None)
        self.assertEqual(vehicle.vehicle_type, VehicleType.BUS)
        self.assertEqual(vehicle.color, "")

    def test_invalid_input(self):
        with self.assertRaises(ValueError):
            self.factory.create("KA03", "rocket")
        with self.assertRaises(ValueError):
            self.factory.create("  ", "car")


class TestParkingTicket(unittest.TestCase):
    """Unit tests for ParkingTicket"""

    def test_ticket_fields_and_serialization(self):
        ticket = make_ticket("A")
        self.assertEqual(ticket.registration_number, "A")
        self.assertEqual(ticket.entry_time, ENTRY_TIME)
        self.assertEqual(ticket.to_dict()["entry_time"], "2024-01-01T09:00:00")

    def test_ticket_is_immutable(self):
        ticket = make_ticket("A")
        with self.assertRaises(AttributeError):
            ticket.entry_time = datetime.now()


# ============================================================================
# ENTITIES
# ============================================================================

class TestParkingSpace(unittest.TestCase):
    """Unit tests for ParkingSpace"""

    def setUp(self):
        self.space = ParkingSpace(slot_number=2, floor_number=1)

    def test_new_space_is_available(self):
        self.assertTrue(self.space.is_available())
        self.assertIsNone(self.space.vehicle)
        self.assertIsNone(self.space.ticket)

    def test_park_occupies_space(self):
        vehicle, ticket = make_vehicle("A"), make_ticket("A")
        self.space.park(vehicle, ticket)

        self.assertFalse(self.space.is_available())
        self.assertIs(self.space.vehicle, vehicle)
        self.assertIs(self.space.ticket, ticket)

    def test_park_into_occupied_space_raises(self):
        self.space.park(make_vehicle("A"), make_ticket("A"))

        with self.assertRaises(SpaceOccupiedError) as ctx:
            self.space.park(make_vehicle("B"), make_ticket("B"))

        self.assertEqual(ctx.exception.slot_number, 2)
        self.assertEqual(ctx.exception.floor_number, 1)
        self.assertEqual(self.space.vehicle.registration_number, "A")

    def test_remove_frees_space(self):
        self.space.park(make_vehicle("A"), make_ticket("A"))
        self.space.remove()

        self.assertTrue(self.space.is_available())
        self.assertIsNone(self.space.vehicle)
        self.assertIsNone(self.space.ticket)

    def test_invalid_numbers_rejected(self):
        with self.assertRaises(ValueError):
            ParkingSpace(0)
        with self.assertRaises(ValueError):
            ParkingSpace(1, floor_number=0)

    def test_to_dict(self):
        self.space.park(make_vehicle("A", VehicleType.BUS), make_ticket("A"))
        data = self.space.to_dict()
        self.assertEqual(data["slot_number"], 2)
        self.assertFalse(data["is_available"])
        self.assertEqual(data["vehicle_type"], "bus")


class TestFloor(unittest.TestCase):
    """Unit tests for Floor"""

    def setUp(self):
        self.floor = Floor(floor_number=1, space_count=3)

    def test_spaces_numbered_sequentially(self):
        self.assertEqual([s.slot_number for s in self.floor.spaces], [1, 2, 3])
        self.assertTrue(all(s.floor_number == 1 for s in self.floor.spaces))
        self.assertEqual(self.floor.capacity, 3)

    def test_first_fit_allocation(self):
        """Lowest-numbered free slot is claimed first"""
        first = self.floor.park(make_vehicle("A"), make_ticket("A"))
        second = self.floor.park(make_vehicle("B"), make_ticket("B"))

        self.assertEqual(first.slot_number, 1)
        self.assertEqual(second.slot_number, 2)

    def test_first_fit_with_occupied_first_slot(self):
        """Given [occupied, free, free], slot 2 is claimed before slot 3"""
        self.floor.spaces[0].park(make_vehicle("X"), make_ticket("X"))

        space = self.floor.park(make_vehicle("A"), make_ticket("A"))

        self.assertEqual(space.slot_number, 2)
        self.assertTrue(self.floor.spaces[2].is_available())

    def test_freed_gap_is_reused_first(self):
        for reg in ("A", "B", "C"):
            self.floor.park(make_vehicle(reg), make_ticket(reg))
        self.floor.remove_by_registration("B")

        space = self.floor.park(make_vehicle("D"), make_ticket("D"))
        self.assertEqual(space.slot_number, 2)

    def test_full_floor_returns_none_without_mutation(self):
        for reg in ("A", "B", "C"):
            self.floor.park(make_vehicle(reg), make_ticket(reg))

        self.assertIsNone(self.floor.park(make_vehicle("D"), make_ticket("D")))
        self.assertEqual(
            [s.vehicle.registration_number for s in self.floor.spaces],
            ["A", "B", "C"]
        )

    def test_remove_by_registration_returns_ticket(self):
        ticket = make_ticket("B")
        self.floor.park(make_vehicle("A"), make_ticket("A"))
        self.floor.park(make_vehicle("B"), ticket)

        returned = self.floor.remove_by_registration("B")

        self.assertIs(returned, ticket)
        self.assertTrue(self.floor.spaces[1].is_available())
        self.assertFalse(self.floor.spaces[0].is_available())

    def test_remove_unknown_registration(self):
        self.floor.park(make_vehicle("A"), make_ticket("A"))

        self.assertIsNone(self.floor.remove_by_registration("Z"))
        self.assertEqual(self.floor.occupied_count, 1)

    def test_matching_is_exact(self):
        self.floor.park(make_vehicle("AB12"), make_ticket("AB12"))
        self.assertIsNone(self.floor.remove_by_registration("ab12"))
        self.assertIsNone(self.floor.remove_by_registration("AB1"))

    def test_duplicate_registration_affects_lowest_slot_only(self):
        self.floor.park(make_vehicle("A"), make_ticket("A"))
        self.floor.park(make_vehicle("A", VehicleType.BIKE), make_ticket("A"))

        self.floor.remove_by_registration("A")

        self.assertTrue(self.floor.spaces[0].is_available())
        self.assertEqual(self.floor.spaces[1].vehicle.vehicle_type, VehicleType.BIKE)

    def test_available_slots_in_order(self):
        self.assertEqual(self.floor.available_slots(), [1, 2, 3])
        self.floor.park(make_vehicle("A"), make_ticket("A"))
        self.floor.park(make_vehicle("B"), make_ticket("B"))
        self.floor.remove_by_registration("A")
        self.assertEqual(self.floor.available_slots(), [1, 3])

    def test_invalid_construction(self):
        with self.assertRaises(ValueError):
            Floor(0, 3)
        with self.assertRaises(ValueError):
            Floor(1, 0)


class TestDomainEvents(unittest.TestCase):
    """Unit tests for domain event serialization"""

    def test_parked_event(self):
        event = VehicleParkedEvent("A", VehicleType.CAR, 1, 2, timestamp=ENTRY_TIME)
        data = event.to_dict()
        self.assertEqual(data["event_type"], "vehicle_parked")
        self.assertEqual(data["vehicle_type"], "car")
        self.assertEqual(data["timestamp"], ENTRY_TIME.isoformat())

    def test_left_event(self):
        event = VehicleLeftEvent("A", VehicleType.BIKE, 2, 1, cost=10)
        data = event.to_dict()
        self.assertEqual(data["event_type"], "vehicle_left")
        self.assertEqual(data["cost"], 10)
        self.assertTrue(data["event_id"])


if __name__ == '__main__':
    unittest.main()
