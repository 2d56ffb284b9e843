# File: src/multilevel_parking/domain/aggregates.py
"""
Aggregate Root for the Multilevel Parking System

Aggregates:
1. ParkingLot - Root aggregate owning every Floor and ParkingSpace

Key Concepts:
- All park/remove requests go through the aggregate root
- Floors are visited in ascending floor number
- Domain events are raised for admissions and exits
- Lot full and vehicle not found are ordinary outcomes (None), not errors
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional, Tuple
import logging
import uuid

from .models import (
    DomainEvent, Floor, ParkingTicket, Vehicle, VehicleType,
    VehicleLeftEvent, VehicleParkedEvent
)
from .strategies import HourlyRateCostStrategy, PricingStrategy


Clock = Callable[[], datetime]


# ============================================================================
# OPERATION RESULTS
# ============================================================================

@dataclass(frozen=True)
class ParkingAllocation:
    """Where an admitted vehicle was parked"""
    floor_number: int
    slot_number: int
    ticket: ParkingTicket


@dataclass(frozen=True)
class ParkingRelease:
    """Outcome of a successful exit"""
    floor_number: int
    slot_number: int
    ticket: ParkingTicket
    vehicle_type: VehicleType
    exit_time: datetime
    billable_hours: Optional[int]
    cost: int

    @property
    def registration_number(self) -> str:
        return self.ticket.registration_number


# ============================================================================
# BASE AGGREGATE ROOT
# ============================================================================

class AggregateRoot:
    """
    Base class for aggregate roots
    Provides identity and domain event collection
    """

    def __init__(self, id: Optional[str] = None):
        self._id = id or str(uuid.uuid4())
        self._changes: List[DomainEvent] = []
        self._logger = logging.getLogger(self.__class__.__name__)

    @property
    def id(self) -> str:
        return self._id

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
        return len(self._changes) > 0


# ============================================================================
# PARKING LOT AGGREGATE
# ============================================================================

class ParkingLot(AggregateRoot):
    """
    Aggregate Root: a fixed set of uniform floors plus a pricing strategy

    The exit fee uses the vehicle class of the space actually being freed.
    """

    def __init__(
        self,
        floor_count: int,
        spaces_per_floor: int,
        cost_strategy: Optional[PricingStrategy] = None,
        clock: Optional[Clock] = None,
        name: str = "Parking Lot",
        id: Optional[str] = None
    ):
        super().__init__(id)
        if floor_count < 1:
            raise ValueError("A parking lot needs at least one floor")
        if spaces_per_floor < 1:
            raise ValueError("Each floor needs at least one parking space")

        self.name = name
        self._floors: Tuple[Floor, ...] = tuple(
            Floor(floor_number, spaces_per_floor)
            for floor_number in range(1, floor_count + 1)
        )
        self._spaces_per_floor = spaces_per_floor
        self._cost_strategy = cost_strategy or HourlyRateCostStrategy()
        self._clock: Clock = clock or datetime.now

        self._logger.info(
            f"Created {self.name}: {floor_count} floor(s) x {spaces_per_floor} space(s)"
        )

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def floors(self) -> Tuple[Floor, ...]:
        return self._floors

    @property
    def cost_strategy(self) -> PricingStrategy:
        return self._cost_strategy

    @property
    def floor_count(self) -> int:
        return len(self._floors)

    @property
    def spaces_per_floor(self) -> int:
        return self._spaces_per_floor

    @property
    def total_spaces(self) -> int:
        return self.floor_count * self._spaces_per_floor

    @property
    def occupied_spaces(self) -> int:
        return sum(floor.occupied_count for floor in self._floors)

    @property
    def available_spaces(self) -> int:
        return self.total_spaces - self.occupied_spaces

    def is_full(self) -> bool:
        return self.available_spaces == 0

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def park(self, vehicle: Vehicle) -> Optional[ParkingAllocation]:
        """
        Admit a vehicle into the first free space of the first floor with room

        Returns: ParkingAllocation, or None when the lot is full (the freshly
        issued ticket is then discarded)
        """
        ticket = ParkingTicket(vehicle.registration_number, self._clock())

        for floor in self._floors:
            space = floor.park(vehicle, ticket)
            if space is not None:
                self._add_domain_event(VehicleParkedEvent(
                    registration_number=vehicle.registration_number,
                    vehicle_type=vehicle.vehicle_type,
                    floor_number=floor.floor_number,
                    slot_number=space.slot_number,
                    timestamp=ticket.entry_time
                ))
                self._logger.info(
                    f"Parked {vehicle.registration_number} at floor {floor.floor_number}, "
                    f"slot {space.slot_number}"
                )
                return ParkingAllocation(floor.floor_number, space.slot_number, ticket)

        self._logger.warning(f"Lot full, {vehicle.registration_number} not admitted")
        return None

    def remove(self, registration_number: str) -> Optional[ParkingRelease]:
        """
        Release the vehicle with the given registration and bill the stay

        Returns: ParkingRelease, or None when no floor holds the vehicle
        """
        for floor in self._floors:
            space = floor.find_space_by_registration(registration_number)
            if space is None:
                continue

            vehicle_type = space.vehicle.vehicle_type
            slot_number = space.slot_number
            ticket = floor.remove_by_registration(registration_number)

            exit_time = self._clock()
            cost = self._cost_strategy.calculate_cost(vehicle_type, ticket.entry_time, exit_time)
            hours = self._cost_strategy.billable_hours(ticket.entry_time, exit_time)

            self._add_domain_event(VehicleLeftEvent(
                registration_number=registration_number,
                vehicle_type=vehicle_type,
                floor_number=floor.floor_number,
                slot_number=slot_number,
                cost=cost,
                timestamp=exit_time
            ))
            self._logger.info(
                f"Removed {registration_number} from floor {floor.floor_number}, "
                f"slot {slot_number}; cost {cost}"
            )
            return ParkingRelease(
                floor_number=floor.floor_number,
                slot_number=slot_number,
                ticket=ticket,
                vehicle_type=vehicle_type,
                exit_time=exit_time,
                billable_hours=hours,
                cost=cost
            )

        self._logger.info(f"Vehicle {registration_number} not found")
        return None

    def status(self) -> List[Tuple[int, List[int]]]:
        """Available slot numbers per floor, in floor then slot order"""
        return [(floor.floor_number, floor.available_slots()) for floor in self._floors]

    def get_status_report(self) -> Dict[str, Any]:
        """Occupancy summary for reporting"""
        return {
            "id": self.id,
            "name": self.name,
            "total_spaces": self.total_spaces,
            "occupied_spaces": self.occupied_spaces,
            "available_spaces": self.available_spaces,
            "floors": [
                {
                    "floor_number": floor.floor_number,
                    "available_slots": floor.available_slots(),
                    "occupied_count": floor.occupied_count,
                }
                for floor in self._floors
            ],
        }

    def __str__(self) -> str:
        return f"{self.name} ({self.occupied_spaces}/{self.total_spaces} occupied)"
