# File: src/multilevel_parking/domain/models.py
"""
Domain Models for the Multilevel Parking System

This module contains:
1. Enums: Vehicle classes known to the lot
2. Value Objects: Vehicle and ParkingTicket (immutable)
3. Entities: ParkingSpace and Floor (stateful, fixed identity)
4. Domain Events: Events raised by the ParkingLot aggregate
5. Domain Errors: Invariant violations

A Floor owns a fixed tuple of ParkingSpace objects created at construction
time. Spaces are claimed first-fit by ascending slot number.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple
import logging
import uuid


# ============================================================================
# DOMAIN ERRORS
# ============================================================================

class ParkingDomainError(Exception):
    """Base exception for domain invariant violations"""
    pass


class SpaceOccupiedError(ParkingDomainError):
    """Raised when parking into a space that already holds a vehicle"""

    def __init__(self, floor_number: int, slot_number: int):
        super().__init__(
            f"Space {slot_number} on floor {floor_number} is already occupied"
        )
        self.floor_number = floor_number
        self.slot_number = slot_number


# ============================================================================
# ENUMS FOR DOMAIN TYPES
# ============================================================================

class VehicleType(Enum):
    """
    Enumeration of vehicle classes
    Each class is billed at its own hourly rate
    """
    CAR = "car"
    BIKE = "bike"
    TRUCK = "truck"
    BUS = "bus"

    @classmethod
    def from_string(cls, value: str) -> 'VehicleType':
        """Parse a vehicle type from its value or name, case-insensitively"""
        normalized = value.strip().lower()
        for member in cls:
            if normalized in (member.value, member.name.lower()):
                return member
        raise ValueError(
            f"Unknown vehicle type: {value!r} "
            f"(expected one of {', '.join(m.value for m in cls)})"
        )

    def __str__(self) -> str:
        return self.value.title()


# ============================================================================
# VALUE OBJECTS
# ============================================================================

@dataclass(frozen=True)
class Vehicle:
    """
    Value Object: A vehicle presented at the entrance
    Identified by its registration number; matching is exact
    """
    registration_number: str
    vehicle_type: VehicleType
    color: str = ""

    def __post_init__(self):
        """Validate vehicle after initialization"""
        if not isinstance(self.registration_number, str) or not self.registration_number.strip():
            raise ValueError("Registration number cannot be empty")

        if not isinstance(self.vehicle_type, VehicleType):
            raise ValueError(f"Invalid vehicle type: {self.vehicle_type!r}")

        object.__setattr__(self, 'registration_number', self.registration_number.strip())

    def __str__(self) -> str:
        color = f"{self.color} " if self.color else ""
        return f"{color}{self.vehicle_type} ({self.registration_number})"


@dataclass(frozen=True)
class ParkingTicket:
    """
    Value Object: Proof of entry
    Binds a registration number to the moment the vehicle was admitted
    """
    registration_number: str
    entry_time: datetime

    def to_dict(self) -> Dict[str, Any]:
        return {
            "registration_number": self.registration_number,
            "entry_time": self.entry_time.isoformat(),
        }


# ============================================================================
# ENTITIES
# ============================================================================

class ParkingSpace:
    """
    Entity: A single parking slot on a floor
    Holds at most one (vehicle, ticket) pair
    """

    def __init__(self, slot_number: int, floor_number: int = 1):
        if slot_number < 1:
            raise ValueError("Slot number must be positive")
        if floor_number < 1:
            raise ValueError("Floor number must be at least 1")

        self._slot_number = slot_number
        self._floor_number = floor_number
        self._vehicle: Optional[Vehicle] = None
        self._ticket: Optional[ParkingTicket] = None

    @property
    def slot_number(self) -> int:
        return self._slot_number

    @property
    def floor_number(self) -> int:
        return self._floor_number

    @property
    def vehicle(self) -> Optional[Vehicle]:
        """Vehicle currently parked here, None when free"""
        return self._vehicle

    @property
    def ticket(self) -> Optional[ParkingTicket]:
        """Ticket of the parked vehicle, None when free"""
        return self._ticket

    def is_available(self) -> bool:
        """True iff no vehicle occupies the slot"""
        return self._vehicle is None

    def park(self, vehicle: Vehicle, ticket: ParkingTicket) -> None:
        """
        Occupy the space with a vehicle and its ticket
        Raises: SpaceOccupiedError if the space is already occupied
        """
        if not self.is_available():
            raise SpaceOccupiedError(self._floor_number, self._slot_number)

        self._vehicle = vehicle
        self._ticket = ticket

    def remove(self) -> None:
        """Free the space; callers capture the ticket beforehand"""
        self._vehicle = None
        self._ticket = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "floor_number": self._floor_number,
            "slot_number": self._slot_number,
            "is_available": self.is_available(),
            "registration_number": self._vehicle.registration_number if self._vehicle else None,
            "vehicle_type": self._vehicle.vehicle_type.value if self._vehicle else None,
        }

    def __repr__(self) -> str:
        status = "AVAILABLE" if self.is_available() else f"OCCUPIED by {self._vehicle.registration_number}"
        return f"ParkingSpace(floor={self._floor_number}, slot={self._slot_number}, {status})"


class Floor:
    """
    Entity: One level of the parking lot

    The space sequence is fixed at construction. Allocation is first-fit by
    ascending slot number; lookup by registration scans in the same order.
    """

    def __init__(self, floor_number: int, space_count: int):
        if floor_number < 1:
            raise ValueError("Floor number must be at least 1")
        if space_count < 1:
            raise ValueError("A floor needs at least one parking space")

        self._floor_number = floor_number
        self._spaces: Tuple[ParkingSpace, ...] = tuple(
            ParkingSpace(slot_number, floor_number)
            for slot_number in range(1, space_count + 1)
        )
        self._logger = logging.getLogger(self.__class__.__name__)

    @property
    def floor_number(self) -> int:
        return self._floor_number

    @property
    def spaces(self) -> Tuple[ParkingSpace, ...]:
        return self._spaces

    @property
    def capacity(self) -> int:
        return len(self._spaces)

    @property
    def occupied_count(self) -> int:
        return sum(1 for space in self._spaces if not space.is_available())

    def park(self, vehicle: Vehicle, ticket: ParkingTicket) -> Optional[ParkingSpace]:
        """
        Park a vehicle in the lowest-numbered free space
        Returns: the claimed ParkingSpace, or None if the floor is full
        """
        for space in self._spaces:
            if space.is_available():
                space.park(vehicle, ticket)
                self._logger.debug(
                    f"Floor {self._floor_number}: slot {space.slot_number} "
                    f"claimed by {vehicle.registration_number}"
                )
                return space
        return None

    def find_space_by_registration(self, registration_number: str) -> Optional[ParkingSpace]:
        """First occupied space whose vehicle carries the given registration"""
        for space in self._spaces:
            if not space.is_available() and space.vehicle.registration_number == registration_number:
                return space
        return None

    def remove_by_registration(self, registration_number: str) -> Optional[ParkingTicket]:
        """
        Free the space holding the given registration
        Returns: the vehicle's ticket, or None if it is not on this floor
        """
        space = self.find_space_by_registration(registration_number)
        if space is None:
            return None

        ticket = space.ticket
        space.remove()
        self._logger.debug(
            f"Floor {self._floor_number}: slot {space.slot_number} "
            f"released by {registration_number}"
        )
        return ticket

    def available_slots(self) -> List[int]:
        """Slot numbers of free spaces, in slot order"""
        return [space.slot_number for space in self._spaces if space.is_available()]

    def __repr__(self) -> str:
        return f"Floor({self._floor_number}, {self.occupied_count}/{self.capacity} occupied)"


# ============================================================================
# DOMAIN EVENTS
# ============================================================================

class DomainEvent(ABC):
    """
    Base class for all domain events
    Events represent something that happened in the domain
    """

    def __init__(self, timestamp: Optional[datetime] = None):
        self.event_id = str(uuid.uuid4())
        self.timestamp = timestamp or datetime.now()

    @abstractmethod
    def to_dict(self) -> Dict[str, Any]:
        """Convert event to dictionary for serialization"""
        pass

    def __str__(self) -> str:
        return f"{self.__class__.__name__} at {self.timestamp}"


class VehicleParkedEvent(DomainEvent):
    """Event raised when a vehicle is admitted"""

    def __init__(
        self,
        registration_number: str,
        vehicle_type: VehicleType,
        floor_number: int,
        slot_number: int,
        timestamp: Optional[datetime] = None
    ):
        super().__init__(timestamp)
        self.registration_number = registration_number
        self.vehicle_type = vehicle_type
        self.floor_number = floor_number
        self.slot_number = slot_number

    def to_dict(self) -> Dict[str, Any]:
        return {
            "event_type": "vehicle_parked",
            "event_id": self.event_id,
            "timestamp": self.timestamp.isoformat(),
            "registration_number": self.registration_number,
            "vehicle_type": self.vehicle_type.value,
            "floor_number": self.floor_number,
            "slot_number": self.slot_number,
        }


class VehicleLeftEvent(DomainEvent):
    """Event raised when a vehicle exits and is charged"""

    def __init__(
        self,
        registration_number: str,
        vehicle_type: VehicleType,
        floor_number: int,
        slot_number: int,
        cost: int,
        timestamp: Optional[datetime] = None
    ):
        super().__init__(timestamp)
        self.registration_number = registration_number
        self.vehicle_type = vehicle_type
        self.floor_number = floor_number
        self.slot_number = slot_number
        self.cost = cost

    def to_dict(self) -> Dict[str, Any]:
        return {
            "event_type": "vehicle_left",
            "event_id": self.event_id,
            "timestamp": self.timestamp.isoformat(),
            "registration_number": self.registration_number,
            "vehicle_type": self.vehicle_type.value,
            "floor_number": self.floor_number,
            "slot_number": self.slot_number,
            "cost": self.cost,
        }
