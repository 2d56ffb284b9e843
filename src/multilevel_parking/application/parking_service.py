# File: src/multilevel_parking/application/parking_service.py
"""
Parking Management Application Service

Orchestrates the ParkingLot aggregate for the use cases of the system:
1. Vehicle entry (park)
2. Vehicle exit and billing (remove)
3. Availability report (status)

Lot full and vehicle not found come back as unsuccessful DTOs. A
SpaceOccupiedError from the domain is an invariant violation and is allowed
to propagate.
"""

from collections import deque
from typing import Deque, Optional
import logging

from ..domain.aggregates import ParkingLot
from ..domain.factories import VehicleFactory
from ..domain.models import DomainEvent
from .dtos import (
    FloorAvailabilityDTO, ParkingAllocationDTO, ParkingExitDTO,
    ParkingLotStatusDTO, ParkVehicleRequestDTO
)


DEFAULT_MAX_EVENT_HISTORY = 1000


# ============================================================================
# EXCEPTIONS
# ============================================================================

class ParkingServiceError(Exception):
    """Base exception for parking service errors"""
    pass


class VehicleValidationError(ParkingServiceError):
    """Exception for malformed vehicle data"""
    pass


# ============================================================================
# MAIN PARKING SERVICE
# ============================================================================

class ParkingService:
    """
    Main application service for parking management

    Translates DTOs into domain calls and domain results back into DTOs,
    collecting the aggregate's domain events along the way. Only the most
    recent ``max_event_history`` events are kept.
    """

    def __init__(
        self,
        parking_lot: ParkingLot,
        vehicle_factory: Optional[VehicleFactory] = None,
        max_event_history: int = DEFAULT_MAX_EVENT_HISTORY
    ):
        self.logger = logging.getLogger(self.__class__.__name__)
        self.parking_lot = parking_lot
        self.vehicle_factory = vehicle_factory or VehicleFactory()
        self.event_history: Deque[DomainEvent] = deque(maxlen=max_event_history)
        self.logger.info(f"ParkingService initialized for {parking_lot}")

    def park_vehicle(self, request: ParkVehicleRequestDTO) -> ParkingAllocationDTO:
        """
        Park a vehicle in the first free space

        Raises: VehicleValidationError if the request cannot form a Vehicle
        """
        self.logger.info(f"Processing parking request for {request.registration_number}")

        try:
            vehicle = self.vehicle_factory.create(
                request.registration_number,
                request.vehicle_type,
                request.color
            )
        except ValueError as e:
            raise VehicleValidationError(str(e)) from e

        allocation = self.parking_lot.park(vehicle)
        self._collect_events()

        if allocation is None:
            return ParkingAllocationDTO(
                success=False,
                registration_number=vehicle.registration_number,
                message="Parking lot is full"
            )

        return ParkingAllocationDTO(
            success=True,
            registration_number=vehicle.registration_number,
            floor_number=allocation.floor_number,
            slot_number=allocation.slot_number,
            entry_time=allocation.ticket.entry_time,
            message="Vehicle parked"
        )

    def exit_vehicle(self, registration_number: str) -> ParkingExitDTO:
        """Remove a vehicle and compute its fee"""
        registration_number = registration_number.strip()
        self.logger.info(f"Processing exit request for {registration_number}")

        release = self.parking_lot.remove(registration_number)
        self._collect_events()

        if release is None:
            return ParkingExitDTO(
                success=False,
                registration_number=registration_number,
                message="Vehicle not found"
            )

        return ParkingExitDTO(
            success=True,
            registration_number=release.registration_number,
            vehicle_type=release.vehicle_type.value,
            floor_number=release.floor_number,
            slot_number=release.slot_number,
            entry_time=release.ticket.entry_time,
            exit_time=release.exit_time,
            billable_hours=release.billable_hours,
            total_cost=release.cost,
            message="Vehicle removed"
        )

    def get_parking_lot_status(self) -> ParkingLotStatusDTO:
        """Current availability, floor by floor"""
        lot = self.parking_lot
        return ParkingLotStatusDTO(
            total_spaces=lot.total_spaces,
            occupied_spaces=lot.occupied_spaces,
            available_spaces=lot.available_spaces,
            floors=[
                FloorAvailabilityDTO(floor_number=floor_number, available_slots=slots)
                for floor_number, slots in lot.status()
            ]
        )

    def _collect_events(self) -> None:
        for event in self.parking_lot.clear_events():
            self.logger.debug(f"Domain event: {event.to_dict()}")
            self.event_history.append(event)


# ============================================================================
# SERVICE FACTORY
# ============================================================================

class ParkingServiceFactory:
    """Factory for creating parking service instances"""

    @staticmethod
    def create_service(
        parking_lot: ParkingLot,
        vehicle_factory: Optional[VehicleFactory] = None,
        max_event_history: int = DEFAULT_MAX_EVENT_HISTORY
    ) -> ParkingService:
        """Create a service around an existing lot"""
        return ParkingService(
            parking_lot,
            vehicle_factory=vehicle_factory or VehicleFactory(),
            max_event_history=max_event_history
        )
