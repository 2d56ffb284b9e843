# File: src/multilevel_parking/domain/factories.py
"""
Domain Factories for the Multilevel Parking System

Turns raw operator input into domain value objects. Lives in the domain layer
so the application services can use it without depending on infrastructure.
"""

from typing import Union
import logging

from .models import Vehicle, VehicleType


class VehicleFactory:
    """Factory for creating Vehicle value objects"""

    def __init__(self):
        self.logger = logging.getLogger(self.__class__.__name__)

    def create(
        self,
        registration_number: str,
        vehicle_type: Union[str, VehicleType],
        color: str = ""
    ) -> Vehicle:
        """
        Create a vehicle from a registration number, a vehicle class given as
        a VehicleType or its name, and an optional color

        Raises: ValueError for an unknown class or a blank registration number
        """
        if not isinstance(vehicle_type, VehicleType):
            vehicle_type = VehicleType.from_string(vehicle_type)

        vehicle = Vehicle(
            registration_number=registration_number,
            vehicle_type=vehicle_type,
            color=color or ""
        )
        self.logger.debug(f"Created vehicle: {vehicle}")
        return vehicle
