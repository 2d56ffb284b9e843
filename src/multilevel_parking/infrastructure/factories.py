# File: src/multilevel_parking/infrastructure/factories.py
"""
Factory Pattern Implementation for the Multilevel Parking System

Centralizes wiring of the object graph from a ParkingLotConfig:
configuration -> ParkingLot aggregate -> ParkingService -> CommandProcessor
"""

from typing import Optional
import logging

from ..application.commands import CommandProcessor
from ..application.parking_service import ParkingService, ParkingServiceFactory
from ..domain.aggregates import Clock, ParkingLot
from ..domain.factories import VehicleFactory
from ..domain.strategies import HourlyRateCostStrategy, PricingStrategy
from .config import ParkingLotConfig


class ParkingLotFactory:
    """Builds lots and the services around them"""

    logger = logging.getLogger("ParkingLotFactory")

    @staticmethod
    def create_parking_lot(
        config: ParkingLotConfig,
        cost_strategy: Optional[PricingStrategy] = None,
        clock: Optional[Clock] = None
    ) -> ParkingLot:
        """Create a lot laid out as the configuration says"""
        ParkingLotFactory.logger.debug(f"Creating parking lot from {config!r}")
        return ParkingLot(
            floor_count=config.floors,
            spaces_per_floor=config.spaces_per_floor,
            cost_strategy=cost_strategy or HourlyRateCostStrategy(),
            clock=clock,
            name=config.name
        )

    @staticmethod
    def create_parking_service(
        config: ParkingLotConfig,
        clock: Optional[Clock] = None,
        vehicle_factory: Optional[VehicleFactory] = None
    ) -> ParkingService:
        return ParkingServiceFactory.create_service(
            ParkingLotFactory.create_parking_lot(config, clock=clock),
            vehicle_factory=vehicle_factory
        )

    @staticmethod
    def create_command_processor(
        config: ParkingLotConfig,
        clock: Optional[Clock] = None
    ) -> CommandProcessor:
        return CommandProcessor(ParkingLotFactory.create_parking_service(config, clock=clock))
