# File: src/multilevel_parking/domain/strategies.py
"""
Strategy Pattern Implementation for Parking Fees

Pricing is encapsulated behind the PricingStrategy interface so the
ParkingLot aggregate does not depend on a concrete rate table.

Billing rule for the hourly strategy:
- Elapsed time is truncated to whole hours
- Anything under one hour is billed as one hour
- Fee = hourly rate of the vehicle class x billable hours
"""

from abc import ABC, abstractmethod
from datetime import datetime, timedelta
from types import MappingProxyType
from typing import Mapping, Optional
import logging

from .models import VehicleType


DEFAULT_HOURLY_RATES: Mapping[VehicleType, int] = MappingProxyType({
    VehicleType.CAR: 20,
    VehicleType.BIKE: 10,
    VehicleType.TRUCK: 30,
    VehicleType.BUS: 30,
})

MINIMUM_BILLABLE_HOURS = 1


# ============================================================================
# STRATEGY INTERFACES
# ============================================================================

class PricingStrategy(ABC):
    """
    Abstract base class for pricing strategies
    Maps a vehicle class and a stay to a fee
    """

    def __init__(self):
        self.logger = logging.getLogger(self.__class__.__name__)

    @abstractmethod
    def calculate_cost(
        self,
        vehicle_type: VehicleType,
        entry_time: datetime,
        exit_time: Optional[datetime] = None
    ) -> int:
        """
        Calculate the fee for a stay
        Returns: fee in integer currency units
        """
        pass

    def billable_hours(self, entry_time: datetime, exit_time: datetime) -> Optional[int]:
        """Hours the fee is based on, or None for strategies that do not bill by time"""
        return None

    def get_strategy_name(self) -> str:
        """Get human-readable strategy name"""
        return self.__class__.__name__.replace("Strategy", "")

    def __str__(self) -> str:
        return self.get_strategy_name()


# ============================================================================
# CONCRETE STRATEGIES
# ============================================================================

class HourlyRateCostStrategy(PricingStrategy):
    """
    Flat hourly rate per vehicle class with a one-hour minimum

    The rate table is read-only after construction.
    """

    def __init__(self, hourly_rates: Optional[Mapping[VehicleType, int]] = None):
        super().__init__()
        rates = dict(hourly_rates if hourly_rates is not None else DEFAULT_HOURLY_RATES)

        missing = [vehicle_type for vehicle_type in VehicleType if vehicle_type not in rates]
        if missing:
            raise ValueError(f"Missing hourly rate for: {', '.join(str(m) for m in missing)}")

        for vehicle_type, rate in rates.items():
            if not isinstance(rate, int) or isinstance(rate, bool) or rate <= 0:
                raise ValueError(f"Hourly rate for {vehicle_type} must be a positive integer, got {rate!r}")

        self._hourly_rates = MappingProxyType(rates)

    @property
    def hourly_rates(self) -> Mapping[VehicleType, int]:
        return self._hourly_rates

    def hourly_rate(self, vehicle_type: VehicleType) -> int:
        return self._hourly_rates[vehicle_type]

    def billable_hours(self, entry_time: datetime, exit_time: datetime) -> int:
        """Whole hours elapsed, never less than the one-hour minimum"""
        elapsed_hours = (exit_time - entry_time) // timedelta(hours=1)
        return max(MINIMUM_BILLABLE_HOURS, elapsed_hours)

    def calculate_cost(
        self,
        vehicle_type: VehicleType,
        entry_time: datetime,
        exit_time: Optional[datetime] = None
    ) -> int:
        exit_time = exit_time or datetime.now()
        hours = self.billable_hours(entry_time, exit_time)
        cost = self._hourly_rates[vehicle_type] * hours

        self.logger.debug(
            f"Calculated fee for {vehicle_type}: {hours}h x {self._hourly_rates[vehicle_type]} = {cost}"
        )
        return cost
