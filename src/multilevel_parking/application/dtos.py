# File: src/multilevel_parking/application/dtos.py
"""
Data Transfer Objects (DTOs) for the Multilevel Parking System

1. Input DTOs - Park requests coming from the CLI or a command script
2. Output DTOs - Results handed to the presentation layer

DTO Principles:
- Validation at creation (pydantic)
- No business logic, only data
- Serialization support through to_dict / to_json
"""

from datetime import datetime
from typing import Any, Dict, List, Optional
import json

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..domain.models import VehicleType


# ============================================================================
# BASE DTO CLASSES
# ============================================================================

class BaseDTO(BaseModel):
    """Base DTO with common functionality"""

    model_config = ConfigDict(
        populate_by_name=True,
        use_enum_values=True,
    )

    def to_dict(self, exclude_none: bool = False, **kwargs) -> Dict[str, Any]:
        """Convert DTO to dictionary"""
        data = self.model_dump(**kwargs)
        if exclude_none:
            data = {k: v for k, v in data.items() if v is not None}
        return data

    def to_json(self, **kwargs) -> str:
        """Convert DTO to JSON string"""
        return self.model_dump_json(**kwargs)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'BaseDTO':
        """Create DTO from dictionary"""
        return cls(**data)

    @classmethod
    def from_json(cls, json_str: str) -> 'BaseDTO':
        """Create DTO from JSON string"""
        return cls(**json.loads(json_str))


# ============================================================================
# INPUT DTOs
# ============================================================================

class ParkVehicleRequestDTO(BaseDTO):
    """DTO for park requests"""

    model_config = ConfigDict(extra="forbid")

    registration_number: str = Field(..., min_length=1, description="Vehicle registration number")
    vehicle_type: str = Field(..., description="car, bike, truck or bus")
    color: str = Field(default="", description="Vehicle color")

    @field_validator('registration_number')
    @classmethod
    def validate_registration_number(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Registration number cannot be blank")
        return v

    @field_validator('vehicle_type')
    @classmethod
    def validate_vehicle_type(cls, v: str) -> str:
        return VehicleType.from_string(v).value


# ============================================================================
# OUTPUT DTOs
# ============================================================================

class ParkingAllocationDTO(BaseDTO):
    """DTO for park results"""
    success: bool
    registration_number: str
    floor_number: Optional[int] = None
    slot_number: Optional[int] = None
    entry_time: Optional[datetime] = None
    message: str = ""


class ParkingExitDTO(BaseDTO):
    """DTO for exit results"""
    success: bool
    registration_number: str
    vehicle_type: Optional[str] = None
    floor_number: Optional[int] = None
    slot_number: Optional[int] = None
    entry_time: Optional[datetime] = None
    exit_time: Optional[datetime] = None
    billable_hours: Optional[int] = None
    total_cost: Optional[int] = None
    message: str = ""


class FloorAvailabilityDTO(BaseDTO):
    """Free slots of one floor"""
    floor_number: int
    available_slots: List[int] = Field(default_factory=list)


class ParkingLotStatusDTO(BaseDTO):
    """DTO for lot status"""
    total_spaces: int
    occupied_spaces: int
    available_spaces: int
    floors: List[FloorAvailabilityDTO] = Field(default_factory=list)
    timestamp: datetime = Field(default_factory=datetime.now)

    @property
    def occupancy_rate(self) -> float:
        if self.total_spaces == 0:
            return 0.0
        return self.occupied_spaces / self.total_spaces
