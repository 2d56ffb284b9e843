# File: src/multilevel_parking/application/commands.py
"""
Command Pattern Implementation for the Multilevel Parking System

Each operator action (park, remove, status) is a first-class command that can
be built from plain data, executed against the ParkingService, and kept in an
audit history by the CommandProcessor.

Command Types:
1. ParkVehicleCommand - Vehicle entry
2. ExitVehicleCommand - Vehicle exit and billing
3. ShowStatusCommand - Availability report
"""

from abc import ABC, abstractmethod
from collections import deque
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Deque, Dict, List, Optional, Type
import logging
import uuid

from pydantic import BaseModel, ValidationError

from .dtos import ParkVehicleRequestDTO
from .parking_service import ParkingService, ParkingServiceError


class CommandParseError(ParkingServiceError):
    """Raised when plain data cannot be turned into a command"""
    pass


# ============================================================================
# COMMAND INTERFACES AND BASE CLASSES
# ============================================================================

@dataclass
class CommandResult:
    """Outcome of executing a command"""
    success: bool
    command_id: str
    command_type: str
    executed_at: datetime
    data: Optional[BaseModel] = None
    error_message: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        return {
            "success": self.success,
            "command_id": self.command_id,
            "command_type": self.command_type,
            "executed_at": self.executed_at.isoformat(),
            "data": self.data.model_dump(mode="json") if self.data is not None else None,
            "error_message": self.error_message,
        }


class Command(ABC):
    """
    Abstract base class for all commands

    Commands are named in the imperative (e.g., ParkVehicleCommand).
    """

    action: str = ""

    def __init__(self, command_id: Optional[str] = None):
        self.command_id = command_id or str(uuid.uuid4())
        self.executed_at: Optional[datetime] = None
        self.logger = logging.getLogger(self.__class__.__name__)

    @abstractmethod
    def execute(self, service: ParkingService) -> CommandResult:
        """Execute the command against the service"""
        pass

    @abstractmethod
    def get_description(self) -> str:
        """Human-readable description for logs"""
        pass

    def build_result(self, success: bool, data: Optional[BaseModel] = None,
                     error_message: Optional[str] = None) -> CommandResult:
        self.executed_at = datetime.now()
        return CommandResult(
            success=success,
            command_id=self.command_id,
            command_type=self.__class__.__name__,
            executed_at=self.executed_at,
            data=data,
            error_message=error_message
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "command_id": self.command_id,
            "action": self.action,
            "executed_at": self.executed_at.isoformat() if self.executed_at else None,
        }


# ============================================================================
# PARKING COMMANDS
# ============================================================================

class ParkVehicleCommand(Command):
    """Command: Admit a vehicle into the lot"""

    action = "park"

    def __init__(self, request: ParkVehicleRequestDTO, command_id: Optional[str] = None):
        super().__init__(command_id)
        self.request = request

    def execute(self, service: ParkingService) -> CommandResult:
        self.logger.info(f"Executing ParkVehicleCommand for {self.request.registration_number}")
        allocation = service.park_vehicle(self.request)
        return self.build_result(
            allocation.success,
            data=allocation,
            error_message=None if allocation.success else allocation.message
        )

    def get_description(self) -> str:
        return f"Park {self.request.vehicle_type} {self.request.registration_number}"

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data.update(self.request.to_dict())
        return data


class ExitVehicleCommand(Command):
    """Command: Release a vehicle and bill its stay"""

    action = "remove"

    def __init__(self, registration_number: str, command_id: Optional[str] = None):
        super().__init__(command_id)
        self.registration_number = registration_number

    def execute(self, service: ParkingService) -> CommandResult:
        self.logger.info(f"Executing ExitVehicleCommand for {self.registration_number}")
        exit_result = service.exit_vehicle(self.registration_number)
        return self.build_result(
            exit_result.success,
            data=exit_result,
            error_message=None if exit_result.success else exit_result.message
        )

    def get_description(self) -> str:
        return f"Remove {self.registration_number}"

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["registration_number"] = self.registration_number
        return data


class ShowStatusCommand(Command):
    """Command: Report free slots per floor"""

    action = "status"

    def execute(self, service: ParkingService) -> CommandResult:
        return self.build_result(True, data=service.get_parking_lot_status())

    def get_description(self) -> str:
        return "Show parking lot status"


COMMAND_TYPES: Dict[str, Type[Command]] = {
    ParkVehicleCommand.action: ParkVehicleCommand,
    ExitVehicleCommand.action: ExitVehicleCommand,
    ShowStatusCommand.action: ShowStatusCommand,
}


def create_command(data: Dict[str, Any]) -> Command:
    """
    Build a command from plain data such as one entry of a YAML script

    Raises: CommandParseError for unknown actions or invalid fields
    """
    if not isinstance(data, dict):
        raise CommandParseError(f"Command entry must be a mapping, got {type(data).__name__}")

    action = str(data.get("action", "")).strip().lower()
    if action not in COMMAND_TYPES:
        raise CommandParseError(
            f"Unknown action {data.get('action')!r} "
            f"(expected one of {', '.join(COMMAND_TYPES)})"
        )

    # YAML resolves plates like 0123 or 0x1F to numbers; the original text is gone
    registration_number = data.get("registration_number")
    if registration_number is not None and not isinstance(registration_number, str):
        raise CommandParseError(
            f"registration_number must be text, got {type(registration_number).__name__} "
            f"{registration_number!r}; quote the plate in the script (e.g. '0123')"
        )

    if action == ParkVehicleCommand.action:
        fields = {k: v for k, v in data.items() if k != "action"}
        try:
            request = ParkVehicleRequestDTO(**fields)
        except ValidationError as e:
            raise CommandParseError(f"Invalid park command: {e}") from e
        return ParkVehicleCommand(request)

    if action == ExitVehicleCommand.action:
        registration_number = data.get("registration_number")
        if not isinstance(registration_number, str) or not registration_number.strip():
            raise CommandParseError("Remove command requires a registration_number")
        return ExitVehicleCommand(registration_number)

    return ShowStatusCommand()


# ============================================================================
# COMMAND PROCESSOR
# ============================================================================

class CommandProcessor:
    """
    Executes commands and keeps an audit history

    Service errors become failed results; domain invariant violations
    propagate to the caller.
    """

    def __init__(self, service: ParkingService, max_history_size: int = 1000):
        self.service = service
        self.logger = logging.getLogger(self.__class__.__name__)
        self.command_history: Deque[Command] = deque(maxlen=max_history_size)
        self.max_history_size = max_history_size

    def process(self, command: Command) -> CommandResult:
        """Execute a single command"""
        self.logger.info(f"Processing command: {command.get_description()}")

        try:
            result = command.execute(self.service)
        except ParkingServiceError as e:
            self.logger.error(f"Error processing command {command.get_description()}: {e}")
            return command.build_result(False, error_message=str(e))

        self.command_history.append(command)
        return result

    def process_batch(self, commands: List[Command]) -> List[CommandResult]:
        """Process multiple commands in order"""
        return [self.process(command) for command in commands]
