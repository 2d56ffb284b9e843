# File: src/multilevel_parking/presentation/console.py
"""
Console Presentation Layer

Model-View-Presenter for a text console:
- ConsoleView knows the exact operator-facing wording and nothing else
- ParkingPresenter turns operator actions into commands and renders results
"""

from typing import Any, Dict, Iterable, List, Optional, TextIO
import logging
import sys

from ..application.commands import (
    CommandProcessor, CommandResult, ExitVehicleCommand,
    ParkVehicleCommand, ShowStatusCommand, create_command
)
from ..application.dtos import (
    ParkingAllocationDTO, ParkingExitDTO, ParkingLotStatusDTO, ParkVehicleRequestDTO
)


# ============================================================================
# VIEW
# ============================================================================

class ConsoleView:
    """Writes operator notices to a text stream"""

    PARKED = "Parked vehicle at space {slot} on floor {floor}"
    LOT_FULL = "Parking lot is full!"
    REMOVED_FROM_SPACE = "Removed vehicle from space {slot} on floor {floor}"
    REMOVED_WITH_COST = "Vehicle {registration} removed. Total cost: {cost}"
    NOT_FOUND = "Vehicle not found!"
    FLOOR_HEADER = "Floor {floor} availability:"
    SPACE_AVAILABLE = "Space {slot} is available"

    def __init__(self, stream: Optional[TextIO] = None):
        self._stream = stream

    @property
    def stream(self) -> TextIO:
        # Resolved lazily so a replaced sys.stdout is honoured
        return self._stream if self._stream is not None else sys.stdout

    def write_line(self, line: str) -> None:
        self.stream.write(line + "\n")

    def show_park_result(self, allocation: ParkingAllocationDTO) -> None:
        if allocation.success:
            self.write_line(self.PARKED.format(slot=allocation.slot_number, floor=allocation.floor_number))
        else:
            self.write_line(self.LOT_FULL)

    def show_exit_result(self, exit_result: ParkingExitDTO) -> None:
        if not exit_result.success:
            self.write_line(self.NOT_FOUND)
            return

        self.write_line(self.REMOVED_FROM_SPACE.format(
            slot=exit_result.slot_number, floor=exit_result.floor_number
        ))
        self.write_line(self.REMOVED_WITH_COST.format(
            registration=exit_result.registration_number, cost=exit_result.total_cost
        ))

    def show_status(self, status: ParkingLotStatusDTO) -> None:
        for floor in status.floors:
            self.write_line(self.FLOOR_HEADER.format(floor=floor.floor_number))
            for slot in floor.available_slots:
                self.write_line(self.SPACE_AVAILABLE.format(slot=slot))

    def show_error(self, message: str) -> None:
        self.write_line(f"Error: {message}")


# ============================================================================
# PRESENTER
# ============================================================================

class ParkingPresenter:
    """Connects operator actions to the command processor and the view"""

    def __init__(self, processor: CommandProcessor, view: Optional[ConsoleView] = None):
        self.processor = processor
        self.view = view or ConsoleView()
        self.logger = logging.getLogger(self.__class__.__name__)

    def park(self, registration_number: str, vehicle_type: str, color: str = "") -> CommandResult:
        request = ParkVehicleRequestDTO(
            registration_number=registration_number,
            vehicle_type=vehicle_type,
            color=color
        )
        return self.render(self.processor.process(ParkVehicleCommand(request)))

    def remove(self, registration_number: str) -> CommandResult:
        return self.render(self.processor.process(ExitVehicleCommand(registration_number)))

    def show_status(self) -> CommandResult:
        return self.render(self.processor.process(ShowStatusCommand()))

    def run_script(self, entries: Iterable[Dict[str, Any]]) -> List[CommandResult]:
        """
        Parse every entry first, then execute them in order

        Raises: CommandParseError before anything runs if an entry is invalid
        """
        commands = [create_command(entry) for entry in entries]
        self.logger.info(f"Running script of {len(commands)} command(s)")
        return [self.render(result) for result in self.processor.process_batch(commands)]

    def render(self, result: CommandResult) -> CommandResult:
        data = result.data
        if isinstance(data, ParkingAllocationDTO):
            self.view.show_park_result(data)
        elif isinstance(data, ParkingExitDTO):
            self.view.show_exit_result(data)
        elif isinstance(data, ParkingLotStatusDTO):
            self.view.show_status(data)
        elif not result.success:
            self.view.show_error(result.error_message or "Command failed")
        return result
