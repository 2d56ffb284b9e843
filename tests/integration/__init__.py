"""
Integration Tests Package for the Multilevel Parking System

Integration tests drive the full stack (presenter -> command processor ->
service -> ParkingLot aggregate) and compare the console output.
"""

import sys
from datetime import datetime
from pathlib import Path
from typing import Callable, TextIO

# Add the src directory to the Python path for imports
project_root = Path(__file__).resolve().parent.parent.parent
sys.path.insert(0, str(project_root / "src"))

from multilevel_parking.infrastructure.config import ParkingLotConfig
from multilevel_parking.infrastructure.factories import ParkingLotFactory
from multilevel_parking.presentation.console import ConsoleView, ParkingPresenter


T0 = datetime(2024, 1, 1, 9, 0, 0)


def build_presenter(
    floors: int,
    spaces_per_floor: int,
    clock: Callable[[], datetime],
    stream: TextIO
) -> ParkingPresenter:
    """Wire a presenter over a fresh lot, writing to the given stream"""
    config = ParkingLotConfig(floors=floors, spaces_per_floor=spaces_per_floor)
    processor = ParkingLotFactory.create_command_processor(config, clock=clock)
    return ParkingPresenter(processor, ConsoleView(stream))
