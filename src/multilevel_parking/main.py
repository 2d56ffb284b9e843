# File: src/multilevel_parking/main.py
"""
Main application entry point for the Multilevel Parking System

Without --script the demonstration scenario runs: three vehicles arrive,
availability is shown, one vehicle leaves and availability is shown again.
"""

from typing import List, Optional
import argparse
import logging
import os
import sys

from .application.commands import CommandParseError
from .infrastructure.config import (
    ConfigurationError, ParkingLotConfig, load_config, load_script
)
from .infrastructure.factories import ParkingLotFactory
from .presentation.console import ConsoleView, ParkingPresenter


LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

DEMO_VEHICLES = [
    ("py01jf5634", "car", "red"),
    ("up81fb5535", "car", "blue"),
    ("Hr26ff4533", "bike", "red"),
]
DEMO_EXIT = "up81fb5535"


def setup_logging(level: str = "WARNING", log_file: Optional[str] = None) -> logging.Logger:
    """Setup application logging configuration"""
    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file:
        log_dir = os.path.dirname(log_file)
        if log_dir and not os.path.exists(log_dir):
            os.makedirs(log_dir)
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format=LOG_FORMAT,
        handlers=handlers,
        force=True
    )
    return logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="multilevel-parking",
        description="Multi-floor parking lot with first-fit allocation and hourly billing"
    )
    parser.add_argument("--config", help="YAML file with name, floors and spaces_per_floor")
    parser.add_argument("--floors", type=int, help="Number of floors (overrides --config)")
    parser.add_argument("--spaces-per-floor", type=int, help="Spaces on each floor (overrides --config)")
    parser.add_argument("--script", help="YAML list of park/remove/status commands to replay")
    parser.add_argument(
        "--log-level", default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: WARNING)"
    )
    parser.add_argument("--log-file", help="Also write logs to this file")
    return parser


def resolve_config(args: argparse.Namespace) -> ParkingLotConfig:
    config = load_config(args.config) if args.config else ParkingLotConfig()
    return config.with_overrides(floors=args.floors, spaces_per_floor=args.spaces_per_floor)


def run_demo(presenter: ParkingPresenter) -> None:
    """Park the demo vehicles, show status, remove one, show status again"""
    for registration_number, vehicle_type, color in DEMO_VEHICLES:
        presenter.park(registration_number, vehicle_type, color)

    presenter.show_status()
    presenter.remove(DEMO_EXIT)
    presenter.show_status()


def main(argv: Optional[List[str]] = None, view: Optional[ConsoleView] = None) -> int:
    """Main entry point for the application"""
    args = build_parser().parse_args(argv)
    logger = setup_logging(args.log_level, args.log_file)
    logger.info("Starting Multilevel Parking System...")

    try:
        config = resolve_config(args)
        processor = ParkingLotFactory.create_command_processor(config)
        presenter = ParkingPresenter(processor, view or ConsoleView())

        if args.script:
            presenter.run_script(load_script(args.script))
        else:
            run_demo(presenter)
    except (ConfigurationError, CommandParseError) as e:
        logger.error(str(e))
        return 1

    logger.info("Multilevel Parking System finished")
    return 0


if __name__ == "__main__":
    sys.exit(main())
