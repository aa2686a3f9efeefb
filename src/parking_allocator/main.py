# File: src/parking_allocator/main.py
"""
Main entry point for the parking allocator demo.

Builds a pool of randomly sized slots, then asks for a slot for a car, a
truck and a motorcycle, printing a receipt for each ticket issued.
"""

import argparse
import logging
import os
import sys
from typing import List, Optional

from pydantic import ValidationError

from .config import ParkingConfig
from .domain.models import VehicleKind, Vehicle
from .application.parking_service import ParkingService, ParkingServiceFactory, BatchResult
from .infrastructure.factories import VehicleFactory
from .presentation.receipts import ReceiptPrinter

DEMO_VEHICLE_KINDS = (VehicleKind.CAR, VehicleKind.TRUCK, VehicleKind.MOTORCYCLE)


def setup_logging(config: ParkingConfig) -> logging.Logger:
    """Setup application logging configuration"""
    log_dir = os.path.dirname(config.log_file)
    if log_dir and not os.path.exists(log_dir):
        os.makedirs(log_dir)

    handlers: List[logging.Handler] = [logging.FileHandler(config.log_file)]
    if config.log_to_console:
        handlers.append(logging.StreamHandler(sys.stderr))

    logging.basicConfig(
        level=getattr(logging, config.log_level),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=handlers,
        force=True
    )
    return logging.getLogger(__name__)


class ParkingApplication:
    """Wires the service, vehicles and printer together and runs one batch"""

    def __init__(
        self,
        config: Optional[ParkingConfig] = None,
        service: Optional[ParkingService] = None,
        printer: Optional[ReceiptPrinter] = None
    ):
        self.config = config or ParkingConfig()
        self.logger = logging.getLogger(self.__class__.__name__)
        self.service = service or ParkingServiceFactory.create_default_service(self.config)
        self.printer = printer or ReceiptPrinter()

    def demo_vehicles(self) -> List[Vehicle]:
        return VehicleFactory.create_batch(DEMO_VEHICLE_KINDS, self.config.registration_id)

    def run(self, vehicles: Optional[List[Vehicle]] = None) -> BatchResult:
        vehicles = vehicles if vehicles is not None else self.demo_vehicles()
        self.logger.info(f"Processing {len(vehicles)} vehicle(s) against {len(self.service.pool)} slots")

        result = self.service.process_batch(
            vehicles,
            stop_on_first_failure=self.config.stop_on_first_failure
        )
        self.printer.print_batch(result)
        return result


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="parking-allocator",
        description="Allocate parking slots for a car, a truck and a motorcycle and print their tickets"
    )
    parser.add_argument('--slots', type=int, dest='total_slots', help='Number of slots in the pool (default 100)')
    parser.add_argument('--seed', type=int, help='Seed for random slot sizes')
    parser.add_argument('--registration', dest='registration_id', help='Registration id used for every vehicle')
    parser.add_argument(
        '--continue-on-failure',
        action='store_true',
        help='Keep processing vehicles after a slot is not available'
    )
    parser.add_argument('--log-level', help='DEBUG, INFO, WARNING, ERROR or CRITICAL; also echoes logs to stderr')
    parser.add_argument('--log-file', help='Write logs to this file (default logs/parking_app.log)')
    return parser


def config_from_args(args: argparse.Namespace) -> ParkingConfig:
    return ParkingConfig.from_dict({
        "total_slots": args.total_slots,
        "seed": args.seed,
        "registration_id": args.registration_id,
        "stop_on_first_failure": False if args.continue_on_failure else None,
        "log_level": args.log_level,
        "log_file": args.log_file,
        "log_to_console": True if args.log_level else None,
    })


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_arg_parser()
    args = parser.parse_args(argv)

    try:
        config = config_from_args(args)
    except ValidationError as e:
        parser.error(str(e))

    logger = setup_logging(config)
    try:
        ParkingApplication(config).run()
    except Exception as e:
        logger.error(f"Fatal error in main: {str(e)}", exc_info=True)
        raise

    return 0


if __name__ == "__main__":
    sys.exit(main())
